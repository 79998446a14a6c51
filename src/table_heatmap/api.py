"""TableHeatmap: the main user-facing API (one full recomputation per update)."""

from __future__ import annotations

import logging
import pathlib
import threading
from typing import Any, Mapping

import pandas as pd

from .core.color_scale import BucketColorScale, ColorScaleBuilder, normalize_settings
from .core.settings import HeatmapSettings
from .core.table import ChartData, DataTable, convert
from .core.validation import MissingDataError
from .layout.geometry import Margin, Viewport
from .layout.grid_layout import GridLayoutEngine, LayoutGeometry
from .layout.label_layout import LabelLayoutEngine
from .layout.legend_layout import LegendBuilder
from .layout.text_metrics import MatplotlibTextMetrics, TextMetrics
from .render.scene import DEFAULT_TRANSITION_MS, Scene, SceneBuilder, serialize_scene

logger = logging.getLogger(__name__)


class TableHeatmap:
    """Categorical heat map over a category x values table.

    Usage::

        import table_heatmap as th

        hm = th.TableHeatmap()
        scene = hm.update(
            df,
            settings={"general": {"buckets": 5, "colorbrewer": "Blues"}},
            viewport=(800, 400),
        )
        hm.to_svg("heatmap.svg")

    Every call to :meth:`update` recomputes everything from its inputs.
    Only the latest settings, chart data and scene are kept. When updates
    arrive concurrently they run one at a time, and the result of an update
    superseded by a newer call is discarded.
    """

    def __init__(
        self,
        text_metrics: TextMetrics | None = None,
        margin: Margin | None = None,
        suppress_animations: bool = False,
    ) -> None:
        self._metrics = text_metrics or MatplotlibTextMetrics()
        self._grid_engine = GridLayoutEngine(margin)
        self._transition_ms = 0 if suppress_animations else DEFAULT_TRANSITION_MS

        self._update_lock = threading.Lock()
        self._generation_lock = threading.Lock()
        self._generation = 0

        self._settings = normalize_settings(HeatmapSettings())
        self._chart_data: ChartData | None = None
        self._color_scale: BucketColorScale | None = None
        self._geometry: LayoutGeometry | None = None
        self._scene: Scene | None = None

    # --- Update cycle ---

    def update(
        self,
        table: DataTable | pd.DataFrame,
        settings: Mapping[str, Any] | HeatmapSettings | None = None,
        viewport: Viewport | tuple[float, float] = (600.0, 400.0),
    ) -> Scene | None:
        """Recompute the heatmap for new data, settings or viewport size.

        Parameters
        ----------
        table : DataTable or pd.DataFrame
            One category column and one or more value columns. A DataFrame
            uses its index as the category column.
        settings : mapping or HeatmapSettings, optional
            Raw host settings; unknown keys are ignored.
        viewport : Viewport or (width, height)

        Returns the new Scene, or None when there is nothing to draw
        (missing data) or when a newer update superseded this one.
        """
        with self._generation_lock:
            self._generation += 1
            generation = self._generation

        with self._update_lock:
            if generation != self._generation:
                logger.debug("Skipping superseded update %d", generation)
                return None

            parsed = self._parse_settings(settings)
            if not isinstance(viewport, Viewport):
                viewport = Viewport(*viewport)

            try:
                chart_data, color_scale, geometry, scene = self._compute(table, parsed, viewport)
            except MissingDataError as exc:
                logger.info("Nothing to draw: %s", exc)
                chart_data = color_scale = geometry = scene = None

            if generation != self._generation:
                logger.debug("Discarding result of superseded update %d", generation)
                return None

            self._settings = parsed
            self._chart_data = chart_data
            self._color_scale = color_scale
            self._geometry = geometry
            self._scene = scene
            return scene

    def clear(self) -> None:
        """Drop the current drawing."""
        with self._update_lock:
            self._chart_data = None
            self._color_scale = None
            self._geometry = None
            self._scene = None

    @staticmethod
    def _parse_settings(settings: Mapping[str, Any] | HeatmapSettings | None) -> HeatmapSettings:
        if isinstance(settings, HeatmapSettings):
            return normalize_settings(settings)
        return normalize_settings(HeatmapSettings.from_dict(settings))

    def _compute(
        self,
        table: DataTable | pd.DataFrame,
        settings: HeatmapSettings,
        viewport: Viewport,
    ) -> tuple[ChartData, BucketColorScale, LayoutGeometry, Scene]:
        chart_data = convert(table)
        vmin, vmax = chart_data.value_range()
        color_scale = ColorScaleBuilder.build(settings, (vmin, vmax))

        geometry = self._grid_engine.compute(
            chart_data, settings, viewport, self._metrics,
            bucket_count=color_scale.bucket_count,
        )

        labels = (
            LabelLayoutEngine.y_labels(chart_data, geometry, settings.y_axis_labels, self._metrics)
            + LabelLayoutEngine.x_labels(chart_data, geometry, settings.x_axis_labels, self._metrics)
            + LabelLayoutEngine.data_labels(chart_data, geometry, settings.labels, self._metrics)
        )
        legend = LegendBuilder.build(color_scale, vmin, vmax, geometry, chart_data.y_formatter)

        scene = SceneBuilder.build(
            chart_data, color_scale, geometry, labels, legend, settings, viewport,
            transition_ms=self._transition_ms,
        )
        logger.debug(
            "Laid out %dx%d grid: cell %.1fx%.1f px, %d buckets, surface %.0fx%.0f",
            geometry.n_cols, geometry.n_rows, geometry.cell_width, geometry.cell_height,
            color_scale.bucket_count, scene.width, scene.height,
        )
        return chart_data, color_scale, geometry, scene

    # --- State ---

    @property
    def settings(self) -> HeatmapSettings:
        """Normalized settings of the last update."""
        return self._settings

    @property
    def chart_data(self) -> ChartData | None:
        return self._chart_data

    @property
    def color_scale(self) -> BucketColorScale | None:
        return self._color_scale

    @property
    def geometry(self) -> LayoutGeometry | None:
        return self._geometry

    @property
    def scene(self) -> Scene | None:
        """Scene of the last update; None when nothing is drawn."""
        return self._scene

    # --- Output ---

    def to_json(self) -> str | None:
        """Serialize the current scene as JSON (None when nothing is drawn)."""
        if self._scene is None:
            return None
        return serialize_scene(self._scene)

    def to_svg(self, path: str | pathlib.Path, title: str | None = None) -> None:
        """Export the current scene as a standalone SVG file."""
        if self._scene is None:
            raise MissingDataError("Nothing to export: call update() with data first.")
        from .export.svg_export import export_svg

        export_svg(self._scene, path, title=title)
