"""GridLayoutEngine: cell size, axis reservations and overflow growth."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..core.settings import HeatmapSettings
from ..core.table import ChartData
from ..core.validation import MissingDataError
from .geometry import Margin, Rect, Viewport
from .text_metrics import TextMetrics, truncate_text


Y_AXIS_ADDITIONAL_MARGIN = 5.0
CELL_HEIGHT_WIDTH_RATIO = 0.5
CELL_MAX_HEIGHT = 60.0
CELL_MAX_WIDTH_FACTOR = 3.0
MIN_CELL_WIDTH = 1.0
LEGEND_WIDTH_RATIO = 2 / 3


@dataclass(frozen=True)
class LayoutGeometry:
    """Derived sizes for one update; all values in pixels."""

    cell_width: float
    cell_height: float
    x_offset: float
    y_offset: float
    x_axis_height: float
    y_axis_width: float
    y_axis_height: float
    legend_element_width: float
    legend_element_height: float
    data_label_width: float
    data_label_height: float
    surface_width: float
    n_cols: int
    n_rows: int
    margin: Margin = field(default_factory=Margin)

    @property
    def grid_width(self) -> float:
        return self.n_cols * self.cell_width

    @property
    def grid_height(self) -> float:
        return self.n_rows * self.cell_height

    def cell_rect(self, x_index: int, y_index: int) -> Rect:
        """Rectangle of the cell at (row category index, value column index)."""
        return Rect(
            x=x_index * self.cell_width + self.x_offset,
            y=y_index * self.cell_height + self.y_offset,
            width=self.cell_width,
            height=self.cell_height,
        )

    def to_dict(self) -> dict:
        return {
            "cellWidth": self.cell_width,
            "cellHeight": self.cell_height,
            "xOffset": self.x_offset,
            "yOffset": self.y_offset,
            "xAxisHeight": self.x_axis_height,
            "yAxisWidth": self.y_axis_width,
            "legendElementWidth": self.legend_element_width,
            "legendElementHeight": self.legend_element_height,
            "surfaceWidth": self.surface_width,
        }


class GridLayoutEngine:
    """Solves the grid layout for a viewport.

    Cells start from an even split of the available width at a fixed 2:1
    aspect ratio, grow so data labels never clip, and are then capped
    (height <= 60px, width <= 3x height). When the grid ends up wider than
    the viewport the surface grows instead of clipping cells.
    """

    def __init__(self, margin: Margin | None = None) -> None:
        self._margin = margin or Margin()

    @property
    def margin(self) -> Margin:
        return self._margin

    def compute(
        self,
        chart_data: ChartData,
        settings: HeatmapSettings,
        viewport: Viewport,
        metrics: TextMetrics,
        bucket_count: int,
    ) -> LayoutGeometry:
        """Compute the layout geometry.

        Parameters
        ----------
        chart_data : ChartData for this update
        settings : normalized HeatmapSettings
        viewport : outer viewport given by the host
        metrics : text measurement collaborator
        bucket_count : number of color buckets (legend swatches)
        """
        n_cols = len(chart_data.categories_x)
        n_rows = len(chart_data.categories_y)
        if n_cols == 0 or n_rows == 0:
            raise MissingDataError("Cannot lay out a grid without categories.")

        margin = self._margin
        inner = viewport.inner(margin)
        x_axis = settings.x_axis_labels
        y_axis = settings.y_axis_labels
        data_labels = settings.labels

        longest_y = max(chart_data.categories_y, key=len)
        y_axis_width = 0.0
        if y_axis.show:
            shown = truncate_text(longest_y, y_axis.max_text_symbol).strip()
            y_axis_width = (
                metrics.measure_width(shown, y_axis.font_size, y_axis.font_family)
                + Y_AXIS_ADDITIONAL_MARGIN
            )
        x_axis_height = 0.0
        if x_axis.show:
            x_axis_height = metrics.measure_height(longest_y.strip(), x_axis.font_size, x_axis.font_family)
        y_axis_height = metrics.measure_height(longest_y.strip(), y_axis.font_size, y_axis.font_family)

        cell_width = max(MIN_CELL_WIDTH, float(math.floor((inner.width - y_axis_width) / n_cols)))
        cell_height = cell_width * CELL_HEIGHT_WIDTH_RATIO

        longest_label = chart_data.longest_value_label()
        label_width = metrics.measure_width(longest_label, data_labels.font_size, data_labels.font_family)
        label_height = metrics.measure_height(longest_label, data_labels.font_size, data_labels.font_family)
        if data_labels.show:
            cell_width = max(cell_width, label_width)
            cell_height = max(cell_height, label_height)

        cell_height = min(cell_height, CELL_MAX_HEIGHT)
        cell_width = min(cell_width, cell_height * CELL_MAX_WIDTH_FACTOR)

        x_offset = margin.left + y_axis_width
        y_offset = margin.top + x_axis_height

        legend_width = max(0.0, (inner.width * LEGEND_WIDTH_RATIO - x_offset) / max(1, bucket_count))

        # cells are drawn in a group translated by margin.left
        surface_width = float(viewport.width)
        needed_width = margin.left + x_offset + n_cols * cell_width
        if needed_width > viewport.width:
            surface_width = needed_width

        return LayoutGeometry(
            cell_width=cell_width,
            cell_height=cell_height,
            x_offset=x_offset,
            y_offset=y_offset,
            x_axis_height=x_axis_height,
            y_axis_width=y_axis_width,
            y_axis_height=y_axis_height,
            legend_element_width=legend_width,
            legend_element_height=cell_height,
            data_label_width=label_width,
            data_label_height=label_height,
            surface_width=surface_width,
            n_cols=n_cols,
            n_rows=n_rows,
            margin=margin,
        )
