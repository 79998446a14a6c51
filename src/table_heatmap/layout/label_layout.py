"""Axis and data label placement: wrapping, truncation and clipping."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.settings import AxisLabelSettings, DataLabelSettings, YAxisLabelSettings
from ..core.table import ChartData
from ..render.style import StyleRole
from .grid_layout import LayoutGeometry
from .text_metrics import TextMetrics, truncate_text


LINE_HEIGHT_EMS = 1.1
Y_LABEL_BASELINE_EMS = 0.71
SHIFT_LABEL_FROM_GRID = -6.0
DATA_LABEL_BASELINE_DIVISOR = 2.6


@dataclass(frozen=True)
class LabelSpec:
    """A single label to render, with wrapping and clipping resolved."""

    lines: tuple[str, ...]
    x: float             # anchor x
    y: float             # baseline of the first line
    anchor: str          # "start" or "middle"
    role: StyleRole
    font_size: float
    font_family: str
    fill: str
    line_height: float = 0.0

    @property
    def text(self) -> str:
        return " ".join(self.lines)

    def to_dict(self) -> dict:
        return {
            "lines": list(self.lines),
            "x": float(self.x),
            "y": float(self.y),
            "anchor": self.anchor,
            "role": self.role.value,
            "fontSize": float(self.font_size),
            "fontFamily": self.font_family,
            "fill": self.fill,
            "lineHeight": float(self.line_height),
        }


def wrap_words(
    text: str,
    max_width: float,
    metrics: TextMetrics,
    font_size: float,
    font_family: str,
) -> list[str]:
    """Greedily pack whitespace-separated words into lines of ``max_width``.

    A word wider than ``max_width`` on its own still gets a line of its own.
    """
    lines: list[str] = []
    current: list[str] = []
    for word in text.split():
        candidate = " ".join(current + [word])
        if current and metrics.measure_width(candidate, font_size, font_family) > max_width:
            lines.append(" ".join(current))
            current = [word]
        else:
            current.append(word)
    if current:
        lines.append(" ".join(current))
    return lines


class LabelLayoutEngine:
    """Computes axis and data labels from the grid geometry."""

    @staticmethod
    def x_labels(
        chart_data: ChartData,
        geometry: LayoutGeometry,
        settings: AxisLabelSettings,
        metrics: TextMetrics,
    ) -> list[LabelSpec]:
        """One label per row category, centred above its column."""
        if not settings.show:
            return []
        labels = []
        y = geometry.y_offset + SHIFT_LABEL_FROM_GRID
        for i, category in enumerate(chart_data.categories_x):
            text = metrics.ellipsize(category, geometry.cell_width, settings.font_size, settings.font_family)
            labels.append(LabelSpec(
                lines=(text,),
                x=geometry.x_offset + (i + 0.5) * geometry.cell_width,
                y=y,
                anchor="middle",
                role=StyleRole.AXIS_X_LABEL,
                font_size=settings.font_size,
                font_family=settings.font_family,
                fill=settings.fill,
            ))
        return labels

    @staticmethod
    def y_labels(
        chart_data: ChartData,
        geometry: LayoutGeometry,
        settings: YAxisLabelSettings,
        metrics: TextMetrics,
    ) -> list[LabelSpec]:
        """One label per value column, truncated then word-wrapped.

        Lines wrap within ``cell_width + x_offset``; every line is finally
        ellipsized to that budget.
        """
        if not settings.show:
            return []
        budget = geometry.cell_width + geometry.x_offset
        line_height = settings.font_size * LINE_HEIGHT_EMS
        x = geometry.margin.left + SHIFT_LABEL_FROM_GRID
        labels = []
        for i, name in enumerate(chart_data.categories_y):
            text = truncate_text(name, settings.max_text_symbol)
            lines = wrap_words(text, budget, metrics, settings.font_size, settings.font_family) or [""]
            lines = [
                metrics.ellipsize(line, budget, settings.font_size, settings.font_family)
                for line in lines
            ]
            y = (
                i * geometry.cell_height
                + geometry.cell_height / 2
                + geometry.y_offset
                - geometry.y_axis_height / 3
                + Y_LABEL_BASELINE_EMS * settings.font_size
            )
            labels.append(LabelSpec(
                lines=tuple(lines),
                x=x,
                y=y,
                anchor="start",
                role=StyleRole.AXIS_Y_LABEL,
                font_size=settings.font_size,
                font_family=settings.font_family,
                fill=settings.fill,
                line_height=line_height,
            ))
        return labels

    @staticmethod
    def data_labels(
        chart_data: ChartData,
        geometry: LayoutGeometry,
        settings: DataLabelSettings,
        metrics: TextMetrics,
    ) -> list[LabelSpec]:
        """Value labels centred in their cells.

        All labels are suppressed when they are taller than a cell. Null
        cells get no label; a value of exactly 0 is written as "0".
        """
        if not settings.show or geometry.data_label_height > geometry.cell_height:
            return []
        labels = []
        for point in chart_data.points:
            if math.isnan(point.value):
                continue
            text = "0" if point.value == 0 else point.value_label
            text = metrics.ellipsize(text, geometry.cell_width, settings.font_size, settings.font_family)
            rect = geometry.cell_rect(point.x_index, point.y_index)
            labels.append(LabelSpec(
                lines=(text,),
                x=rect.x + rect.width / 2,
                y=rect.y + rect.height / 2 + geometry.data_label_height / DATA_LABEL_BASELINE_DIVISOR,
                anchor="middle",
                role=StyleRole.DATA_LABEL,
                font_size=settings.font_size,
                font_family=settings.font_family,
                fill=settings.fill,
            ))
        return labels

    @staticmethod
    def serialize(labels: list[LabelSpec]) -> list[dict]:
        """Serialize label specs for JSON transfer."""
        return [label.to_dict() for label in labels]
