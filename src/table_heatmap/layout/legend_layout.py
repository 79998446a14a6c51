"""LegendBuilder: quantile breakpoints + bucket colors -> swatches and labels."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.color_scale import BucketColorScale
from ..core.formatting import ValueFormatter
from ..core.table import TooltipItems
from .geometry import Rect
from .grid_layout import LayoutGeometry


LEGEND_OFFSET_FROM_CHART = 0.5  # in cell heights below the last grid row


@dataclass(frozen=True)
class LegendEntry:
    """One swatch: a bucket's lower bound, color and geometry."""

    value: float
    label: str
    color: str
    rect: Rect
    tooltip: TooltipItems

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "label": self.label,
            "color": self.color,
            **self.rect.to_dict(),
            "tooltip": [list(item) for item in self.tooltip],
        }


@dataclass(frozen=True)
class Legend:
    """Legend strip: swatches, the trailing max label and label baseline."""

    entries: tuple[LegendEntry, ...]
    max_label: str
    max_label_x: float
    label_y: float
    required_height: float

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "maxLabel": self.max_label,
            "maxLabelX": self.max_label_x,
            "labelY": self.label_y,
            "requiredHeight": self.required_height,
        }


class LegendBuilder:
    """Lays out one swatch per bucket below the grid.

    Entries are ``[min_value] + quantiles``; each entry's tooltip spans from
    its breakpoint to the next one (or ``max_value`` for the last).
    """

    @staticmethod
    def breakpoints(color_scale: BucketColorScale, min_value: float) -> list[float]:
        return [float(min_value)] + [float(q) for q in color_scale.quantiles()]

    @staticmethod
    def build(
        color_scale: BucketColorScale,
        min_value: float,
        max_value: float,
        geometry: LayoutGeometry,
        formatter: ValueFormatter,
    ) -> Legend:
        values = LegendBuilder.breakpoints(color_scale, min_value)
        margin_top = geometry.margin.top
        cell_height = geometry.cell_height
        rows_span = cell_height * (geometry.n_rows + LEGEND_OFFSET_FROM_CHART)
        swatch_y = margin_top + rows_span + geometry.x_axis_height
        label_y = (
            margin_top
            - cell_height / 2
            + rows_span
            + geometry.legend_element_height * 2
            + geometry.x_axis_height
        )

        entries = []
        for i, (value, color) in enumerate(zip(values, color_scale.colors)):
            upper = values[i + 1] if i + 1 < len(values) else max_value
            entries.append(LegendEntry(
                value=value,
                label=formatter.format(value),
                color=color,
                rect=Rect(
                    x=geometry.legend_element_width * i + geometry.x_offset,
                    y=swatch_y,
                    width=geometry.legend_element_width,
                    height=geometry.legend_element_height,
                ),
                tooltip=(
                    ("Min value", formatter.format(value)),
                    ("Max value", formatter.format(upper)),
                ),
            ))

        return Legend(
            entries=tuple(entries),
            max_label=formatter.format(max_value),
            max_label_x=geometry.legend_element_width * color_scale.bucket_count + geometry.x_offset,
            label_y=label_y,
            required_height=label_y + cell_height,
        )
