"""Scene: everything a drawing surface needs to paint one update."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass

from ..core.color_scale import NULL_CELL_COLOR, BucketColorScale
from ..core.settings import HeatmapSettings
from ..core.table import ChartData, TooltipItems
from ..layout.geometry import Rect, Viewport
from ..layout.grid_layout import LayoutGeometry
from ..layout.label_layout import LabelSpec
from ..layout.legend_layout import Legend
from .style import StyleRole


DEFAULT_TRANSITION_MS = 1000


@dataclass(frozen=True)
class CellShape:
    """One colored grid cell."""

    rect: Rect
    fill: str
    opacity: float
    tooltip: TooltipItems
    x_index: int
    y_index: int
    role: StyleRole = StyleRole.CELL

    def to_dict(self) -> dict:
        return {
            **self.rect.to_dict(),
            "fill": self.fill,
            "opacity": self.opacity,
            "tooltip": [list(item) for item in self.tooltip],
            "xIndex": self.x_index,
            "yIndex": self.y_index,
        }


@dataclass(frozen=True)
class Scene:
    """Final geometry and colors, positioned in the chart group's space.

    ``origin`` is the translation of the chart group on the surface.
    ``transition_ms`` is a hint for animating fills; 0 means no animation.
    """

    width: float
    height: float
    origin: tuple[float, float]
    cells: tuple[CellShape, ...]
    labels: tuple[LabelSpec, ...]
    legend: Legend
    transition_ms: int = DEFAULT_TRANSITION_MS

    def labels_for(self, role: StyleRole) -> list[LabelSpec]:
        return [label for label in self.labels if label.role is role]

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "origin": list(self.origin),
            "cells": [c.to_dict() for c in self.cells],
            "labels": [label.to_dict() for label in self.labels],
            "legend": self.legend.to_dict(),
            "transitionMs": self.transition_ms,
        }


class SceneBuilder:
    """Binds chart data, colors and layout outputs into a Scene."""

    @staticmethod
    def build_cells(
        chart_data: ChartData,
        color_scale: BucketColorScale,
        geometry: LayoutGeometry,
        settings: HeatmapSettings,
    ) -> list[CellShape]:
        cells = []
        for point in chart_data.points:
            if math.isnan(point.value):
                fill = NULL_CELL_COLOR
                opacity = 1.0 if settings.general.fill_null_values_cells else 0.0
            else:
                fill = color_scale.to_color(point.value)
                opacity = 1.0
            cells.append(CellShape(
                rect=geometry.cell_rect(point.x_index, point.y_index),
                fill=fill,
                opacity=opacity,
                tooltip=point.tooltip,
                x_index=point.x_index,
                y_index=point.y_index,
            ))
        return cells

    @staticmethod
    def build(
        chart_data: ChartData,
        color_scale: BucketColorScale,
        geometry: LayoutGeometry,
        labels: list[LabelSpec],
        legend: Legend,
        settings: HeatmapSettings,
        viewport: Viewport,
        transition_ms: int = DEFAULT_TRANSITION_MS,
    ) -> Scene:
        cells = SceneBuilder.build_cells(chart_data, color_scale, geometry, settings)
        return Scene(
            width=geometry.surface_width,
            height=max(float(viewport.height), geometry.margin.top + legend.required_height),
            origin=(geometry.margin.left, geometry.margin.top),
            cells=tuple(cells),
            labels=tuple(labels),
            legend=legend,
            transition_ms=transition_ms,
        )


def serialize_scene(scene: Scene) -> str:
    """Serialize a scene as a JSON string."""
    return json.dumps(scene.to_dict())
