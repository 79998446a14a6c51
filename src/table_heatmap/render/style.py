"""Semantic style roles for scene elements."""

from __future__ import annotations

from enum import Enum


class StyleRole(str, Enum):
    """What a scene element is, so a drawing surface can style it."""

    CELL = "cell"
    AXIS_X_LABEL = "axis-x-label"
    AXIS_Y_LABEL = "axis-y-label"
    DATA_LABEL = "data-label"
    LEGEND_SWATCH = "legend-swatch"
    LEGEND_LABEL = "legend-label"
