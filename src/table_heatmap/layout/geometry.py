"""Geometric primitives for layout computation."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.validation import validate_viewport


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in pixel space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Margin:
    """Space reserved around the chart group."""

    left: float = 5.0
    right: float = 10.0
    bottom: float = 15.0
    top: float = 10.0


@dataclass(frozen=True)
class Viewport:
    """Pixel size the host gives the visual."""

    width: float
    height: float

    def __post_init__(self) -> None:
        validate_viewport(self.width, self.height)

    def inner(self, margin: Margin) -> Viewport:
        """Viewport minus margins, floored at 1px per side."""
        return Viewport(
            width=max(1.0, self.width - margin.left - margin.right),
            height=max(1.0, self.height - margin.top - margin.bottom),
        )
