"""Grid, label and legend layout."""

from .geometry import Margin, Rect, Viewport
from .grid_layout import GridLayoutEngine, LayoutGeometry
from .text_metrics import ApproximateTextMetrics, MatplotlibTextMetrics, TextMetrics

__all__ = [
    "Margin",
    "Rect",
    "Viewport",
    "GridLayoutEngine",
    "LayoutGeometry",
    "ApproximateTextMetrics",
    "MatplotlibTextMetrics",
    "TextMetrics",
]
