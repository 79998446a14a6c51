"""table-heatmap: categorical heat maps with quantile-bucketed colors."""

from ._version import __version__
from .api import TableHeatmap
from .core import (
    ChartData,
    DataPoint,
    DataTable,
    HeatmapSettings,
    MissingDataError,
    TableColumn,
    convert,
)
from .layout import ApproximateTextMetrics, MatplotlibTextMetrics, Viewport
from .export.svg_export import render_svg


__all__ = [
    "__version__",
    "TableHeatmap",
    "ChartData",
    "DataPoint",
    "DataTable",
    "HeatmapSettings",
    "MissingDataError",
    "TableColumn",
    "convert",
    "ApproximateTextMetrics",
    "MatplotlibTextMetrics",
    "Viewport",
    "render_svg",
]
