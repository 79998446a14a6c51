"""Data conversion, settings and color scales."""

from .color_scale import BucketColorScale, ColorScaleBuilder, normalize_settings
from .formatting import ValueFormatter
from .settings import HeatmapSettings
from .table import ChartData, DataPoint, DataTable, TableColumn, TableConverter, convert
from .validation import MissingDataError

__all__ = [
    "BucketColorScale",
    "ColorScaleBuilder",
    "normalize_settings",
    "ValueFormatter",
    "HeatmapSettings",
    "ChartData",
    "DataPoint",
    "DataTable",
    "TableColumn",
    "TableConverter",
    "convert",
    "MissingDataError",
]
