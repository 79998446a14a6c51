"""Shared test fixtures for table-heatmap."""

import numpy as np
import pandas as pd
import pytest

from table_heatmap.core.settings import HeatmapSettings
from table_heatmap.core.color_scale import normalize_settings
from table_heatmap.core.table import DataTable, TableColumn, convert
from table_heatmap.layout.geometry import Viewport
from table_heatmap.layout.text_metrics import ApproximateTextMetrics


@pytest.fixture
def metrics():
    """Deterministic text metrics: 0.65 x font size per character."""
    return ApproximateTextMetrics()


@pytest.fixture
def abc_table():
    """Three row categories, one value column 'M' with values 1, 5, 10."""
    return DataTable(
        category=TableColumn.of("Category", ["A", "B", "C"]),
        values=(TableColumn.of("M", [1, 5, 10]),),
    )


@pytest.fixture
def abc_chart(abc_table):
    return convert(abc_table)


@pytest.fixture
def region_df():
    """4 regions x 3 quarters of sales."""
    return pd.DataFrame(
        {
            "region": ["North", "South", "East", "West"],
            "Q1": [120.0, 80.5, 95.25, 60.0],
            "Q2": [130.0, np.nan, 101.0, 72.5],
            "Q3": [0.0, 88.0, 110.0, 65.0],
        }
    )


@pytest.fixture
def default_settings():
    return normalize_settings(HeatmapSettings())


@pytest.fixture
def gradient_settings():
    """Gradient mode, 3 buckets, red -> blue."""
    return normalize_settings(HeatmapSettings.from_dict({
        "general": {
            "enableColorbrewer": False,
            "buckets": 3,
            "gradientStart": "#ff0000",
            "gradientEnd": "#0000ff",
        }
    }))


@pytest.fixture
def viewport():
    return Viewport(600, 400)
