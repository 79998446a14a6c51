"""Input validation with clear error messages for table-driven heatmaps."""

from __future__ import annotations

from typing import Any

import pandas as pd


class MissingDataError(ValueError):
    """Raised when a table cannot produce a grid.

    Covers missing category or value columns, zero rows, and tables that
    are empty once null categories and unnamed columns are filtered out.
    The orchestrator treats it as "nothing to draw", never as a crash.
    """


def validate_dataframe_table(data: Any, category: str | None) -> pd.DataFrame:
    """Validate that data is a DataFrame usable as a category x values table.

    Returns the validated DataFrame (unchanged).
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas DataFrame, got {type(data).__name__}. "
            "Wrap your data with pd.DataFrame(data) first."
        )
    if data.columns.has_duplicates:
        dupes = data.columns[data.columns.duplicated()].unique().tolist()
        raise ValueError(
            f"Column names must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    if category is not None and category not in data.columns:
        raise MissingDataError(
            f"Category column '{category}' not found. "
            f"Available columns: {list(data.columns)[:10]}"
        )
    return data


def validate_unique_categories(categories: list) -> list:
    """Validate that row categories are unique (one grid row per category)."""
    seen: set = set()
    dupes = []
    for cat in categories:
        if cat in seen and cat not in dupes:
            dupes.append(cat)
        seen.add(cat)
    if dupes:
        raise ValueError(
            f"Row categories must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    return categories


def validate_viewport(width: float, height: float) -> tuple[float, float]:
    """Validate that a viewport has a positive pixel size."""
    if width <= 0 or height <= 0:
        raise ValueError(
            f"Viewport must have a positive size, got {width!r} x {height!r}."
        )
    return float(width), float(height)


def validate_color(color: str) -> str:
    """Validate that a color string is understood by matplotlib."""
    from matplotlib.colors import is_color_like

    if not isinstance(color, str) or not is_color_like(color):
        raise ValueError(
            f"Unknown color {color!r}. Use a hex string like '#FF0000' "
            "or a named color like 'red'."
        )
    return color
