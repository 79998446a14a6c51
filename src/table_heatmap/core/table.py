"""TableConverter: raw category x values table -> normalized ChartData."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np
import pandas as pd

from .formatting import ValueFormatter, is_blank, sample_decimals
from .validation import (
    MissingDataError,
    validate_dataframe_table,
    validate_unique_categories,
)


TooltipItems = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class TableColumn:
    """One column of the input table: display name, format and raw values."""

    display_name: str | None
    values: tuple
    format: str | None = None

    @classmethod
    def of(cls, display_name: str | None, values: Sequence, format: str | None = None) -> TableColumn:
        return cls(display_name=display_name, values=tuple(values), format=format)


@dataclass(frozen=True)
class DataTable:
    """Table-shaped data view: one category column plus value columns."""

    category: TableColumn | None
    values: tuple[TableColumn, ...] = ()

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        category: str | None = None,
        formats: dict[str, str] | None = None,
    ) -> DataTable:
        """Build a DataTable from a DataFrame.

        Parameters
        ----------
        df : pd.DataFrame
            One row per row category.
        category : str, optional
            Name of the category column. Defaults to the DataFrame index.
        formats : dict, optional
            ``{column_name: format_string}`` for category and value columns.
        """
        df = validate_dataframe_table(df, category)
        formats = formats or {}
        if category is None:
            name = df.index.name
            cat_col = TableColumn.of(name, df.index.tolist(), formats.get(name))
            value_names = list(df.columns)
        else:
            cat_col = TableColumn.of(category, df[category].tolist(), formats.get(category))
            value_names = [c for c in df.columns if c != category]
        value_cols = tuple(
            TableColumn.of(
                None if is_blank(c) else str(c),
                df[c].tolist(),
                formats.get(c),
            )
            for c in value_names
        )
        return cls(category=cat_col, values=value_cols)


@dataclass(frozen=True)
class DataPoint:
    """One grid cell: (row category, value column) -> value."""

    category_x: str
    category_y: str
    value: float
    value_label: str
    tooltip: TooltipItems = ()
    x_index: int = 0
    y_index: int = 0

    @property
    def is_null(self) -> bool:
        return math.isnan(self.value)


@dataclass(frozen=True)
class ChartData:
    """Normalized point set for one update cycle.

    ``categories_x`` holds the formatted row categories (unique, source
    order) and ``categories_y`` the value-column display names; together
    they index the grid, so ``len(points) == len(categories_x) * len(categories_y)``.
    """

    points: tuple[DataPoint, ...]
    categories_x: tuple[str, ...]
    categories_y: tuple[str, ...]
    x_formatter: ValueFormatter
    y_formatter: ValueFormatter
    _values: np.ndarray | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._values is None:
            values = np.array([p.value for p in self.points], dtype=np.float64)
            object.__setattr__(self, "_values", values)

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self.categories_x), len(self.categories_y))

    @property
    def values(self) -> np.ndarray:
        """Point values in point order (float64, NaN for nulls)."""
        return self._values

    def value_range(self) -> tuple[float, float]:
        """Return (min, max) of all finite values."""
        finite = self._values[np.isfinite(self._values)]
        if len(finite) == 0:
            raise MissingDataError("Table has no numeric values to color.")
        return (float(finite.min()), float(finite.max()))

    def longest_value_label(self) -> str:
        """The longest formatted value label (first one wins on ties)."""
        longest = ""
        for point in self.points:
            if len(point.value_label) > len(longest):
                longest = point.value_label
        return longest


class TableConverter:
    """Converts a DataTable into ChartData.

    Every value column gets its own formatter, built from the column's format
    string and its first raw value and reused for all rows of that column.
    """

    @staticmethod
    def convert(table: DataTable) -> ChartData:
        if not isinstance(table, DataTable):
            raise TypeError(
                f"Expected a DataTable, got {type(table).__name__}. "
                "Use DataTable.from_dataframe(df) to build one."
            )
        if table.category is None:
            raise MissingDataError("Table has no category column.")
        columns = [c for c in table.values if c.display_name is not None]
        if not columns:
            raise MissingDataError("Table has no named value columns.")

        raw_categories = table.category.values
        rows = [i for i, cat in enumerate(raw_categories) if not is_blank(cat)]
        if not rows:
            raise MissingDataError("Table has no rows with a category.")

        x_formatter, categories_x = _format_categories(
            table.category.format, [raw_categories[i] for i in rows],
        )
        y_formatter = ValueFormatter.create(columns[0].format, _first(columns[0].values))
        column_formatters = [ValueFormatter.create(c.format, _first(c.values)) for c in columns]
        column_values = [
            pd.to_numeric(pd.Series(c.values, dtype=object), errors="coerce").to_numpy(dtype=np.float64)
            for c in columns
        ]

        points: list[DataPoint] = []
        for x_index, row in enumerate(rows):
            category_text = categories_x[x_index]
            for y_index, column in enumerate(columns):
                raw = column.values[row] if row < len(column.values) else None
                value = float(column_values[y_index][row]) if row < len(column.values) else math.nan
                label = column_formatters[y_index].format(raw)
                points.append(DataPoint(
                    category_x=category_text,
                    category_y=column.display_name,
                    value=value,
                    value_label=label,
                    tooltip=(
                        ("Category", category_text),
                        ("Y", str(column.display_name)),
                        ("Value", label),
                    ),
                    x_index=x_index,
                    y_index=y_index,
                ))

        return ChartData(
            points=tuple(points),
            categories_x=tuple(categories_x),
            categories_y=tuple(c.display_name for c in columns),
            x_formatter=x_formatter,
            y_formatter=y_formatter,
        )


def convert(table: DataTable | pd.DataFrame, **kwargs: Any) -> ChartData:
    """Convert a DataTable (or a DataFrame, via DataTable.from_dataframe)."""
    if isinstance(table, pd.DataFrame):
        table = DataTable.from_dataframe(table, **kwargs)
    return TableConverter.convert(table)


def _first(values: Sequence) -> Any:
    return values[0] if len(values) > 0 else None


def _format_categories(format_string: str | None, categories: list) -> tuple[ValueFormatter, list[str]]:
    """Format row categories into unique axis texts.

    The formatter is sampled from the first category. Without an explicit
    format, numeric categories that collide once formatted are re-formatted
    with the decimals of the most precise category.
    """
    formatter = ValueFormatter.create(format_string, categories[0])
    texts = [formatter.format(c) for c in categories]
    if len(set(texts)) < len(texts) and not format_string and formatter.kind == "number":
        widest = max(categories, key=sample_decimals)
        formatter = ValueFormatter.create(None, widest)
        texts = [formatter.format(c) for c in categories]
    return formatter, validate_unique_categories(texts)
