"""ValueFormatter: format-string + sample value -> reusable formatter.

A formatter is built once per column from the column's declared format
string and one representative raw value (the column's first value), then
reused for every row of that column. Supported format strings are the
.NET-style custom patterns hosts usually attach to columns::

    "#,0"          -> 1,234
    "0.00"         -> 1234.50
    "$#,0.##"      -> $1,234.5
    "0.0 %"        -> 12.5 %
    "#,0,"         -> 1 (thousands scaling)
    "0;(0)"        -> (12) for negatives
    "dd/MM/yyyy"   -> 31/01/2024 (date-like samples)
"""

from __future__ import annotations

import datetime as _dt
import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
import pandas as pd


BLANK_TEXT = "(Blank)"
MAX_SAMPLE_DECIMALS = 4
_GENERAL_NAMES = {"", "g", "general"}

_NUMBER_PATTERN = re.compile(
    r"^(?P<prefix>[^#0.,]*?)(?P<body>[#0,]+(?:\.[#0]*)?|\.[#0]+)(?P<suffix>.*)$"
)

_DATE_TOKEN = re.compile(r"yyyy|yy|MMMM|MMM|MM|M|dddd|ddd|dd|d|HH|H|hh|h|mm|m|ss|s|tt")

_DATE_TOKENS: dict[str, Callable[[pd.Timestamp], str]] = {
    "yyyy": lambda t: f"{t.year:04d}",
    "yy": lambda t: f"{t.year % 100:02d}",
    "MMMM": lambda t: t.strftime("%B"),
    "MMM": lambda t: t.strftime("%b"),
    "MM": lambda t: f"{t.month:02d}",
    "M": lambda t: str(t.month),
    "dddd": lambda t: t.strftime("%A"),
    "ddd": lambda t: t.strftime("%a"),
    "dd": lambda t: f"{t.day:02d}",
    "d": lambda t: str(t.day),
    "HH": lambda t: f"{t.hour:02d}",
    "H": lambda t: str(t.hour),
    "hh": lambda t: f"{(t.hour % 12) or 12:02d}",
    "h": lambda t: str((t.hour % 12) or 12),
    "mm": lambda t: f"{t.minute:02d}",
    "m": lambda t: str(t.minute),
    "ss": lambda t: f"{t.second:02d}",
    "s": lambda t: str(t.second),
    "tt": lambda t: "AM" if t.hour < 12 else "PM",
}


def is_blank(value: Any) -> bool:
    """True for None, NaN and NaT scalars."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Number, np.number)) and not isinstance(value, (bool, np.bool_))


def _is_date(value: Any) -> bool:
    return isinstance(value, (_dt.date, np.datetime64, pd.Timestamp))


@dataclass(frozen=True)
class _NumberPattern:
    """One parsed section of a numeric format string."""

    prefix: str = ""
    suffix: str = ""
    decimals: int = 0
    min_decimals: int = 0
    grouping: bool = False
    percent: bool = False
    scale_thousands: int = 0

    @classmethod
    def parse(cls, section: str) -> _NumberPattern | None:
        match = _NUMBER_PATTERN.match(section)
        if match is None:
            return None
        body = match.group("body")
        integer_part, _, fraction = body.partition(".")
        stripped = integer_part.rstrip(",")
        prefix = _unquote(match.group("prefix"))
        suffix = _unquote(match.group("suffix"))
        return cls(
            prefix=prefix,
            suffix=suffix,
            decimals=len(fraction),
            min_decimals=fraction.count("0"),
            grouping="," in stripped,
            percent="%" in prefix or "%" in suffix,
            scale_thousands=len(integer_part) - len(stripped),
        )

    def render(self, value: float) -> str:
        if self.percent:
            value *= 100.0
        if self.scale_thousands:
            value /= 1000.0 ** self.scale_thousands
        text = f"{value:{',' if self.grouping else ''}.{self.decimals}f}"
        if self.decimals > self.min_decimals:
            whole, _, frac = text.partition(".")
            frac = frac.rstrip("0")
            if len(frac) < self.min_decimals:
                frac = frac.ljust(self.min_decimals, "0")
            text = f"{whole}.{frac}" if frac else whole
        return f"{self.prefix}{text}{self.suffix}"


def _unquote(literal: str) -> str:
    return literal.replace('"', "").replace("'", "").replace("\\", "")


def sample_decimals(sample: Any) -> int:
    """Number of decimals to show, inferred from one sample value."""
    if not _is_number(sample):
        return 0
    value = float(sample)
    if not math.isfinite(value) or value.is_integer():
        return 0
    text = repr(value)
    if "e" in text or "E" in text:
        return MAX_SAMPLE_DECIMALS
    return min(len(text.partition(".")[2]), MAX_SAMPLE_DECIMALS)


class ValueFormatter:
    """Formats raw column values for labels and tooltips.

    Build one with :meth:`create`; the kind of formatter (number, date or
    text) is inferred from the sample value.
    """

    __slots__ = ("_format_string", "_kind", "_sections", "_decimals")

    def __init__(
        self,
        format_string: str | None,
        kind: str,
        sections: tuple[_NumberPattern, ...] = (),
        decimals: int = 0,
    ) -> None:
        self._format_string = format_string
        self._kind = kind
        self._sections = sections
        self._decimals = decimals

    @classmethod
    def create(cls, format_string: str | None = None, sample: Any = None) -> ValueFormatter:
        """Build a formatter from a format string and a representative value."""
        fmt = (format_string or "").strip()
        if _is_date(sample):
            return cls(fmt or None, "date")
        if isinstance(sample, str) or isinstance(sample, (bool, np.bool_)):
            return cls(fmt or None, "text")

        sections: tuple[_NumberPattern, ...] = ()
        if fmt.lower() not in _GENERAL_NAMES:
            parsed = [_NumberPattern.parse(s) for s in fmt.split(";")[:3]]
            if parsed and parsed[0] is not None:
                sections = tuple(p if p is not None else parsed[0] for p in parsed)
        if sample is None and not sections:
            return cls(fmt or None, "general")
        return cls(fmt or None, "number", sections, sample_decimals(sample))

    @property
    def format_string(self) -> str | None:
        return self._format_string

    @property
    def kind(self) -> str:
        """One of 'number', 'date', 'text' or 'general'."""
        return self._kind

    def format(self, value: Any) -> str:
        """Format a single raw value. Blank values render as ``(Blank)``."""
        if is_blank(value):
            return BLANK_TEXT
        if self._kind == "text":
            return str(value)
        if self._kind == "date":
            return self._format_date(value)
        if self._kind == "general":
            if _is_date(value):
                return self._format_date(value)
            if not _is_number(value):
                return str(value)
            return _format_default_number(float(value), sample_decimals(value))
        return self._format_number(value)

    def __call__(self, value: Any) -> str:
        return self.format(value)

    def _format_number(self, value: Any) -> str:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return str(value)
        if not math.isfinite(number):
            return str(number)
        if not self._sections:
            return _format_default_number(number, self._decimals)
        if number < 0 and len(self._sections) > 1:
            return self._sections[1].render(-number)
        if number == 0 and len(self._sections) > 2:
            return self._sections[2].render(number)
        return self._sections[0].render(number)

    def _format_date(self, value: Any) -> str:
        try:
            ts = pd.Timestamp(value)
        except (TypeError, ValueError):
            return str(value)
        if self._format_string:
            return _DATE_TOKEN.sub(lambda m: _DATE_TOKENS[m.group(0)](ts), self._format_string)
        if ts.hour or ts.minute or ts.second:
            return ts.isoformat(sep=" ")
        return ts.date().isoformat()

    def __repr__(self) -> str:
        return f"ValueFormatter(kind={self._kind!r}, format_string={self._format_string!r})"


def _format_default_number(value: float, decimals: int) -> str:
    if decimals == 0:
        rounded = round(value)
        return str(int(rounded)) if rounded != 0 else "0"
    return f"{value:.{decimals}f}"
