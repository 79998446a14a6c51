"""Text measurement used by the layout engines."""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Protocol, runtime_checkable


ELLIPSIS = "…"


@runtime_checkable
class TextMetrics(Protocol):
    """Measures rendered text in pixels for a font size and family."""

    def measure_width(self, text: str, font_size: float, font_family: str) -> float:
        ...

    def measure_height(self, text: str, font_size: float, font_family: str) -> float:
        ...

    def ellipsize(self, text: str, max_width: float, font_size: float, font_family: str) -> str:
        ...


class BaseTextMetrics(ABC):
    """Shared ellipsis logic on top of :meth:`measure_width`."""

    @abstractmethod
    def measure_width(self, text: str, font_size: float, font_family: str) -> float:
        """Rendered width of ``text`` in pixels."""
        ...

    @abstractmethod
    def measure_height(self, text: str, font_size: float, font_family: str) -> float:
        """Rendered line height of ``text`` in pixels."""
        ...

    def ellipsize(self, text: str, max_width: float, font_size: float, font_family: str) -> str:
        """Longest prefix of ``text`` that fits ``max_width`` once "…" is appended.

        Text that already fits is returned unchanged; when not even one
        character fits the result is the bare ellipsis.
        """
        if self.measure_width(text, font_size, font_family) <= max_width:
            return text
        lo, hi = 0, len(text)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            candidate = text[:mid].rstrip() + ELLIPSIS
            if self.measure_width(candidate, font_size, font_family) <= max_width:
                lo = mid
            else:
                hi = mid - 1
        return text[:lo].rstrip() + ELLIPSIS


class ApproximateTextMetrics(BaseTextMetrics):
    """Deterministic metrics: every character has the same advance width.

    At a 10px font with the default ratio a character is 6.5px wide.
    """

    def __init__(self, char_width_ratio: float = 0.65, line_height_ratio: float = 1.2) -> None:
        self._char_width_ratio = char_width_ratio
        self._line_height_ratio = line_height_ratio

    def measure_width(self, text: str, font_size: float, font_family: str) -> float:
        return len(text) * font_size * self._char_width_ratio

    def measure_height(self, text: str, font_size: float, font_family: str) -> float:
        return font_size * self._line_height_ratio


class MatplotlibTextMetrics(BaseTextMetrics):
    """Glyph-accurate metrics from matplotlib's font machinery.

    Font sizes are treated as pixels (matplotlib points at 72 dpi).
    Unknown families fall back to matplotlib's default font.
    """

    HEIGHT_SAMPLE = "Mg"

    def measure_width(self, text: str, font_size: float, font_family: str) -> float:
        return _text_extent(text, float(font_size), font_family)[0]

    def measure_height(self, text: str, font_size: float, font_family: str) -> float:
        return _text_extent(text or self.HEIGHT_SAMPLE, float(font_size), font_family)[1]


@lru_cache(maxsize=64)
def _font_path(font_family: str) -> str:
    from matplotlib import font_manager

    return font_manager.findfont(
        font_manager.FontProperties(family=font_family), fallback_to_default=True,
    )


@lru_cache(maxsize=4096)
def _text_extent(text: str, font_size: float, font_family: str) -> tuple[float, float]:
    from matplotlib.font_manager import FontProperties
    from matplotlib.textpath import TextToPath

    if not text:
        return (0.0, 0.0)
    prop = FontProperties(fname=_font_path(font_family), size=font_size)
    width, height, _descent = TextToPath().get_text_width_height_descent(text, prop, ismath=False)
    return (float(width), float(height))


def truncate_text(text: str, limit: int) -> str:
    """Hard-truncate ``text`` to at most ``limit`` characters.

    Truncated text keeps ``limit - 3`` characters (whitespace-stripped) and
    gets "…" appended.
    """
    if len(text) > limit:
        return text[:max(limit - 3, 0)].strip() + ELLIPSIS
    return text
