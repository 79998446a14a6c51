"""BucketColorScale: bucket colors + quantile mapping of values to buckets."""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Sequence

import numpy as np

from .palettes import COLORBREWER
from .settings import (
    DEFAULT_PALETTE,
    AxisLabelSettings,
    DataLabelSettings,
    GeneralSettings,
    HeatmapSettings,
)
from .validation import validate_color

logger = logging.getLogger(__name__)


BUCKET_COUNT_MIN = 1
BUCKET_COUNT_MAX = 18
COLORBREWER_MAX_BUCKET_COUNT = 14  # exclusive upper bound of the palette key scan
MIN_FONT_SIZE = 1.0
NULL_CELL_COLOR = "#cccccc"


def available_bucket_range(palette_name: str) -> tuple[int, int]:
    """Smallest and largest bucket counts a palette defines in [1, 14).

    Unknown palettes report the default palette's range.
    """
    palette = COLORBREWER.get(palette_name) or COLORBREWER[DEFAULT_PALETTE]
    keys = [n for n in range(BUCKET_COUNT_MIN, COLORBREWER_MAX_BUCKET_COUNT) if n in palette]
    return (keys[0], keys[-1])


def clamp_bucket_count(general: GeneralSettings) -> GeneralSettings:
    """Clamp the bucket count into the range valid for the color mode.

    Gradient mode allows [1, 18]. Palette mode allows the bucket counts the
    selected palette actually defines; an empty palette name selects the
    default palette.
    """
    if not general.enable_colorbrewer:
        buckets = max(BUCKET_COUNT_MIN, min(BUCKET_COUNT_MAX, general.buckets))
        return dataclasses.replace(general, buckets=buckets)

    palette_name = general.colorbrewer or DEFAULT_PALETTE
    lo, hi = available_bucket_range(palette_name)
    buckets = max(lo, min(hi, general.buckets))
    return dataclasses.replace(general, colorbrewer=palette_name, buckets=buckets)


def normalize_settings(settings: HeatmapSettings) -> HeatmapSettings:
    """Return a copy of ``settings`` with every value in its valid range.

    Out-of-range values are corrected, never rejected.
    """
    general = clamp_bucket_count(settings.general)
    defaults = GeneralSettings()
    general = dataclasses.replace(
        general,
        gradient_start=_valid_color(general.gradient_start, defaults.gradient_start),
        gradient_end=_valid_color(general.gradient_end, defaults.gradient_end),
    )
    y_axis = _normalize_text(settings.y_axis_labels, AxisLabelSettings())
    y_axis = dataclasses.replace(y_axis, max_text_symbol=max(1, y_axis.max_text_symbol))
    return dataclasses.replace(
        settings,
        general=general,
        x_axis_labels=_normalize_text(settings.x_axis_labels, AxisLabelSettings()),
        y_axis_labels=y_axis,
        labels=_normalize_text(settings.labels, DataLabelSettings()),
    )


def _normalize_text(section, defaults):
    font_size = section.font_size
    if not math.isfinite(font_size):
        font_size = defaults.font_size
    return dataclasses.replace(
        section,
        font_size=max(MIN_FONT_SIZE, font_size),
        fill=_valid_color(section.fill, defaults.fill),
        font_family=section.font_family or defaults.font_family,
    )


def _valid_color(color: str, default: str) -> str:
    try:
        return validate_color(color)
    except ValueError:
        return default


class QuantileScale:
    """Maps numeric values onto an ordered range by quantile bins.

    Bin boundaries are the k/n quantiles of the domain (linear
    interpolation), n being the range length. A value equal to a boundary
    falls in the lower bin; values outside the domain fall in the first or
    last bin. NaN maps to None.
    """

    __slots__ = ("_range", "_thresholds")

    def __init__(self, domain: Sequence[float], output_range: Sequence) -> None:
        if len(output_range) == 0:
            raise ValueError("QuantileScale needs a non-empty range.")
        self._range = tuple(output_range)
        data = np.asarray(domain, dtype=np.float64)
        data = np.sort(data[np.isfinite(data)])
        n = len(self._range)
        if len(data) == 0 or n == 1:
            self._thresholds = np.empty(0, dtype=np.float64)
        else:
            self._thresholds = np.quantile(data, np.arange(1, n) / n)

    def quantiles(self) -> np.ndarray:
        """The n - 1 bin boundaries (copy)."""
        return self._thresholds.copy()

    def index_of(self, value: float) -> int | None:
        if value is None or math.isnan(value):
            return None
        return int(np.searchsorted(self._thresholds, value, side="left"))

    def indices(self, values: np.ndarray) -> np.ndarray:
        """Vectorized :meth:`index_of`; NaN entries become -1."""
        values = np.asarray(values, dtype=np.float64)
        idx = np.searchsorted(self._thresholds, values, side="left")
        return np.where(np.isnan(values), -1, idx)

    def __call__(self, value: float):
        idx = self.index_of(value)
        return None if idx is None else self._range[idx]


class BucketColorScale:
    """Ordered bucket colors plus a quantile value -> color mapping."""

    __slots__ = ("_colors", "_scale", "_vmin", "_vmax")

    def __init__(self, colors: Sequence[str], vmin: float, vmax: float) -> None:
        self._colors = tuple(colors)
        self._vmin = float(vmin)
        self._vmax = float(vmax)
        self._scale = QuantileScale([self._vmin, self._vmax], self._colors)

    @property
    def colors(self) -> tuple[str, ...]:
        return self._colors

    @property
    def bucket_count(self) -> int:
        return len(self._colors)

    @property
    def vmin(self) -> float:
        return self._vmin

    @property
    def vmax(self) -> float:
        return self._vmax

    @property
    def is_degenerate(self) -> bool:
        """True when every value maps to the same bucket."""
        return self._vmin == self._vmax

    def quantiles(self) -> list[float]:
        return self._scale.quantiles().tolist()

    def bucket_index(self, value: float) -> int | None:
        return self._scale.index_of(value)

    def to_color(self, value: float) -> str | None:
        """Bucket color for a value; None for NaN."""
        return self._scale(value)

    def __call__(self, value: float) -> str | None:
        return self.to_color(value)


class ColorScaleBuilder:
    """Builds the bucket colors and color scale for one update."""

    @staticmethod
    def bucket_colors(general: GeneralSettings) -> list[str]:
        """Bucket colors for (already clamped) general settings."""
        if general.enable_colorbrewer:
            return ColorScaleBuilder._palette_colors(general.colorbrewer, general.buckets)
        return ColorScaleBuilder._gradient_colors(
            general.gradient_start, general.gradient_end, general.buckets,
        )

    @staticmethod
    def build(settings: HeatmapSettings, value_range: tuple[float, float]) -> BucketColorScale:
        """Build the color scale from normalized settings and a (min, max) range."""
        vmin, vmax = value_range
        colors = ColorScaleBuilder.bucket_colors(settings.general)
        return BucketColorScale(colors, vmin=vmin, vmax=vmax)

    @staticmethod
    def _palette_colors(name: str, buckets: int) -> list[str]:
        palette = COLORBREWER.get(name or DEFAULT_PALETTE)
        if palette is not None and buckets in palette:
            return list(palette[buckets])

        default = COLORBREWER[DEFAULT_PALETTE]
        if buckets not in default:
            lo, hi = available_bucket_range(DEFAULT_PALETTE)
            logger.debug(
                "Bucket count %d missing from %r and %r; using %d",
                buckets, name, DEFAULT_PALETTE, max(lo, min(hi, buckets)),
            )
            buckets = max(lo, min(hi, buckets))
        else:
            logger.debug("Palette %r has no %d-bucket scheme; using %r", name, buckets, DEFAULT_PALETTE)
        return list(default[buckets])

    @staticmethod
    def _gradient_colors(start: str, end: str, buckets: int) -> list[str]:
        """Sample a linear start -> end gradient over [0, buckets] at 0..buckets-1."""
        from matplotlib.colors import LinearSegmentedColormap, to_hex

        cmap = LinearSegmentedColormap.from_list("bucket_gradient", [start, end], N=buckets + 1)
        return [to_hex(cmap(i)) for i in range(buckets)]
