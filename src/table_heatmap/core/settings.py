"""HeatmapSettings: immutable configuration snapshot for one update."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping


DEFAULT_PALETTE = "Reds"
DEFAULT_FONT_FAMILY = "Segoe UI"


@dataclass(frozen=True)
class GeneralSettings:
    """Bucket count and color source."""

    buckets: int = 5
    colorbrewer: str = DEFAULT_PALETTE
    enable_colorbrewer: bool = True
    gradient_start: str = "#FFFFFF"
    gradient_end: str = "#FF0000"
    fill_null_values_cells: bool = True


@dataclass(frozen=True)
class AxisLabelSettings:
    show: bool = True
    font_size: float = 12.0
    font_family: str = DEFAULT_FONT_FAMILY
    fill: str = "#000000"


@dataclass(frozen=True)
class YAxisLabelSettings(AxisLabelSettings):
    max_text_symbol: int = 25


@dataclass(frozen=True)
class DataLabelSettings:
    show: bool = False
    font_size: float = 9.0
    font_family: str = DEFAULT_FONT_FAMILY
    fill: str = "#000000"


@dataclass(frozen=True)
class HeatmapSettings:
    """Settings tree recognized by the heatmap.

    Parse host settings with :meth:`from_dict`. Both the host's camelCase
    keys (``enableColorbrewer``) and snake_case keys are accepted, unknown
    keys are ignored and values that cannot be coerced keep their default.
    Range clamping is done separately by ``normalize_settings``.
    """

    general: GeneralSettings = field(default_factory=GeneralSettings)
    x_axis_labels: AxisLabelSettings = field(default_factory=AxisLabelSettings)
    y_axis_labels: YAxisLabelSettings = field(default_factory=YAxisLabelSettings)
    labels: DataLabelSettings = field(default_factory=DataLabelSettings)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> HeatmapSettings:
        raw = raw or {}
        sections = {}
        for f in dataclasses.fields(cls):
            section_raw = _lookup(raw, f.name)
            default = f.default_factory()
            if isinstance(section_raw, Mapping):
                sections[f.name] = _parse_section(default, section_raw)
            else:
                sections[f.name] = default
        return cls(**sections)

    def to_dict(self) -> dict:
        """Serialize with the host's camelCase keys."""
        return {
            _camel(f.name): {
                _camel(k): v for k, v in dataclasses.asdict(getattr(self, f.name)).items()
            }
            for f in dataclasses.fields(self)
        }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(w.capitalize() for w in rest)


def _lookup(raw: Mapping[str, Any], name: str) -> Any:
    if name in raw:
        return raw[name]
    return raw.get(_camel(name))


def _parse_section(default: Any, raw: Mapping[str, Any]) -> Any:
    updates = {}
    for f in dataclasses.fields(default):
        value = _lookup(raw, f.name)
        if value is None:
            continue
        coerced = _coerce(value, getattr(default, f.name))
        if coerced is not None:
            updates[f.name] = coerced
    return dataclasses.replace(default, **updates)


def _coerce(value: Any, default: Any) -> Any:
    """Coerce a raw value to the type of ``default``; None when impossible."""
    if isinstance(default, bool):
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "1", "yes", "on"):
                return True
            if lowered in ("false", "0", "no", "off"):
                return False
            return None
        return bool(value)
    if isinstance(default, int):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None
    if isinstance(default, float):
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
    if isinstance(value, Mapping):
        # Host fill objects look like {"solid": {"color": "#ff0000"}}
        solid = value.get("solid")
        if isinstance(solid, Mapping) and isinstance(solid.get("color"), str):
            return solid["color"]
        return None
    return str(value)
