"""SVG export: paint a Scene as a standalone SVG document."""

from __future__ import annotations

import pathlib

import jinja2

from ..render.scene import Scene
from ..render.style import StyleRole

_TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"


def _px(value: float) -> str:
    """Compact pixel value: at most two decimals, no trailing zeros."""
    text = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _tooltip(items) -> str:
    return "\n".join(f"{name}: {value}" for name, value in items)


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=True,  # labels and tooltips are user content
    )
    env.filters["px"] = _px
    env.filters["tooltip"] = _tooltip
    return env


def render_svg(scene: Scene, title: str | None = None) -> str:
    """Render a scene to an SVG string."""
    template = _environment().get_template("heatmap.svg.j2")
    return template.render(scene=scene, title=title, roles=StyleRole)


def export_svg(scene: Scene, path: str | pathlib.Path, title: str | None = None) -> None:
    """Write a scene as a standalone SVG file."""
    path = pathlib.Path(path)
    path.write_text(render_svg(scene, title=title), encoding="utf-8")
