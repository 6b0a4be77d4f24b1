"""Plotly rendering of prepared series."""

from scatters.render.figure import RenderOptions, make_figure, write_html
from scatters.render.theme import ThemeMode

__all__ = [
    "RenderOptions",
    "ThemeMode",
    "make_figure",
    "write_html",
]
