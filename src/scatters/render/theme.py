"""Theme utilities for Plotly charts."""

from __future__ import annotations

from enum import Enum


class ThemeMode(str, Enum):
    """Plot theme mode. DARK is the default; LIGHT is the white theme."""

    DARK = "dark"
    LIGHT = "light"


def resolve_theme(theme) -> ThemeMode:
    """Convert str to ThemeMode. Unknown strings fall back to DARK."""
    if isinstance(theme, ThemeMode):
        return theme
    s = str(theme).lower()
    if s in ("light", "white", "plotly_white"):
        return ThemeMode.LIGHT
    return ThemeMode.DARK


def get_theme_colors(theme: ThemeMode) -> tuple[str, str]:
    """Get background and foreground colors for a theme."""
    if theme is ThemeMode.DARK:
        return "#100c2a", "#eeeeee"
    return "#ffffff", "#000000"


def get_theme_template(theme: ThemeMode) -> str:
    """Get Plotly template name for a theme."""
    if theme is ThemeMode.DARK:
        return "plotly_dark"
    return "plotly_white"
