"""Theme definitions for Void renders."""

from void_type.themes.light import LIGHT_THEME
from void_type.themes.void import VOID_THEME

THEMES = {
    "void": VOID_THEME,
    "light": LIGHT_THEME,
}

__all__ = ["THEMES", "VOID_THEME", "LIGHT_THEME"]
