"""Default Void theme: white modules on black."""

from void_type.render.style import Theme

VOID_THEME = Theme(
    name="void",
    color="#ffffff",
    background_color="#000000",
    grid_color="#333333",
)
