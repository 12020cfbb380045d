"""Light theme."""

from void_type.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    color="#111111",
    background_color="#ffffff",
    grid_color="#dddddd",
)
