"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- How the template's style block maps onto a Textual theme
- Dark/light mode configuration
"""

from textual.theme import Theme

from ..config import CssConfig

THEME_NAME = "chatwidget"

# Catppuccin Mocha
_DARK_PALETTE = {
    "accent": "#f9e2af",
    "foreground": "#cdd6f4",
    "background": "#11111b",
    "success": "#a6e3a1",
    "warning": "#fab387",
    "error": "#f38ba8",
    "surface": "#1e1e2e",
    "panel": "#181825",
}

# Catppuccin Latte
_LIGHT_PALETTE = {
    "accent": "#df8e1d",
    "foreground": "#4c4f69",
    "background": "#eff1f5",
    "success": "#40a02b",
    "warning": "#fe640b",
    "error": "#d20f39",
    "surface": "#e6e9ef",
    "panel": "#dce0e8",
}


def build_theme(css: CssConfig) -> Theme:
    """Build the widget theme from the template's style block.

    Primary and secondary colors come from the template; the rest of the
    palette follows the dark-mode toggle.
    """
    palette = _DARK_PALETTE if css.dark_mode else _LIGHT_PALETTE
    return Theme(
        name=THEME_NAME,
        primary=css.primary_color,
        secondary=css.secondary_color,
        dark=css.dark_mode,
        variables={
            "input-selection-background": f"{css.primary_color} 30%",
            "border": css.secondary_color,
            "border-blurred": palette["panel"],
            "scrollbar-active": css.primary_color,
            "link-color": css.primary_color,
            "link-style": "underline",
            "footer-key-foreground": palette["accent"],
        },
        **palette,
    )
