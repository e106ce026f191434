"""Terminal styling for skillbox."""

from utils.tui.theme import Theme, set_theme

__all__ = [
    "Theme",
    "set_theme",
]
