"""Shared style constants for DIRPLAY."""

COLORS = {
    "bass": "#5f5fd7",
    "primary": "#d75fd7",
    "highlight": "#5fd7ff",
    "background": "#121212",
    "muted": "#8a8a8a",
    "dim": "#585858",
    "inactive": "#3a3a3a",
}

COLOR_BASS = COLORS["bass"]
COLOR_PRIMARY = COLORS["primary"]
COLOR_HIGHLIGHT = COLORS["highlight"]
COLOR_BACKGROUND = COLORS["background"]
COLOR_MUTED = COLORS["muted"]
COLOR_DIM = COLORS["dim"]
COLOR_INACTIVE = COLORS["inactive"]
