"""Preference framework constants."""

from __future__ import annotations

DEFAULT_THEME_ID = "warm"
DEFAULT_WALLPAPER_OPACITY = 0.3

KEY_THEME = "theme"
KEY_WALLPAPER_IMAGE = "wallpaperImage"
KEY_WALLPAPER_OPACITY = "wallpaperOpacity"

PERSISTED_KEYS: tuple[str, ...] = (
    KEY_THEME,
    KEY_WALLPAPER_IMAGE,
    KEY_WALLPAPER_OPACITY,
)

MAX_WALLPAPER_BYTES = 5 * 1024 * 1024
IMAGE_MIME_PREFIX = "image/"
IMAGE_DATA_URI_PREFIX = "data:image/"

PALETTE_KEYS: tuple[str, ...] = (
    "primary",
    "accent",
    "dark",
)

APPEARANCES: tuple[str, ...] = (
    "light",
    "dark",
)
