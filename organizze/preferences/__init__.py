"""Theme and wallpaper preference exports."""

from organizze.preferences.constants import DEFAULT_THEME_ID, DEFAULT_WALLPAPER_OPACITY
from organizze.preferences.models import (
    BuiltinTheme,
    PreferenceState,
    ThemeDefinition,
    ThemePalette,
    ThemeValidationError,
    UploadResult,
    WallpaperSettings,
)
from organizze.preferences.registry import ThemeRegistry
from organizze.preferences.render import PreferenceRenderer, QtPreferenceRenderer
from organizze.preferences.store import PreferenceStore

__all__ = [
    "DEFAULT_THEME_ID",
    "DEFAULT_WALLPAPER_OPACITY",
    "BuiltinTheme",
    "PreferenceState",
    "ThemeDefinition",
    "ThemePalette",
    "ThemeValidationError",
    "UploadResult",
    "WallpaperSettings",
    "ThemeRegistry",
    "PreferenceRenderer",
    "QtPreferenceRenderer",
    "PreferenceStore",
]
