"""Preference framework models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from organizze.preferences.constants import DEFAULT_THEME_ID, DEFAULT_WALLPAPER_OPACITY


class ThemeValidationError(ValueError):
    """Raised when a user theme package fails validation."""


class BuiltinTheme(str, Enum):
    """Identifiers of the themes shipped with the application."""

    WARM = "warm"
    DARK = "dark"


@dataclass(frozen=True, slots=True)
class ThemePalette:
    """Colors a theme contributes to the stylesheet."""

    primary: str
    accent: str
    dark: str


@dataclass(frozen=True, slots=True)
class ThemeDefinition:
    """A named palette applied globally to the interface."""

    theme_id: str
    name: str
    description: str
    icon: str
    colors: ThemePalette
    appearance: str = "light"
    is_builtin: bool = True
    source_dir: Path | None = None


@dataclass(slots=True)
class PreferenceState:
    """Mutable preference values owned by a PreferenceStore."""

    active_theme_id: str = DEFAULT_THEME_ID
    wallpaper_image: str | None = None
    wallpaper_opacity: float = DEFAULT_WALLPAPER_OPACITY

    @property
    def has_wallpaper(self) -> bool:
        return bool(self.wallpaper_image)


@dataclass(frozen=True, slots=True)
class WallpaperSettings:
    """Display-ready wallpaper summary."""

    has_wallpaper: bool
    opacity: float
    preview: str | None


@dataclass(frozen=True, slots=True)
class UploadResult:
    """Outcome of a wallpaper upload that reached the store."""

    request_id: int
    message: str
    preview: str
