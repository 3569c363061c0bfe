"""Rendering collaborators that turn preference state into visuals."""

from __future__ import annotations

from typing import Protocol

from PySide6.QtWidgets import QApplication

from organizze.preferences.registry import ThemeRegistry
from organizze.preferences.stylesheet import build_stylesheet
from organizze.ui.widgets.wallpaper_backdrop import WallpaperBackdrop


class PreferenceRenderer(Protocol):
    """Side-effecting sink the PreferenceStore applies its state through."""

    def apply_theme(self, theme_id: str) -> None: ...

    def apply_background(self, image: str | None, opacity: float) -> None: ...


class QtPreferenceRenderer:
    """Apply themes to QApplication and wallpaper to a backdrop widget."""

    def __init__(
        self,
        app: QApplication,
        registry: ThemeRegistry,
        backdrop: WallpaperBackdrop | None = None,
    ) -> None:
        self._app = app
        self._registry = registry
        self._backdrop = backdrop

    def set_backdrop(self, backdrop: WallpaperBackdrop | None) -> None:
        self._backdrop = backdrop

    def apply_theme(self, theme_id: str) -> None:
        theme = self._registry.get_theme(theme_id) or self._registry.fallback()
        self._app.setStyleSheet(build_stylesheet(theme))
        self._app.setProperty("themeId", theme.theme_id)
        self._app.setProperty("themeAppearance", theme.appearance)

    def apply_background(self, image: str | None, opacity: float) -> None:
        if self._backdrop is None:
            return
        self._backdrop.set_wallpaper(image)
        self._backdrop.set_opacity(opacity)
