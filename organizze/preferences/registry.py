"""Theme definitions: built-in set plus user theme packages."""

from __future__ import annotations

from pathlib import Path

from organizze.preferences.constants import DEFAULT_THEME_ID
from organizze.preferences.loader import THEME_FILE_NAME, load_theme_definition
from organizze.preferences.models import (
    BuiltinTheme,
    ThemeDefinition,
    ThemePalette,
    ThemeValidationError,
)

_MAX_THEME_DIR_CANDIDATES = 512

BUILTIN_THEMES: tuple[ThemeDefinition, ...] = (
    ThemeDefinition(
        theme_id=BuiltinTheme.WARM.value,
        name="Warm/Golden Mode",
        description="Suave design with warm tones",
        icon="☀️",
        colors=ThemePalette(primary="#F97316", accent="#F59E0B", dark="#EA580C"),
    ),
    ThemeDefinition(
        theme_id=BuiltinTheme.DARK.value,
        name="Dark Cyan Mode",
        description="Modern dark theme with cyan accents",
        icon="🌙",
        colors=ThemePalette(primary="#06B6D4", accent="#14B8A6", dark="#0891B2"),
        appearance="dark",
    ),
)


class ThemeRegistry:
    """Holds the immutable set of theme definitions for a session."""

    def __init__(self, user_root: Path | None = None) -> None:
        self._user_root = user_root
        self._themes: dict[str, ThemeDefinition] = {}
        self._load_errors: list[str] = []
        self._load_builtins()

    @property
    def user_root(self) -> Path | None:
        return self._user_root

    def reload(self) -> None:
        self._themes = {}
        self._load_errors = []
        self._load_builtins()
        if self._user_root is not None:
            self._load_from_root(self._user_root)

    def list_themes(self) -> list[ThemeDefinition]:
        builtins = [theme for theme in self._themes.values() if theme.is_builtin]
        users = sorted(
            (theme for theme in self._themes.values() if not theme.is_builtin),
            key=lambda theme: theme.name.lower(),
        )
        return builtins + users

    def get_theme(self, theme_id: str) -> ThemeDefinition | None:
        return self._themes.get(theme_id)

    def fallback(self) -> ThemeDefinition:
        return self._themes[DEFAULT_THEME_ID]

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._themes

    def load_errors(self) -> list[str]:
        return list(self._load_errors)

    def _load_builtins(self) -> None:
        for theme in BUILTIN_THEMES:
            self._themes[theme.theme_id] = theme

    def _load_from_root(self, root: Path) -> None:
        if not root.exists():
            return
        try:
            all_dirs = sorted(path for path in root.iterdir() if path.is_dir())
        except OSError as exc:
            self._load_errors.append(f"Failed to list themes in {root}: {exc}")
            return

        candidates: list[Path] = []
        for path in all_dirs:
            if path.is_symlink():
                self._load_errors.append(f"Skipping symlink theme directory: {path}")
                continue
            if not (path / THEME_FILE_NAME).exists():
                continue
            candidates.append(path)
        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            self._load_errors.append(
                f"Theme directory limit exceeded in {root}; "
                f"only first {_MAX_THEME_DIR_CANDIDATES} folders were scanned."
            )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]

        for theme_dir in candidates:
            try:
                theme = load_theme_definition(theme_dir)
            except ThemeValidationError as exc:
                self._load_errors.append(str(exc))
                continue

            existing = self._themes.get(theme.theme_id)
            if existing is not None and existing.is_builtin:
                self._load_errors.append(
                    f"User theme {theme.theme_id!r} at {theme_dir} cannot replace a built-in theme; skipping."
                )
                continue
            if existing is not None:
                self._load_errors.append(
                    f"Duplicate theme id {theme.theme_id!r} at {theme_dir}; skipping."
                )
                continue
            self._themes[theme.theme_id] = theme
