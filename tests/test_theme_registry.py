"""Tests for theme package loader and registry behavior."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from organizze.preferences.loader import load_theme_definition
from organizze.preferences.models import BuiltinTheme, ThemeValidationError
from organizze.preferences.registry import ThemeRegistry


def _write_json(path: Path, data: dict[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _base_theme(theme_id: str, name: str | None = None) -> dict[str, object]:
    return {
        "theme_id": theme_id,
        "name": name or theme_id,
        "description": "test theme",
        "icon": "*",
        "colors": {"primary": "#112233", "accent": "#445566", "dark": "#000000"},
    }


def _write_theme_dir(theme_dir: Path, theme_id: str, **overrides: object) -> None:
    data = _base_theme(theme_id)
    data.update(overrides)
    _write_json(theme_dir / "theme.json", data)


def test_builtins_always_present() -> None:
    registry = ThemeRegistry()
    ids = [theme.theme_id for theme in registry.list_themes()]
    assert ids == [BuiltinTheme.WARM.value, BuiltinTheme.DARK.value]
    warm = registry.get_theme("warm")
    assert warm is not None
    assert warm.name == "Warm/Golden Mode"
    assert warm.colors.primary == "#F97316"
    assert registry.fallback() is warm
    assert registry.get_theme("dark").appearance == "dark"


def test_load_theme_definition_valid(tmp_path: Path) -> None:
    theme_dir = tmp_path / "forest"
    _write_theme_dir(theme_dir, "forest", appearance="dark")

    theme = load_theme_definition(theme_dir)
    assert theme.theme_id == "forest"
    assert theme.colors.accent == "#445566"
    assert theme.appearance == "dark"
    assert theme.is_builtin is False
    assert theme.source_dir == theme_dir


def test_load_theme_missing_color_rejected(tmp_path: Path) -> None:
    theme_dir = tmp_path / "broken"
    _write_theme_dir(theme_dir, "broken", colors={"primary": "#112233", "accent": "#445566"})

    with pytest.raises(ThemeValidationError):
        load_theme_definition(theme_dir)


def test_load_theme_invalid_color_rejected(tmp_path: Path) -> None:
    theme_dir = tmp_path / "badcolor"
    _write_theme_dir(
        theme_dir,
        "badcolor",
        colors={"primary": "red; background: url(x)", "accent": "#445566", "dark": "#000"},
    )

    with pytest.raises(ThemeValidationError):
        load_theme_definition(theme_dir)


def test_load_theme_rejects_unknown_key(tmp_path: Path) -> None:
    theme_dir = tmp_path / "unknown"
    _write_theme_dir(theme_dir, "unknown", stylesheet="QWidget {}")

    with pytest.raises(ThemeValidationError):
        load_theme_definition(theme_dir)


def test_load_theme_rejects_bad_appearance(tmp_path: Path) -> None:
    theme_dir = tmp_path / "sepia"
    _write_theme_dir(theme_dir, "sepia", appearance="sepia")

    with pytest.raises(ThemeValidationError):
        load_theme_definition(theme_dir)


def test_load_theme_rejects_field_length_and_newlines(tmp_path: Path) -> None:
    theme_dir = tmp_path / "bad-name"
    _write_theme_dir(theme_dir, "bad-name", name="A" * 200)
    with pytest.raises(ThemeValidationError):
        load_theme_definition(theme_dir)

    _write_theme_dir(theme_dir, "bad-name", name="bad\nname")
    with pytest.raises(ThemeValidationError):
        load_theme_definition(theme_dir)


def test_registry_loads_user_themes_sorted_by_name(tmp_path: Path) -> None:
    _write_json(tmp_path / "b" / "theme.json", _base_theme("b-theme", name="Zebra"))
    _write_json(tmp_path / "a" / "theme.json", _base_theme("a-theme", name="Apple"))

    registry = ThemeRegistry(user_root=tmp_path)
    registry.reload()

    ids = [theme.theme_id for theme in registry.list_themes()]
    assert ids == ["warm", "dark", "a-theme", "b-theme"]
    assert "a-theme" in registry
    assert registry.load_errors() == []


def test_registry_rejects_invalid_theme_id(tmp_path: Path) -> None:
    _write_theme_dir(tmp_path / "bad", "Bad Theme")

    registry = ThemeRegistry(user_root=tmp_path)
    registry.reload()

    assert registry.get_theme("Bad Theme") is None
    assert any("theme_id must match pattern" in msg for msg in registry.load_errors())


def test_registry_user_theme_cannot_replace_builtin(tmp_path: Path) -> None:
    _write_theme_dir(tmp_path / "warm", "warm", name="Impostor")

    registry = ThemeRegistry(user_root=tmp_path)
    registry.reload()

    assert registry.get_theme("warm").name == "Warm/Golden Mode"
    assert any("cannot replace a built-in theme" in msg for msg in registry.load_errors())


def test_registry_skips_duplicate_user_ids(tmp_path: Path) -> None:
    _write_theme_dir(tmp_path / "one", "shared", name="One")
    _write_theme_dir(tmp_path / "two", "shared", name="Two")

    registry = ThemeRegistry(user_root=tmp_path)
    registry.reload()

    assert registry.get_theme("shared").name == "One"
    assert any("Duplicate theme id" in msg for msg in registry.load_errors())


def test_registry_ignores_dirs_without_theme_file(tmp_path: Path) -> None:
    (tmp_path / "logs").mkdir()

    registry = ThemeRegistry(user_root=tmp_path)
    registry.reload()

    assert len(registry.list_themes()) == 2
    assert registry.load_errors() == []


def test_registry_missing_user_root_is_fine(tmp_path: Path) -> None:
    registry = ThemeRegistry(user_root=tmp_path / "missing")
    registry.reload()
    assert len(registry.list_themes()) == 2
