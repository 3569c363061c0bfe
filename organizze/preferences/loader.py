"""User theme package parsing and validation."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Mapping

from organizze.preferences.constants import APPEARANCES, PALETTE_KEYS
from organizze.preferences.models import ThemeDefinition, ThemePalette, ThemeValidationError

THEME_FILE_NAME = "theme.json"

_THEME_ID_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR_RE = re.compile(r"^(?:rgb|rgba|hsl|hsla)\([^)]+\)$", re.IGNORECASE)

_MAX_THEME_FILE_BYTES = 32 * 1024
_MAX_THEME_ID_LEN = 64
_MAX_SHORT_FIELD_LEN = 120
_MAX_DESC_LEN = 240
_MAX_ICON_LEN = 8
_MAX_COLOR_VALUE_LEN = 64


def load_theme_definition(theme_dir: Path) -> ThemeDefinition:
    """Load and validate a single user theme package directory."""
    if not theme_dir.exists() or not theme_dir.is_dir():
        raise ThemeValidationError(f"Theme path is not a directory: {theme_dir}")
    if theme_dir.is_symlink():
        raise ThemeValidationError(f"Theme directory cannot be a symlink: {theme_dir}")

    data = _load_json(theme_dir / THEME_FILE_NAME, max_bytes=_MAX_THEME_FILE_BYTES)
    _reject_unknown_keys(
        data,
        allowed={"theme_id", "name", "description", "icon", "colors", "appearance"},
        context=f"{theme_dir}/{THEME_FILE_NAME}",
    )

    theme_id = _required_str(data, "theme_id", theme_dir, max_len=_MAX_THEME_ID_LEN)
    if not _THEME_ID_RE.match(theme_id):
        raise ThemeValidationError(
            f"{theme_dir}: theme_id must match pattern [a-z0-9-], got {theme_id!r}"
        )

    return ThemeDefinition(
        theme_id=theme_id,
        name=_required_str(data, "name", theme_dir, max_len=_MAX_SHORT_FIELD_LEN),
        description=_required_str(data, "description", theme_dir, max_len=_MAX_DESC_LEN),
        icon=_required_str(data, "icon", theme_dir, max_len=_MAX_ICON_LEN),
        colors=_parse_palette(data.get("colors"), theme_dir),
        appearance=_parse_appearance(data, theme_dir),
        is_builtin=False,
        source_dir=theme_dir,
    )


def _load_json(path: Path, *, max_bytes: int) -> Mapping[str, object]:
    content = _read_text_limited(path, max_bytes=max_bytes)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ThemeValidationError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ThemeValidationError(f"Expected JSON object in {path}")
    return data


def _parse_palette(data: object, theme_dir: Path) -> ThemePalette:
    if not isinstance(data, dict):
        raise ThemeValidationError(f"{theme_dir}: field 'colors' must be an object")
    _reject_unknown_keys(data, allowed=set(PALETTE_KEYS), context=f"{theme_dir}: colors")
    missing = [key for key in PALETTE_KEYS if key not in data]
    if missing:
        joined = ", ".join(sorted(missing))
        raise ThemeValidationError(f"{theme_dir}: missing required colors: {joined}")

    colors: dict[str, str] = {}
    for key in PALETTE_KEYS:
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ThemeValidationError(f"{theme_dir}: color {key!r} must be a non-empty string")
        cleaned = value.strip()
        if len(cleaned) > _MAX_COLOR_VALUE_LEN:
            raise ThemeValidationError(f"{theme_dir}: color {key!r} value is too long")
        if not is_valid_color(cleaned):
            raise ThemeValidationError(f"{theme_dir}: color {key!r} has invalid value {cleaned!r}")
        colors[key] = cleaned
    return ThemePalette(**colors)


def _parse_appearance(data: Mapping[str, object], theme_dir: Path) -> str:
    raw = data.get("appearance", "light")
    if raw not in APPEARANCES:
        raise ThemeValidationError(
            f"{theme_dir}: appearance must be one of {', '.join(APPEARANCES)}, got {raw!r}"
        )
    return str(raw)


def _required_str(data: Mapping[str, object], key: str, theme_dir: Path, *, max_len: int) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ThemeValidationError(f"{theme_dir}: field {key!r} must be a non-empty string")
    cleaned = value.strip()
    if len(cleaned) > max_len:
        raise ThemeValidationError(f"{theme_dir}: field {key!r} exceeds max length {max_len}")
    if any(ch in cleaned for ch in ("\n", "\r", "\t")):
        raise ThemeValidationError(f"{theme_dir}: field {key!r} must be a single line string")
    return cleaned


def is_valid_color(value: str) -> bool:
    if _HEX_COLOR_RE.match(value):
        return True
    if _FUNC_COLOR_RE.match(value):
        return True
    return False


def _reject_unknown_keys(
    data: Mapping[str, object],
    *,
    allowed: set[str],
    context: str,
) -> None:
    unknown = sorted(str(key) for key in data.keys() if key not in allowed)
    if unknown:
        joined = ", ".join(unknown)
        raise ThemeValidationError(f"{context}: unsupported keys found: {joined}")


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ThemeValidationError(f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise ThemeValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeValidationError(f"Unable to read {path}: {exc}") from exc
