"""Resolve persisted preference values, falling back to defaults.

Every persisted field passes through one of these helpers on read. Missing
values and malformed values both resolve to the documented default; nothing
here raises.
"""

from __future__ import annotations

import math
from typing import Callable, Container, TypeVar

from organizze.preferences.constants import (
    DEFAULT_THEME_ID,
    DEFAULT_WALLPAPER_OPACITY,
    IMAGE_DATA_URI_PREFIX,
)

T = TypeVar("T")


def resolve_with_default(raw: str | None, parse: Callable[[str], T | None], default: T) -> T:
    """Parse ``raw`` or return ``default`` when it is absent or ``parse`` rejects it."""
    if raw is None:
        return default
    try:
        parsed = parse(raw)
    except (TypeError, ValueError):
        return default
    return default if parsed is None else parsed


def clamp_opacity(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        return DEFAULT_WALLPAPER_OPACITY
    return max(0.0, min(1.0, value))


def parse_opacity(raw: str) -> float | None:
    value = float(raw.strip())
    if not math.isfinite(value):
        return None
    return clamp_opacity(value)


def parse_wallpaper(raw: str) -> str | None:
    cleaned = raw.strip()
    if not cleaned.startswith(IMAGE_DATA_URI_PREFIX):
        return None
    return cleaned


def resolve_theme_id(raw: str | None, known: Container[str]) -> str:
    cleaned = (raw or "").strip()
    if cleaned in known:
        return cleaned
    return DEFAULT_THEME_ID


def resolve_opacity(raw: str | None) -> float:
    return resolve_with_default(raw, parse_opacity, DEFAULT_WALLPAPER_OPACITY)


def resolve_wallpaper(raw: str | None) -> str | None:
    return resolve_with_default(raw, parse_wallpaper, None)


def format_opacity(value: float) -> str:
    """Serialize an opacity as a decimal string for persistence."""
    return repr(clamp_opacity(value))
