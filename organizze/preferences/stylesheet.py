"""Compile a theme definition into an application stylesheet."""

from __future__ import annotations

from typing import Mapping

from organizze.preferences.models import ThemeDefinition

# Base tones per appearance; the theme palette is layered on top.
BASE_TONES: dict[str, dict[str, str]] = {
    "light": {
        "canvas": "#f5e6d3",
        "surface": "#fffaf3",
        "line": "#e7d3bb",
        "text_primary": "#3b2a1a",
        "text_muted": "#7a6450",
    },
    "dark": {
        "canvas": "#1a1f3a",
        "surface": "#222847",
        "line": "#323a63",
        "text_primary": "#e6ebf5",
        "text_muted": "#93a0b8",
    },
}

APP_TEMPLATE = """
QWidget {{
    background-color: {surface};
    color: {text_primary};
    font-size: 10pt;
}}

QMainWindow, #WallpaperHost {{
    background-color: {canvas};
}}

QLabel {{
    color: {text_primary};
    background-color: transparent;
}}

#Muted {{
    color: {text_muted};
}}

QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
    background-color: {surface};
    border: 1px solid {line};
    border-radius: 7px;
    padding: 5px 8px;
}}

QLineEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus, QComboBox:focus {{
    border: 1px solid {accent};
}}

QPushButton {{
    background-color: {primary};
    color: #ffffff;
    border: 1px solid {dark};
    border-radius: 7px;
    padding: 5px 11px;
    font-weight: 600;
}}

QPushButton:hover {{
    background-color: {accent};
}}

QPushButton:pressed {{
    background-color: {dark};
}}

QSlider::groove:horizontal {{
    height: 4px;
    background: {line};
    border-radius: 2px;
}}

QSlider::handle:horizontal {{
    width: 14px;
    margin: -5px 0;
    border-radius: 7px;
    background: {primary};
}}
"""


def build_tokens(theme: ThemeDefinition) -> dict[str, str]:
    tokens = dict(BASE_TONES.get(theme.appearance, BASE_TONES["light"]))
    tokens["primary"] = theme.colors.primary
    tokens["accent"] = theme.colors.accent
    tokens["dark"] = theme.colors.dark
    return tokens


def build_stylesheet(theme: ThemeDefinition, *, extra: Mapping[str, str] | None = None) -> str:
    """Build the application stylesheet for ``theme``.

    ``extra`` overrides individual tokens, which is handy for previews.
    """
    tokens = build_tokens(theme)
    for key, value in (extra or {}).items():
        if key in tokens and isinstance(value, str) and value:
            tokens[key] = value
    return APP_TEMPLATE.format(**tokens)
