"""Wallpaper layer painted behind the main content area."""

from __future__ import annotations

import base64
import binascii

from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter, QPixmap
from PySide6.QtWidgets import QWidget


def decode_data_uri(data_uri: str) -> bytes | None:
    """Return the payload of a base64 ``data:`` URI, or None if malformed."""
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


class WallpaperBackdrop(QWidget):
    """Mouse-transparent layer that paints the user's wallpaper cover-scaled."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self.setAutoFillBackground(False)
        self._opacity: float = 0.3
        self._data_uri: str | None = None
        self._source_pixmap = QPixmap()
        self._scaled_pixmap = QPixmap()
        self.hide()

    @property
    def opacity(self) -> float:
        return self._opacity

    def set_wallpaper(self, data_uri: str | None) -> None:
        """Load a new wallpaper; an unchanged payload is not decoded again."""
        if not data_uri:
            self.clear()
            return
        if data_uri == self._data_uri and not self._source_pixmap.isNull():
            self.show()
            self.update()
            return

        data = decode_data_uri(data_uri)
        pixmap = QPixmap()
        if data is None or not pixmap.loadFromData(data):
            self.clear()
            return

        self._data_uri = data_uri
        self._source_pixmap = pixmap
        self._scaled_pixmap = QPixmap()
        self.show()
        self.update()

    def set_opacity(self, value: float) -> None:
        """Set the wallpaper paint opacity and repaint."""
        self._opacity = max(0.0, min(1.0, value))
        self.update()

    def clear(self) -> None:
        """Drop the current wallpaper and hide the layer."""
        self._data_uri = None
        self._source_pixmap = QPixmap()
        self._scaled_pixmap = QPixmap()
        self.hide()
        self.update()

    def paintEvent(self, _event) -> None:
        if self._source_pixmap.isNull() or self.width() <= 0 or self.height() <= 0:
            return

        if self._scaled_pixmap.isNull() or self._scaled_pixmap.size() != self.size():
            self._rebuild_scaled_pixmap()
        if self._scaled_pixmap.isNull():
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        painter.setOpacity(self._opacity)
        painter.drawPixmap(self.rect(), self._scaled_pixmap)

    def _rebuild_scaled_pixmap(self) -> None:
        target_size = self.size()
        cover = self._source_pixmap.scaled(
            target_size,
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.SmoothTransformation,
        )
        x = max(0, (cover.width() - target_size.width()) // 2)
        y = max(0, (cover.height() - target_size.height()) // 2)
        self._scaled_pixmap = cover.copy(x, y, target_size.width(), target_size.height())
