"""Preference state, persistence reconciliation and render effects."""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from typing import Any, Callable, Mapping, Optional, Protocol

from PySide6.QtCore import QObject, QThread, Signal, Slot

from organizze.errors import (
    InvalidThemeError,
    PayloadTooLargeError,
    PersistenceWriteError,
    PreferenceError,
    UnsupportedMediaError,
    classify_exception,
)
from organizze.preferences.constants import (
    DEFAULT_THEME_ID,
    IMAGE_DATA_URI_PREFIX,
    IMAGE_MIME_PREFIX,
    KEY_THEME,
    KEY_WALLPAPER_IMAGE,
    KEY_WALLPAPER_OPACITY,
    MAX_WALLPAPER_BYTES,
    PERSISTED_KEYS,
)
from organizze.preferences.models import (
    PreferenceState,
    ThemeDefinition,
    UploadResult,
    WallpaperSettings,
)
from organizze.preferences.registry import ThemeRegistry
from organizze.preferences.render import PreferenceRenderer
from organizze.preferences.resolve import (
    clamp_opacity,
    format_opacity,
    resolve_opacity,
    resolve_theme_id,
    resolve_wallpaper,
)
from organizze.workers.base_worker import BaseWorker, start_in_thread
from organizze.workers.wallpaper_worker import (
    DecodedWallpaper,
    WallpaperDecodeWorker,
    WallpaperSource,
)

logger = logging.getLogger("organizze.preferences")

WorkerRunner = Callable[[BaseWorker], Optional[QThread]]


class KeyValueStore(Protocol):
    """Persisted string store; ``AppSettings`` is the production implementation."""

    def value(self, key: str) -> str | None: ...

    def set_value(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class PreferenceStore(QObject):
    """Own the session's preference state and mirror it to persistence.

    In-memory state is authoritative for the running session. Persistence is
    best-effort: a failed write is logged and reported on
    ``persistence_failed`` but never reverts state or raises.
    """

    theme_changed = Signal(str)
    wallpaper_uploaded = Signal(object)         # UploadResult
    wallpaper_upload_failed = Signal(object)    # DecodeError
    persistence_failed = Signal(object)         # PersistenceWriteError

    def __init__(
        self,
        settings: KeyValueStore,
        registry: ThemeRegistry,
        renderer: PreferenceRenderer,
        *,
        worker_runner: WorkerRunner | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._registry = registry
        self._renderer = renderer
        self._worker_runner = worker_runner or partial(start_in_thread, parent=self)
        self._state = PreferenceState()
        self._last_request_id = 0
        self._workers: dict[int, WallpaperDecodeWorker] = {}

    @property
    def state(self) -> PreferenceState:
        return replace(self._state)

    @property
    def pending_uploads(self) -> int:
        return len(self._workers)

    def initialize(self) -> PreferenceState:
        """Load persisted preferences and apply them."""
        theme_id = resolve_theme_id(self._settings.value(KEY_THEME), self._registry)
        self._state = PreferenceState(
            active_theme_id=theme_id,
            wallpaper_image=resolve_wallpaper(self._settings.value(KEY_WALLPAPER_IMAGE)),
            wallpaper_opacity=resolve_opacity(self._settings.value(KEY_WALLPAPER_OPACITY)),
        )
        self._renderer.apply_theme(theme_id)
        self._apply_background()
        logger.info(
            "preferences loaded theme=%s wallpaper=%s opacity=%s",
            theme_id,
            self._state.has_wallpaper,
            self._state.wallpaper_opacity,
        )
        return self.state

    # -- themes --

    def list_themes(self) -> list[ThemeDefinition]:
        return self._registry.list_themes()

    def get_active_theme(self) -> ThemeDefinition:
        return self._registry.get_theme(self._state.active_theme_id) or self._registry.fallback()

    def set_theme(self, theme_id: str) -> ThemeDefinition:
        if not isinstance(theme_id, str) or theme_id not in self._registry:
            raise InvalidThemeError(theme_id)
        if theme_id == self._state.active_theme_id:
            self._persist(KEY_THEME, theme_id)
            return self.get_active_theme()
        self._state.active_theme_id = theme_id
        self._persist(KEY_THEME, theme_id)
        self._renderer.apply_theme(theme_id)
        self.theme_changed.emit(theme_id)
        return self.get_active_theme()

    # -- wallpaper --

    def upload_wallpaper(self, file_bytes: WallpaperSource, mime_type: str, size_bytes: int) -> int:
        """Validate an upload and start decoding it; return the request id.

        Validation failures raise immediately. The decoded result arrives on
        ``wallpaper_uploaded`` or ``wallpaper_upload_failed``.
        """
        mime = _validate_upload(mime_type, size_bytes)
        self._last_request_id += 1
        request_id = self._last_request_id

        worker = WallpaperDecodeWorker(
            request_id=request_id,
            source=file_bytes,
            mime_type=mime,
            size_bytes=size_bytes,
        )
        worker.finished.connect(self._on_wallpaper_decoded)
        worker.error.connect(self._on_wallpaper_failed)
        self._workers[request_id] = worker
        try:
            thread = self._worker_runner(worker)
        except Exception:
            self._workers.pop(request_id, None)
            raise
        if thread is None:
            self._workers.pop(request_id, None)
        else:
            thread.setProperty("requestId", request_id)
            thread.finished.connect(self._on_decode_thread_finished)
        return request_id

    def set_wallpaper_opacity(self, value: float) -> float:
        opacity = clamp_opacity(value)
        self._state.wallpaper_opacity = opacity
        self._persist(KEY_WALLPAPER_OPACITY, format_opacity(opacity))
        self._apply_background()
        return opacity

    def remove_wallpaper(self) -> None:
        self._state.wallpaper_image = None
        self._remove(KEY_WALLPAPER_IMAGE)
        self._renderer.apply_theme(self._state.active_theme_id)
        self._apply_background()

    def wallpaper_settings(self) -> WallpaperSettings:
        return WallpaperSettings(
            has_wallpaper=self._state.has_wallpaper,
            opacity=self._state.wallpaper_opacity,
            preview=self._state.wallpaper_image,
        )

    # -- snapshots --

    def export_settings(self) -> dict[str, Any]:
        return {
            "theme": self._state.active_theme_id,
            "wallpaper": self._state.wallpaper_image,
            "opacity": self._state.wallpaper_opacity,
        }

    def import_settings(self, snapshot: Mapping[str, Any]) -> None:
        """Apply each present field of ``snapshot`` independently.

        Every field is attempted. If any field was rejected, the first
        rejection is raised after the others have been applied.
        """
        errors: list[Exception] = []
        if "theme" in snapshot:
            try:
                self.set_theme(snapshot["theme"])
            except InvalidThemeError as exc:
                errors.append(exc)
        if "wallpaper" in snapshot:
            try:
                self._import_wallpaper(snapshot["wallpaper"])
            except (UnsupportedMediaError, PayloadTooLargeError) as exc:
                errors.append(exc)
        if "opacity" in snapshot:
            try:
                self.set_wallpaper_opacity(snapshot["opacity"])
            except (TypeError, ValueError):
                errors.append(ValueError(f"Invalid opacity: {snapshot['opacity']!r}"))
        if errors:
            logger.warning("import rejected %d field(s): %s", len(errors), "; ".join(map(str, errors)))
            raise errors[0]

    def reset_to_defaults(self) -> None:
        self._state = PreferenceState()
        for key in PERSISTED_KEYS:
            self._remove(key)
        self._renderer.apply_theme(DEFAULT_THEME_ID)
        self._apply_background()
        self.theme_changed.emit(DEFAULT_THEME_ID)

    # -- internals --

    @Slot(object)
    def _on_wallpaper_decoded(self, result: DecodedWallpaper) -> None:
        data_uri = result["data_uri"]
        self._state.wallpaper_image = data_uri
        self._persist(KEY_WALLPAPER_IMAGE, data_uri)
        self._apply_background()
        logger.info("wallpaper %d applied (%d bytes)", result["request_id"], result["size"])
        self.wallpaper_uploaded.emit(
            UploadResult(
                request_id=result["request_id"],
                message="Wallpaper uploaded successfully",
                preview=data_uri,
            )
        )

    @Slot(object)
    def _on_wallpaper_failed(self, error: PreferenceError) -> None:
        logger.warning("wallpaper decode failed: %s", error)
        self.wallpaper_upload_failed.emit(error)

    @Slot()
    def _on_decode_thread_finished(self) -> None:
        # Queued to the store's thread; sender() is the finished QThread.
        thread = self.sender()
        if thread is not None:
            self._workers.pop(thread.property("requestId"), None)

    def _import_wallpaper(self, value: object) -> None:
        if value is None:
            self.remove_wallpaper()
            return
        if not isinstance(value, str) or not value.startswith(IMAGE_DATA_URI_PREFIX):
            raise UnsupportedMediaError(_data_uri_mime(value))
        payload_size = _decoded_size(value.partition(",")[2])
        if payload_size > MAX_WALLPAPER_BYTES:
            raise PayloadTooLargeError(payload_size, MAX_WALLPAPER_BYTES)
        self._state.wallpaper_image = value
        self._persist(KEY_WALLPAPER_IMAGE, value)
        self._apply_background()

    def _apply_background(self) -> None:
        self._renderer.apply_background(self._state.wallpaper_image, self._state.wallpaper_opacity)

    def _persist(self, key: str, value: str) -> None:
        try:
            self._settings.set_value(key, value)
        except PersistenceWriteError as exc:
            self._report_persistence_failure(exc)
        except OSError as exc:
            self._report_persistence_failure(classify_exception(exc, key=key))

    def _remove(self, key: str) -> None:
        try:
            self._settings.remove(key)
        except PersistenceWriteError as exc:
            self._report_persistence_failure(exc)
        except OSError as exc:
            self._report_persistence_failure(classify_exception(exc, key=key))

    def _report_persistence_failure(self, error: PreferenceError) -> None:
        logger.warning("could not persist preference: %s", error)
        self.persistence_failed.emit(error)


def _validate_upload(mime_type: str, size_bytes: int) -> str:
    mime = (mime_type or "").strip().lower() if isinstance(mime_type, str) else ""
    if not mime.startswith(IMAGE_MIME_PREFIX):
        raise UnsupportedMediaError(mime_type)
    if size_bytes > MAX_WALLPAPER_BYTES:
        raise PayloadTooLargeError(size_bytes, MAX_WALLPAPER_BYTES)
    return mime


def _decoded_size(payload: str) -> int:
    """Byte length of a base64 payload, without decoding it."""
    payload = payload.strip()
    return len(payload) * 3 // 4 - payload[-2:].count("=")


def _data_uri_mime(value: object) -> str:
    if not isinstance(value, str):
        return type(value).__name__
    header = value.partition(",")[0]
    return header.removeprefix("data:").split(";", 1)[0]
