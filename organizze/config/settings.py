"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from organizze.errors import PersistenceWriteError


class AppSettings:
    """Wraps QSettings as the persisted key/value store for preferences.

    Values are stored as strings under flat keys. Every write is synced and
    checked; a failed write raises ``PersistenceWriteError`` so the caller can
    decide whether it matters.
    """

    def __init__(self, path: Path | None = None, *, max_value_bytes: int | None = None) -> None:
        if path is None:
            self._qs = QSettings("Organizze", "Organizze")
        else:
            self._qs = QSettings(str(path), QSettings.Format.IniFormat)
        self._max_value_bytes = max_value_bytes

    @property
    def file_name(self) -> str:
        return self._qs.fileName()

    # -- raw key/value access --

    def value(self, key: str) -> str | None:
        raw = self._qs.value(key)
        if raw is None:
            return None
        if isinstance(raw, (list, tuple)):
            # IniFormat may split unquoted values on commas.
            return ",".join(str(part) for part in raw)
        return str(raw)

    def set_value(self, key: str, value: str) -> None:
        if self._max_value_bytes is not None:
            size = len(value.encode("utf-8"))
            if size > self._max_value_bytes:
                raise PersistenceWriteError(
                    key,
                    f"value is {size} bytes; quota is {self._max_value_bytes}",
                    quota=True,
                )
        self._qs.setValue(key, value)
        self._sync_or_raise(key)

    def remove(self, key: str) -> None:
        self._qs.remove(key)
        self._sync_or_raise(key)

    def contains(self, key: str) -> bool:
        return self._qs.contains(key)

    def _sync_or_raise(self, key: str) -> None:
        self._qs.sync()
        status = self._qs.status()
        if status != QSettings.Status.NoError:
            raise PersistenceWriteError(key, f"QSettings status {status.name}")

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def themes_dir(self) -> Path:
        path = self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def logs_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "organizze"
