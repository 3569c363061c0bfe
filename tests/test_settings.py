"""Tests for organizze.config.settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from organizze.config.settings import AppSettings
from organizze.errors import ErrorCode, PersistenceWriteError


class TestAppSettings:
    def test_missing_key_is_none(self, tmp_path: Path):
        settings = AppSettings(tmp_path / "prefs.ini")
        assert settings.value("theme") is None
        assert settings.contains("theme") is False

    def test_values_survive_a_new_instance(self, tmp_path: Path):
        path = tmp_path / "prefs.ini"
        settings = AppSettings(path)
        settings.set_value("theme", "dark")
        settings.set_value("wallpaperOpacity", "0.45")
        settings.set_value("wallpaperImage", "data:image/png;base64,AAAA")

        reopened = AppSettings(path)
        assert reopened.value("theme") == "dark"
        assert reopened.value("wallpaperOpacity") == "0.45"
        assert reopened.value("wallpaperImage") == "data:image/png;base64,AAAA"

    def test_remove(self, tmp_path: Path):
        settings = AppSettings(tmp_path / "prefs.ini")
        settings.set_value("theme", "dark")
        settings.remove("theme")
        assert settings.value("theme") is None

    def test_quota_exceeded_raises_before_write(self, tmp_path: Path):
        settings = AppSettings(tmp_path / "prefs.ini", max_value_bytes=8)
        with pytest.raises(PersistenceWriteError) as excinfo:
            settings.set_value("wallpaperImage", "data:image/png;base64,AAAA")
        assert excinfo.value.code is ErrorCode.PERSIST_QUOTA_EXCEEDED
        assert excinfo.value.key == "wallpaperImage"
        assert settings.value("wallpaperImage") is None

    def test_app_data_dirs_honour_appdata(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("APPDATA", str(tmp_path))
        settings = AppSettings(tmp_path / "prefs.ini")
        assert settings.app_data_dir == tmp_path / "organizze"
        assert settings.themes_dir.is_dir()
        assert settings.logs_dir == tmp_path / "organizze" / "logs"
