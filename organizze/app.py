"""QApplication bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from PySide6.QtCore import QCommandLineOption, QCommandLineParser
from PySide6.QtWidgets import QApplication, QGridLayout, QMainWindow, QWidget

from organizze.config.settings import AppSettings
from organizze.errors import PreferenceError, format_error_for_user
from organizze.preferences.registry import ThemeRegistry
from organizze.preferences.render import QtPreferenceRenderer
from organizze.preferences.snapshot import load_snapshot, save_snapshot
from organizze.preferences.store import PreferenceStore
from organizze.ui.widgets.wallpaper_backdrop import WallpaperBackdrop


def _configure_startup_logger(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("organizze")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    handler = RotatingFileHandler(
        settings.logs_dir / "startup.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def _build_parser() -> tuple[QCommandLineParser, dict[str, QCommandLineOption]]:
    parser = QCommandLineParser()
    parser.setApplicationDescription("Organizze personal finance client")
    parser.addHelpOption()
    options = {
        "reset": QCommandLineOption("reset-preferences", "Restore default theme and wallpaper."),
        "export": QCommandLineOption(
            "export-preferences", "Write current preferences to <file> and exit.", "file"
        ),
        "import": QCommandLineOption(
            "import-preferences", "Load preferences from <file> before starting.", "file"
        ),
    }
    for option in options.values():
        parser.addOption(option)
    return parser, options


def _build_window(backdrop_host: QWidget) -> QMainWindow:
    window = QMainWindow()
    window.setWindowTitle("Organizze")
    window.setCentralWidget(backdrop_host)
    window.resize(1100, 720)
    return window


def run_app() -> int:
    """Initialize and run the application."""
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("Organizze")
    app.setOrganizationName("Organizze")
    parser, options = _build_parser()
    parser.process(app)

    settings = AppSettings()
    logger = _configure_startup_logger(settings)
    logger.info("startup settings=%s", settings.file_name)

    registry = ThemeRegistry(user_root=settings.themes_dir)
    registry.reload()
    errors = registry.load_errors()
    if errors:
        logger.warning("theme load warnings: %s", " | ".join(errors[:6]))

    host = QWidget()
    host.setObjectName("WallpaperHost")
    backdrop = WallpaperBackdrop(host)
    layout = QGridLayout(host)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.addWidget(backdrop, 0, 0)

    renderer = QtPreferenceRenderer(app, registry, backdrop)
    store = PreferenceStore(settings, registry, renderer)
    store.persistence_failed.connect(
        lambda error: logger.warning("preference not saved: %s", format_error_for_user(error))
    )
    store.initialize()

    if parser.isSet(options["reset"]):
        store.reset_to_defaults()
    if parser.isSet(options["import"]):
        path = Path(parser.value(options["import"]))
        try:
            store.import_settings(load_snapshot(path))
        except (PreferenceError, ValueError) as exc:
            logger.warning("preferences import from %s incomplete: %s", path, exc)
    if parser.isSet(options["export"]):
        path = Path(parser.value(options["export"]))
        try:
            save_snapshot(path, store.export_settings())
        except PreferenceError as exc:
            logger.error("preferences export failed: %s", exc)
            return 1
        logger.info("preferences exported to %s", path)
        return 0

    window = _build_window(host)
    window.show()

    exit_code = app.exec()
    return exit_code
