"""Base worker class for single-shot background operations."""

from __future__ import annotations

from PySide6.QtCore import QObject, QThread, Signal


class BaseWorker(QObject):
    """Base class for background workers using moveToThread pattern.

    A worker completes exactly once: ``finished`` with the result, or
    ``error`` with the failure. There is no progress or cancellation.

    Usage:
        worker = SomeWorker(args)
        start_in_thread(worker)
    """

    started = Signal()
    finished = Signal(object)           # result data
    error = Signal(object)              # PreferenceError

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)

    def run(self) -> None:
        """Override in subclass. Called when thread starts."""
        raise NotImplementedError


def start_in_thread(worker: BaseWorker, parent: QObject | None = None) -> QThread:
    """Run ``worker`` on a fresh QThread and tear both down on completion.

    The caller must keep a reference to ``worker`` until the returned
    thread emits ``finished``.
    """
    thread = QThread(parent)
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    worker.finished.connect(thread.quit)
    worker.error.connect(thread.quit)
    thread.finished.connect(worker.deleteLater)
    thread.finished.connect(thread.deleteLater)
    thread.start()
    return thread


def run_inline(worker: BaseWorker) -> None:
    """Run ``worker`` synchronously on the calling thread."""
    worker.run()
