"""Async workers for non-blocking backend calls using Qt threading."""

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from vip_reader.io import ApiError, ProgressGateway

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals. Results carry the request id so the
    receiver can drop answers to requests it no longer cares about.
    """
    finished = Signal()
    result = Signal(int, object)
    error = Signal(int, str)


class CallWorker(QRunnable):
    """
    Runs a single backend call in a background thread.

    Emits result(request_id, value) on success and error(request_id, message)
    on any failure, so the receiver always hears back.
    """

    def __init__(self, request_id: int, fn: Callable[..., Any], *args: Any):
        super().__init__()
        self.request_id = request_id
        self.fn = fn
        self.args = args
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        try:
            value = self.fn(*self.args)
        except ApiError as e:
            self.signals.error.emit(self.request_id, str(e))
        except Exception as e:
            # Catch any unexpected exceptions not handled by the call
            logger.exception("Background call %d failed unexpectedly", self.request_id)
            self.signals.error.emit(self.request_id, f"Unexpected error: {e}")
        else:
            self.signals.result.emit(self.request_id, value)
        finally:
            self.signals.finished.emit()


class ProgressSyncWorker(QRunnable):
    """
    Sends one reading-progress update to the progress sink.

    Fire-and-forget: a rejection is logged and dropped. No retry, no replay.
    Only finished is emitted.
    """

    def __init__(self, progress_gateway: ProgressGateway, item_id: str, page: int):
        super().__init__()
        self.progress_gateway = progress_gateway
        self.item_id = item_id
        self.page = page
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        try:
            self.progress_gateway.record_progress(self.item_id, self.page)
        except ApiError as e:
            logger.warning(
                "Progress sync for item %s page %d failed: %s", self.item_id, self.page, e
            )
        except Exception:
            logger.exception(
                "Progress sync for item %s page %d failed unexpectedly", self.item_id, self.page
            )
        finally:
            self.signals.finished.emit()
