"""Reader Controller - Central coordinator for the reading session."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, QThreadPool, QTimer, Signal, Slot

from vip_reader.core import AccessDecision, ReadingSessionState, decide_access
from vip_reader.io import CatalogGateway, ProgressGateway
from vip_reader.services import CallWorker, CatalogStore, ProgressSyncWorker, SessionManager

from .reader_states import DenialReason, ReaderState

logger = logging.getLogger(__name__)

IDLE_TIMEOUT_MS = 3000


class ReaderController(QObject):
    """
    Drives one reading session at a time.

    Entry consults the entitlement gate, then resolves a content reference
    in the background: LOADING -> READY | DENIED | ERROR. Inside READY it
    owns pagination, zoom, fullscreen and the idle-chrome timer.

    Every page change is written through to the CatalogStore immediately
    and sent to the progress sink in the background. Progress syncs are
    never awaited, retried or canceled, and may complete out of order.
    """

    state_changed = Signal(object)  # ReaderState
    access_denied = Signal(object)  # DenialReason
    load_failed = Signal(str)
    content_ready = Signal(str)  # content reference
    page_changed = Signal(int)
    zoom_changed = Signal(int)
    fullscreen_changed = Signal(bool)
    controls_visibility_changed = Signal(bool)

    def __init__(
        self,
        session_manager: SessionManager,
        catalog_store: CatalogStore,
        catalog_gateway: CatalogGateway,
        progress_gateway: ProgressGateway,
        thread_pool: Optional[QThreadPool] = None,
        idle_timeout_ms: int = IDLE_TIMEOUT_MS,
        require_identity: bool = True,
    ):
        super().__init__()

        if session_manager is None:
            raise ValueError("SessionManager must not be None")
        if catalog_store is None:
            raise ValueError("CatalogStore must not be None")
        if catalog_gateway is None:
            raise ValueError("CatalogGateway must not be None")
        if progress_gateway is None:
            raise ValueError("ProgressGateway must not be None")

        self.session_manager = session_manager
        self.catalog_store = catalog_store
        self.catalog_gateway = catalog_gateway
        self.progress_gateway = progress_gateway
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        self.require_identity = require_identity

        # Session state
        self.state = ReaderState.IDLE
        self.session: Optional[ReadingSessionState] = None
        self.denial_reason: Optional[DenialReason] = None
        self.content_reference: Optional[str] = None
        self.error_message: str = ""

        # Bumped on every open/close so late worker results can be discarded
        self._request_id = 0

        self.idle_timer = QTimer(self)
        self.idle_timer.setSingleShot(True)
        self.idle_timer.setInterval(idle_timeout_ms)
        self.idle_timer.timeout.connect(self._hide_controls_on_idle)

    # --- Session entry / teardown ---

    @Slot(str)
    def open_session(self, item_id: str):
        """
        Attempt to open an item for reading.

        Args:
            item_id: Catalog id of the item to open.
        """
        self.close_session()

        item = self.catalog_store.get_by_id(item_id)
        if item is None:
            self._fail(f"Item not found: {item_id}")
            return

        decision = decide_access(
            self.session_manager.identity, item, require_identity=self.require_identity
        )
        if decision is not AccessDecision.GRANTED:
            self.denial_reason = DenialReason.from_decision(decision)
            logger.info("Access to '%s' denied: %s", item.title, self.denial_reason.value)
            self._set_state(ReaderState.DENIED)
            self.access_denied.emit(self.denial_reason)
            return

        self.session = ReadingSessionState.seeded_from(item)
        self._set_state(ReaderState.LOADING)

        worker = CallWorker(
            self._request_id, self.catalog_gateway.resolve_access_reference, item.id
        )
        worker.signals.result.connect(self._handle_reference_resolved)
        worker.signals.error.connect(self._handle_reference_failed)
        self.thread_pool.start(worker)

    @Slot()
    def close_session(self):
        """Tear down the current session, if any. In-flight progress syncs continue."""
        self._request_id += 1
        self.idle_timer.stop()
        had_session = self.state is not ReaderState.IDLE
        self.session = None
        self.denial_reason = None
        self.content_reference = None
        self.error_message = ""
        if had_session:
            self._set_state(ReaderState.IDLE)

    @Slot(int, object)
    def _handle_reference_resolved(self, request_id: int, reference):
        if request_id != self._request_id or self.state is not ReaderState.LOADING:
            return
        self.content_reference = str(reference)
        self._set_state(ReaderState.READY)
        self.content_ready.emit(self.content_reference)
        self.page_changed.emit(self.session.current_page)
        self.zoom_changed.emit(self.session.zoom_level)

    @Slot(int, str)
    def _handle_reference_failed(self, request_id: int, message: str):
        if request_id != self._request_id or self.state is not ReaderState.LOADING:
            return
        self.session = None
        self._fail(f"Failed to load content: {message}")

    # --- Pagination ---

    @Slot()
    def next_page(self):
        """Navigate to the next page."""
        if self._ready() and self.session.next_page():
            self._on_page_changed()

    @Slot()
    def previous_page(self):
        """Navigate to the previous page."""
        if self._ready() and self.session.previous_page():
            self._on_page_changed()

    @Slot(int)
    def jump_to_page(self, page: int):
        """
        Jump to a specific page.

        Args:
            page: 1-based page number; clamped to the document.
        """
        if self._ready() and self.session.go_to_page(page):
            self._on_page_changed()

    @Slot(int)
    def set_document_page_count(self, count: int):
        """Adopt the page count reported by the rendered document."""
        if self._ready() and self.session.set_document_page_count(count):
            self._on_page_changed()

    @property
    def total_pages(self) -> int:
        return self.session.total_pages if self.session else 0

    # --- Zoom ---

    @Slot()
    def zoom_in(self):
        if self._ready() and self.session.zoom_in():
            self.zoom_changed.emit(self.session.zoom_level)

    @Slot()
    def zoom_out(self):
        if self._ready() and self.session.zoom_out():
            self.zoom_changed.emit(self.session.zoom_level)

    @Slot()
    def reset_zoom(self):
        if self._ready():
            self.session.reset_zoom()
            self.zoom_changed.emit(self.session.zoom_level)

    # --- Fullscreen and idle chrome ---

    @Slot()
    def toggle_fullscreen(self):
        if not self._ready():
            return
        self.session.is_fullscreen = not self.session.is_fullscreen
        self.idle_timer.stop()
        self.fullscreen_changed.emit(self.session.is_fullscreen)
        self._show_controls()

    @Slot()
    def register_activity(self):
        """Pointer activity: while fullscreen, show the controls and re-arm the timer."""
        if self._ready() and self.session.is_fullscreen:
            self._show_controls()

    def _show_controls(self):
        was_visible = self.session.controls_visible
        self.session.controls_visible = True
        if not was_visible:
            self.controls_visibility_changed.emit(True)
        if self.session.is_fullscreen:
            self.idle_timer.start()

    @Slot()
    def _hide_controls_on_idle(self):
        if not self._ready() or not self.session.is_fullscreen:
            return
        if self.session.controls_visible:
            self.session.controls_visible = False
            self.controls_visibility_changed.emit(False)

    # --- Progress write-through ---

    def _on_page_changed(self):
        page = self.session.current_page
        item_id = self.session.item.id
        self.page_changed.emit(page)

        try:
            self.catalog_store.record_local_progress(
                item_id, page, total_pages=self.session.total_pages
            )
        except ValueError as e:
            logger.warning("Could not record local progress: %s", e)

        if not self.session_manager.is_authenticated:
            return
        self.thread_pool.start(ProgressSyncWorker(self.progress_gateway, item_id, page))

    # --- Internals ---

    def _ready(self) -> bool:
        return self.state is ReaderState.READY and self.session is not None

    def _fail(self, message: str):
        self.error_message = message
        logger.error(message)
        self._set_state(ReaderState.ERROR)
        self.load_failed.emit(message)

    def _set_state(self, state: ReaderState):
        if state is self.state:
            return
        logger.debug("Reader state %s -> %s", self.state.value, state.value)
        self.state = state
        self.state_changed.emit(state)
