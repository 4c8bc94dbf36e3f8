"""Library Coordinator - Orchestrates catalog browsing, routing and account actions."""

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QThreadPool, Slot

from vip_reader.core import (
    AccessDecision,
    ContentItem,
    ItemDraft,
    SignInMode,
    SignInRequest,
    decide_access,
)
from vip_reader.services import CallWorker, CatalogStore, SessionManager

from .reader_controller import ReaderController
from .reader_states import DenialReason

logger = logging.getLogger(__name__)

FILTER_ALL = "all"
FILTER_FREE = "free"
FILTER_VIP = "vip"
FILTER_IN_PROGRESS = "in_progress"

CTA_READ = "read"
CTA_LOGIN = "login"
CTA_UPGRADE = "upgrade"

_CTA_BY_DECISION = {
    AccessDecision.GRANTED: CTA_READ,
    AccessDecision.REQUIRES_LOGIN: CTA_LOGIN,
    AccessDecision.REQUIRES_UPGRADE: CTA_UPGRADE,
}


class LibraryCoordinator(QObject):
    """Manages library screen display and routing into the reader.

    Responsibilities:
    - Load the catalog and display it, optionally filtered to free, VIP or started items
    - Pick each item's call-to-action (read / sign in / upgrade)
    - Open the reader for a selected item and route denials
    - Handle item creation and deletion for authors
    - Handle sign-in, registration, sign-out and upgrade requests
    - Send the reader back to sign-in when the session is forcibly cleared

    Every backend call runs on the thread pool; answers come back through
    the slot methods below on the GUI thread.
    """

    def __init__(
        self,
        library_screen,
        catalog_store: CatalogStore,
        session_manager: SessionManager,
        reader_controller: ReaderController,
        main_window,
        thread_pool: Optional[QThreadPool] = None,
        payments_enabled: bool = True,
    ):
        super().__init__()

        if library_screen is None:
            raise ValueError("LibraryScreen must not be None")
        if catalog_store is None:
            raise ValueError("CatalogStore must not be None")
        if session_manager is None:
            raise ValueError("SessionManager must not be None")
        if reader_controller is None:
            raise ValueError("ReaderController must not be None")
        if main_window is None:
            raise ValueError("MainWindow must not be None")

        self.library_screen = library_screen
        self.catalog_store = catalog_store
        self.session_manager = session_manager
        self.reader_controller = reader_controller
        self.main_window = main_window
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        self.payments_enabled = payments_enabled

        self.current_filter = FILTER_ALL
        self._request_id = 0
        self._upgrade_request_id = 0

        # Wire library screen signals
        self.library_screen.item_selected.connect(self.handle_item_selected)
        self.library_screen.item_deleted.connect(self.handle_item_deleted)
        self.library_screen.filter_changed.connect(self.handle_filter_changed)

        self.catalog_store.items_changed.connect(self._refresh_display)
        self.session_manager.session_changed.connect(self._refresh_display)
        self.session_manager.login_required.connect(self.handle_login_required)
        self.reader_controller.access_denied.connect(self.handle_access_denied)

    def show_library(self):
        """Display the library screen and reload the catalog in the background."""
        self.reader_controller.close_session()
        self.main_window.display_library_view(self.library_screen)
        self._refresh_display()
        self._run_in_background(
            self.catalog_store.load, on_error=self._handle_load_failed
        )

    def call_to_action(self, item: ContentItem) -> str:
        """Which action the details view should offer for an item."""
        decision = decide_access(self.session_manager.identity, item)
        return _CTA_BY_DECISION[decision]

    def visible_items(self) -> list[ContentItem]:
        if self.current_filter == FILTER_FREE:
            return self.catalog_store.free_subset()
        if self.current_filter == FILTER_VIP:
            return self.catalog_store.vip_subset()
        if self.current_filter == FILTER_IN_PROGRESS:
            return self.catalog_store.in_progress_subset()
        return list(self.catalog_store.items)

    # --- Library screen slots ---

    @Slot(str)
    def handle_item_selected(self, item_id: str):
        """Open the selected item; the reader decides whether it is admitted."""
        self.main_window.display_reader_view()
        self.reader_controller.open_session(item_id)

    @Slot(str)
    def handle_item_deleted(self, item_id: str):
        self._run_in_background(
            self.catalog_store.delete, item_id, on_error=self._handle_delete_failed
        )

    @Slot(str)
    def handle_filter_changed(self, filter_name: str):
        if filter_name not in (FILTER_ALL, FILTER_FREE, FILTER_VIP, FILTER_IN_PROGRESS):
            raise ValueError(f"Unknown library filter: {filter_name}")
        self.current_filter = filter_name
        self._refresh_display()

    @Slot()
    def handle_add_item_requested(self):
        identity = self.session_manager.identity
        if identity is None or not identity.is_author:
            self.main_window.show_error("Add Item Error", "Only authors can add items.")
            return
        draft = self.main_window.prompt_new_item()
        if draft is not None:
            self.add_item(draft)

    def add_item(self, draft: ItemDraft) -> int:
        """Publish a new item in the background. Returns the request id."""
        return self._run_in_background(
            self.catalog_store.create,
            draft,
            on_result=self._handle_item_added,
            on_error=self._handle_add_item_failed,
        )

    # --- Routing ---

    @Slot(object)
    def handle_access_denied(self, reason: DenialReason):
        self.main_window.display_library_view(self.library_screen)
        if reason is DenialReason.REQUIRES_LOGIN:
            self.handle_login_requested()
        elif reason is DenialReason.REQUIRES_UPGRADE:
            self.handle_upgrade_requested()

    @Slot()
    def handle_login_required(self):
        """The session was cleared by a rejected credential; go back to sign-in."""
        self.reader_controller.close_session()
        self.main_window.display_library_view(self.library_screen)
        self.main_window.show_info("Session Expired", "Please sign in again.")
        self.handle_login_requested()

    # --- Account actions ---

    @Slot()
    def handle_login_requested(self):
        request: Optional[SignInRequest] = self.main_window.prompt_login()
        if request is None:
            return

        if request.mode is SignInMode.REGISTER:
            call = (
                self.session_manager.create_account,
                request.email,
                request.password,
                request.display_name,
            )
        elif request.mode is SignInMode.FEDERATED:
            call = (self.session_manager.establish_federated_session, request.provider_token)
        else:
            call = (self.session_manager.establish_session, request.email, request.password)

        self._run_in_background(
            *call, on_result=self._handle_sign_in_finished, on_error=self._handle_sign_in_failed
        )

    @Slot()
    def handle_logout_requested(self):
        self.reader_controller.close_session()
        self.session_manager.terminate_session()
        self.main_window.display_library_view(self.library_screen)

    @Slot()
    def handle_refresh_requested(self):
        """Re-read the server's view of the identity, then reload the catalog."""
        if not self.session_manager.is_authenticated:
            self.show_library()
            return
        self._run_in_background(
            self.session_manager.refresh_entitlement,
            on_result=self._handle_refresh_finished,
            on_error=self._handle_refresh_failed,
        )

    @Slot()
    def handle_upgrade_requested(self):
        if not self.payments_enabled:
            self.main_window.show_info(
                "Upgrade Unavailable", "VIP upgrades are not available right now."
            )
            return
        if not self.session_manager.is_authenticated:
            self.handle_login_requested()
            return
        if not self.main_window.confirm_upgrade():
            return

        worker = self._make_worker(
            self.session_manager.upgrade_entitlement,
            on_result=self._handle_upgrade_finished,
            on_error=self._handle_upgrade_failed,
        )
        self._upgrade_request_id = worker.request_id
        self.thread_pool.start(worker)

    # --- Background call results ---

    def _make_worker(
        self,
        fn: Callable[..., Any],
        *args: Any,
        on_result: Optional[Callable] = None,
        on_error: Optional[Callable] = None,
    ) -> CallWorker:
        self._request_id += 1
        worker = CallWorker(self._request_id, fn, *args)
        if on_result is not None:
            worker.signals.result.connect(on_result)
        if on_error is not None:
            worker.signals.error.connect(on_error)
        return worker

    def _run_in_background(self, fn: Callable[..., Any], *args: Any, **slots) -> int:
        worker = self._make_worker(fn, *args, **slots)
        self.thread_pool.start(worker)
        return worker.request_id

    @Slot(int, str)
    def _handle_load_failed(self, request_id: int, message: str):
        self.main_window.show_error("Library Error", message)

    @Slot(int, str)
    def _handle_delete_failed(self, request_id: int, message: str):
        self.main_window.show_error("Delete Error", message)

    @Slot(int, object)
    def _handle_item_added(self, request_id: int, item: ContentItem):
        self.main_window.show_info("Item Added", f"'{item.title}' is now in the library.")

    @Slot(int, str)
    def _handle_add_item_failed(self, request_id: int, message: str):
        self.main_window.show_error("Add Item Error", message)

    @Slot(int, object)
    def _handle_sign_in_finished(self, request_id: int, signed_in):
        if not signed_in:
            self.main_window.show_error(
                "Sign In Failed", self.session_manager.last_error_message or "Invalid credentials"
            )

    @Slot(int, str)
    def _handle_sign_in_failed(self, request_id: int, message: str):
        self.main_window.show_error("Sign In Failed", message)

    @Slot(int, object)
    def _handle_refresh_finished(self, request_id: int, _outcome):
        # A failed refresh keeps the local identity; the catalog still reloads
        self.show_library()

    @Slot(int, str)
    def _handle_refresh_failed(self, request_id: int, message: str):
        logger.warning("Entitlement refresh failed: %s", message)
        self.show_library()

    @Slot(int, object)
    def _handle_upgrade_finished(self, request_id: int, upgraded):
        if request_id != self._upgrade_request_id:
            return
        if upgraded:
            self.main_window.show_info("Welcome to VIP", "Premium titles are now unlocked.")
        else:
            self.main_window.show_error(
                "Upgrade Failed", self.session_manager.last_error_message or "Please try again."
            )

    @Slot(int, str)
    def _handle_upgrade_failed(self, request_id: int, message: str):
        if request_id == self._upgrade_request_id:
            self.main_window.show_error("Upgrade Failed", message)

    def _refresh_display(self, *_):
        identity = self.session_manager.identity
        # Only authors manage the catalog
        is_author = identity is not None and identity.is_author
        self.library_screen.can_delete = is_author
        self.main_window.set_author_tools_visible(is_author)
        items = self.visible_items()
        actions = {item.id: self.call_to_action(item) for item in items}
        self.library_screen.display_items(items, actions)
