"""Main entry point for the VIP reader application."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from vip_reader.coordinators import LibraryCoordinator, ReaderController
from vip_reader.io import (
    ApiClient,
    CatalogGateway,
    IdentityGateway,
    LocalSessionStorage,
    ProgressGateway,
)
from vip_reader.services import CatalogStore, SessionManager, SettingsManager, setup_logging
from vip_reader.ui import LibraryScreen, MainWindow, ReaderView

logger = logging.getLogger(__name__)


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    # 1. Configuration and logging
    settings = SettingsManager()
    data_dir = settings.get_data_dir()
    setup_logging(data_dir / "vip_reader.log", settings.get_log_level())

    # 2. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("VIP Reader")
    app.setOrganizationName("VipReader")

    # 3. Initialize Infrastructure
    api_client = ApiClient(settings.get_api_url(), timeout=settings.get_request_timeout())
    identity_gateway = IdentityGateway(api_client)
    catalog_gateway = CatalogGateway(api_client)
    progress_gateway = ProgressGateway(api_client)

    # 4. Session and catalog
    session_manager = SessionManager(
        identity_gateway=identity_gateway,
        storage=LocalSessionStorage(data_dir),
        api_client=api_client,
        federated_login_enabled=settings.federated_login_enabled(),
    )
    session_manager.restore_session()
    catalog_store = CatalogStore(catalog_gateway)

    # 5. Construct UI
    reader_view = ReaderView()
    library_screen = LibraryScreen()
    main_window = MainWindow(
        reader_view,
        federated_login_enabled=settings.federated_login_enabled(),
        payments_enabled=settings.payments_enabled(),
    )

    # 6. Instantiate Coordinators (Dependency Injection)
    reader_controller = ReaderController(
        session_manager=session_manager,
        catalog_store=catalog_store,
        catalog_gateway=catalog_gateway,
        progress_gateway=progress_gateway,
    )
    library_coordinator = LibraryCoordinator(
        library_screen=library_screen,
        catalog_store=catalog_store,
        session_manager=session_manager,
        reader_controller=reader_controller,
        main_window=main_window,
        payments_enabled=settings.payments_enabled(),
    )

    # 7. Signal Wiring
    reader_view.bind(reader_controller)
    reader_view.back_requested.connect(library_coordinator.show_library)
    reader_controller.fullscreen_changed.connect(main_window.set_fullscreen)
    main_window.login_requested.connect(library_coordinator.handle_login_requested)
    main_window.logout_requested.connect(library_coordinator.handle_logout_requested)
    main_window.upgrade_requested.connect(library_coordinator.handle_upgrade_requested)
    main_window.refresh_requested.connect(library_coordinator.handle_refresh_requested)
    main_window.add_item_requested.connect(library_coordinator.handle_add_item_requested)
    app.aboutToQuit.connect(reader_controller.close_session)

    # 8. Show UI and start event loop
    library_coordinator.show_library()
    main_window.show()
    logger.info("VIP Reader started against %s", api_client.base_url)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
