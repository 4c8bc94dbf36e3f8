"""Main Window - Application shell with menus and view switching."""

from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QMessageBox, QStackedWidget

from vip_reader.core import ItemDraft, SignInRequest

from .add_item_dialog import AddItemDialog
from .login_dialog import LoginDialog
from .reader_view import ReaderView


class MainWindow(QMainWindow):
    """Provides the application shell and the navigation targets coordinators route to."""

    login_requested = Signal()
    logout_requested = Signal()
    upgrade_requested = Signal()
    refresh_requested = Signal()
    add_item_requested = Signal()

    def __init__(
        self,
        reader_view: ReaderView,
        federated_login_enabled: bool = False,
        payments_enabled: bool = True,
    ):
        super().__init__()
        self.setWindowTitle("VIP Reader")
        self.setGeometry(100, 100, 1200, 800)

        self._federated_login_enabled = federated_login_enabled
        self.reader_view = reader_view
        self._stack = QStackedWidget()
        self._stack.addWidget(self.reader_view)
        self.setCentralWidget(self._stack)

        self._create_menu_bar()
        self.upgrade_action.setVisible(payments_enabled)
        self.set_author_tools_visible(False)

    def _create_menu_bar(self):
        menu_bar = self.menuBar()

        account_menu = menu_bar.addMenu("&Account")
        login_action = QAction("&Sign In...", self)
        login_action.setShortcut("Ctrl+L")
        login_action.triggered.connect(self.login_requested.emit)
        account_menu.addAction(login_action)

        logout_action = QAction("Sign &Out", self)
        logout_action.triggered.connect(self.logout_requested.emit)
        account_menu.addAction(logout_action)

        self.upgrade_action = QAction("&Upgrade to VIP...", self)
        self.upgrade_action.triggered.connect(self.upgrade_requested.emit)
        account_menu.addAction(self.upgrade_action)

        account_menu.addSeparator()
        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        account_menu.addAction(exit_action)

        view_menu = menu_bar.addMenu("&View")
        refresh_action = QAction("&Refresh Library", self)
        refresh_action.setShortcut("F5")
        refresh_action.triggered.connect(self.refresh_requested.emit)
        view_menu.addAction(refresh_action)

        self._author_menu = menu_bar.addMenu("A&uthor")
        self.add_item_action = QAction("&Add Item...", self)
        self.add_item_action.triggered.connect(self.add_item_requested.emit)
        self._author_menu.addAction(self.add_item_action)

    def set_author_tools_visible(self, visible: bool):
        self._author_menu.menuAction().setVisible(visible)
        self.add_item_action.setEnabled(visible)

    def display_library_view(self, library_screen):
        if self._stack.indexOf(library_screen) == -1:
            self._stack.addWidget(library_screen)
        self._stack.setCurrentWidget(library_screen)

    def display_reader_view(self):
        self._stack.setCurrentWidget(self.reader_view)

    def set_fullscreen(self, fullscreen: bool):
        if fullscreen:
            self.showFullScreen()
        else:
            self.showNormal()

    def prompt_login(self) -> Optional[SignInRequest]:
        dialog = LoginDialog(self, federated_enabled=self._federated_login_enabled)
        if dialog.exec() != LoginDialog.Accepted:
            return None
        return dialog.sign_in_request()

    def prompt_new_item(self) -> Optional[ItemDraft]:
        dialog = AddItemDialog(self)
        if dialog.exec() != AddItemDialog.Accepted:
            return None
        try:
            return dialog.draft()
        except OSError as e:
            self.show_error("Add Item Error", f"Could not read file: {e}")
            return None

    def confirm_upgrade(self) -> bool:
        answer = QMessageBox.question(
            self,
            "Upgrade to VIP",
            "Unlock every premium title with a VIP subscription?",
        )
        return answer == QMessageBox.Yes

    def show_error(self, title: str, message: str):
        """Display an error message to the user."""
        QMessageBox.critical(self, title, message)

    def show_info(self, title: str, message: str):
        """Display an information message to the user."""
        QMessageBox.information(self, title, message)
