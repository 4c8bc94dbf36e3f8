"""UI layer - PySide6 presentation components."""

from .add_item_dialog import AddItemDialog
from .library_screen import ItemTile, LibraryScreen
from .login_dialog import LoginDialog
from .main_window import MainWindow
from .reader_view import ReaderView

__all__ = ["AddItemDialog", "ItemTile", "LibraryScreen", "LoginDialog", "MainWindow", "ReaderView"]
