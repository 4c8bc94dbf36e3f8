"""Library screen - List of catalog items with a call-to-action per item."""

from typing import List

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from vip_reader.core import ContentItem

CTA_LABELS = {
    "read": "Read",
    "login": "Sign in to read",
    "upgrade": "Upgrade to VIP",
}


class ItemTile(QWidget):
    """A single catalog row: title, author, badge, progress and action buttons.

    Signals:
        action_clicked: Emitted with the item id when the call-to-action is pressed.
        delete_requested: Emitted with the item id when delete is pressed.
    """

    action_clicked = Signal(str)
    delete_requested = Signal(str)

    def __init__(self, item: ContentItem, action: str, can_delete: bool = False, parent=None):
        super().__init__(parent)
        self.item = item
        self.action = action

        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 6, 10, 6)

        text = QVBoxLayout()
        title = QLabel(f"<b>{item.title}</b>" + ("  ★ VIP" if item.is_premium else ""))
        title.setTextFormat(Qt.RichText)
        text.addWidget(title)
        text.addWidget(QLabel(item.author))
        if item.has_started:
            total = f" of {item.total_pages}" if item.total_pages else ""
            text.addWidget(QLabel(f"Continue from page {item.last_read_page}{total}"))
        layout.addLayout(text, stretch=1)

        self.action_button = QPushButton(CTA_LABELS.get(action, action))
        self.action_button.clicked.connect(lambda: self.action_clicked.emit(self.item.id))
        layout.addWidget(self.action_button)

        if can_delete:
            delete_btn = QPushButton("Delete")
            delete_btn.clicked.connect(lambda: self.delete_requested.emit(self.item.id))
            layout.addWidget(delete_btn)


class LibraryScreen(QWidget):
    """Scrollable list of catalog items with All / Free / VIP / In Progress filters.

    Signals:
        item_selected: Emitted with an item id when the reader should open it.
        item_deleted: Emitted with an item id when the user deletes it.
        filter_changed: Emitted with "all", "free", "vip" or "in_progress".
    """

    item_selected = Signal(str)
    item_deleted = Signal(str)
    filter_changed = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.can_delete = False
        self.tiles: List[ItemTile] = []

        layout = QVBoxLayout(self)

        filters = QHBoxLayout()
        self._filter_group = QButtonGroup(self)
        self._filter_group.setExclusive(True)
        for name, label in (("all", "All"), ("free", "Free"), ("vip", "VIP"), ("in_progress", "In Progress")):
            button = QPushButton(label)
            button.setCheckable(True)
            button.setChecked(name == "all")
            button.clicked.connect(lambda _checked=False, n=name: self.filter_changed.emit(n))
            self._filter_group.addButton(button)
            filters.addWidget(button)
        filters.addStretch()
        layout.addLayout(filters)

        self._list_container = QWidget()
        self._list_layout = QVBoxLayout(self._list_container)
        self._list_layout.addStretch()

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._list_container)
        layout.addWidget(scroll)

        self.empty_label = QLabel("No titles available.")
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

    def display_items(self, items: List[ContentItem], actions: dict[str, str]):
        """Replace the displayed rows.

        Args:
            items: Items to show, in order.
            actions: Call-to-action per item id ("read", "login" or "upgrade").
        """
        for tile in self.tiles:
            self._list_layout.removeWidget(tile)
            tile.deleteLater()
        self.tiles = []

        for item in items:
            tile = ItemTile(item, actions.get(item.id, "read"), can_delete=self.can_delete)
            tile.action_clicked.connect(self.item_selected.emit)
            tile.delete_requested.connect(self.item_deleted.emit)
            self._list_layout.insertWidget(self._list_layout.count() - 1, tile)
            self.tiles.append(tile)

        self.empty_label.setVisible(not items)
