"""Reader view - Page display with navigation, zoom and fullscreen chrome."""

from typing import override

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeyEvent, QMouseEvent
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget


class ReaderView(QWidget):
    """Presents the reader controller's state and forwards user intents.

    Rendering of the document itself belongs to the content viewer; this
    widget only shows where the reader is.
    """

    next_requested = Signal()
    previous_requested = Signal()
    zoom_in_requested = Signal()
    zoom_out_requested = Signal()
    reset_zoom_requested = Signal()
    fullscreen_requested = Signal()
    back_requested = Signal()
    activity = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMouseTracking(True)

        layout = QVBoxLayout(self)

        self.header = QWidget()
        header_layout = QHBoxLayout(self.header)
        back_btn = QPushButton("Back")
        back_btn.clicked.connect(self.back_requested.emit)
        header_layout.addWidget(back_btn)
        self.title_label = QLabel()
        header_layout.addWidget(self.title_label, stretch=1)
        layout.addWidget(self.header)

        self.page_surface = QLabel()
        self.page_surface.setAlignment(Qt.AlignCenter)
        self.page_surface.setMouseTracking(True)
        layout.addWidget(self.page_surface, stretch=1)

        self.footer = QWidget()
        footer_layout = QHBoxLayout(self.footer)
        for label, signal in (
            ("Previous", self.previous_requested),
            ("Next", self.next_requested),
            ("-", self.zoom_out_requested),
            ("+", self.zoom_in_requested),
            ("100%", self.reset_zoom_requested),
            ("Fullscreen", self.fullscreen_requested),
        ):
            button = QPushButton(label)
            button.clicked.connect(signal.emit)
            footer_layout.addWidget(button)
        self.page_label = QLabel()
        self.zoom_label = QLabel()
        footer_layout.addWidget(self.page_label)
        footer_layout.addWidget(self.zoom_label)
        layout.addWidget(self.footer)

        self._total_pages = 0

    def bind(self, controller):
        """Wire this view to a ReaderController."""
        self.next_requested.connect(controller.next_page)
        self.previous_requested.connect(controller.previous_page)
        self.zoom_in_requested.connect(controller.zoom_in)
        self.zoom_out_requested.connect(controller.zoom_out)
        self.reset_zoom_requested.connect(controller.reset_zoom)
        self.fullscreen_requested.connect(controller.toggle_fullscreen)
        self.activity.connect(controller.register_activity)

        controller.page_changed.connect(
            lambda page: self.show_page(page, controller.total_pages)
        )
        controller.zoom_changed.connect(self.show_zoom)
        controller.controls_visibility_changed.connect(self.set_controls_visible)
        controller.content_ready.connect(self.show_content)
        controller.content_ready.connect(
            lambda _reference: self.set_title(controller.session.item.title)
        )
        controller.load_failed.connect(self.show_failure)

    def show_content(self, reference: str):
        self.page_surface.setText(reference)

    def show_page(self, page: int, total_pages: int):
        self._total_pages = total_pages
        self.page_label.setText(f"Page {page} of {total_pages}")

    def show_zoom(self, zoom: int):
        self.zoom_label.setText(f"{zoom}%")

    def show_failure(self, message: str):
        self.page_surface.setText(message)

    def set_title(self, title: str):
        self.title_label.setText(title)

    def set_controls_visible(self, visible: bool):
        self.header.setVisible(visible)
        self.footer.setVisible(visible)

    @override
    def mouseMoveEvent(self, event: QMouseEvent):
        self.activity.emit()
        super().mouseMoveEvent(event)

    @override
    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key.Key_Right:
            self.next_requested.emit()
        elif event.key() == Qt.Key.Key_Left:
            self.previous_requested.emit()
        else:
            super().keyPressEvent(event)
