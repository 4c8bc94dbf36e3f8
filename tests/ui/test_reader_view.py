"""Tests for ReaderView - controls follow the reader controller."""

from unittest.mock import MagicMock

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication

from vip_reader.ui import ReaderView


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


class FakeController(QObject):
    """Signal surface of a ReaderController with recorded intents."""

    page_changed = Signal(int)
    zoom_changed = Signal(int)
    controls_visibility_changed = Signal(bool)
    content_ready = Signal(str)
    load_failed = Signal(str)

    def __init__(self):
        super().__init__()
        self.total_pages = 340
        self.session = MagicMock()
        self.session.item.title = "Mysteries of the Cosmos"
        self.calls = []

    def next_page(self):
        self.calls.append("next")

    def previous_page(self):
        self.calls.append("previous")

    def zoom_in(self):
        self.calls.append("zoom_in")

    def zoom_out(self):
        self.calls.append("zoom_out")

    def reset_zoom(self):
        self.calls.append("reset_zoom")

    def toggle_fullscreen(self):
        self.calls.append("fullscreen")

    def register_activity(self):
        self.calls.append("activity")


def make_bound_view():
    ensure_qt_app()
    view = ReaderView()
    controller = FakeController()
    view.bind(controller)
    return view, controller


def test_renders_controller_state():
    view, controller = make_bound_view()

    controller.content_ready.emit("https://cdn.example/2.pdf")
    controller.page_changed.emit(5)
    controller.zoom_changed.emit(125)

    assert view.title_label.text() == "Mysteries of the Cosmos"
    assert view.page_label.text() == "Page 5 of 340"
    assert view.zoom_label.text() == "125%"


def test_controls_follow_visibility_signal():
    view, controller = make_bound_view()

    controller.controls_visibility_changed.emit(False)
    assert view.header.isHidden()
    assert view.footer.isHidden()

    controller.controls_visibility_changed.emit(True)
    assert not view.footer.isHidden()


def test_intents_reach_controller():
    view, controller = make_bound_view()

    view.next_requested.emit()
    view.zoom_in_requested.emit()
    view.fullscreen_requested.emit()
    view.activity.emit()

    assert controller.calls == ["next", "zoom_in", "fullscreen", "activity"]


def test_load_failure_is_displayed():
    view, controller = make_bound_view()

    controller.load_failed.emit("Failed to load content: no pdf")

    assert view.page_surface.text() == "Failed to load content: no pdf"
