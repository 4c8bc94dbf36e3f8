"""Unit tests for CatalogStore."""

from unittest.mock import MagicMock

import pytest
from PySide6.QtWidgets import QApplication

from vip_reader.core import ContentItem, ItemDraft
from vip_reader.io import ApiError, ServiceUnavailableError
from vip_reader.services import BUILTIN_SEED, CatalogStore


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


def make_item(item_id: str, is_premium: bool = False, **overrides) -> ContentItem:
    fields = dict(
        id=item_id,
        title=f"Book {item_id}",
        author="Author",
        description="",
        cover_url="",
        content_url="/sample.pdf",
        is_premium=is_premium,
        published_at="2024-01-01",
        total_pages=100,
        last_read_page=0,
    )
    fields.update(overrides)
    return ContentItem(**fields)


@pytest.fixture
def gateway():
    gateway = MagicMock()
    gateway.list_items.return_value = [make_item("a"), make_item("b", is_premium=True)]
    return gateway


@pytest.fixture
def store(gateway):
    ensure_qt_app()
    store = CatalogStore(gateway)
    store.load()
    return store


class TestLoad:
    def test_fails_fast_on_none_gateway(self):
        ensure_qt_app()
        with pytest.raises(ValueError, match="CatalogGateway must not be None"):
            CatalogStore(None)

    def test_load_replaces_items(self, store):
        assert [item.id for item in store.items] == ["a", "b"]
        assert store.using_fallback is False

    def test_failure_substitutes_seed_set(self, gateway):
        ensure_qt_app()
        gateway.list_items.side_effect = ServiceUnavailableError("offline")
        store = CatalogStore(gateway)

        items = store.load()

        assert items == BUILTIN_SEED
        assert [item.is_premium for item in items] == [False, True, False, True]
        assert store.using_fallback is True
        gateway.list_items.assert_called_once()

    def test_fallback_is_full_replacement(self, store, gateway):
        gateway.list_items.side_effect = ApiError("boom", status_code=500)

        store.load()

        assert store.get_by_id("a") is None
        assert len(store.items) == 4

    def test_load_emits_items_changed(self, gateway):
        ensure_qt_app()
        store = CatalogStore(gateway)
        emitted = []
        store.items_changed.connect(emitted.append)

        store.load()

        assert [item.id for item in emitted[-1]] == ["a", "b"]


class TestDerivedReads:
    def test_get_by_id(self, store):
        assert store.get_by_id("b").is_premium
        assert store.get_by_id("missing") is None

    def test_subsets(self, store):
        assert [item.id for item in store.free_subset()] == ["a"]
        assert [item.id for item in store.vip_subset()] == ["b"]

    def test_items_snapshot_is_immutable(self, store):
        snapshot = store.items
        assert isinstance(snapshot, tuple)
        with pytest.raises(AttributeError):
            snapshot[0].title = "changed"


class TestWrites:
    def test_create_appends_server_copy(self, store, gateway):
        created = make_item("c", title="Server Title")
        gateway.create_item.return_value = created

        result = store.create(ItemDraft(title="Local Title", author="A", description="D"))

        assert result == created
        assert store.get_by_id("c").title == "Server Title"

    def test_create_failure_propagates_and_leaves_list(self, store, gateway):
        gateway.create_item.side_effect = ApiError("too large", status_code=413)

        with pytest.raises(ApiError):
            store.create(ItemDraft(title="T", author="A", description="D"))

        assert [item.id for item in store.items] == ["a", "b"]

    def test_update_maps_fields_and_swaps_item(self, store, gateway):
        gateway.update_item.return_value = make_item("a", title="Renamed", is_premium=True)

        store.update("a", {"title": "Renamed", "is_premium": True})

        gateway.update_item.assert_called_once_with("a", {"title": "Renamed", "isVip": True})
        assert store.get_by_id("a").title == "Renamed"
        assert [item.id for item in store.vip_subset()] == ["a", "b"]

    def test_update_rejects_unknown_fields(self, store, gateway):
        with pytest.raises(ValueError, match="Unknown item fields"):
            store.update("a", {"colour": "red"})
        gateway.update_item.assert_not_called()

    def test_update_failure_propagates(self, store, gateway):
        gateway.update_item.side_effect = ApiError("forbidden", status_code=403)

        with pytest.raises(ApiError):
            store.update("a", {"title": "Renamed"})

        assert store.get_by_id("a").title == "Book a"

    def test_delete_removes_after_remote_success(self, store, gateway):
        store.delete("a")

        gateway.delete_item.assert_called_once_with("a")
        assert store.get_by_id("a") is None

    def test_delete_failure_keeps_item(self, store, gateway):
        gateway.delete_item.side_effect = ServiceUnavailableError("offline")

        with pytest.raises(ApiError):
            store.delete("a")

        assert store.get_by_id("a") is not None


class TestLocalProgress:
    def test_records_without_remote_call(self, store, gateway):
        updated = store.record_local_progress("b", 37)

        assert updated.last_read_page == 37
        assert store.get_by_id("b").last_read_page == 37
        gateway.update_item.assert_not_called()

    def test_position_may_move_backwards(self, store):
        store.record_local_progress("b", 37)
        store.record_local_progress("b", 12)
        assert store.get_by_id("b").last_read_page == 12

    def test_unknown_item(self, store):
        with pytest.raises(ValueError, match="not in catalog"):
            store.record_local_progress("missing", 1)

    def test_reader_page_count_overrides_item_total(self, store):
        updated = store.record_local_progress("a", 150, total_pages=200)

        assert updated.last_read_page == 150
        with pytest.raises(ValueError, match="out of range"):
            store.record_local_progress("a", 201, total_pages=200)

    def test_in_progress_subset(self, store):
        assert store.in_progress_subset() == []

        store.record_local_progress("b", 4)

        assert [item.id for item in store.in_progress_subset()] == ["b"]

    @pytest.mark.parametrize("page", [-1, 101])
    def test_out_of_range(self, store, page):
        with pytest.raises(ValueError, match="out of range"):
            store.record_local_progress("a", page)
