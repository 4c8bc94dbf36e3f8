"""Catalog Store - Owns the process-wide list of content items."""

import logging
import threading
from dataclasses import replace
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal

from vip_reader.core import ContentItem, ItemDraft
from vip_reader.io import ApiError, CatalogGateway

logger = logging.getLogger(__name__)

_SAMPLE_CONTENT = "/sample.pdf"

BUILTIN_SEED: tuple[ContentItem, ...] = (
    ContentItem(
        id="1",
        title="The Digital Revolution",
        author="Sarah Johnson",
        description=(
            "An exploration of how technology has transformed society and what "
            "the future holds for humanity in the digital age."
        ),
        cover_url="https://images.pexels.com/photos/159866/books-book-pages-read-literature-159866.jpeg",
        content_url=_SAMPLE_CONTENT,
        is_premium=False,
        published_at="2024-01-15",
        total_pages=280,
        last_read_page=0,
    ),
    ContentItem(
        id="2",
        title="Mysteries of the Cosmos",
        author="Dr. Michael Chen",
        description=(
            "Journey through space and time to discover the most profound mysteries "
            "of our universe, from black holes to quantum mechanics."
        ),
        cover_url="https://images.pexels.com/photos/1290141/pexels-photo-1290141.jpeg",
        content_url=_SAMPLE_CONTENT,
        is_premium=True,
        published_at="2024-02-20",
        total_pages=340,
        last_read_page=0,
    ),
    ContentItem(
        id="3",
        title="The Art of Mindfulness",
        author="Emma Williams",
        description=(
            "Discover ancient wisdom and modern techniques for achieving inner peace "
            "and mental clarity in our chaotic world."
        ),
        cover_url="https://images.pexels.com/photos/1556691/pexels-photo-1556691.jpeg",
        content_url=_SAMPLE_CONTENT,
        is_premium=False,
        published_at="2024-03-10",
        total_pages=220,
        last_read_page=0,
    ),
    ContentItem(
        id="4",
        title="Advanced Machine Learning",
        author="Prof. David Kumar",
        description=(
            "Deep dive into cutting-edge ML algorithms, neural networks, and AI "
            "applications that are reshaping industries."
        ),
        cover_url="https://images.pexels.com/photos/8386440/pexels-photo-8386440.jpeg",
        content_url=_SAMPLE_CONTENT,
        is_premium=True,
        published_at="2024-03-25",
        total_pages=450,
        last_read_page=0,
    ),
)

# ContentItem attribute -> catalog service field
_WIRE_FIELDS = {
    "title": "title",
    "author": "author",
    "description": "description",
    "cover_url": "coverUrl",
    "content_url": "pdfUrl",
    "is_premium": "isVip",
    "total_pages": "pages",
    "last_read_page": "lastReadPage",
}


class CatalogStore(QObject):
    """Single shared collection of catalog items for the running session.

    Two independent consistency strategies:
    - Reads (load) degrade to the builtin seed set when the service fails.
    - Writes (create/update/delete) go to the service first and are applied
      locally only from the service's canonical answer; failures propagate.

    Items handed out are frozen snapshots. All changes go through this store.
    Remote calls may run on a worker thread; the list itself is only ever
    swapped whole, under a lock.
    """

    items_changed = Signal(list)

    def __init__(self, catalog_gateway: CatalogGateway):
        super().__init__()

        if catalog_gateway is None:
            raise ValueError("CatalogGateway must not be None")

        self.catalog_gateway = catalog_gateway
        self._lock = threading.Lock()
        self._items: list[ContentItem] = []
        self.using_fallback = False

    @property
    def items(self) -> tuple[ContentItem, ...]:
        return tuple(self._items)

    # --- Read path ---

    def load(self) -> tuple[ContentItem, ...]:
        """Fetch the full list, replacing it with the seed set on any failure."""
        try:
            items = self.catalog_gateway.list_items()
        except ApiError as e:
            logger.warning("Catalog load failed, using builtin items: %s", e)
            items = list(BUILTIN_SEED)
            self.using_fallback = True
        else:
            self.using_fallback = False

        with self._lock:
            self._items = list(items)
        self._emit_changed()
        return self.items

    def get_by_id(self, item_id: str) -> Optional[ContentItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def free_subset(self) -> list[ContentItem]:
        return [item for item in self._items if not item.is_premium]

    def vip_subset(self) -> list[ContentItem]:
        return [item for item in self._items if item.is_premium]

    def in_progress_subset(self) -> list[ContentItem]:
        """Items the reader has opened and turned pages in."""
        return [item for item in self._items if item.has_started]

    # --- Write path ---

    def create(self, draft: ItemDraft) -> ContentItem:
        """Create an item remotely, then append the service's copy.

        Raises:
            ApiError: if the service rejects the item.
        """
        try:
            created = self.catalog_gateway.create_item(draft)
        except ApiError as e:
            logger.error("Failed to add item '%s': %s", draft.title, e)
            raise

        with self._lock:
            self._items = self._items + [created]
        self._emit_changed()
        return created

    def update(self, item_id: str, patch: dict[str, Any]) -> ContentItem:
        """Update an item remotely, then swap in the service's copy.

        Args:
            item_id: Item to update.
            patch: ContentItem attribute names mapped to new values.

        Raises:
            ValueError: if the patch names an unknown field.
            ApiError: if the service rejects the update.
        """
        unknown = set(patch) - set(_WIRE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown item fields: {', '.join(sorted(unknown))}")

        fields = {_WIRE_FIELDS[name]: value for name, value in patch.items()}
        try:
            updated = self.catalog_gateway.update_item(item_id, fields)
        except ApiError as e:
            logger.error("Failed to update item %s: %s", item_id, e)
            raise

        self._swap(item_id, updated)
        return updated

    def delete(self, item_id: str) -> None:
        """Delete an item remotely, then drop it locally.

        Raises:
            ApiError: if the service rejects the deletion.
        """
        try:
            self.catalog_gateway.delete_item(item_id)
        except ApiError as e:
            logger.error("Failed to delete item %s: %s", item_id, e)
            raise

        with self._lock:
            self._items = [item for item in self._items if item.id != item_id]
        self._emit_changed()

    def record_local_progress(
        self, item_id: str, page: int, total_pages: Optional[int] = None
    ) -> ContentItem:
        """Set an item's last_read_page locally, with no remote call.

        Args:
            item_id: Item being read.
            page: Page to record.
            total_pages: Page count the reader is using. Defaults to the
                item's own total_pages; a rendered document may have more.

        Raises:
            ValueError: if the item is unknown or the page is out of range.
        """
        with self._lock:
            item = self.get_by_id(item_id)
            if item is None:
                raise ValueError(f"Item not in catalog: {item_id}")
            bound = total_pages if total_pages is not None else item.total_pages
            if page < 0 or (bound is not None and page > bound):
                raise ValueError(
                    f"Page {page} out of range for item {item_id} with {bound} pages"
                )
            updated = replace(item, last_read_page=page)
            self._items = [updated if entry.id == item_id else entry for entry in self._items]
        self._emit_changed()
        return updated

    def _swap(self, item_id: str, updated: ContentItem) -> None:
        with self._lock:
            self._items = [updated if item.id == item_id else item for item in self._items]
        self._emit_changed()

    def _emit_changed(self) -> None:
        self.items_changed.emit(list(self._items))
