"""ReadingSessionState - pagination and viewport state of an open reading session."""

from dataclasses import dataclass

from .content_item import ContentItem

MIN_ZOOM = 50
MAX_ZOOM = 200
DEFAULT_ZOOM = 100
ZOOM_STEP = 25

# Used when neither the document nor the catalog reports a page count.
FALLBACK_TOTAL_PAGES = 100


@dataclass
class ReadingSessionState:
    """Live state of one admitted reading session.

    Not persisted itself; only current_page is projected outward.
    All mutators return True when the state actually changed.
    """

    item: ContentItem
    current_page: int = 1
    zoom_level: int = DEFAULT_ZOOM
    is_fullscreen: bool = False
    controls_visible: bool = True
    document_page_count: int = 0

    @classmethod
    def seeded_from(cls, item: ContentItem) -> "ReadingSessionState":
        """Start a session at the item's stored position (page 1 if not started)."""
        state = cls(item=item)
        state.current_page = state.clamp_page(item.last_read_page or 1)
        return state

    @property
    def total_pages(self) -> int:
        return self.document_page_count or self.item.total_pages or FALLBACK_TOTAL_PAGES

    def clamp_page(self, page: int) -> int:
        return max(1, min(page, self.total_pages))

    def go_to_page(self, page: int) -> bool:
        target = self.clamp_page(page)
        if target == self.current_page:
            return False
        self.current_page = target
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.current_page - 1)

    def set_document_page_count(self, count: int) -> bool:
        """Adopt the page count reported by the rendered document.

        Returns True if current_page had to be pulled back into range.
        """
        self.document_page_count = max(0, count)
        return self.go_to_page(self.current_page)

    def zoom_in(self) -> bool:
        return self._set_zoom(self.zoom_level + ZOOM_STEP)

    def zoom_out(self) -> bool:
        return self._set_zoom(self.zoom_level - ZOOM_STEP)

    def reset_zoom(self) -> bool:
        return self._set_zoom(DEFAULT_ZOOM)

    def _set_zoom(self, level: int) -> bool:
        level = max(MIN_ZOOM, min(level, MAX_ZOOM))
        if level == self.zoom_level:
            return False
        self.zoom_level = level
        return True
