"""Domain entities for catalog content."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ContentItem:
    """A readable item in the catalog.

    Instances are immutable snapshots; changes go through CatalogStore.

    Attributes:
        id: Unique identifier assigned by the catalog service.
        title: Display title.
        author: Author display name.
        description: Short blurb.
        cover_url: Cover image reference.
        content_url: Content document reference.
        is_premium: Whether reading requires the VIP or AUTHOR capability.
        published_at: Publication date (ISO string as sent by the service).
        total_pages: Page count if known.
        last_read_page: Last visited page; None or 0 means not started.
    """

    id: str
    title: str
    author: str
    description: str
    cover_url: str
    content_url: str
    is_premium: bool
    published_at: str
    total_pages: Optional[int] = None
    last_read_page: Optional[int] = None

    @property
    def has_started(self) -> bool:
        return bool(self.last_read_page)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentItem":
        """Build a ContentItem from the catalog service's camelCase payload.

        Raises:
            ValueError: if the payload has no id.
        """
        if not isinstance(data, dict) or "id" not in data:
            raise ValueError(f"Malformed catalog item payload: {data!r}")

        pages = data.get("pages")
        last_read = data.get("lastReadPage")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            author=str(data.get("author") or ""),
            description=str(data.get("description") or ""),
            cover_url=str(data.get("coverUrl") or ""),
            content_url=str(data.get("pdfUrl") or ""),
            is_premium=bool(data.get("isVip", False)),
            published_at=str(data.get("publishedAt") or ""),
            total_pages=int(pages) if pages is not None else None,
            last_read_page=int(last_read) if last_read is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "coverUrl": self.cover_url,
            "pdfUrl": self.content_url,
            "isVip": self.is_premium,
            "publishedAt": self.published_at,
        }
        if self.total_pages is not None:
            data["pages"] = self.total_pages
        if self.last_read_page is not None:
            data["lastReadPage"] = self.last_read_page
        return data


@dataclass(frozen=True)
class ItemDraft:
    """Fields for a new catalog item, including the binary uploads."""

    title: str
    author: str
    description: str
    is_premium: bool = False
    total_pages: Optional[int] = None
    cover: Optional[bytes] = None
    content: Optional[bytes] = None

    def form_fields(self) -> dict[str, str]:
        """Plain multipart form fields (uploads are sent separately)."""
        fields = {
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "isVip": "true" if self.is_premium else "false",
        }
        if self.total_pages is not None:
            fields["pages"] = str(self.total_pages)
        return fields
