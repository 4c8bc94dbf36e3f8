"""Catalog service client."""

from typing import Any

from vip_reader.core import ContentItem, ItemDraft
from vip_reader.io.api_client import ApiClient
from vip_reader.io.errors import ApiError


class CatalogGateway:
    """CRUD over catalog items plus content access resolution."""

    def __init__(self, client: ApiClient):
        if client is None:
            raise ValueError("ApiClient must not be None")
        self._client = client

    def list_items(self) -> list[ContentItem]:
        body = self._client.request("GET", "/books")
        if not isinstance(body, list):
            raise ApiError("Catalog list response is not a list", payload=body)
        return [self._item_from(entry) for entry in body]

    def get_item(self, item_id: str) -> ContentItem:
        return self._item_from(self._client.request("GET", f"/books/{item_id}"))

    def create_item(self, draft: ItemDraft) -> ContentItem:
        body = self._client.request(
            "POST",
            "/books",
            data=draft.form_fields(),
            files=self._uploads(draft),
        )
        return self._item_from(body)

    def update_item(self, item_id: str, fields: dict[str, Any]) -> ContentItem:
        """Send changed fields (camelCase keys) as form data."""
        form = {key: self._form_value(value) for key, value in fields.items()}
        body = self._client.request("PUT", f"/books/{item_id}", data=form)
        return self._item_from(body)

    def delete_item(self, item_id: str) -> None:
        self._client.request("DELETE", f"/books/{item_id}")

    def resolve_access_reference(self, item_id: str) -> str:
        """Return the transient reference used to open the item's content."""
        body = self._client.request("GET", f"/books/{item_id}/pdf")
        if not isinstance(body, dict) or not body.get("pdfUrl"):
            raise ApiError("Content reference response missing pdfUrl", payload=body)
        return str(body["pdfUrl"])

    @staticmethod
    def _item_from(body: Any) -> ContentItem:
        try:
            return ContentItem.from_dict(body)
        except (ValueError, TypeError) as e:
            raise ApiError(f"Malformed catalog response: {e}", payload=body) from e

    @staticmethod
    def _uploads(draft: ItemDraft) -> dict[str, tuple[str, bytes, str]]:
        uploads = {}
        if draft.cover is not None:
            uploads["cover"] = ("cover", draft.cover, "application/octet-stream")
        if draft.content is not None:
            uploads["pdf"] = ("content.pdf", draft.content, "application/pdf")
        return uploads

    @staticmethod
    def _form_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
