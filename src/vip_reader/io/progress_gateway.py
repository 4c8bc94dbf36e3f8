"""Progress sink client."""

from vip_reader.io.api_client import ApiClient


class ProgressGateway:
    """Records the last visited page per item for the signed-in identity."""

    def __init__(self, client: ApiClient):
        if client is None:
            raise ValueError("ApiClient must not be None")
        self._client = client

    def record_progress(self, item_id: str, page: int) -> None:
        self._client.request(
            "POST",
            "/user/reading-progress",
            json={"bookId": item_id, "page": page},
        )
