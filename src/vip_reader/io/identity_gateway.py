"""Identity service client: credential exchange and profile refresh."""

from typing import Any

from vip_reader.core import Identity
from vip_reader.io.api_client import ApiClient
from vip_reader.io.errors import ApiError


class IdentityGateway:
    """Exchanges credentials for an (Identity, token) pair."""

    def __init__(self, client: ApiClient):
        if client is None:
            raise ValueError("ApiClient must not be None")
        self._client = client

    def login(self, email: str, password: str) -> tuple[Identity, str]:
        body = self._client.request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
            authenticated=False,
        )
        return self._session_from(body)

    def register(self, email: str, password: str, name: str) -> tuple[Identity, str]:
        body = self._client.request(
            "POST",
            "/auth/register",
            json={"email": email, "password": password, "name": name},
            authenticated=False,
        )
        return self._session_from(body)

    def federated_exchange(self, provider_token: str) -> tuple[Identity, str]:
        body = self._client.request(
            "POST",
            "/auth/google",
            json={"token": provider_token},
            authenticated=False,
        )
        return self._session_from(body)

    def fetch_profile(self) -> Identity:
        """Fetch the server's current view of the signed-in identity."""
        body = self._client.request("GET", "/user/profile")
        if isinstance(body, dict) and isinstance(body.get("user"), dict):
            body = body["user"]
        try:
            return Identity.from_dict(body)
        except ValueError as e:
            raise ApiError(f"Unexpected profile response: {e}", payload=body) from e

    @staticmethod
    def _session_from(body: Any) -> tuple[Identity, str]:
        if not isinstance(body, dict) or not body.get("token"):
            raise ApiError("Identity service response missing token", payload=body)
        try:
            identity = Identity.from_dict(body.get("user"))
        except ValueError as e:
            raise ApiError(f"Identity service response malformed: {e}", payload=body) from e
        return identity, str(body["token"])
