"""Persisted local session: the serialized identity and its credential."""

import json
import logging
from pathlib import Path
from typing import Optional

from vip_reader.core import Identity

logger = logging.getLogger(__name__)


class LocalSessionStorage:
    """
    JSON file holding two keyed entries, "user" and "token".

    Format:
    {
        "user": {"id": "...", "email": "...", "name": "...", "isVip": false, ...},
        "token": "<opaque bearer token>"
    }

    Absence of either entry means "no session". There is no schema version.
    """

    FILENAME = "session.json"
    USER_KEY = "user"
    TOKEN_KEY = "token"

    def __init__(self, data_dir: Path):
        self._path = Path(data_dir) / self.FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[tuple[Identity, str]]:
        """Return the stored (identity, token), or None if no usable session exists."""
        data = self._read()
        user = data.get(self.USER_KEY)
        token = data.get(self.TOKEN_KEY)
        if not user or not token:
            return None
        try:
            return Identity.from_dict(user), str(token)
        except ValueError as e:
            logger.warning("Ignoring unreadable stored identity: %s", e)
            return None

    def save(self, identity: Identity, token: str) -> None:
        self._write({self.USER_KEY: identity.to_dict(), self.TOKEN_KEY: token})

    def save_identity(self, identity: Identity) -> None:
        """Replace the stored identity, keeping the stored token."""
        data = self._read()
        data[self.USER_KEY] = identity.to_dict()
        self._write(data)

    def clear(self) -> None:
        if not self._path.exists():
            return
        try:
            self._path.unlink()
        except OSError as e:
            logger.error("Could not remove session file %s: %s", self._path, e)

    def _read(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read session file %s: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Could not write session file %s: %s", self._path, e)
