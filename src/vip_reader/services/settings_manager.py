"""Settings Manager - Handles backend endpoints and feature configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class SettingsManager:
    """
    Manages application settings.

    Reads configuration from a .env file in the project root, falling back
    to the process environment and built-in defaults.
    """

    DEFAULT_API_URL = "http://localhost:3001/api"
    DEFAULT_TIMEOUT = 10.0
    DEFAULT_LOG_LEVEL = "INFO"

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

    def get_api_url(self) -> str:
        return self._get("VIP_READER_API_URL") or self.DEFAULT_API_URL

    def get_request_timeout(self) -> float:
        """Request timeout in seconds; malformed values fall back to the default."""
        raw = self._get("VIP_READER_API_TIMEOUT")
        if raw is None:
            return self.DEFAULT_TIMEOUT
        try:
            timeout = float(raw)
        except ValueError:
            return self.DEFAULT_TIMEOUT
        return timeout if timeout > 0 else self.DEFAULT_TIMEOUT

    def get_google_client_id(self) -> Optional[str]:
        return self._get("VIP_READER_GOOGLE_CLIENT_ID")

    def get_stripe_publishable_key(self) -> Optional[str]:
        return self._get("VIP_READER_STRIPE_KEY")

    def get_data_dir(self) -> Path:
        """Directory for the persisted session and log files."""
        raw = self._get("VIP_READER_DATA_DIR")
        return Path(raw).expanduser() if raw else Path.home() / ".vip_reader"

    def get_log_level(self) -> str:
        return (self._get("VIP_READER_LOG_LEVEL") or self.DEFAULT_LOG_LEVEL).upper()

    def federated_login_enabled(self) -> bool:
        return self.get_google_client_id() is not None

    def payments_enabled(self) -> bool:
        return self.get_stripe_publishable_key() is not None

    @staticmethod
    def _get(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None
