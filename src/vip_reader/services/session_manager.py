"""Session Manager - Owns the current identity, its credential and their persistence."""

import logging
import re
import threading
import time
from enum import Enum
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from vip_reader.core import Identity
from vip_reader.io import (
    ApiClient,
    ApiError,
    IdentityGateway,
    LocalSessionStorage,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


class AuthFailure(Enum):
    """Why the last session operation failed."""

    INVALID_CREDENTIALS = "invalid_credentials"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    EXCHANGE_FAILED = "exchange_failed"
    VALIDATION_ERROR = "validation_error"
    DUPLICATE_ACCOUNT = "duplicate_account"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NO_SESSION = "no_session"


class SessionManager(QObject):
    """
    Publishes the current identity (or None) to the rest of the application.

    Lifecycle:
    - restore_session() on start-up republishes the persisted session
      without re-validating it. A revoked credential is trusted until the
      next authenticated call is rejected.
    - terminate_session() clears everything, in memory and on disk.
    - Any authenticated call rejected with 401, from any collaborator,
      clears the session and emits login_required.

    Session operations report a boolean outcome; the reason for a failure
    is kept in last_failure and last_error_message.
    """

    session_changed = Signal(object)  # Identity | None
    login_required = Signal()

    SUBSCRIPTION_PREFIX = "sub_"

    def __init__(
        self,
        identity_gateway: IdentityGateway,
        storage: LocalSessionStorage,
        api_client: ApiClient,
        federated_login_enabled: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__()

        if identity_gateway is None:
            raise ValueError("IdentityGateway must not be None")
        if storage is None:
            raise ValueError("LocalSessionStorage must not be None")
        if api_client is None:
            raise ValueError("ApiClient must not be None")

        self.identity_gateway = identity_gateway
        self.storage = storage
        self.federated_login_enabled = federated_login_enabled
        self._sleep = sleep

        self._lock = threading.Lock()
        self._identity: Optional[Identity] = None
        self._credential: Optional[str] = None

        self.last_failure: Optional[AuthFailure] = None
        self.last_error_message: str = ""

        api_client.set_credential_provider(lambda: self.credential)
        api_client.add_unauthorized_listener(self.handle_unauthorized)

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def credential(self) -> Optional[str]:
        return self._credential

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None and self._credential is not None

    # --- Lifecycle ---

    def restore_session(self) -> bool:
        """Republish the persisted session, if any. No remote validation."""
        stored = self.storage.load()
        if stored is None:
            logger.debug("No stored session to restore")
            return False

        identity, token = stored
        self._publish(identity, token)
        logger.info("Restored session for %s", identity.email)
        return True

    def terminate_session(self) -> None:
        """Clear the published and persisted session. Cannot fail."""
        had_session = self._identity is not None
        self._clear()
        if had_session:
            logger.info("Session terminated")

    def handle_unauthorized(self) -> None:
        """Forced logout after any authenticated call was rejected with 401."""
        logger.warning("Credential rejected by the service; signing out")
        self._clear()
        self.login_required.emit()

    # --- Establishing a session ---

    def establish_session(self, email: str, password: str) -> bool:
        self._reset_failure()
        try:
            identity, token = self.identity_gateway.login(email, password)
        except ServiceUnavailableError as e:
            return self._fail(AuthFailure.SERVICE_UNAVAILABLE, e)
        except ApiError as e:
            return self._fail(AuthFailure.INVALID_CREDENTIALS, e)

        self._accept(identity, token)
        return True

    def establish_federated_session(self, provider_token: Optional[str]) -> bool:
        """Exchange a third-party identity token for a session."""
        self._reset_failure()
        if not self.federated_login_enabled:
            return self._fail(
                AuthFailure.PROVIDER_UNAVAILABLE, "No federated identity provider configured"
            )
        if not provider_token:
            return self._fail(AuthFailure.EXCHANGE_FAILED, "Provider returned no token")

        try:
            identity, token = self.identity_gateway.federated_exchange(provider_token)
        except ServiceUnavailableError as e:
            return self._fail(AuthFailure.SERVICE_UNAVAILABLE, e)
        except ApiError as e:
            return self._fail(AuthFailure.EXCHANGE_FAILED, e)

        self._accept(identity, token)
        return True

    def create_account(self, email: str, password: str, display_name: str) -> bool:
        """Register a new account and sign straight into it."""
        self._reset_failure()
        problem = self._validate_registration(email, password, display_name)
        if problem:
            return self._fail(AuthFailure.VALIDATION_ERROR, problem)

        try:
            identity, token = self.identity_gateway.register(
                email.strip(), password, display_name.strip()
            )
        except ServiceUnavailableError as e:
            return self._fail(AuthFailure.SERVICE_UNAVAILABLE, e)
        except ApiError as e:
            if e.status_code == 409:
                return self._fail(AuthFailure.DUPLICATE_ACCOUNT, e)
            return self._fail(AuthFailure.VALIDATION_ERROR, e)

        self._accept(identity, token)
        return True

    # --- Entitlement ---

    def upgrade_entitlement(self, processing_delay: float = 2.0) -> bool:
        """
        Optimistically grant VIP to the current identity.

        Stands in for the server-driven update that follows a confirmed
        payment. Aborts if the session ended or changed during the delay.
        """
        self._reset_failure()
        identity = self._identity
        if identity is None:
            return self._fail(AuthFailure.NO_SESSION, "No signed-in identity to upgrade")

        self._sleep(processing_delay)

        with self._lock:
            current = self._identity
            still_current = current is not None and current.id == identity.id
            if still_current:
                subscription_id = f"{self.SUBSCRIPTION_PREFIX}{int(time.time() * 1000)}"
                upgraded = current.with_vip(subscription_id)
                self._identity = upgraded

        if not still_current:
            return self._fail(AuthFailure.NO_SESSION, "Session ended before the upgrade completed")

        self.storage.save_identity(upgraded)
        self.session_changed.emit(upgraded)
        logger.info("Upgraded %s to VIP (%s)", upgraded.email, upgraded.subscription_id)
        return True

    def refresh_entitlement(self) -> bool:
        """
        Adopt the server's current view of the identity's capabilities.

        The server's answer wins over any local optimistic flip. A failed
        refresh leaves the local identity untouched.
        """
        self._reset_failure()
        identity = self._identity
        if identity is None:
            return self._fail(AuthFailure.NO_SESSION, "No signed-in identity to refresh")

        try:
            refreshed = self.identity_gateway.fetch_profile()
        except ApiError as e:
            logger.warning("Entitlement refresh failed: %s", e)
            self.last_error_message = str(e)
            return False

        with self._lock:
            current = self._identity
            stale = current is None or current.id != refreshed.id
            if not stale:
                self._identity = refreshed

        if stale:
            logger.warning("Discarding profile refresh for a session that is no longer current")
            return False

        self.storage.save_identity(refreshed)
        self.session_changed.emit(refreshed)
        return True

    # --- Internals ---

    def _accept(self, identity: Identity, token: str) -> None:
        self.storage.save(identity, token)
        self._publish(identity, token)
        logger.info("Session established for %s", identity.email)

    def _publish(self, identity: Identity, token: str) -> None:
        with self._lock:
            self._identity = identity
            self._credential = token
        self.session_changed.emit(identity)

    def _clear(self) -> None:
        with self._lock:
            self._identity = None
            self._credential = None
        self.storage.clear()
        self.session_changed.emit(None)

    def _reset_failure(self) -> None:
        self.last_failure = None
        self.last_error_message = ""

    def _fail(self, reason: AuthFailure, error) -> bool:
        self.last_failure = reason
        self.last_error_message = str(error)
        logger.warning("Session operation failed (%s): %s", reason.value, error)
        return False

    @staticmethod
    def _validate_registration(email: str, password: str, display_name: str) -> str:
        if not email or not _EMAIL_PATTERN.match(email.strip()):
            return "Please enter a valid email address"
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if not display_name or not display_name.strip():
            return "Display name must not be empty"
        return ""
