"""Reader session states and denial reasons."""

from enum import Enum

from vip_reader.core import AccessDecision


class ReaderState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    DENIED = "denied"
    ERROR = "error"


class DenialReason(Enum):
    """Where a denied reader should be routed."""

    REQUIRES_LOGIN = "requires_login"
    REQUIRES_UPGRADE = "requires_upgrade"

    @classmethod
    def from_decision(cls, decision: AccessDecision) -> "DenialReason":
        if decision is AccessDecision.REQUIRES_LOGIN:
            return cls.REQUIRES_LOGIN
        if decision is AccessDecision.REQUIRES_UPGRADE:
            return cls.REQUIRES_UPGRADE
        raise ValueError(f"{decision} is not a denial")
