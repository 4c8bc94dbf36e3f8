"""Domain layer - Pure entities and access rules."""

from .content_item import ContentItem, ItemDraft
from .entitlement import AccessDecision, can_access, decide_access
from .identity import Capability, Identity
from .reading_session import ReadingSessionState
from .sign_in_request import SignInMode, SignInRequest

__all__ = [
    "AccessDecision",
    "Capability",
    "ContentItem",
    "Identity",
    "ItemDraft",
    "ReadingSessionState",
    "SignInMode",
    "SignInRequest",
    "can_access",
    "decide_access",
]
