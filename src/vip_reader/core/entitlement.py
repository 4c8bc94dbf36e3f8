"""Entitlement gate - pure admission decisions over (identity, item)."""

from enum import Enum
from typing import Optional

from .content_item import ContentItem
from .identity import Capability, Identity


class AccessDecision(Enum):
    GRANTED = "granted"
    REQUIRES_LOGIN = "requires_login"
    REQUIRES_UPGRADE = "requires_upgrade"


# Capabilities that unlock premium items. Authors may preview everything.
PREMIUM_CAPABILITIES = frozenset({Capability.VIP, Capability.AUTHOR})


def can_access(identity: Optional[Identity], item: ContentItem) -> bool:
    """True iff the item is free, or the identity holds VIP or AUTHOR."""
    if not item.is_premium:
        return True
    if identity is None:
        return False
    return not PREMIUM_CAPABILITIES.isdisjoint(identity.capabilities)


def decide_access(
    identity: Optional[Identity],
    item: ContentItem,
    require_identity: bool = True,
) -> AccessDecision:
    """Route an attempt to open an item.

    Args:
        identity: Current identity, or None when signed out.
        item: Item the reader wants to open.
        require_identity: When True, opening any item needs a session,
            even a free one.
    """
    if identity is None:
        if item.is_premium or require_identity:
            return AccessDecision.REQUIRES_LOGIN
        return AccessDecision.GRANTED

    if can_access(identity, item):
        return AccessDecision.GRANTED
    return AccessDecision.REQUIRES_UPGRADE
