"""
VIP Reader - A desktop client for a premium reading catalog.

This package provides:
- Session management with persisted sign-in
- Premium entitlement gating (VIP and author capabilities)
- A catalog store backed by the reading service
- A reader with pagination, zoom, fullscreen chrome and synced progress
"""

__version__ = "0.1.0"

from vip_reader.core import Capability, ContentItem, Identity, can_access

__all__ = [
    "Capability",
    "ContentItem",
    "Identity",
    "can_access",
]
