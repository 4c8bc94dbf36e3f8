"""Identity entity - the authenticated reader and their capabilities."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


class Capability(Enum):
    """Named capabilities an identity can hold."""

    VIEWER = "viewer"
    VIP = "vip"
    AUTHOR = "author"


@dataclass(frozen=True)
class Identity:
    """Represents a signed-in reader.

    Attributes:
        id: Unique identifier assigned by the identity service.
        email: Login email.
        name: Display name.
        capabilities: Capability set; always contains VIEWER.
        avatar: Optional avatar reference.
        subscription_id: Optional subscription reference.
    """

    id: str
    email: str
    name: str
    capabilities: frozenset = field(default_factory=lambda: frozenset({Capability.VIEWER}))
    avatar: Optional[str] = None
    subscription_id: Optional[str] = None

    def __post_init__(self):
        if Capability.VIEWER not in self.capabilities:
            object.__setattr__(
                self, "capabilities", frozenset(self.capabilities) | {Capability.VIEWER}
            )

    @property
    def is_vip(self) -> bool:
        return Capability.VIP in self.capabilities

    @property
    def is_author(self) -> bool:
        return Capability.AUTHOR in self.capabilities

    def with_vip(self, subscription_id: str) -> "Identity":
        """Return a copy holding the VIP capability and the given subscription."""
        return replace(
            self,
            capabilities=self.capabilities | {Capability.VIP},
            subscription_id=subscription_id,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Identity":
        """Build an Identity from the service's camelCase user payload.

        Raises:
            ValueError: if the payload has no id or email.
        """
        try:
            identity_id = str(data["id"])
            email = str(data["email"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed identity payload: {data!r}") from e

        capabilities = {Capability.VIEWER}
        if data.get("isVip"):
            capabilities.add(Capability.VIP)
        if data.get("isAuthor"):
            capabilities.add(Capability.AUTHOR)

        return cls(
            id=identity_id,
            email=email,
            name=str(data.get("name") or ""),
            capabilities=frozenset(capabilities),
            avatar=data.get("avatar"),
            subscription_id=data.get("subscriptionId"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the same camelCase shape the service returns."""
        data: dict[str, Any] = {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "isVip": self.is_vip,
            "isAuthor": self.is_author,
        }
        if self.avatar is not None:
            data["avatar"] = self.avatar
        if self.subscription_id is not None:
            data["subscriptionId"] = self.subscription_id
        return data
