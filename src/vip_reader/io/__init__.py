"""I/O layer - Remote collaborators and local persistence."""

from .api_client import ApiClient
from .catalog_gateway import CatalogGateway
from .errors import ApiError, ServiceUnavailableError, UnauthorizedError
from .identity_gateway import IdentityGateway
from .progress_gateway import ProgressGateway
from .session_storage import LocalSessionStorage

__all__ = [
    "ApiClient",
    "ApiError",
    "CatalogGateway",
    "IdentityGateway",
    "LocalSessionStorage",
    "ProgressGateway",
    "ServiceUnavailableError",
    "UnauthorizedError",
]
