"""Best Buy API client package exports."""
from .base import AuthorizationError, BestBuyError, InvalidArgumentError, ServiceError
from .client import Client
from .version import __version__

__all__ = [
    "Client",
    "BestBuyError",
    "AuthorizationError",
    "InvalidArgumentError",
    "ServiceError",
    "__version__",
]
