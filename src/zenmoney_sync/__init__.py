"""
ZenMoney sync client.

A typed Python client for the ZenMoney personal-finance synchronization API:
authenticated diff requests, camelCase JSON <-> dataclass entities, and a
small error taxonomy callers can branch on.
"""

from .config import ClientConfig
from .errors import (
    ErrorCode,
    InvalidRequestError,
    InvalidTokenError,
    NetworkError,
    ServerError,
    ZenMoneyError,
)
from .schemas import EntityType, SyncRequest, SyncResponse, Transaction
from .zenmoney_client import ZenMoneyClient

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "EntityType",
    "ErrorCode",
    "InvalidRequestError",
    "InvalidTokenError",
    "NetworkError",
    "ServerError",
    "SyncRequest",
    "SyncResponse",
    "Transaction",
    "ZenMoneyClient",
    "ZenMoneyError",
]
