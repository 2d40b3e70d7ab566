"""
ZenMoney API Client.

Provides:
- Diff sync: full, since a server timestamp, forced refresh of entity types
- Merchant/category suggestion (POST /suggest/)
- Fixed-delay retry for connection failures

Errors surface as ZenMoneyError subclasses; see zenmoney_sync.errors.
"""

from .client import ZenMoneyClient
from .transport import RequestSender

__all__ = [
    "ZenMoneyClient",
    "RequestSender",
]
