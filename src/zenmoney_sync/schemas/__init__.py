"""
Schemas for the ZenMoney diff API.

Entities are plain dataclasses with camelCase JSON conversion; the sync
request/response wrap them for the ``diff/`` endpoint.
"""

from .entities import (
    Account,
    ApiEntity,
    Budget,
    Company,
    Country,
    Deletion,
    Instrument,
    Merchant,
    Reminder,
    ReminderMarker,
    Tag,
    Transaction,
    User,
)
from .sync import ENTITY_LISTS, EntityType, SyncRequest, SyncResponse

__all__ = [
    # Entities
    "ApiEntity",
    "Account",
    "Budget",
    "Company",
    "Country",
    "Deletion",
    "Instrument",
    "Merchant",
    "Reminder",
    "ReminderMarker",
    "Tag",
    "Transaction",
    "User",
    # Sync
    "ENTITY_LISTS",
    "EntityType",
    "SyncRequest",
    "SyncResponse",
]
