"""
Diff synchronization request/response schemas.

A sync request tells the server when the client last synchronized
(``server_timestamp``, 0 for everything) and may push local changes or ask
for a full refresh of some entity types (``force_fetch``). The response
carries the new server timestamp and every entity changed since.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

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


class EntityType(str, Enum):
    """Synchronizable resource class, as named in ``forceFetch``."""

    INSTRUMENT = "instrument"
    COMPANY = "company"
    USER = "user"
    COUNTRY = "country"
    ACCOUNT = "account"
    TAG = "tag"
    MERCHANT = "merchant"
    BUDGET = "budget"
    REMINDER = "reminder"
    REMINDER_MARKER = "reminderMarker"
    TRANSACTION = "transaction"


# JSON key -> (attribute name, entity class), in API order
ENTITY_LISTS: dict[str, tuple[str, type[ApiEntity]]] = {
    "instrument": ("instruments", Instrument),
    "company": ("companies", Company),
    "user": ("users", User),
    "country": ("countries", Country),
    "account": ("accounts", Account),
    "tag": ("tags", Tag),
    "merchant": ("merchants", Merchant),
    "budget": ("budgets", Budget),
    "reminder": ("reminders", Reminder),
    "reminderMarker": ("reminder_markers", ReminderMarker),
    "transaction": ("transactions", Transaction),
    "deletion": ("deletions", Deletion),
}

# Entity lists a client may push with a request
PUSHABLE_LISTS = (
    "account",
    "tag",
    "merchant",
    "budget",
    "reminder",
    "reminderMarker",
    "transaction",
    "deletion",
)


@dataclass
class SyncRequest:
    """Body of a ``diff/`` call."""

    current_client_timestamp: int
    server_timestamp: int = 0
    force_fetch: list[EntityType] | None = None

    # Local changes to push; None means "nothing to send"
    accounts: list[Account] | None = None
    tags: list[Tag] | None = None
    merchants: list[Merchant] | None = None
    budgets: list[Budget] | None = None
    reminders: list[Reminder] | None = None
    reminder_markers: list[ReminderMarker] | None = None
    transactions: list[Transaction] | None = None
    deletions: list[Deletion] | None = None

    def validate(self) -> list[str]:
        """Check timestamp invariants.

        Returns:
            List of violations (empty if valid)
        """
        errors: list[str] = []

        if self.current_client_timestamp < 0:
            errors.append("currentClientTimestamp must not be negative")
        if self.server_timestamp < 0:
            errors.append("serverTimestamp must not be negative")
        if self.server_timestamp and self.server_timestamp > self.current_client_timestamp:
            errors.append(
                f"serverTimestamp {self.server_timestamp} is after "
                f"currentClientTimestamp {self.current_client_timestamp}"
            )

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to API JSON format."""
        result: dict[str, Any] = {
            "currentClientTimestamp": self.current_client_timestamp,
            "serverTimestamp": self.server_timestamp,
        }

        if self.force_fetch is not None:
            result["forceFetch"] = [EntityType(t).value for t in self.force_fetch]

        for key in PUSHABLE_LISTS:
            attr, _ = ENTITY_LISTS[key]
            items = getattr(self, attr)
            if items is not None:
                result[key] = [item.to_dict() for item in items]

        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncRequest":
        """Deserialize a request body (used by stub servers and tooling)."""
        force_fetch = data.get("forceFetch")
        kwargs: dict[str, Any] = {
            "current_client_timestamp": data["currentClientTimestamp"],
            "server_timestamp": data.get("serverTimestamp", 0),
            "force_fetch": (
                [EntityType(t) for t in force_fetch] if force_fetch is not None else None
            ),
        }
        for key in PUSHABLE_LISTS:
            attr, entity_cls = ENTITY_LISTS[key]
            if data.get(key) is not None:
                kwargs[attr] = [entity_cls.from_dict(item) for item in data[key]]
        return cls(**kwargs)


@dataclass
class SyncResponse:
    """Body returned by ``diff/``.

    A missing list means no changes of that type since the requested
    timestamp and decodes to an empty list.
    """

    server_timestamp: int
    instruments: list[Instrument] = field(default_factory=list)
    companies: list[Company] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    countries: list[Country] = field(default_factory=list)
    accounts: list[Account] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    merchants: list[Merchant] = field(default_factory=list)
    budgets: list[Budget] = field(default_factory=list)
    reminders: list[Reminder] = field(default_factory=list)
    reminder_markers: list[ReminderMarker] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    deletions: list[Deletion] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncResponse":
        """Create from API response JSON.

        Raises:
            TypeError: If the payload or one of its lists has the wrong shape
            ValueError: If serverTimestamp is not a number
        """
        if not isinstance(data, dict):
            raise TypeError(f"sync response must be a JSON object, got {type(data).__name__}")

        kwargs: dict[str, Any] = {"server_timestamp": int(data.get("serverTimestamp", 0))}
        for key, (attr, entity_cls) in ENTITY_LISTS.items():
            items = data.get(key)
            if items is None:
                continue
            if not isinstance(items, list):
                raise TypeError(f"'{key}' must be a list, got {type(items).__name__}")
            kwargs[attr] = [entity_cls.from_dict(item) for item in items]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert back to API JSON format, omitting empty lists."""
        result: dict[str, Any] = {"serverTimestamp": self.server_timestamp}
        for key, (attr, _) in ENTITY_LISTS.items():
            items = getattr(self, attr)
            if items:
                result[key] = [item.to_dict() for item in items]
        return result

    def counts(self) -> dict[str, int]:
        """Number of received entities per JSON key (non-empty lists only)."""
        return {
            key: len(getattr(self, attr))
            for key, (attr, _) in ENTITY_LISTS.items()
            if getattr(self, attr)
        }
