"""
ZenMoney entity schemas.

Each entity is a dataclass whose attributes use snake_case while the API uses
camelCase. The JSON name is derived from the attribute name unless a field
overrides it with ``metadata={"json": ...}`` (e.g. ``syncID``).

Nullable API fields are ``Optional`` and default to ``None``, so "no balance
reported" is never confused with a zero balance.
"""

from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

T = TypeVar("T", bound="ApiEntity")


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _json_name(f) -> str:
    return f.metadata.get("json", _camel_case(f.name))


class ApiEntity:
    """Mixin providing camelCase dict conversion for dataclass entities."""

    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """Create from an API JSON object, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")

        kwargs = {}
        for f in fields(cls):
            key = _json_name(f)
            if key in data:
                kwargs[f.name] = data[key]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API JSON format, omitting unset optional fields."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[_json_name(f)] = list(value) if isinstance(value, list) else value
        return result


@dataclass
class Instrument(ApiEntity):
    """Currency with its exchange rate to the ruble."""

    id: int = 0
    changed: int = 0
    title: str = ""
    short_title: str = ""
    symbol: str = ""
    rate: float | None = None


@dataclass
class Company(ApiEntity):
    """Bank or other financial organization."""

    id: int = 0
    changed: int = 0
    title: str = ""
    full_title: str | None = None
    www: str | None = None
    country: int | None = None
    country_code: str | None = None
    deleted: bool | None = None


@dataclass
class User(ApiEntity):
    id: int = 0
    changed: int = 0
    login: str | None = None
    currency: int | None = None
    parent: int | None = None
    country: int | None = None
    country_code: str | None = None
    email: str | None = None
    month_start_day: int | None = None
    is_forecast_enabled: bool | None = None
    plan_balance_mode: str | None = None
    plan_settings: str | None = None
    subscription: str | None = None
    paid_till: int | None = None


@dataclass
class Country(ApiEntity):
    id: int = 0
    title: str = ""
    currency: int | None = None
    domain: str | None = None


@dataclass
class Account(ApiEntity):
    """Account (card, cash, deposit, loan, debt)."""

    id: str = ""
    changed: int = 0
    user: int | None = None
    role: int | None = None
    instrument: int | None = None
    company: int | None = None
    type: str = ""
    title: str = ""
    sync_id: list[str] | None = field(default=None, metadata={"json": "syncID"})
    balance: float | None = None
    start_balance: float | None = None
    credit_limit: float | None = None
    in_balance: bool | None = None
    savings: bool | None = None
    enable_correction: bool | None = None
    enable_sms: bool | None = field(default=None, metadata={"json": "enableSMS"})
    archive: bool | None = None
    private: bool | None = None

    # Deposit and loan terms
    capitalization: bool | None = None
    percent: float | None = None
    start_date: str | None = None
    end_date_offset: int | None = None
    end_date_offset_interval: str | None = None
    payoff_step: int | None = None
    payoff_interval: str | None = None


@dataclass
class Tag(ApiEntity):
    """Transaction category."""

    id: str = ""
    changed: int = 0
    user: int | None = None
    title: str = ""
    parent: str | None = None
    icon: str | None = None
    picture: str | None = None
    color: int | None = None
    show_income: bool | None = None
    show_outcome: bool | None = None
    budget_income: bool | None = None
    budget_outcome: bool | None = None
    required: bool | None = None


@dataclass
class Merchant(ApiEntity):
    id: str = ""
    changed: int = 0
    user: int | None = None
    title: str = ""


@dataclass
class Reminder(ApiEntity):
    """Recurring planned transaction."""

    id: str = ""
    changed: int = 0
    user: int | None = None
    income_instrument: int | None = None
    income_account: str | None = None
    income: float | None = None
    outcome_instrument: int | None = None
    outcome_account: str | None = None
    outcome: float | None = None
    tag: list[str] | None = None
    merchant: str | None = None
    payee: str | None = None
    comment: str | None = None
    interval: str | None = None
    step: int | None = None
    points: list[int] | None = None
    start_date: str | None = None
    end_date: str | None = None
    notify: bool | None = None


@dataclass
class ReminderMarker(ApiEntity):
    """Single planned occurrence of a reminder."""

    id: str = ""
    changed: int = 0
    user: int | None = None
    income_instrument: int | None = None
    income_account: str | None = None
    income: float | None = None
    outcome_instrument: int | None = None
    outcome_account: str | None = None
    outcome: float | None = None
    tag: list[str] | None = None
    merchant: str | None = None
    payee: str | None = None
    comment: str | None = None
    date: str | None = None
    reminder: str | None = None
    state: str | None = None
    notify: bool | None = None


@dataclass
class Transaction(ApiEntity):
    """Money movement between accounts.

    Income and outcome are always non-negative; a transfer fills both sides.
    """

    id: str = ""
    changed: int = 0
    created: int | None = None
    user: int | None = None
    deleted: bool | None = None
    hold: bool | None = None

    income_instrument: int | None = None
    income_account: str | None = None
    income: float | None = None
    outcome_instrument: int | None = None
    outcome_account: str | None = None
    outcome: float | None = None

    tag: list[str] | None = None
    merchant: str | None = None
    payee: str | None = None
    original_payee: str | None = None
    comment: str | None = None
    date: str | None = None
    mcc: int | None = None
    reminder_marker: str | None = None

    # Amounts in the operation currency, when it differs from the account's
    op_income: float | None = None
    op_income_instrument: int | None = None
    op_outcome: float | None = None
    op_outcome_instrument: int | None = None

    latitude: float | None = None
    longitude: float | None = None
    qr_code: str | None = None
    income_bank_id: str | None = field(default=None, metadata={"json": "incomeBankID"})
    outcome_bank_id: str | None = field(default=None, metadata={"json": "outcomeBankID"})


@dataclass
class Budget(ApiEntity):
    """Monthly budget for a category (``tag`` None means the whole month)."""

    changed: int = 0
    user: int | None = None
    tag: str | None = None
    date: str = ""
    income: float | None = None
    income_lock: bool | None = None
    outcome: float | None = None
    outcome_lock: bool | None = None


@dataclass
class Deletion(ApiEntity):
    """Tombstone for a deleted object."""

    id: str = ""
    object_type: str = field(default="", metadata={"json": "object"})
    stamp: int = 0
    user: int | None = None
