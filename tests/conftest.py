"""Test fixtures and utilities."""

import pytest
from fixtures import RecordingSleep

ZENMONEY_ENV_VARS = (
    "ZENMONEY_TOKEN",
    "ZENMONEY_BASE_URL",
    "ZENMONEY_TIMEOUT",
    "ZENMONEY_RETRY_ATTEMPTS",
    "ZENMONEY_RETRY_WAIT",
)


@pytest.fixture(autouse=True)
def clear_zenmoney_env(monkeypatch):
    """Keep developer environment variables out of config tests."""
    for name in ZENMONEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def instrument_response() -> dict:
    """Stub diff response with a single instrument."""
    return {
        "serverTimestamp": 1642300800,
        "instrument": [
            {
                "id": 1,
                "title": "US Dollar",
                "shortTitle": "USD",
                "symbol": "$",
                "rate": 74.5,
                "changed": 1642300700,
            }
        ],
    }


@pytest.fixture
def full_sync_response() -> dict:
    """Realistic diff response covering several entity types."""
    return {
        "serverTimestamp": 1700000000,
        "user": [{"id": 1, "changed": 1699990000, "login": "testuser", "currency": 2}],
        "account": [
            {
                "id": "acc-1",
                "changed": 1699990000,
                "user": 1,
                "instrument": 2,
                "type": "ccard",
                "title": "Debit card",
                "syncID": ["1234"],
                "balance": 1520.5,
                "startBalance": 0,
                "inBalance": True,
                "enableSMS": False,
                "archive": False,
            },
            {
                "id": "acc-2",
                "changed": 1699990000,
                "user": 1,
                "type": "cash",
                "title": "Wallet",
                "balance": None,
            },
        ],
        "tag": [{"id": "tag-food", "changed": 1699990000, "title": "Food", "showOutcome": True}],
        "transaction": [
            {
                "id": "tx-1",
                "changed": 1699995000,
                "created": 1699995000,
                "user": 1,
                "deleted": False,
                "incomeInstrument": 2,
                "incomeAccount": "acc-1",
                "income": 0,
                "outcomeInstrument": 2,
                "outcomeAccount": "acc-1",
                "outcome": 350.0,
                "tag": ["tag-food"],
                "merchant": None,
                "payee": "Coffee House",
                "date": "2023-11-14",
                "incomeBankID": None,
            }
        ],
        "budget": [
            {
                "changed": 1699990000,
                "user": 1,
                "tag": "tag-food",
                "date": "2023-11-01",
                "income": 0,
                "incomeLock": False,
                "outcome": 15000,
                "outcomeLock": True,
            }
        ],
        "deletion": [{"id": "tx-0", "object": "transaction", "stamp": 1699996000, "user": 1}],
    }
