"""
ZenMoney API client implementation.
"""

import json
import logging
import threading
import time
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

import requests

from ..config import ClientConfig
from ..errors import InvalidRequestError, InvalidTokenError
from ..schemas import EntityType, SyncRequest, SyncResponse, Transaction
from .transport import RequestSender

logger = logging.getLogger(__name__)

DIFF_ENDPOINT = "diff/"
SUGGEST_ENDPOINT = "suggest/"


def _decode_json(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidRequestError("failed to unmarshal response", e) from e


class ZenMoneyClient:
    """
    Client for the ZenMoney sync API.

    Features:
    - Full, incremental and forced diff synchronization
    - Merchant/category suggestion for one or many transactions
    - Fixed-delay retry on connection failures

    The client keeps no state between calls besides its immutable settings,
    so one instance can be shared between threads.
    """

    def __init__(
        self,
        token: str,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize ZenMoney client.

        No network access happens here.

        Args:
            token: OAuth token for the API
            config: Connection settings (defaults to ClientConfig())
            session: HTTP transport (a new requests.Session if omitted)
            sleep: Delay function used between retry attempts
            clock: Returns the current time as epoch seconds

        Raises:
            InvalidTokenError: If the token is empty or missing
            InvalidRequestError: If the config is invalid
        """
        if not token:
            raise InvalidTokenError("token is not provided")

        self.config = config or ClientConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise InvalidRequestError(f"invalid client config: {'; '.join(config_errors)}")

        self._clock = clock
        self._sender = RequestSender(
            base_url=self.config.base_url,
            token=token,
            session=session or requests.Session(),
            timeout=self.config.timeout,
            retry_attempts=self.config.retry_attempts,
            retry_wait_time=self.config.retry_wait_time,
            sleep=sleep,
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _now(self) -> int:
        return int(self._clock())

    def sync(self, request: SyncRequest, cancel: threading.Event | None = None) -> SyncResponse:
        """
        Send a diff request.

        Args:
            request: Synchronization parameters and local changes
            cancel: Optional event that stops further retry attempts

        Returns:
            Decoded server changes

        Raises:
            InvalidRequestError: If the request is invalid or the response undecodable
            ServerError: If the API returns an error status
            NetworkError: If the API could not be reached
        """
        violations = request.validate()
        if violations:
            raise InvalidRequestError(f"invalid sync request: {'; '.join(violations)}")

        raw = self._sender.send(DIFF_ENDPOINT, "POST", request.to_dict(), cancel=cancel)
        data = _decode_json(raw)

        try:
            response = SyncResponse.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidRequestError("failed to unmarshal response", e) from e

        logger.debug(
            f"Sync complete: serverTimestamp={response.server_timestamp} "
            f"changes={response.counts()}"
        )
        return response

    def full_sync(self, cancel: threading.Event | None = None) -> SyncResponse:
        """Retrieve the entire dataset (server timestamp 0)."""
        request = SyncRequest(current_client_timestamp=self._now(), server_timestamp=0)
        return self.sync(request, cancel=cancel)

    def sync_since(
        self,
        last_sync: datetime | int,
        cancel: threading.Event | None = None,
    ) -> SyncResponse:
        """
        Retrieve changes made after ``last_sync``.

        Args:
            last_sync: Previous response's server timestamp (epoch seconds or datetime)
            cancel: Optional event that stops further retry attempts
        """
        if isinstance(last_sync, datetime):
            server_timestamp = int(last_sync.timestamp())
        else:
            server_timestamp = int(last_sync)

        # The server clock may run ahead of ours
        request = SyncRequest(
            current_client_timestamp=max(self._now(), server_timestamp),
            server_timestamp=server_timestamp,
        )
        return self.sync(request, cancel=cancel)

    def force_sync_entities(
        self,
        *entity_types: EntityType,
        server_timestamp: int = 0,
        cancel: threading.Event | None = None,
    ) -> SyncResponse:
        """
        Request a full refresh of the given entity types along with regular changes.

        An empty call is valid and sends an empty ``forceFetch`` list.
        """
        request = SyncRequest(
            current_client_timestamp=self._now(),
            server_timestamp=server_timestamp,
            force_fetch=[EntityType(t) for t in entity_types],
        )
        return self.sync(request, cancel=cancel)

    def suggest(
        self,
        transaction: Transaction,
        cancel: threading.Event | None = None,
    ) -> Transaction:
        """
        Ask the API to fill in merchant and categories for a transaction.

        Usually only ``payee`` needs to be set on the input.
        """
        raw = self._sender.send(SUGGEST_ENDPOINT, "POST", transaction.to_dict(), cancel=cancel)
        data = _decode_json(raw)

        try:
            return Transaction.from_dict(data)
        except TypeError as e:
            raise InvalidRequestError("failed to unmarshal response", e) from e

    def suggest_batch(
        self,
        transactions: Iterable[Transaction],
        cancel: threading.Event | None = None,
    ) -> list[Transaction]:
        """Suggest merchant and categories for several transactions in one call."""
        body = [tx.to_dict() for tx in transactions]
        raw = self._sender.send(SUGGEST_ENDPOINT, "POST", body, cancel=cancel)
        data = _decode_json(raw)

        if not isinstance(data, list):
            raise InvalidRequestError(
                f"failed to unmarshal response: expected a list, got {type(data).__name__}"
            )
        try:
            return [Transaction.from_dict(item) for item in data]
        except TypeError as e:
            raise InvalidRequestError("failed to unmarshal response", e) from e
