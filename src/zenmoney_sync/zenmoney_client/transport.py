"""
Request sender for the ZenMoney API.

Sends one JSON request, retrying a fixed number of times on transport
failures only. HTTP error statuses are never retried.
"""

import json
import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import requests

from ..errors import InvalidRequestError, NetworkError, ServerError

logger = logging.getLogger(__name__)


class RequestSender:
    """
    Dispatches authenticated JSON requests.

    Features:
    - Bearer token auth and JSON content type on every request
    - Linear retry on connection failures (fixed wait, no backoff)
    - Status >= 400 mapped to ServerError without retry
    - Response always released, including on error paths
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        session: requests.Session,
        timeout: float,
        retry_attempts: int,
        retry_wait_time: float,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the sender.

        Args:
            base_url: API root ending with "/"
            token: Bearer token
            session: HTTP transport
            timeout: Per-attempt timeout in seconds
            retry_attempts: Extra attempts after a transport failure
            retry_wait_time: Pause between attempts in seconds
            sleep: Delay function, replaceable in tests
        """
        self.base_url = base_url
        self._token = token
        self.session = session
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_wait_time = retry_wait_time
        self._sleep = sleep

    def send(
        self,
        endpoint: str,
        method: str,
        body: Any,
        cancel: threading.Event | None = None,
    ) -> bytes:
        """
        Send a request and return the raw response body.

        Args:
            endpoint: Path relative to base_url (e.g. "diff/")
            method: HTTP method
            body: JSON-serializable payload
            cancel: Once set, no further attempt is started

        Returns:
            Response body bytes

        Raises:
            InvalidRequestError: If the body cannot be serialized or the request built
            NetworkError: If every attempt fails at the transport level
            ServerError: If the API answers with status >= 400
        """
        try:
            payload = json.dumps(body)
        except (TypeError, ValueError) as e:
            raise InvalidRequestError("failed to marshal request body", e) from e

        prepared = self._prepare(endpoint, method, payload)

        response = self._execute(prepared, cancel)
        try:
            try:
                content = response.content
            except requests.exceptions.RequestException as e:
                raise NetworkError("failed to read response body", e) from e

            logger.debug(f"Response status: {response.status_code} ({len(content)} bytes)")

            if response.status_code >= 400:
                raise ServerError(
                    f"server returned error status: {response.status_code}",
                    status_code=response.status_code,
                )

            return content
        finally:
            self._close(response)

    def _prepare(self, endpoint: str, method: str, payload: str) -> requests.PreparedRequest:
        url = f"{self.base_url}{endpoint}"
        request = requests.Request(
            method=method,
            url=url,
            data=payload.encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._token}",
            },
        )
        try:
            prepared = self.session.prepare_request(request)
        except (requests.exceptions.RequestException, ValueError) as e:
            raise InvalidRequestError("failed to create request", e) from e

        logger.debug(f"API Request: {method} {url}")
        return prepared

    def _execute(
        self,
        prepared: requests.PreparedRequest,
        cancel: threading.Event | None,
    ) -> requests.Response:
        """Run the attempt loop; returns an open (streamed) response."""
        last_error: requests.exceptions.RequestException | None = None
        attempts = self.retry_attempts + 1
        # Proxies and REQUESTS_CA_BUNDLE, as Session.request would apply them
        settings = self.session.merge_environment_settings(prepared.url, {}, True, None, None)

        for attempt in range(1, attempts + 1):
            if cancel is not None and cancel.is_set():
                raise NetworkError("request cancelled", last_error)

            try:
                response = self.session.send(prepared, timeout=self.timeout, **settings)
            except requests.exceptions.RequestException as e:
                last_error = e
                logger.debug(f"Attempt {attempt}/{attempts} to {prepared.url} failed: {e}")
                if attempt == attempts:
                    break
                if cancel is not None and cancel.is_set():
                    raise NetworkError("request cancelled", e) from e
                self._sleep(self.retry_wait_time)
                continue

            if response is None:
                raise NetworkError("got nil response")
            return response

        raise NetworkError("failed to send request after retries", last_error)

    @staticmethod
    def _close(response: requests.Response) -> None:
        # The exchange outcome is already decided; a close failure is only reported.
        try:
            response.close()
        except Exception as e:
            logger.warning(f"failed to close response body: {e}")
