"""
Test doubles for the ZenMoney client.

- RecordingSleep: replaces time.sleep and records requested delays
- FailingSession / FlakySession: sessions that simulate transport failures
- BrokenBodyResponse: response whose body cannot be read
"""

import requests

BASE_URL = "https://api.zenmoney.test/v8/"
TOKEN = "test-token"
DIFF_URL = f"{BASE_URL}diff/"
SUGGEST_URL = f"{BASE_URL}suggest/"


class RecordingSleep:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FailingSession(requests.Session):
    """Session whose every send fails at the transport level."""

    def __init__(self, error: Exception | None = None, on_send=None):
        super().__init__()
        self.error = error or requests.exceptions.ConnectionError("connection refused")
        self.on_send = on_send
        self.calls = 0

    def send(self, request, **kwargs):
        self.calls += 1
        if self.on_send is not None:
            self.on_send()
        raise self.error


class FlakySession(requests.Session):
    """Session that fails the first ``failures`` sends, then sends normally."""

    def __init__(self, failures: int):
        super().__init__()
        self.failures = failures
        self.calls = 0

    def send(self, request, **kwargs):
        self.calls += 1
        if self.calls <= self.failures:
            raise requests.exceptions.ConnectionError("connection reset")
        return super().send(request, **kwargs)


class StubSession(requests.Session):
    """Session that returns a fixed response object without any I/O."""

    def __init__(self, response):
        super().__init__()
        self.response = response
        self.calls = 0
        self.send_kwargs: dict = {}

    def send(self, request, **kwargs):
        self.calls += 1
        self.send_kwargs = kwargs
        return self.response


class TrackingResponse(requests.Response):
    """Response with an in-memory body that records close() calls."""

    def __init__(self, status_code: int = 200, body: bytes = b"{}", close_error=None):
        super().__init__()
        self.status_code = status_code
        self._content = body
        self.close_calls = 0
        self.close_error = close_error

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class BrokenBodyResponse(TrackingResponse):
    """Response whose body read fails mid-stream."""

    @property
    def content(self):
        raise requests.exceptions.ChunkedEncodingError("connection broken while reading")
