"""
Error taxonomy for the ZenMoney client.

Every failure surfaced by the client is a ZenMoneyError carrying one of four
codes. Callers branch on the code (or the subclass) to decide on remediation:

- INVALID_TOKEN: ask for a new token
- INVALID_REQUEST: local serialization/decoding problem, not retryable
- SERVER_ERROR: the API answered with status >= 400
- NETWORK_ERROR: the HTTP exchange itself failed after all retries
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Category of a client failure."""

    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_REQUEST = "INVALID_REQUEST"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class ZenMoneyError(Exception):
    """Base exception for ZenMoney client errors.

    The optional cause is kept on ``cause`` and chained as ``__cause__`` so
    tracebacks show the full chain.
    """

    def __init__(self, code: ErrorCode, message: str, cause: BaseException | None = None):
        self.code = ErrorCode(code)
        self.message = message
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.code.value}: {self.message}: {self.cause}"
        return f"{self.code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class InvalidTokenError(ZenMoneyError):
    """Token is missing or rejected."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(ErrorCode.INVALID_TOKEN, message, cause)


class InvalidRequestError(ZenMoneyError):
    """Request could not be built, or the response could not be decoded."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(ErrorCode.INVALID_REQUEST, message, cause)


class ServerError(ZenMoneyError):
    """API returned an error status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        self.status_code = status_code
        super().__init__(ErrorCode.SERVER_ERROR, message, cause)


class NetworkError(ZenMoneyError):
    """HTTP exchange failed at the transport level."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(ErrorCode.NETWORK_ERROR, message, cause)


def new_error(code: ErrorCode, message: str, cause: BaseException | None = None) -> ZenMoneyError:
    """Build the exception subclass matching ``code``."""
    code = ErrorCode(code)
    if code is ErrorCode.INVALID_TOKEN:
        return InvalidTokenError(message, cause)
    if code is ErrorCode.INVALID_REQUEST:
        return InvalidRequestError(message, cause)
    if code is ErrorCode.SERVER_ERROR:
        return ServerError(message, cause=cause)
    return NetworkError(message, cause)
