"""
Exception hierarchy for the TradeSatoshi API client.

Every failed client call raises exactly one of these. Callers that only care
about "the call failed" can catch TradeSatoshiError.
"""

from typing import Optional


class TradeSatoshiError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(TradeSatoshiError):
    """Raised for malformed or missing credentials and invalid settings.

    Always raised before any network I/O is attempted.
    """


class TransportError(TradeSatoshiError):
    """Connection, TLS, timeout or non-2xx HTTP failure."""

    def __init__(self, message: str, url: str, cause: Optional[BaseException] = None,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.cause = cause
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code}, url {self.url})"
        return f"{self.message} (url {self.url})"


class MalformedResponseError(TradeSatoshiError):
    """Response body is not valid JSON or breaks the envelope contract."""

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class APIError(TradeSatoshiError):
    """The exchange answered with success=false."""

    DEFAULT_MESSAGE = "An error occurred."

    def __init__(self, message: Optional[str] = None):
        super().__init__(self.DEFAULT_MESSAGE if message is None else message)
