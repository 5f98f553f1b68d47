"""Error types raised by the War API clients."""

from typing import Optional


class WarApiError(Exception):
    """Base class for all War API client errors.

    Attributes:
        url: URL of the request that failed, if one was made
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TransportError(WarApiError):
    """The HTTP exchange failed.

    Raised for connection failures, timeouts and non-2xx responses.
    ``status_code`` is set only when the server actually answered.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, url=url)
        self.status_code = status_code


class DecodeError(WarApiError):
    """The response body could not be decoded into the expected type.

    Covers malformed JSON, missing required fields, type mismatches and
    unknown enumeration tags.
    """
