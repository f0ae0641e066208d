"""Exceptions raised by the commerce API client."""

from __future__ import annotations

TRANSIENT_STATUS_CODES = frozenset({408, 425, 429})


class ApiError(Exception):
    """Raised when a commerce API call does not produce usable data.

    Attributes:
        status_code: HTTP status of the response, or None when no response
            was received (connection refused, DNS failure, ...).
        message: Human readable error message, taken from the response body
            when the API provided one.
        code: Machine readable error code from the response body, if any.
    """

    def __init__(
        self,
        status_code: int | None,
        message: str,
        code: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code

    @property
    def is_transient(self) -> bool:
        """Whether retrying later could succeed."""
        if self.status_code is None:
            return True
        return self.status_code in TRANSIENT_STATUS_CODES or self.status_code >= 500

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code!r}, message={self.message!r})"
