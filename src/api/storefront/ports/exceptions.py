"""Exceptions for the storefront bounded context."""

from __future__ import annotations


class CatalogUnavailableError(Exception):
    """Raised when catalog data could not be fetched from the upstream.

    Attributes:
        status_code: Upstream HTTP status, or None without a response.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ReviewSubmissionError(Exception):
    """Raised when the upstream rejects a product review.

    The message is the upstream's and is safe to show to the visitor.
    """
