"""Exceptions for the visitors bounded context."""

from __future__ import annotations


class TrackingFailure(Exception):
    """Raised by a tracking gateway when a visit could not be reported.

    Never reaches callers of the tracking service: tracking is
    fire-and-forget.
    """


class FingerprintUnavailableError(Exception):
    """Raised when the device signals needed for a fingerprint are missing."""
