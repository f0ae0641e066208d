"""Store lookup exceptions for the tenancy bounded context.

Callers distinguish terminal failures (the store does not exist, or exists
but may not be served) from transient ones (the upstream could not answer).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tenancy.domain.store import Store


class StoreLookupError(Exception):
    """Base exception for store lookups.

    Raised directly for upstream answers that fit no narrower category.

    Attributes:
        identifier: Tenant key or store id that was looked up.
    """

    def __init__(self, identifier: str, message: str | None = None):
        super().__init__(message or f"Store lookup failed for {identifier!r}")
        self.identifier = identifier


class TenantNotFoundError(StoreLookupError):
    """Raised when the upstream reports no store for the identifier.

    Terminal: render the not-found experience.
    """

    def __init__(self, identifier: str):
        super().__init__(identifier, f"Store {identifier!r} not found")


class TenantInactiveError(StoreLookupError):
    """Raised when the store exists but its storefront may not be served.

    Terminal, and distinct from not-found: render the "store unavailable"
    experience.

    Attributes:
        store: The store snapshot, when the upstream returned one.
    """

    def __init__(self, identifier: str, store: Store | None = None):
        super().__init__(identifier, f"Store {identifier!r} is not available")
        self.store = store


class TransientUpstreamError(StoreLookupError):
    """Raised for network failures, timeouts and upstream errors.

    Recoverable in principle; a later request may succeed.
    """
