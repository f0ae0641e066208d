"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped and domain-relevant metadata that should be
    included with all instrumentation events.

    Attributes:
        request_id: Unique identifier for the current request.
        host: Raw Host header of the request (if applicable).
        tenant_key: Tenant key derived from the host (if applicable).
        store_id: Resolved store identifier (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", host="shop1.example.com")
        probe = DefaultStoreResolutionProbe().with_context(context)
    """

    request_id: str | None = None
    host: str | None = None
    tenant_key: str | None = None
    store_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.host is not None:
            result["host"] = self.host
        if self.tenant_key is not None:
            result["tenant_key"] = self.tenant_key
        if self.store_id is not None:
            result["store_id"] = self.store_id
        result.update(self.extra)
        return result

    def with_store(self, store_id: str) -> ObservationContext:
        """Create a new context with the store id set."""
        return replace(self, store_id=store_id)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
