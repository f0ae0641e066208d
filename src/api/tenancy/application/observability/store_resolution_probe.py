"""Protocol for store resolution observability.

Defines the interface for domain probes that capture application-level
domain events while binding requests to stores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StoreResolutionProbe(Protocol):
    """Domain probe for store resolution operations."""

    def non_tenant_host(self, hostname: str) -> None:
        """Record that the request host names no store."""
        ...

    def store_resolved(self, tenant_key: str, store_id: str) -> None:
        """Record that the request was bound to a store."""
        ...

    def store_resolution_failed(
        self,
        tenant_key: str,
        error_type: str,
        message: str,
    ) -> None:
        """Record that the request host names a store that cannot be served."""
        ...

    def store_lookup_timed_out(self, identifier: str, timeout: float) -> None:
        """Record that the store lookup exceeded its bounded wait."""
        ...

    def store_bound_from_cookie(self, store_id: str) -> None:
        """Record that a server action took its store id from the cookie."""
        ...

    def with_context(self, context: ObservationContext) -> StoreResolutionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStoreResolutionProbe:
    """Default implementation of StoreResolutionProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultStoreResolutionProbe:
        """Create a new probe with observation context bound."""
        return DefaultStoreResolutionProbe(logger=self._logger, context=context)

    def non_tenant_host(self, hostname: str) -> None:
        """Record that the request host names no store."""
        self._logger.debug(
            "non_tenant_host",
            hostname=hostname,
            **self._get_context_kwargs(),
        )

    def store_resolved(self, tenant_key: str, store_id: str) -> None:
        """Record that the request was bound to a store."""
        self._logger.debug(
            "store_resolved",
            tenant_key=tenant_key,
            store_id=store_id,
            **self._get_context_kwargs(),
        )

    def store_resolution_failed(
        self,
        tenant_key: str,
        error_type: str,
        message: str,
    ) -> None:
        """Record that the request host names a store that cannot be served."""
        self._logger.warning(
            "store_resolution_failed",
            tenant_key=tenant_key,
            error_type=error_type,
            message=message,
            **self._get_context_kwargs(),
        )

    def store_lookup_timed_out(self, identifier: str, timeout: float) -> None:
        """Record that the store lookup exceeded its bounded wait."""
        self._logger.warning(
            "store_lookup_timed_out",
            identifier=identifier,
            timeout=timeout,
            **self._get_context_kwargs(),
        )

    def store_bound_from_cookie(self, store_id: str) -> None:
        """Record that a server action took its store id from the cookie."""
        self._logger.debug(
            "store_bound_from_cookie",
            store_id=store_id,
            **self._get_context_kwargs(),
        )
