"""Domain probe for store lookups against the commerce API.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the store repository.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StoreRepositoryProbe(Protocol):
    """Domain probe for store repository operations."""

    def store_fetched(self, identifier: str, store_id: str) -> None:
        """Record that a store snapshot was fetched."""
        ...

    def store_not_found(self, identifier: str) -> None:
        """Record that the upstream reported no such store."""
        ...

    def store_inactive(self, identifier: str, status: str | None) -> None:
        """Record that the store exists but may not be served."""
        ...

    def upstream_unavailable(
        self,
        identifier: str,
        status_code: int | None,
        reason: str,
    ) -> None:
        """Record that the upstream could not answer the lookup."""
        ...

    def unexpected_status(self, identifier: str, status_code: int | None) -> None:
        """Record an upstream answer that fits no lookup category."""
        ...

    def with_context(self, context: ObservationContext) -> StoreRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStoreRepositoryProbe:
    """Default implementation of StoreRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStoreRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultStoreRepositoryProbe(logger=self._logger, context=context)

    def store_fetched(self, identifier: str, store_id: str) -> None:
        """Record that a store snapshot was fetched."""
        self._logger.debug(
            "store_fetched",
            identifier=identifier,
            store_id=store_id,
            **self._get_context_kwargs(),
        )

    def store_not_found(self, identifier: str) -> None:
        """Record that the upstream reported no such store."""
        self._logger.info(
            "store_not_found",
            identifier=identifier,
            **self._get_context_kwargs(),
        )

    def store_inactive(self, identifier: str, status: str | None) -> None:
        """Record that the store exists but may not be served."""
        self._logger.info(
            "store_inactive",
            identifier=identifier,
            status=status,
            **self._get_context_kwargs(),
        )

    def upstream_unavailable(
        self,
        identifier: str,
        status_code: int | None,
        reason: str,
    ) -> None:
        """Record that the upstream could not answer the lookup."""
        self._logger.warning(
            "store_lookup_upstream_unavailable",
            identifier=identifier,
            status_code=status_code,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def unexpected_status(self, identifier: str, status_code: int | None) -> None:
        """Record an upstream answer that fits no lookup category."""
        self._logger.error(
            "store_lookup_unexpected_status",
            identifier=identifier,
            status_code=status_code,
            **self._get_context_kwargs(),
        )
