"""Domain probe for the client runtime and its store provider.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the client-side context copy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ClientRuntimeProbe(Protocol):
    """Domain probe for client runtime operations."""

    def runtime_started(self, store_id: str | None, source: str) -> None:
        """Record the initial store id and which channel supplied it."""
        ...

    def store_changed(self, previous: str | None, current: str | None) -> None:
        """Record that the provider's store id changed."""
        ...

    def store_left(self, previous: str | None) -> None:
        """Record navigation to a non-tenant route."""
        ...

    def subscriber_failed(self, error: Exception) -> None:
        """Record that a store subscriber raised."""
        ...

    def with_context(self, context: ObservationContext) -> ClientRuntimeProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultClientRuntimeProbe:
    """Default implementation of ClientRuntimeProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultClientRuntimeProbe:
        """Create a new probe with observation context bound."""
        return DefaultClientRuntimeProbe(logger=self._logger, context=context)

    def runtime_started(self, store_id: str | None, source: str) -> None:
        self._logger.debug(
            "client_runtime_started",
            store_id=store_id,
            source=source,
            **self._get_context_kwargs(),
        )

    def store_changed(self, previous: str | None, current: str | None) -> None:
        self._logger.debug(
            "client_store_changed",
            previous=previous,
            current=current,
            **self._get_context_kwargs(),
        )

    def store_left(self, previous: str | None) -> None:
        self._logger.debug(
            "client_store_left",
            previous=previous,
            **self._get_context_kwargs(),
        )

    def subscriber_failed(self, error: Exception) -> None:
        self._logger.error(
            "client_store_subscriber_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
