"""Protocol for visitor identity and tracking observability.

Defines the interface for domain probes that capture application-level
domain events for visitor identification and visit tracking.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class VisitorProbe(Protocol):
    """Domain probe for visitor operations."""

    def visitor_id_generated(self, visitor_id: str) -> None:
        """Record that a new visitor id was generated."""
        ...

    def visitor_id_restored(self, visitor_id: str, source: str) -> None:
        """Record that an existing visitor id was found."""
        ...

    def fingerprint_failed(self, error: Exception) -> None:
        """Record that the device fingerprint could not be computed."""
        ...

    def tracking_scheduled(self, store_id: str, visitor_id: str) -> None:
        """Record that a visit report was scheduled."""
        ...

    def tracking_failed(self, store_id: str, error: Exception) -> None:
        """Record that a visit report failed (development only)."""
        ...

    def with_context(self, context: ObservationContext) -> VisitorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultVisitorProbe:
    """Default implementation of VisitorProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultVisitorProbe:
        """Create a new probe with observation context bound."""
        return DefaultVisitorProbe(logger=self._logger, context=context)

    def visitor_id_generated(self, visitor_id: str) -> None:
        """Record that a new visitor id was generated."""
        self._logger.debug(
            "visitor_id_generated",
            visitor_id=visitor_id,
            **self._get_context_kwargs(),
        )

    def visitor_id_restored(self, visitor_id: str, source: str) -> None:
        """Record that an existing visitor id was found."""
        self._logger.debug(
            "visitor_id_restored",
            visitor_id=visitor_id,
            source=source,
            **self._get_context_kwargs(),
        )

    def fingerprint_failed(self, error: Exception) -> None:
        """Record that the device fingerprint could not be computed."""
        self._logger.error(
            "fingerprint_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def tracking_scheduled(self, store_id: str, visitor_id: str) -> None:
        """Record that a visit report was scheduled."""
        self._logger.debug(
            "visitor_tracking_scheduled",
            store_id=store_id,
            visitor_id=visitor_id,
            **self._get_context_kwargs(),
        )

    def tracking_failed(self, store_id: str, error: Exception) -> None:
        """Record that a visit report failed (development only)."""
        self._logger.error(
            "visitor_tracking_failed",
            store_id=store_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
