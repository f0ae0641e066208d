"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_started(self, version: str, environment: str) -> None:
        """Record that the application finished starting."""
        ...

    def commerce_client_created(self, base_url: str, timeout: float) -> None:
        """Record that the shared commerce API client was created."""
        ...

    def commerce_client_closed(self) -> None:
        """Record that the shared commerce API client was closed on shutdown."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, version: str, environment: str) -> None:
        """Record that the application finished starting."""
        self._logger.info(
            "application_started",
            version=version,
            environment=environment,
            **self._get_context_kwargs(),
        )

    def commerce_client_created(self, base_url: str, timeout: float) -> None:
        """Record that the shared commerce API client was created."""
        self._logger.info(
            "commerce_client_created",
            base_url=base_url,
            timeout=timeout,
            **self._get_context_kwargs(),
        )

    def commerce_client_closed(self) -> None:
        """Record that the shared commerce API client was closed on shutdown."""
        self._logger.info(
            "commerce_client_closed",
            **self._get_context_kwargs(),
        )
