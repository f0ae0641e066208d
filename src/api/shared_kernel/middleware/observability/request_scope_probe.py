"""Domain probe for request scope handling.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to opening request scopes and negotiating
the visitor locale.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RequestScopeProbe(Protocol):
    """Domain probe for request scope operations."""

    def scope_opened(self, request_id: str, host: str) -> None:
        """Record that a request scope was opened."""
        ...

    def locale_negotiated(self, locale: str, source: str) -> None:
        """Record which locale was chosen and where it came from."""
        ...

    def scope_closed(
        self,
        request_id: str,
        store_id: str | None,
        status_code: int,
    ) -> None:
        """Record that a request scope was closed."""
        ...

    def with_context(self, context: ObservationContext) -> RequestScopeProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRequestScopeProbe:
    """Default implementation of RequestScopeProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRequestScopeProbe:
        """Create a new probe with observation context bound."""
        return DefaultRequestScopeProbe(logger=self._logger, context=context)

    def scope_opened(self, request_id: str, host: str) -> None:
        """Record that a request scope was opened."""
        self._logger.debug(
            "request_scope_opened",
            request_id=request_id,
            host=host,
            **self._get_context_kwargs(),
        )

    def locale_negotiated(self, locale: str, source: str) -> None:
        """Record which locale was chosen and where it came from."""
        self._logger.debug(
            "request_locale_negotiated",
            locale=locale,
            source=source,
            **self._get_context_kwargs(),
        )

    def scope_closed(
        self,
        request_id: str,
        store_id: str | None,
        status_code: int,
    ) -> None:
        """Record that a request scope was closed."""
        self._logger.debug(
            "request_scope_closed",
            request_id=request_id,
            store_id=store_id,
            status_code=status_code,
            **self._get_context_kwargs(),
        )
