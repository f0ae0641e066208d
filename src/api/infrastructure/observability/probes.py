"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CommerceClientProbe(Protocol):
    """Domain probe for commerce API client observability.

    This probe captures domain-significant events related to outbound
    commerce API calls without exposing logging implementation details.
    """

    def request_sent(
        self,
        method: str,
        endpoint: str,
        store_id: str | None,
        locale: str,
    ) -> None:
        """Record that a request was issued to the commerce API."""
        ...

    def request_failed(
        self,
        method: str,
        endpoint: str,
        status_code: int | None,
        message: str,
    ) -> None:
        """Record that the commerce API answered with an error status."""
        ...

    def request_timed_out(self, method: str, endpoint: str) -> None:
        """Record that a commerce API request timed out."""
        ...

    def transport_failed(self, method: str, endpoint: str, error: Exception) -> None:
        """Record that a commerce API request failed before a response arrived."""
        ...

    def with_context(self, context: ObservationContext) -> CommerceClientProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCommerceClientProbe:
    """Default implementation of CommerceClientProbe using structlog.

    Request logging is opt-in (``enable_request_logging``) since every
    rendered page issues several calls; failures are always logged.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
        enable_request_logging: bool = False,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context
        self._enable_request_logging = enable_request_logging

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultCommerceClientProbe:
        """Create a new probe with observation context bound."""
        return DefaultCommerceClientProbe(
            logger=self._logger,
            context=context,
            enable_request_logging=self._enable_request_logging,
        )

    def request_sent(
        self,
        method: str,
        endpoint: str,
        store_id: str | None,
        locale: str,
    ) -> None:
        """Record that a request was issued to the commerce API."""
        if not self._enable_request_logging:
            return
        self._logger.debug(
            "commerce_api_request_sent",
            method=method,
            endpoint=endpoint,
            store_id=store_id,
            locale=locale,
            **self._get_context_kwargs(),
        )

    def request_failed(
        self,
        method: str,
        endpoint: str,
        status_code: int | None,
        message: str,
    ) -> None:
        """Record that the commerce API answered with an error status."""
        self._logger.warning(
            "commerce_api_request_failed",
            method=method,
            endpoint=endpoint,
            status_code=status_code,
            message=message,
            **self._get_context_kwargs(),
        )

    def request_timed_out(self, method: str, endpoint: str) -> None:
        """Record that a commerce API request timed out."""
        self._logger.warning(
            "commerce_api_request_timed_out",
            method=method,
            endpoint=endpoint,
            **self._get_context_kwargs(),
        )

    def transport_failed(self, method: str, endpoint: str, error: Exception) -> None:
        """Record that a commerce API request failed before a response arrived."""
        self._logger.error(
            "commerce_api_transport_failed",
            method=method,
            endpoint=endpoint,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
