"""Protocol for storefront page observability.

Defines the interface for domain probes that capture application-level
domain events while rendering documents and SEO files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PageProbe(Protocol):
    """Domain probe for storefront page operations."""

    def secondary_section_omitted(self, section: str, reason: str) -> None:
        """Record that an optional page section was left out."""
        ...

    def sitemap_source_truncated(self, source: str, page: int, reason: str) -> None:
        """Record that a sitemap source stopped early (partial sitemap)."""
        ...

    def sitemap_generated(self, store_id: str, url_count: int) -> None:
        """Record that a sitemap was generated."""
        ...

    def sitemap_generation_failed(self, error: Exception) -> None:
        """Record that sitemap generation failed."""
        ...

    def review_rejected(self, product_id: str, message: str) -> None:
        """Record that the upstream rejected a product review."""
        ...

    def with_context(self, context: ObservationContext) -> PageProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPageProbe:
    """Default implementation of PageProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPageProbe:
        """Create a new probe with observation context bound."""
        return DefaultPageProbe(logger=self._logger, context=context)

    def secondary_section_omitted(self, section: str, reason: str) -> None:
        """Record that an optional page section was left out."""
        self._logger.warning(
            "secondary_section_omitted",
            section=section,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def sitemap_source_truncated(self, source: str, page: int, reason: str) -> None:
        """Record that a sitemap source stopped early (partial sitemap)."""
        self._logger.warning(
            "sitemap_source_truncated",
            source=source,
            page=page,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def sitemap_generated(self, store_id: str, url_count: int) -> None:
        """Record that a sitemap was generated."""
        self._logger.info(
            "sitemap_generated",
            store_id=store_id,
            url_count=url_count,
            **self._get_context_kwargs(),
        )

    def sitemap_generation_failed(self, error: Exception) -> None:
        """Record that sitemap generation failed."""
        self._logger.error(
            "sitemap_generation_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def review_rejected(self, product_id: str, message: str) -> None:
        """Record that the upstream rejected a product review."""
        self._logger.info(
            "review_rejected",
            product_id=product_id,
            message=message,
            **self._get_context_kwargs(),
        )
