"""Gateway protocols (ports) for the storefront bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from infrastructure.commerce import Page
from storefront.domain.value_objects import (
    FulfillmentOption,
    ProductReview,
    StaticPageLink,
)


@runtime_checkable
class ICatalogGateway(Protocol):
    """Read access to store catalog data, plus review submission.

    Every call is scoped by the store id in the request context.
    """

    async def list_static_pages(self) -> list[StaticPageLink]:
        """List the store's active static pages (empty when it has none).

        Raises:
            CatalogUnavailableError: If the upstream could not answer
        """
        ...

    async def list_fulfillment_methods(self, store_id: str) -> list[FulfillmentOption]:
        """List the store's fulfillment methods.

        Raises:
            CatalogUnavailableError: If the upstream could not answer
        """
        ...

    async def product_page(
        self,
        store_id: str,
        tenant_id: str,
        page: int,
        limit: int,
    ) -> Page[tuple[str, str | None]]:
        """Fetch one page of ``(product_id, updated_at)`` pairs.

        Raises:
            CatalogUnavailableError: If the upstream could not answer
        """
        ...

    async def category_page(self, tenant_id: str, page: int, limit: int) -> Page[str]:
        """Fetch one page of category ids.

        Raises:
            CatalogUnavailableError: If the upstream could not answer
        """
        ...

    async def submit_review(self, product_id: str, review: ProductReview) -> None:
        """Submit a product review.

        Raises:
            ReviewSubmissionError: If the upstream rejected the review
        """
        ...
