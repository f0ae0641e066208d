"""Commerce API implementation of ICatalogGateway."""

from __future__ import annotations

from pydantic import TypeAdapter, ValidationError

from infrastructure.commerce import ApiError, CommerceApiClient, Page
from infrastructure.commerce.endpoints import (
    CATEGORIES,
    PRODUCTS,
    STATIC_PAGES,
    fulfillment_methods,
    product_reviews,
)
from storefront.domain.value_objects import (
    FulfillmentOption,
    ProductReview,
    StaticPageLink,
)
from storefront.infrastructure.models import (
    CategorySummaryModel,
    FulfillmentMethodModel,
    ProductSummaryModel,
    StaticPageListItemModel,
)
from storefront.ports.exceptions import CatalogUnavailableError, ReviewSubmissionError
from storefront.ports.gateways import ICatalogGateway

_static_pages = TypeAdapter(list[StaticPageListItemModel])
_fulfillment_methods = TypeAdapter(list[FulfillmentMethodModel])
_products = TypeAdapter(list[ProductSummaryModel])
_categories = TypeAdapter(list[CategorySummaryModel])


class CommerceCatalogGateway(ICatalogGateway):
    """Catalog reads through the shared commerce client."""

    def __init__(self, client: CommerceApiClient):
        self._client = client

    async def list_static_pages(self) -> list[StaticPageLink]:
        try:
            data = await self._client.get(STATIC_PAGES)
        except ApiError as e:
            # A store without static pages answers 404
            if e.status_code == 404:
                return []
            raise CatalogUnavailableError(e.message, e.status_code) from e

        try:
            return [item.to_domain() for item in _static_pages.validate_python(data or [])]
        except ValidationError as e:
            raise CatalogUnavailableError("Malformed static pages payload") from e

    async def list_fulfillment_methods(self, store_id: str) -> list[FulfillmentOption]:
        try:
            data = await self._client.get(fulfillment_methods(store_id))
        except ApiError as e:
            raise CatalogUnavailableError(e.message, e.status_code) from e

        try:
            return [item.to_domain() for item in _fulfillment_methods.validate_python(data or [])]
        except ValidationError as e:
            raise CatalogUnavailableError("Malformed fulfillment methods payload") from e

    async def product_page(
        self,
        store_id: str,
        tenant_id: str,
        page: int,
        limit: int,
    ) -> Page[tuple[str, str | None]]:
        result = await self._paginated(
            PRODUCTS,
            {"storeId": store_id, "tenantId": tenant_id, "page": page, "limit": limit},
        )
        try:
            products = _products.validate_python(result.items)
        except ValidationError as e:
            raise CatalogUnavailableError("Malformed products payload") from e
        return Page(
            items=[(product.id, product.updated_at) for product in products],
            pagination=result.pagination,
        )

    async def category_page(self, tenant_id: str, page: int, limit: int) -> Page[str]:
        result = await self._paginated(
            CATEGORIES,
            {"tenantId": tenant_id, "page": page, "limit": limit},
        )
        try:
            categories = _categories.validate_python(result.items)
        except ValidationError as e:
            raise CatalogUnavailableError("Malformed categories payload") from e
        return Page(items=[category.id for category in categories], pagination=result.pagination)

    async def _paginated(self, endpoint: str, params: dict[str, str | int]) -> Page:
        try:
            return await self._client.get_paginated(endpoint, params=params)
        except ApiError as e:
            raise CatalogUnavailableError(e.message, e.status_code) from e

    async def submit_review(self, product_id: str, review: ProductReview) -> None:
        payload = {"name": review.name, "stars": review.stars, "comment": review.comment}
        try:
            await self._client.post(product_reviews(product_id), payload)
        except ApiError as e:
            raise ReviewSubmissionError(e.message) from e
