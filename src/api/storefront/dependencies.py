"""Dependency injection for the storefront bounded context."""

from typing import Annotated

from fastapi import Depends

from infrastructure.commerce import CommerceApiClient
from infrastructure.dependencies import get_commerce_client
from infrastructure.settings import (
    StorefrontSettings,
    TenancySettings,
    get_settings,
    get_tenancy_settings,
)
from storefront.application.observability import DefaultPageProbe, PageProbe
from storefront.application.pages import StorefrontPageService
from storefront.application.reviews import ReviewService
from storefront.application.seo import SitemapService
from storefront.infrastructure.catalog_gateway import CommerceCatalogGateway
from storefront.ports.gateways import ICatalogGateway
from tenancy.application.services import StoreResolutionService
from tenancy.dependencies import get_store_resolution_service


def get_page_probe() -> PageProbe:
    """Get PageProbe instance."""
    return DefaultPageProbe()


def get_catalog_gateway(
    client: Annotated[CommerceApiClient, Depends(get_commerce_client)],
) -> ICatalogGateway:
    """Get the catalog gateway backed by the shared commerce client."""
    return CommerceCatalogGateway(client=client)


def get_storefront_page_service(
    resolution: Annotated[StoreResolutionService, Depends(get_store_resolution_service)],
    gateway: Annotated[ICatalogGateway, Depends(get_catalog_gateway)],
    settings: Annotated[StorefrontSettings, Depends(get_settings)],
    tenancy_settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
    probe: Annotated[PageProbe, Depends(get_page_probe)],
) -> StorefrontPageService:
    """Get StorefrontPageService instance."""
    return StorefrontPageService(
        resolution=resolution,
        gateway=gateway,
        settings=settings,
        tenancy_settings=tenancy_settings,
        probe=probe,
    )


def get_sitemap_service(
    resolution: Annotated[StoreResolutionService, Depends(get_store_resolution_service)],
    gateway: Annotated[ICatalogGateway, Depends(get_catalog_gateway)],
    probe: Annotated[PageProbe, Depends(get_page_probe)],
) -> SitemapService:
    """Get SitemapService instance."""
    return SitemapService(resolution=resolution, gateway=gateway, probe=probe)


def get_review_service(
    gateway: Annotated[ICatalogGateway, Depends(get_catalog_gateway)],
    probe: Annotated[PageProbe, Depends(get_page_probe)],
) -> ReviewService:
    """Get ReviewService instance."""
    return ReviewService(gateway=gateway, probe=probe)
