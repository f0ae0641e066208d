"""Document metadata for storefront pages.

Pure functions of the resolved store, so the document head and body always
agree on which store they describe.
"""

from __future__ import annotations

from tenancy.application.value_objects import ResolvedStore
from tenancy.domain.value_objects import StoreErrorType
from storefront.domain.value_objects import PageMetadata

DEFAULT_FAVICON = "/favicon.svg"
PLATFORM_DESCRIPTION = "Multi-tenant e-commerce storefront"


def base_url_for(hostname: str) -> str:
    """Absolute base URL of a host; plain http only for local development."""
    protocol = "http" if "localhost" in hostname else "https"
    return f"{protocol}://{hostname}"


def build_page_metadata(resolved: ResolvedStore, app_name: str, hostname: str) -> PageMetadata:
    """Build head metadata for the current request's store.

    Favicon fallback chain: storefront favicon, store logo, platform default.
    Open Graph image chain: first hero image, favicon, logo.
    """
    if not resolved.is_tenant_host:
        return PageMetadata(
            title=app_name,
            description=PLATFORM_DESCRIPTION,
            favicon_url=DEFAULT_FAVICON,
        )

    store = resolved.store
    if store is None or store.storefront is None:
        inactive = resolved.error is not None and resolved.error.type is StoreErrorType.INACTIVE
        return PageMetadata(
            title="Store unavailable" if inactive else "Store not found",
            description=(
                "This store is not available right now."
                if inactive
                else "The store you are looking for does not exist."
            ),
            favicon_url=DEFAULT_FAVICON,
        )

    storefront = store.storefront
    seo = storefront.seo
    seo_title = seo.title if seo else None
    seo_description = seo.description if seo else None
    seo_favicon = seo.favicon if seo else None

    favicon = seo_favicon or storefront.logo_url or DEFAULT_FAVICON
    hero_images = store.sorted_hero_images
    og_image = (
        (hero_images[0].image_url if hero_images else None)
        or seo_favicon
        or storefront.logo_url
    )

    return PageMetadata(
        title=seo_title or store.name,
        description=seo_description or f"Welcome to {store.name}",
        favicon_url=favicon,
        site_name=store.name,
        og_image=og_image,
        base_url=base_url_for(hostname),
    )
