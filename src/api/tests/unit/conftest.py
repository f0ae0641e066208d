"""Unit test fixtures shared across bounded contexts."""

from __future__ import annotations

import pytest

from infrastructure.settings import CookieSettings, StorefrontSettings, TenancySettings
from tenancy.domain.store import (
    HeroImage,
    Store,
    Storefront,
    StorefrontSeo,
    StorefrontSocialMedia,
)
from tenancy.domain.value_objects import StorefrontStatus


def make_store(
    store_id: str = "abc123",
    subdomain: str = "shop1",
    status: StorefrontStatus = StorefrontStatus.ACTIVE,
    **storefront_fields,
) -> Store:
    """Build a store snapshot with an active storefront by default."""
    return Store(
        id=store_id,
        tenant_id="tenant-1",
        subdomain=subdomain,
        name="Shop One",
        currency="USD",
        storefront=Storefront(id=f"sf-{store_id}", status=status, **storefront_fields),
    )


def store_payload(
    store_id: str = "abc123",
    subdomain: str = "shop1",
    status: str = "ACTIVE",
) -> dict:
    """Camel-cased store payload as the commerce API returns it."""
    return {
        "id": store_id,
        "tenantId": "tenant-1",
        "subdomain": subdomain,
        "name": "Shop One",
        "currency": "USD",
        "country": {"id": 1, "code": "US", "nameEn": "United States"},
        "storeFront": {
            "id": f"sf-{store_id}",
            "status": status,
            "logoUrl": "https://cdn.example.com/logo.png",
            "seo": {"title": "Shop One Online", "favIcon": "https://cdn.example.com/fav.ico"},
            "socialMedia": {"contactPhone": "+1 555 0100"},
            "heroImages": [
                {"imageUrl": "https://cdn.example.com/hero-2.jpg", "displayOrder": 2},
                {"imageUrl": "https://cdn.example.com/hero-1.jpg", "displayOrder": 1},
            ],
        },
    }


@pytest.fixture
def store() -> Store:
    """An active store addressed by ``shop1``."""
    return make_store(
        seo=StorefrontSeo(title="Shop One Online", favicon="https://cdn.example.com/fav.ico"),
        social_media=StorefrontSocialMedia(contact_phone="+1 555 0100"),
        logo_url="https://cdn.example.com/logo.png",
        hero_images=(HeroImage(image_url="https://cdn.example.com/hero.jpg"),),
    )


@pytest.fixture
def tenancy_settings() -> TenancySettings:
    """Tenancy settings with short timeouts for tests."""
    return TenancySettings(store_lookup_timeout=0.5, secondary_timeout=0.2)


@pytest.fixture
def cookie_settings() -> CookieSettings:
    """Default cookie names and lifetimes."""
    return CookieSettings()


@pytest.fixture
def storefront_settings() -> StorefrontSettings:
    """Application settings in development mode."""
    return StorefrontSettings(environment="development")


@pytest.fixture
def store_factory():
    """Factory for store snapshots (see ``make_store``)."""
    return make_store


@pytest.fixture
def store_payload_factory():
    """Factory for upstream store payloads (see ``store_payload``)."""
    return store_payload
