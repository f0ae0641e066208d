"""Store snapshot owned by the upstream commerce system.

The storefront treats a ``Store`` as an immutable snapshot for the duration
of one request: it is fetched once, never mutated locally, and discarded when
the request ends.
"""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.value_objects import StorefrontStatus, TenantKey


@dataclass(frozen=True)
class Country:
    """Country a store sells from."""

    id: int
    code: str
    name_en: str
    name_ar: str | None = None
    name_fr: str | None = None


@dataclass(frozen=True)
class StorefrontSeo:
    """Search engine metadata of a storefront."""

    title: str | None = None
    description: str | None = None
    favicon: str | None = None


@dataclass(frozen=True)
class StorefrontSocialMedia:
    """Social links displayed by a storefront."""

    facebook: str | None = None
    instagram: str | None = None
    tiktok: str | None = None
    youtube: str | None = None
    website: str | None = None
    contact_phone: str | None = None


@dataclass(frozen=True)
class HeroImage:
    """Hero banner image of a storefront."""

    image_url: str
    display_order: int = 0


@dataclass(frozen=True)
class Storefront:
    """Public storefront configuration of a store."""

    id: str
    status: StorefrontStatus
    logo_url: str | None = None
    hide_out_of_stock: bool = False
    seo: StorefrontSeo | None = None
    social_media: StorefrontSocialMedia | None = None
    hero_images: tuple[HeroImage, ...] = ()

    @property
    def is_active(self) -> bool:
        """Whether the storefront may be served publicly."""
        return self.status is StorefrontStatus.ACTIVE


@dataclass(frozen=True)
class Store:
    """A tenant store as returned by the commerce API.

    Attributes:
        id: Store identifier, sent as the routing header on outbound calls.
        tenant_id: Identifier of the owning tenant account.
        subdomain: Store code used in its hostname.
        name: Display name.
        currency: ISO currency code.
        country: Country the store sells from, if configured.
        storefront: Public storefront configuration, if configured.
    """

    id: str
    tenant_id: str
    subdomain: str
    name: str
    currency: str
    country: Country | None = None
    storefront: Storefront | None = None

    @property
    def tenant_key(self) -> TenantKey:
        """Tenant key this store is addressed by."""
        return TenantKey.from_string(self.subdomain)

    @property
    def is_servable(self) -> bool:
        """A store is servable only with an active storefront."""
        return self.storefront is not None and self.storefront.is_active

    @property
    def sorted_hero_images(self) -> tuple[HeroImage, ...]:
        if self.storefront is None:
            return ()
        return tuple(sorted(self.storefront.hero_images, key=lambda image: image.display_order))
