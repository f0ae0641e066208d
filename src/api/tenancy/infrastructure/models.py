"""Pydantic models for the commerce API's public store payload.

The upstream speaks camelCase JSON; these models validate it and translate
it to the immutable domain ``Store``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from tenancy.domain.store import (
    Country,
    HeroImage,
    Store,
    Storefront,
    StorefrontSeo,
    StorefrontSocialMedia,
)
from tenancy.domain.value_objects import StorefrontStatus


def _storefront_status(value: str) -> StorefrontStatus:
    # Anything but an explicit ACTIVE keeps the storefront closed
    if value.upper() == StorefrontStatus.ACTIVE:
        return StorefrontStatus.ACTIVE
    return StorefrontStatus.INACTIVE


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CountryModel(_UpstreamModel):
    id: int
    code: str
    name_en: str = Field(alias="nameEn")
    name_ar: str | None = Field(default=None, alias="nameAr")
    name_fr: str | None = Field(default=None, alias="nameFr")

    def to_domain(self) -> Country:
        return Country(
            id=self.id,
            code=self.code,
            name_en=self.name_en,
            name_ar=self.name_ar,
            name_fr=self.name_fr,
        )


class StorefrontSeoModel(_UpstreamModel):
    title: str | None = None
    description: str | None = None
    fav_icon: str | None = Field(default=None, alias="favIcon")


class StorefrontSocialMediaModel(_UpstreamModel):
    facebook: str | None = None
    instagram: str | None = None
    tiktok: str | None = None
    youtube: str | None = None
    website: str | None = None
    contact_phone: str | None = Field(default=None, alias="contactPhone")


class HeroImageModel(_UpstreamModel):
    image_url: str = Field(alias="imageUrl")
    display_order: int = Field(default=0, alias="displayOrder")


class StorefrontModel(_UpstreamModel):
    id: str
    status: str
    logo_url: str | None = Field(default=None, alias="logoUrl")
    hide_out_of_stock: bool = Field(default=False, alias="hideOutOfStock")
    seo: StorefrontSeoModel | None = None
    social_media: StorefrontSocialMediaModel | None = Field(
        default=None, alias="socialMedia"
    )
    hero_images: list[HeroImageModel] | None = Field(default=None, alias="heroImages")

    def to_domain(self) -> Storefront:
        return Storefront(
            id=self.id,
            status=_storefront_status(self.status),
            logo_url=self.logo_url,
            hide_out_of_stock=self.hide_out_of_stock,
            seo=(
                StorefrontSeo(
                    title=self.seo.title,
                    description=self.seo.description,
                    favicon=self.seo.fav_icon,
                )
                if self.seo
                else None
            ),
            social_media=(
                StorefrontSocialMedia(**self.social_media.model_dump())
                if self.social_media
                else None
            ),
            hero_images=tuple(
                HeroImage(image_url=image.image_url, display_order=image.display_order)
                for image in self.hero_images or []
            ),
        )


class PublicStoreModel(_UpstreamModel):
    """Payload of ``GET /public/stores/{subdomain}``."""

    id: str
    tenant_id: str = Field(alias="tenantId")
    subdomain: str
    name: str
    currency: str
    country: CountryModel | None = None
    store_front: StorefrontModel | None = Field(default=None, alias="storeFront")

    def to_domain(self) -> Store:
        return Store(
            id=self.id,
            tenant_id=self.tenant_id,
            subdomain=self.subdomain,
            name=self.name,
            currency=self.currency,
            country=self.country.to_domain() if self.country else None,
            storefront=self.store_front.to_domain() if self.store_front else None,
        )
