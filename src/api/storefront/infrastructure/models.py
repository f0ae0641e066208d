"""Pydantic models for catalog payloads of the commerce API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.value_objects import (
    FulfillmentMethod,
    FulfillmentOption,
    StaticPageLink,
)


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class StaticPageListItemModel(_UpstreamModel):
    slug: str
    title: str = ""

    def to_domain(self) -> StaticPageLink:
        return StaticPageLink(slug=self.slug, title=self.title or self.slug)


class FulfillmentMethodModel(_UpstreamModel):
    fulfillment_method: FulfillmentMethod = Field(alias="fulfillmentMethod")
    is_active: bool = Field(default=True, alias="isActive")

    def to_domain(self) -> FulfillmentOption:
        return FulfillmentOption(method=self.fulfillment_method, is_active=self.is_active)


class ProductSummaryModel(_UpstreamModel):
    id: str
    updated_at: str | None = Field(default=None, alias="updatedAt")


class CategorySummaryModel(_UpstreamModel):
    id: str
