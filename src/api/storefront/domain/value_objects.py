"""Value objects for the storefront domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class FulfillmentMethod(StrEnum):
    """How an order reaches the customer. In-store sales are never online."""

    DELIVERY = "DELIVERY"
    PICKUP = "PICKUP"
    DINE_IN = "DINE_IN"


@dataclass(frozen=True)
class FulfillmentOption:
    method: FulfillmentMethod
    is_active: bool


@dataclass(frozen=True)
class StaticPageLink:
    """Link to a store-authored page (about, shipping policy, ...)."""

    slug: str
    title: str


@dataclass(frozen=True)
class ProductReview:
    """A review left by a visitor. The visitor id is never sent."""

    name: str
    stars: int
    comment: str | None = None


@dataclass(frozen=True)
class ReviewResult:
    success: bool
    error: str | None = None


@dataclass(frozen=True)
class PageMetadata:
    """Document head metadata.

    Attributes:
        title: Default document title.
        description: Meta description.
        favicon_url: Icon for every icon slot.
        site_name: Open Graph site name.
        og_image: Open Graph / Twitter image, if any.
        base_url: Absolute base for relative metadata URLs.
    """

    title: str
    description: str
    favicon_url: str
    site_name: str | None = None
    og_image: str | None = None
    base_url: str | None = None


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    changefreq: str
    priority: str
    lastmod: str | None = None


@dataclass(frozen=True)
class SitemapSources:
    """Catalog data a sitemap is built from; each list may be partial."""

    products: list[tuple[str, str | None]] = field(default_factory=list)
    category_ids: list[str] = field(default_factory=list)
    static_page_slugs: list[str] = field(default_factory=list)
