"""robots.txt and sitemap.xml generation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TypeVar
from xml.sax.saxutils import escape

from infrastructure.commerce import Page
from shared_kernel.locale import Locale
from shared_kernel.middleware.tenant_context import set_locale
from storefront.application.metadata import base_url_for
from storefront.application.observability import DefaultPageProbe, PageProbe
from storefront.domain.value_objects import SitemapEntry, SitemapSources
from storefront.ports.exceptions import CatalogUnavailableError
from storefront.ports.gateways import ICatalogGateway
from tenancy.application.services import StoreResolutionService
from tenancy.domain.store import Store

SITEMAP_PAGE_SIZE = 100
SITEMAP_MAX_PAGES = 50
ROBOTS_DISALLOWED = ("/order-success", "/checkout", "/cart", "/api/")

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}

T = TypeVar("T")


def build_robots(hostname: str) -> str:
    """robots.txt for a host, pointing at that host's sitemap."""
    lines = ["User-agent: *", "Allow: /"]
    lines.extend(f"Disallow: {path}" for path in ROBOTS_DISALLOWED)
    lines.extend(["", f"Sitemap: {base_url_for(hostname)}/sitemap.xml", ""])
    return "\n".join(lines)


def sitemap_entries(base_url: str, sources: SitemapSources, now: str) -> list[SitemapEntry]:
    entries = [
        SitemapEntry(loc=base_url, lastmod=now, changefreq="daily", priority="1.0"),
        SitemapEntry(loc=f"{base_url}/products", lastmod=now, changefreq="daily", priority="0.8"),
        SitemapEntry(loc=f"{base_url}/categories", lastmod=now, changefreq="daily", priority="0.8"),
    ]
    entries.extend(
        SitemapEntry(
            loc=f"{base_url}/products/{product_id}",
            lastmod=updated_at or now,
            changefreq="weekly",
            priority="0.7",
        )
        for product_id, updated_at in sources.products
    )
    entries.extend(
        SitemapEntry(loc=f"{base_url}/categories/{category_id}", changefreq="weekly", priority="0.6")
        for category_id in sources.category_ids
    )
    entries.extend(
        SitemapEntry(loc=f"{base_url}/pages/{slug}", changefreq="monthly", priority="0.5")
        for slug in sources.static_page_slugs
    )
    return entries


def render_sitemap(entries: list[SitemapEntry]) -> str:
    """Serialize entries as a sitemaps.org urlset, escaping every value."""
    blocks = []
    for entry in entries:
        lines = ["  <url>", f"    <loc>{escape(entry.loc, _XML_ENTITIES)}</loc>"]
        if entry.lastmod:
            lines.append(f"    <lastmod>{escape(entry.lastmod, _XML_ENTITIES)}</lastmod>")
        lines.append(f"    <changefreq>{entry.changefreq}</changefreq>")
        lines.append(f"    <priority>{entry.priority}</priority>")
        lines.append("  </url>")
        blocks.append("\n".join(lines))

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(blocks)
        + "\n</urlset>"
    )


class SitemapService:
    """Builds the sitemap of the request's store.

    Catalog sources are fetched concurrently. A source that fails midway
    contributes what it fetched so far: a partial sitemap beats none.
    """

    def __init__(
        self,
        resolution: StoreResolutionService,
        gateway: ICatalogGateway,
        probe: PageProbe | None = None,
    ):
        self._resolution = resolution
        self._gateway = gateway
        self._probe = probe or DefaultPageProbe()

    async def build(self, hostname: str) -> str | None:
        """Return the sitemap XML, or None when the host names no servable store."""
        resolved = await self._resolution.resolve_request_store()
        if resolved.store is None:
            return None

        store = resolved.store
        # Sitemap URLs are locale independent
        set_locale(Locale.ENGLISH)

        products, category_ids, slugs = await asyncio.gather(
            self._collect_products(store),
            self._collect_categories(store),
            self._collect_static_pages(),
        )
        sources = SitemapSources(
            products=products,
            category_ids=category_ids,
            static_page_slugs=slugs,
        )
        now = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        entries = sitemap_entries(base_url_for(hostname), sources, now)
        self._probe.sitemap_generated(store.id, url_count=len(entries))
        return render_sitemap(entries)

    async def _collect_products(self, store: Store) -> list[tuple[str, str | None]]:
        return await self._collect_pages(
            "products",
            lambda page: self._gateway.product_page(
                store.id, store.tenant_id, page=page, limit=SITEMAP_PAGE_SIZE
            ),
        )

    async def _collect_categories(self, store: Store) -> list[str]:
        return await self._collect_pages(
            "categories",
            lambda page: self._gateway.category_page(
                store.tenant_id, page=page, limit=SITEMAP_PAGE_SIZE
            ),
        )

    async def _collect_pages(
        self, source: str, fetch: Callable[[int], Awaitable[Page[T]]]
    ) -> list[T]:
        """Walk a paginated source.

        The page counter is local; only ``total_pages`` is read from the
        upstream, and at most ``SITEMAP_MAX_PAGES`` pages are requested.
        """
        items: list[T] = []
        page = 1
        while True:
            try:
                result = await fetch(page)
            except CatalogUnavailableError as e:
                self._probe.sitemap_source_truncated(source, page=page, reason=str(e))
                break
            items.extend(result.items)
            if page >= result.pagination.total_pages:
                break
            if page >= SITEMAP_MAX_PAGES:
                self._probe.sitemap_source_truncated(source, page=page + 1, reason="page_limit")
                break
            page += 1
        return items

    async def _collect_static_pages(self) -> list[str]:
        try:
            pages = await self._gateway.list_static_pages()
        except CatalogUnavailableError as e:
            self._probe.sitemap_source_truncated("static_pages", page=1, reason=str(e))
            return []
        return [page.slug for page in pages]
