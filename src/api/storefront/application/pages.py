"""Storefront page assembly.

A document is assembled from independent call sites (head metadata, layout,
page body) that run concurrently. Each resolves the request store on its
own; the per-request memo makes that a single upstream lookup, and the
resolution itself populates the request context, so no call site relies on
another having run first.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TypeVar

from hydration.bootstrap import BootstrapPayload
from infrastructure.settings import StorefrontSettings, TenancySettings
from shared_kernel.locale import Locale
from shared_kernel.middleware.tenant_context import get_locale, get_store_id
from storefront.application.metadata import build_page_metadata
from storefront.application.observability import DefaultPageProbe, PageProbe
from storefront.domain.value_objects import (
    FulfillmentOption,
    PageMetadata,
    StaticPageLink,
)
from storefront.ports.exceptions import CatalogUnavailableError
from storefront.ports.gateways import ICatalogGateway
from tenancy.application.services import StoreResolutionService
from tenancy.application.value_objects import ResolvedStore

T = TypeVar("T")


@dataclass(frozen=True)
class StorefrontLayout:
    """Optional layout sections; None means the section was omitted."""

    static_pages: list[StaticPageLink] | None = None
    fulfillment_methods: list[FulfillmentOption] | None = None


@dataclass(frozen=True)
class StorefrontPage:
    """Everything needed to render one storefront document."""

    path: str
    resolved: ResolvedStore
    metadata: PageMetadata
    layout: StorefrontLayout | None
    locale: Locale
    bootstrap: BootstrapPayload


class StorefrontPageService:
    """Application service assembling storefront documents."""

    def __init__(
        self,
        resolution: StoreResolutionService,
        gateway: ICatalogGateway,
        settings: StorefrontSettings,
        tenancy_settings: TenancySettings,
        probe: PageProbe | None = None,
    ):
        self._resolution = resolution
        self._gateway = gateway
        self._settings = settings
        self._tenancy_settings = tenancy_settings
        self._probe = probe or DefaultPageProbe()

    async def generate_metadata(self, hostname: str) -> PageMetadata:
        """Head metadata call site."""
        resolved = await self._resolution.resolve_request_store()
        return build_page_metadata(resolved, self._settings.app_name, hostname)

    async def load_layout(self) -> StorefrontLayout | None:
        """Layout call site: secondary sections, each allowed to fail."""
        resolved = await self._resolution.resolve_request_store()
        if resolved.store is None:
            return None

        static_pages, fulfillment = await asyncio.gather(
            self._secondary("static_pages", self._gateway.list_static_pages()),
            self._secondary(
                "fulfillment_methods",
                self._gateway.list_fulfillment_methods(resolved.store.id),
            ),
        )
        return StorefrontLayout(static_pages=static_pages, fulfillment_methods=fulfillment)

    async def load_body(self) -> ResolvedStore:
        """Page body call site."""
        return await self._resolution.resolve_request_store()

    async def assemble(self, path: str, hostname: str) -> StorefrontPage:
        """Run every call site concurrently and collect the document parts."""
        metadata, layout, resolved = await asyncio.gather(
            self.generate_metadata(hostname),
            self.load_layout(),
            self.load_body(),
        )
        return StorefrontPage(
            path=path,
            resolved=resolved,
            metadata=metadata,
            layout=layout,
            locale=get_locale(self._settings.default_locale),
            bootstrap=BootstrapPayload(store_id=get_store_id(), locale=get_locale()),
        )

    async def _secondary(self, section: str, call: Awaitable[T]) -> T | None:
        try:
            async with asyncio.timeout(self._tenancy_settings.secondary_timeout):
                return await call
        except TimeoutError:
            self._probe.secondary_section_omitted(section, reason="timeout")
        except CatalogUnavailableError as e:
            self._probe.secondary_section_omitted(section, reason=str(e))
        return None
