"""Store resolution application service.

Binds the current request to a store. Every page call site (metadata,
layout, page body, sitemap, server actions) calls ``resolve_request_store``
independently; the per-request memo guarantees the upstream lookup runs at
most once, and the service populates the request context itself so no call
site depends on another having run first.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping

from infrastructure.settings import CookieSettings, TenancySettings
from shared_kernel.middleware.tenant_context import set_locale, set_store_id
from shared_kernel.request_scope import request_cached, require_scope
from tenancy.application.observability import (
    DefaultStoreResolutionProbe,
    StoreResolutionProbe,
)
from tenancy.application.value_objects import ResolvedStore, StoreError
from tenancy.domain.hostname import resolve_tenant_key
from tenancy.domain.store import Store
from tenancy.domain.value_objects import StoreErrorType, TenantKey
from tenancy.ports.exceptions import (
    StoreLookupError,
    TenantInactiveError,
    TenantNotFoundError,
    TransientUpstreamError,
)
from tenancy.ports.repositories import IStoreRepository


def _error_type(error: StoreLookupError) -> StoreErrorType:
    if isinstance(error, TenantNotFoundError):
        return StoreErrorType.NOT_FOUND
    if isinstance(error, TenantInactiveError):
        return StoreErrorType.INACTIVE
    if isinstance(error, TransientUpstreamError):
        return StoreErrorType.NETWORK_ERROR
    return StoreErrorType.UNKNOWN


class StoreResolutionService:
    """Application service resolving the store a request is addressed to."""

    def __init__(
        self,
        repository: IStoreRepository,
        settings: TenancySettings,
        probe: StoreResolutionProbe | None = None,
    ):
        """Initialize StoreResolutionService with dependencies.

        Args:
            repository: Read-only store repository
            settings: Tenancy settings (reserved labels, timeouts)
            probe: Optional domain probe for observability
        """
        self._repository = repository
        self._settings = settings
        self._probe = probe or DefaultStoreResolutionProbe()

    def tenant_key_for(self, hostname: str | None) -> TenantKey | None:
        """Derive the tenant key for a Host header using configured policy."""
        return resolve_tenant_key(
            hostname,
            reserved_labels=self._settings.reserved_labels,
            local_suffixes=self._settings.local_suffixes,
        )

    async def _bounded(self, identifier: str, lookup: Awaitable[Store]) -> Store:
        timeout = self._settings.store_lookup_timeout
        try:
            async with asyncio.timeout(timeout):
                return await lookup
        except TimeoutError as e:
            self._probe.store_lookup_timed_out(identifier, timeout=timeout)
            raise TransientUpstreamError(
                identifier, f"Store lookup for {identifier!r} timed out"
            ) from e

    @request_cached(ignore_self=True)
    async def get_store(self, tenant_key: TenantKey) -> Store:
        """Fetch the servable store for a tenant key, once per request.

        Raises:
            TenantNotFoundError: If no store exists for the key
            TenantInactiveError: If the store may not be served
            TransientUpstreamError: If the upstream failed or timed out
        """
        return await self._bounded(
            tenant_key.value, self._repository.get_by_subdomain(tenant_key)
        )

    @request_cached(ignore_self=True)
    async def get_store_by_id(self, store_id: str) -> Store:
        """Fetch the servable store for a known store id, once per request."""
        return await self._bounded(store_id, self._repository.get_by_id(store_id))

    @request_cached(ignore_self=True)
    async def resolve_request_store(self) -> ResolvedStore:
        """Bind the current request to its store.

        Sets the context locale from the negotiated preference, then resolves
        the tenant key from the request host and looks the store up. On
        success the store id is written to the request context, so every
        outbound call made afterwards carries it.

        Lookup failures are returned as a ``StoreError`` rather than raised,
        so page call sites can choose the experience to render.

        Raises:
            RequestScopeError: If called outside a request scope.
        """
        scope = require_scope()
        set_locale(scope.preferred_locale)

        tenant_key = self.tenant_key_for(scope.hostname)
        if tenant_key is None:
            self._probe.non_tenant_host(scope.hostname)
            return ResolvedStore()

        try:
            store = await self.get_store(tenant_key)
        except StoreLookupError as e:
            error = StoreError(type=_error_type(e), message=str(e), tenant_key=tenant_key)
            self._probe.store_resolution_failed(
                tenant_key.value, error_type=error.type.value, message=error.message
            )
            return ResolvedStore(tenant_key=tenant_key, error=error)

        set_store_id(store.id)
        self._probe.store_resolved(tenant_key.value, store_id=store.id)
        return ResolvedStore(store=store, tenant_key=tenant_key)

    async def bind_action_context(
        self,
        cookies: Mapping[str, str],
        cookie_settings: CookieSettings,
    ) -> str | None:
        """Populate the request context for a server action.

        Server actions have no access to the rendered bootstrap payload, so
        the store id comes from the persisted store-id cookie, confirmed with
        a by-id lookup. Without the cookie, or when the cookie names a store
        that cannot be served, the store is resolved from the request host.

        Returns:
            The store id now in the request context, or None.
        """
        scope = require_scope()
        set_locale(scope.preferred_locale)

        store_id = cookies.get(cookie_settings.store_id_name)
        if store_id:
            try:
                store = await self.get_store_by_id(store_id)
            except StoreLookupError as e:
                self._probe.store_resolution_failed(
                    store_id, error_type=_error_type(e).value, message=str(e)
                )
            else:
                set_store_id(store.id)
                self._probe.store_bound_from_cookie(store.id)
                return store.id

        resolved = await self.resolve_request_store()
        return resolved.store_id
