"""Repository protocols (ports) for the tenancy bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.store import Store
from tenancy.domain.value_objects import TenantKey


@runtime_checkable
class IStoreRepository(Protocol):
    """Read-only access to store snapshots held by the commerce API."""

    async def get_by_subdomain(self, tenant_key: TenantKey) -> Store:
        """Retrieve the store addressed by a tenant key.

        Args:
            tenant_key: Tenant key derived from the request hostname

        Returns:
            The servable Store

        Raises:
            TenantNotFoundError: If no store exists for the key
            TenantInactiveError: If the store's storefront may not be served
            TransientUpstreamError: If the upstream could not answer
        """
        ...

    async def get_by_id(self, store_id: str) -> Store:
        """Retrieve a store by its id, once the id is already known.

        Avoids a second hostname round trip.

        Args:
            store_id: Store identifier

        Returns:
            The servable Store

        Raises:
            TenantNotFoundError: If no store exists for the id
            TenantInactiveError: If the store's storefront may not be served
            TransientUpstreamError: If the upstream could not answer
        """
        ...
