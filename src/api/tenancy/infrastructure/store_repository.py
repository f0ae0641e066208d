"""Commerce API implementation of IStoreRepository.

Store snapshots are owned by the upstream commerce system; this repository
only reads them and classifies every failure into the lookup categories the
application layer understands:

- 404                                   -> TenantNotFoundError
- 403, 410, 423, or no active storefront -> TenantInactiveError
- network failure, timeout, 408, 429, 5xx
  or a payload that does not validate   -> TransientUpstreamError
- anything else                         -> StoreLookupError
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from infrastructure.commerce import ApiError, CommerceApiClient
from infrastructure.commerce.endpoints import store_by_id, store_by_subdomain
from tenancy.domain.store import Store
from tenancy.domain.value_objects import TenantKey
from tenancy.infrastructure.models import PublicStoreModel
from tenancy.infrastructure.observability import (
    DefaultStoreRepositoryProbe,
    StoreRepositoryProbe,
)
from tenancy.ports.exceptions import (
    StoreLookupError,
    TenantInactiveError,
    TenantNotFoundError,
    TransientUpstreamError,
)
from tenancy.ports.repositories import IStoreRepository

NOT_FOUND_STATUS_CODES = frozenset({404})
INACTIVE_STATUS_CODES = frozenset({403, 410, 423})


class CommerceStoreRepository(IStoreRepository):
    """Read-only store repository backed by the commerce API."""

    def __init__(
        self,
        client: CommerceApiClient,
        probe: StoreRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with the shared commerce client.

        Args:
            client: Commerce API client (stamps locale and store headers)
            probe: Optional domain probe for observability
        """
        self._client = client
        self._probe = probe or DefaultStoreRepositoryProbe()

    async def get_by_subdomain(self, tenant_key: TenantKey) -> Store:
        """Retrieve the servable store addressed by a tenant key."""
        return await self._fetch(
            identifier=tenant_key.value,
            endpoint=store_by_subdomain(tenant_key.value),
        )

    async def get_by_id(self, store_id: str) -> Store:
        """Retrieve the servable store with a known id."""
        return await self._fetch(identifier=store_id, endpoint=store_by_id(store_id))

    async def _fetch(self, identifier: str, endpoint: str) -> Store:
        try:
            data = await self._client.get(endpoint)
        except ApiError as e:
            raise self._classify(identifier, e) from e

        store = self._to_store(identifier, data)

        if not store.is_servable:
            status = store.storefront.status.value if store.storefront else None
            self._probe.store_inactive(identifier, status=status)
            raise TenantInactiveError(identifier, store=store)

        self._probe.store_fetched(identifier, store_id=store.id)
        return store

    def _to_store(self, identifier: str, data: Any) -> Store:
        try:
            return PublicStoreModel.model_validate(data).to_domain()
        except ValidationError as e:
            self._probe.upstream_unavailable(
                identifier, status_code=None, reason="malformed_payload"
            )
            raise TransientUpstreamError(
                identifier, f"Malformed store payload for {identifier!r}"
            ) from e

    def _classify(self, identifier: str, error: ApiError) -> StoreLookupError:
        status_code = error.status_code

        if status_code in NOT_FOUND_STATUS_CODES:
            self._probe.store_not_found(identifier)
            return TenantNotFoundError(identifier)

        if status_code in INACTIVE_STATUS_CODES:
            self._probe.store_inactive(identifier, status=None)
            return TenantInactiveError(identifier)

        if error.is_transient:
            self._probe.upstream_unavailable(
                identifier, status_code=status_code, reason=error.message
            )
            return TransientUpstreamError(identifier, error.message)

        self._probe.unexpected_status(identifier, status_code=status_code)
        return StoreLookupError(identifier, error.message)
