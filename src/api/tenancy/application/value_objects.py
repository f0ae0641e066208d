"""Application-layer value objects for the tenancy bounded context.

``ResolvedStore`` is the outcome every page call site receives from store
resolution: either a servable store, or a ``StoreError`` telling the
presentation layer which experience to render.
"""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.store import Store
from tenancy.domain.value_objects import StoreErrorType, TenantKey


@dataclass(frozen=True)
class StoreError:
    """Why a request could not be bound to a servable store."""

    type: StoreErrorType
    message: str
    tenant_key: TenantKey | None = None

    @property
    def is_terminal(self) -> bool:
        """Not-found and inactive stores will not recover on retry."""
        return self.type in (StoreErrorType.NOT_FOUND, StoreErrorType.INACTIVE)


@dataclass(frozen=True)
class ResolvedStore:
    """Result of resolving the store for the current request.

    Exactly one of three shapes:
    - ``store`` set: the request is bound to a servable store;
    - ``error`` set: the host names a store that cannot be served;
    - neither set: the host is not tenant-scoped (platform apex domain).
    """

    store: Store | None = None
    tenant_key: TenantKey | None = None
    error: StoreError | None = None

    @property
    def is_tenant_host(self) -> bool:
        return self.tenant_key is not None

    @property
    def store_id(self) -> str | None:
        return self.store.id if self.store is not None else None
