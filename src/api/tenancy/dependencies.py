"""Dependency injection for the tenancy bounded context.

Composes the shared commerce API client (owned by the application lifespan)
with tenancy components (repository, resolution service).
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.commerce import CommerceApiClient
from infrastructure.dependencies import get_commerce_client
from infrastructure.settings import TenancySettings, get_tenancy_settings
from tenancy.application.observability import (
    DefaultStoreResolutionProbe,
    StoreResolutionProbe,
)
from tenancy.application.services import StoreResolutionService
from tenancy.infrastructure.store_repository import CommerceStoreRepository
from tenancy.ports.repositories import IStoreRepository


def get_store_resolution_probe() -> StoreResolutionProbe:
    """Get StoreResolutionProbe instance.

    Returns:
        DefaultStoreResolutionProbe instance for observability
    """
    return DefaultStoreResolutionProbe()


def get_store_repository(
    client: Annotated[CommerceApiClient, Depends(get_commerce_client)],
) -> IStoreRepository:
    """Get the store repository backed by the shared commerce client."""
    return CommerceStoreRepository(client=client)


def get_store_resolution_service(
    repository: Annotated[IStoreRepository, Depends(get_store_repository)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
    probe: Annotated[StoreResolutionProbe, Depends(get_store_resolution_probe)],
) -> StoreResolutionService:
    """Get StoreResolutionService instance.

    The service is cheap to build per request: its per-request memo lives on
    the request scope, not on the instance.
    """
    return StoreResolutionService(
        repository=repository,
        settings=settings,
        probe=probe,
    )
