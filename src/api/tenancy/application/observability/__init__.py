"""Domain-Oriented Observability for the tenancy application layer."""

from tenancy.application.observability.store_resolution_probe import (
    DefaultStoreResolutionProbe,
    StoreResolutionProbe,
)

__all__ = [
    "StoreResolutionProbe",
    "DefaultStoreResolutionProbe",
]
