"""Domain-Oriented Observability for tenancy infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from tenancy.infrastructure.observability.store_repository_probe import (
    DefaultStoreRepositoryProbe,
    StoreRepositoryProbe,
)

__all__ = [
    "StoreRepositoryProbe",
    "DefaultStoreRepositoryProbe",
]
