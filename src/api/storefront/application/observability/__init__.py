"""Domain-Oriented Observability for the storefront application layer."""

from storefront.application.observability.page_probe import (
    DefaultPageProbe,
    PageProbe,
)

__all__ = [
    "PageProbe",
    "DefaultPageProbe",
]
