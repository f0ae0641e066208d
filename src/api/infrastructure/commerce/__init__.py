"""Commerce API client and its envelope models."""

from infrastructure.commerce.client import CommerceApiClient
from infrastructure.commerce.exceptions import ApiError
from infrastructure.commerce.models import Page, PaginationMeta

__all__ = [
    "ApiError",
    "CommerceApiClient",
    "Page",
    "PaginationMeta",
]
