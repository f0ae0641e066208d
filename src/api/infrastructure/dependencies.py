"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources (the commerce API connection pool).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from fastapi import Request

from infrastructure.commerce import CommerceApiClient
from infrastructure.observability import DefaultCommerceClientProbe
from infrastructure.settings import CommerceApiSettings


def create_commerce_client(settings: CommerceApiSettings) -> CommerceApiClient:
    """Create the application-scoped commerce API client.

    The client is shared across all requests; it reads the per-request
    context before every call, so it holds no tenant state itself.
    """
    return CommerceApiClient(
        base_url=settings.base_url,
        timeout=settings.timeout,
        probe=DefaultCommerceClientProbe(
            enable_request_logging=settings.enable_logging,
        ),
    )


def get_commerce_client(request: Request) -> CommerceApiClient:
    """Get the commerce API client created by the application lifespan.

    Returns:
        The shared CommerceApiClient stored on ``app.state``.
    """
    return request.app.state.commerce_client
