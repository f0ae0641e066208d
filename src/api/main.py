"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.dependencies import create_commerce_client
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import (
    get_commerce_api_settings,
    get_cookie_settings,
    get_settings,
    get_tenancy_settings,
)
from infrastructure.version import __version__
from shared_kernel.middleware.request_scope import RequestScopeMiddleware
from storefront.presentation import routes as storefront_routes
from tenancy.presentation.middleware import ApexRoutingMiddleware
from visitors.presentation import routes as visitor_routes


@asynccontextmanager
async def storefront_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Shared commerce API client (one connection pool, closed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()

    api_settings = get_commerce_api_settings()
    client = create_commerce_client(api_settings)
    app.state.commerce_client = client
    probe.commerce_client_created(base_url=api_settings.base_url, timeout=api_settings.timeout)
    probe.application_started(version=__version__, environment=settings.environment)

    try:
        yield
    finally:
        await client.aclose()
        probe.commerce_client_closed()


def create_app() -> FastAPI:
    """Build the application with its middleware and routes."""
    settings = get_settings()
    tenancy_settings = get_tenancy_settings()
    cookie_settings = get_cookie_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant storefront",
        version=__version__,
        lifespan=storefront_lifespan,
    )

    # Starlette runs the last-added middleware first: the request scope must
    # be open before the apex redirect runs.
    app.add_middleware(
        ApexRoutingMiddleware,
        reserved_labels=tenancy_settings.reserved_labels,
        local_suffixes=tenancy_settings.local_suffixes,
    )
    app.add_middleware(
        RequestScopeMiddleware,
        default_locale=settings.default_locale,
        fallback_locale=settings.detection_fallback_locale,
        locale_cookie_name=cookie_settings.locale_name,
        locale_cookie_max_age=cookie_settings.locale_max_age,
        same_site=cookie_settings.same_site,
    )

    @app.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    app.include_router(storefront_routes.seo_router)
    app.include_router(storefront_routes.actions_router)
    app.include_router(visitor_routes.router)
    # Catch-all document route goes last
    app.include_router(storefront_routes.pages_router)

    return app


app = create_app()
