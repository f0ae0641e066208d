"""HTTP routes of the storefront: documents, SEO files and catalog actions.

The document catch-all is registered on its own router, so the application
can include it after every other route.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from infrastructure.settings import CookieSettings, get_cookie_settings
from storefront.application.observability import PageProbe
from storefront.application.pages import StorefrontPageService
from storefront.application.reviews import ReviewService
from storefront.application.seo import SitemapService, build_robots
from storefront.dependencies import (
    get_page_probe,
    get_review_service,
    get_sitemap_service,
    get_storefront_page_service,
)
from storefront.presentation.documents import (
    render_landing,
    render_status,
    render_storefront,
)
from storefront.presentation.models import ReviewResultResponse, SubmitReviewRequest
from tenancy.application.services import StoreResolutionService
from tenancy.dependencies import get_store_resolution_service
from tenancy.domain.value_objects import StoreErrorType

SEO_CACHE_SECONDS = 86400
SITEMAP_CACHE_SECONDS = 3600

seo_router = APIRouter(tags=["seo"])
actions_router = APIRouter(prefix="/actions/products", tags=["actions"])
pages_router = APIRouter(tags=["pages"])


@seo_router.get("/robots.txt", response_class=PlainTextResponse)
async def robots(request: Request) -> PlainTextResponse:
    """Per-host robots file pointing at the host's sitemap."""
    hostname = request.headers.get("host") or "localhost"
    return PlainTextResponse(
        build_robots(hostname),
        headers={
            "Cache-Control": (
                f"public, s-maxage={SEO_CACHE_SECONDS}, "
                f"stale-while-revalidate={SEO_CACHE_SECONDS}"
            )
        },
    )


@seo_router.get("/sitemap.xml")
async def sitemap(
    request: Request,
    service: Annotated[SitemapService, Depends(get_sitemap_service)],
    probe: Annotated[PageProbe, Depends(get_page_probe)],
) -> Response:
    """Per-store sitemap.

    Returns:
        200 with the sitemap, 404 when the host names no servable store,
        500 when generation fails.
    """
    hostname = request.headers.get("host", "")
    try:
        xml = await service.build(hostname)
    except Exception as e:
        probe.sitemap_generation_failed(e)
        return PlainTextResponse(
            "Error generating sitemap",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if xml is None:
        return PlainTextResponse("Store not found", status_code=status.HTTP_404_NOT_FOUND)

    return Response(
        xml,
        media_type="application/xml",
        headers={
            "Cache-Control": (
                f"public, s-maxage={SITEMAP_CACHE_SECONDS}, "
                f"stale-while-revalidate={SITEMAP_CACHE_SECONDS}"
            )
        },
    )


@actions_router.post("/{product_id}/reviews")
async def submit_review(
    product_id: str,
    body: SubmitReviewRequest,
    request: Request,
    resolution: Annotated[StoreResolutionService, Depends(get_store_resolution_service)],
    service: Annotated[ReviewService, Depends(get_review_service)],
    cookie_settings: Annotated[CookieSettings, Depends(get_cookie_settings)],
) -> ReviewResultResponse:
    """Submit a product review in the visitor's current store.

    Upstream rejections are returned as ``{"success": false, "error": ...}``
    with status 200, so the form can show the message.
    """
    await resolution.bind_action_context(request.cookies, cookie_settings)
    result = await service.submit(product_id, body.to_domain())
    return ReviewResultResponse.from_domain(result)


async def _render_document(
    request: Request,
    service: StorefrontPageService,
) -> HTMLResponse:
    hostname = request.headers.get("host", "")
    page = await service.assemble(request.url.path, hostname)
    resolved = page.resolved

    if not resolved.is_tenant_host:
        return HTMLResponse(render_landing(page))

    if resolved.store is not None:
        return HTMLResponse(render_storefront(page))

    error = resolved.error
    if error is not None and error.type is StoreErrorType.NOT_FOUND:
        return HTMLResponse(
            render_status(
                page,
                heading="Store not found",
                message="The store you are looking for does not exist.",
            ),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    if error is not None and error.type is StoreErrorType.INACTIVE:
        message = "This store is not available right now."
    else:
        message = "We could not load this store. Please try again shortly."
    return HTMLResponse(
        render_status(page, heading="Store unavailable", message=message),
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@pages_router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    service: Annotated[StorefrontPageService, Depends(get_storefront_page_service)],
) -> HTMLResponse:
    """Storefront home document."""
    return await _render_document(request, service)


@pages_router.get("/{path:path}", response_class=HTMLResponse)
async def page(
    path: str,
    request: Request,
    service: Annotated[StorefrontPageService, Depends(get_storefront_page_service)],
) -> HTMLResponse:
    """Any other storefront document (products, categories, static pages...)."""
    return await _render_document(request, service)
