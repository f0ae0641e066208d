"""Apex-domain routing middleware.

A host that names no store (the platform apex domain, ``www``, an IP
literal) only serves the platform landing page. Any other path on such a
host is redirected to ``/``. Health checks, robots/sitemap files, server
actions and static assets (dotted paths) pass through untouched.
"""

from __future__ import annotations

from collections.abc import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from tenancy.domain.hostname import (
    DEFAULT_LOCAL_SUFFIXES,
    DEFAULT_RESERVED_LABELS,
    is_tenant_host,
)

PASSTHROUGH_PREFIXES = ("/health", "/actions/", "/static/")


def is_apex_allowed_path(path: str) -> bool:
    """Whether ``path`` may be served on a non-tenant host."""
    if path == "/" or path.startswith(PASSTHROUGH_PREFIXES):
        return True
    # robots.txt, sitemap.xml, favicon.svg, ...
    return "." in path.rsplit("/", 1)[-1]


class ApexRoutingMiddleware(BaseHTTPMiddleware):
    """Redirect non-tenant hosts to the landing page."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        reserved_labels: Iterable[str] = DEFAULT_RESERVED_LABELS,
        local_suffixes: Iterable[str] = DEFAULT_LOCAL_SUFFIXES,
    ):
        super().__init__(app)
        self._reserved_labels = frozenset(reserved_labels)
        self._local_suffixes = frozenset(local_suffixes)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        host = request.headers.get("host", "")
        path = request.url.path

        if is_apex_allowed_path(path) or is_tenant_host(
            host, self._reserved_labels, self._local_suffixes
        ):
            return await call_next(request)

        return RedirectResponse(url="/", status_code=307)
