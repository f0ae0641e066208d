"""Request scope middleware.

Opens a fresh ``RequestScope`` around every inbound request, so everything
the request does (store resolution, outbound API calls, background tasks it
schedules) shares one isolated context, and nothing leaks between
concurrently handled requests.

The middleware also negotiates the visitor locale: a valid locale cookie
wins; otherwise the Accept-Language header is negotiated and the result is
written back as a host-only cookie, because different stores may prefer
different locales.
"""

from __future__ import annotations

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from shared_kernel.locale import Locale, is_valid_locale, negotiate_locale
from shared_kernel.middleware.observability import (
    DefaultRequestScopeProbe,
    RequestScopeProbe,
)
from shared_kernel.request_scope import request_scope

REQUEST_ID_HEADER = "X-Request-Id"


class RequestScopeMiddleware(BaseHTTPMiddleware):
    """Bind each request to its own execution scope."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        default_locale: Locale = Locale.ENGLISH,
        fallback_locale: Locale = Locale.ARABIC,
        locale_cookie_name: str = "sf_locale",
        locale_cookie_max_age: int = 365 * 24 * 60 * 60,
        same_site: str = "lax",
        probe: RequestScopeProbe | None = None,
    ):
        super().__init__(app)
        self._default_locale = default_locale
        self._fallback_locale = fallback_locale
        self._locale_cookie_name = locale_cookie_name
        self._locale_cookie_max_age = locale_cookie_max_age
        self._same_site = same_site
        self._probe = probe or DefaultRequestScopeProbe()

    def _preferred_locale(self, request: Request) -> tuple[Locale, bool]:
        """Return the visitor locale and whether the cookie must be written."""
        cookie_value = request.cookies.get(self._locale_cookie_name)
        if is_valid_locale(cookie_value):
            self._probe.locale_negotiated(locale=str(cookie_value), source="cookie")
            return Locale(cookie_value), False

        locale = negotiate_locale(
            request.headers.get("accept-language"),
            fallback=self._fallback_locale,
        )
        self._probe.locale_negotiated(locale=locale.value, source="accept_language")
        return locale, True

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        host = request.headers.get("host", "")
        preferred_locale, write_cookie = self._preferred_locale(request)

        with request_scope(
            hostname=host,
            cookies=dict(request.cookies),
            preferred_locale=preferred_locale,
            locale=self._default_locale,
        ) as scope:
            with structlog.contextvars.bound_contextvars(
                request_id=scope.request_id,
                host=host,
            ):
                self._probe.scope_opened(request_id=scope.request_id, host=host)

                response = await call_next(request)

                if write_cookie:
                    # No Domain attribute: the cookie stays with this host
                    response.set_cookie(
                        self._locale_cookie_name,
                        preferred_locale.value,
                        max_age=self._locale_cookie_max_age,
                        path="/",
                        samesite=self._same_site,
                    )
                response.headers[REQUEST_ID_HEADER] = scope.request_id

                self._probe.scope_closed(
                    request_id=scope.request_id,
                    store_id=scope.store_id,
                    status_code=response.status_code,
                )
        return response
