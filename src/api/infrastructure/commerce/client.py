"""Async client for the upstream commerce API.

The client is shared by every request (one connection pool per process), so
it holds no tenant state of its own. Immediately before each call it asks its
``context_source`` for the current ``RequestContext`` and stamps:

- ``Accept-Language`` with the context locale, always;
- ``X-Store-Id`` with the context store id, only when one is set. The header
  is omitted rather than sent empty, so the API can tell platform-level
  queries from tenant-scoped ones.

On the server the context source is the request-scoped context store; the
client runtime passes its own reader instead.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from infrastructure.commerce.endpoints import LANGUAGE_HEADER, STORE_ID_HEADER
from infrastructure.commerce.exceptions import ApiError
from infrastructure.commerce.models import Page, ResponseEnvelope
from infrastructure.observability.probes import (
    CommerceClientProbe,
    DefaultCommerceClientProbe,
)
from shared_kernel.middleware.tenant_context import (
    RequestContext,
    get_request_context,
)

DEFAULT_HEADERS = {"Content-Type": "application/json"}


class CommerceApiClient:
    """Commerce API client with per-call context header injection."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        context_source: Callable[[], RequestContext] = get_request_context,
        http_client: httpx.AsyncClient | None = None,
        probe: CommerceClientProbe | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL every endpoint is appended to.
            timeout: Default per-request timeout in seconds.
            context_source: Callable returning the context to stamp onto each
                call. Called once per call, right before sending.
            http_client: Optional preconfigured httpx client (tests inject one
                backed by ``httpx.MockTransport``). Owned by the caller.
            probe: Optional domain probe for observability.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._context_source = context_source
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient()
        self._probe = probe or DefaultCommerceClientProbe()

    async def aclose(self) -> None:
        """Close the underlying connection pool if this client created it."""
        if self._owns_http_client:
            await self._http.aclose()

    def _request_headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        """Build headers from the context as it is right now."""
        context = self._context_source()

        headers = {**DEFAULT_HEADERS, LANGUAGE_HEADER: context.locale.value}
        if context.store_id:
            headers[STORE_ID_HEADER] = context.store_id

        if extra:
            headers.update(extra)
        return headers

    async def _send(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        request_headers = self._request_headers(headers)
        self._probe.request_sent(
            method=method,
            endpoint=endpoint,
            store_id=request_headers.get(STORE_ID_HEADER),
            locale=request_headers[LANGUAGE_HEADER],
        )

        try:
            return await self._http.request(
                method,
                f"{self._base_url}{endpoint}",
                json=json,
                params=params,
                headers=request_headers,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except httpx.TimeoutException as e:
            self._probe.request_timed_out(method=method, endpoint=endpoint)
            raise ApiError(408, "Request timeout") from e
        except httpx.HTTPError as e:
            self._probe.transport_failed(method=method, endpoint=endpoint, error=e)
            raise ApiError(None, f"Failed to reach commerce API: {e}") from e

    @staticmethod
    def _is_json(response: httpx.Response) -> bool:
        return "application/json" in response.headers.get("content-type", "")

    def _raise_for_error(self, method: str, endpoint: str, response: httpx.Response) -> None:
        """Raise ApiError for non-2xx responses, using the body's message if any."""
        if response.is_success:
            return

        message = f"HTTP {response.status_code}: {response.reason_phrase}"
        code: str | None = None

        if self._is_json(response):
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                error = body.get("error")
                if isinstance(error, dict):
                    message = error.get("message") or body.get("message") or message
                    code = error.get("code")
                else:
                    message = body.get("message") or message

        self._probe.request_failed(
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            message=message,
        )
        raise ApiError(response.status_code, message, code)

    def _envelope(self, method: str, endpoint: str, response: httpx.Response) -> ResponseEnvelope:
        self._raise_for_error(method, endpoint, response)

        if not self._is_json(response):
            raise ApiError(500, "Expected JSON response from API")

        try:
            return ResponseEnvelope.model_validate_json(response.content)
        except ValidationError as e:
            raise ApiError(500, "Malformed response envelope from API") from e

    async def get(self, endpoint: str, **options: Any) -> Any:
        """GET ``endpoint`` and return the envelope's ``data``."""
        response = await self._send("GET", endpoint, **options)
        return self._envelope("GET", endpoint, response).data

    async def post(self, endpoint: str, data: Any = None, **options: Any) -> Any:
        """POST ``data`` as JSON and return the envelope's ``data``."""
        response = await self._send("POST", endpoint, json=data, **options)
        return self._envelope("POST", endpoint, response).data

    async def post_no_content(self, endpoint: str, data: Any = None, **options: Any) -> None:
        """POST ``data`` to an endpoint that answers 204 No Content."""
        response = await self._send("POST", endpoint, json=data, **options)
        self._raise_for_error("POST", endpoint, response)

    async def put(self, endpoint: str, data: Any = None, **options: Any) -> Any:
        """PUT ``data`` as JSON and return the envelope's ``data``."""
        response = await self._send("PUT", endpoint, json=data, **options)
        return self._envelope("PUT", endpoint, response).data

    async def delete(self, endpoint: str, **options: Any) -> Any:
        """DELETE ``endpoint`` and return the envelope's ``data``."""
        response = await self._send("DELETE", endpoint, **options)
        return self._envelope("DELETE", endpoint, response).data

    async def get_paginated(self, endpoint: str, **options: Any) -> Page[Any]:
        """GET a paginated endpoint.

        Backend format: ``{success, data: [...], meta: {timestamp, pagination}}``.
        Transformed to ``Page(items, pagination)``.

        Raises:
            ApiError: If the response carries no pagination metadata.
        """
        response = await self._send("GET", endpoint, **options)
        envelope = self._envelope("GET", endpoint, response)

        if envelope.meta.pagination is None:
            raise ApiError(500, "Expected paginated response but pagination meta is missing")

        items = envelope.data if isinstance(envelope.data, list) else []
        return Page(items=items, pagination=envelope.meta.pagination)
