"""Unit tests for the ClientRuntime.

The runtime is the client copy of the request context: it must agree with
the server on the first render and follow client-side navigation after.
"""

from __future__ import annotations

import httpx
import pytest

from hydration import BootstrapPayload, BrowserCookieJar, ClientRuntime, render_bootstrap_script
from infrastructure.commerce.endpoints import LANGUAGE_HEADER, STORE_ID_HEADER
from infrastructure.settings import CommerceApiSettings
from shared_kernel.locale import Locale
from shared_kernel.middleware.tenant_context import RequestContext


@pytest.fixture
def cookies() -> BrowserCookieJar:
    return BrowserCookieJar("shop1.example.com")


def make_runtime(bootstrap, cookies, cookie_settings) -> ClientRuntime:
    return ClientRuntime(bootstrap=bootstrap, cookies=cookies, cookie_settings=cookie_settings)


class TestInitialContext:
    """Tests for the context available before the first client call."""

    def test_bootstrap_store_is_available_immediately(self, cookies, cookie_settings):
        """The first client call must already carry the server-resolved store."""
        runtime = make_runtime(
            BootstrapPayload(store_id="abc123", locale=Locale.ARABIC), cookies, cookie_settings
        )

        assert runtime.request_context() == RequestContext(
            store_id="abc123", locale=Locale.ARABIC
        )
        assert runtime.store_provider.store_id == "abc123"
        assert cookies.get("sf_store_id") == "abc123"

    def test_from_document(self, cookies, cookie_settings):
        html = (
            "<html><head>"
            + render_bootstrap_script(BootstrapPayload(store_id="abc123"))
            + "</head><body></body></html>"
        )

        runtime = ClientRuntime.from_document(html, cookies, cookie_settings=cookie_settings)

        assert runtime.bootstrap.store_id == "abc123"
        assert runtime.store_id == "abc123"

    def test_cookie_used_without_bootstrap(self, cookies, cookie_settings):
        """Full reloads of documents without a payload fall back to the cookie."""
        cookies.set("sf_store_id", "xyz789", max_age=60)

        runtime = make_runtime(None, cookies, cookie_settings)

        assert runtime.store_id == "xyz789"

    def test_bootstrap_wins_over_stale_cookie(self, cookies, cookie_settings):
        cookies.set("sf_store_id", "old-store", max_age=60)

        runtime = make_runtime(BootstrapPayload(store_id="abc123"), cookies, cookie_settings)

        assert runtime.store_id == "abc123"
        assert cookies.get("sf_store_id") == "abc123"

    def test_no_store_anywhere(self, cookies, cookie_settings):
        runtime = make_runtime(None, cookies, cookie_settings)

        assert runtime.request_context() == RequestContext(store_id=None, locale=Locale.ENGLISH)

    def test_locale_cookie_wins_over_bootstrap(self, cookies, cookie_settings):
        cookies.set("sf_locale", "en", max_age=60)

        runtime = make_runtime(
            BootstrapPayload(store_id="abc123", locale=Locale.ARABIC), cookies, cookie_settings
        )

        assert runtime.locale is Locale.ENGLISH


class TestNavigation:
    """Tests for client-side navigation."""

    def test_navigate_to_another_store(self, cookies, cookie_settings):
        runtime = make_runtime(BootstrapPayload(store_id="abc123"), cookies, cookie_settings)

        runtime.navigate("xyz789")

        assert runtime.store_id == "xyz789"
        assert cookies.get("sf_store_id") == "xyz789"

    def test_non_tenant_route_clears_store(self, cookies, cookie_settings):
        """Leaving tenant scope hides the store even though the payload names one."""
        runtime = make_runtime(BootstrapPayload(store_id="abc123"), cookies, cookie_settings)

        runtime.navigate(tenant_route=False)

        assert runtime.store_id is None
        assert cookies.get("sf_store_id") is None
        assert not runtime.request_context().is_tenant_scoped

    def test_returning_to_tenant_route_restores_bootstrap_store(self, cookies, cookie_settings):
        runtime = make_runtime(BootstrapPayload(store_id="abc123"), cookies, cookie_settings)
        runtime.navigate(tenant_route=False)

        runtime.navigate()

        assert runtime.store_id == "abc123"
        assert cookies.get("sf_store_id") == "abc123"

    def test_set_locale_writes_cookie(self, cookies, cookie_settings):
        runtime = make_runtime(BootstrapPayload(store_id="abc123"), cookies, cookie_settings)

        runtime.set_locale(Locale.ARABIC)

        assert cookies.get("sf_locale") == "ar"
        assert runtime.locale is Locale.ARABIC


class TestRuntimeCommerceClient:
    """Tests for outbound calls made by the client runtime."""

    @pytest.mark.asyncio
    async def test_client_calls_carry_runtime_context(self, cookies, cookie_settings):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"success": True, "data": []})

        runtime = make_runtime(
            BootstrapPayload(store_id="abc123", locale=Locale.ARABIC), cookies, cookie_settings
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = runtime.commerce_client(
                settings=CommerceApiSettings(base_url="https://api.example.com/v1"),
                http_client=http_client,
            )
            await client.get("/public/products")
            runtime.navigate("xyz789")
            await client.get("/public/products")

        assert requests[0].headers[STORE_ID_HEADER] == "abc123"
        assert requests[0].headers[LANGUAGE_HEADER] == "ar"
        assert requests[1].headers[STORE_ID_HEADER] == "xyz789"

    @pytest.mark.asyncio
    async def test_unscoped_runtime_sends_no_store_header(self, cookies, cookie_settings):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"success": True, "data": {}})

        runtime = make_runtime(None, cookies, cookie_settings)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = runtime.commerce_client(
                settings=CommerceApiSettings(base_url="https://api.example.com/v1"),
                http_client=http_client,
            )
            await client.get("/public/stores/static-pages")

        assert STORE_ID_HEADER not in requests[0].headers
