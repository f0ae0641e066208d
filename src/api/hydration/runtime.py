"""Client runtime: the client-side owner of the request context.

One ``ClientRuntime`` corresponds to one page load. It reads the bootstrap
payload synchronously at construction, before any client-originated call can
be issued, and answers ``request_context()`` from its channels in order of
precedence:

1. the ``StoreProvider`` value (updated on client-side navigation);
2. the bootstrap payload rendered by the server;
3. the persisted store-id cookie (full reloads, or documents without a
   payload).

After an explicit navigation to a non-tenant route the runtime reports no
store until a tenant route is navigated to again, even though the bootstrap
payload still names one.
"""

from __future__ import annotations

import httpx

from hydration.bootstrap import BootstrapPayload, extract_bootstrap
from hydration.cookies import BrowserCookieJar
from hydration.observability import ClientRuntimeProbe, DefaultClientRuntimeProbe
from hydration.store_provider import StoreProvider
from infrastructure.commerce import CommerceApiClient
from infrastructure.settings import (
    CommerceApiSettings,
    CookieSettings,
    get_commerce_api_settings,
    get_cookie_settings,
)
from shared_kernel.locale import Locale, parse_locale
from shared_kernel.middleware.tenant_context import RequestContext


class ClientRuntime:
    """Client copy of the request context for one page load."""

    def __init__(
        self,
        bootstrap: BootstrapPayload | None,
        cookies: BrowserCookieJar,
        cookie_settings: CookieSettings | None = None,
        default_locale: Locale = Locale.ENGLISH,
        probe: ClientRuntimeProbe | None = None,
    ):
        """Initialize the runtime.

        Args:
            bootstrap: Payload rendered by the server, if the document had one.
            cookies: Cookies of the current host.
            cookie_settings: Cookie names and lifetimes.
            default_locale: Locale used when no channel names one.
            probe: Optional domain probe for observability.
        """
        self._bootstrap = bootstrap
        self._cookies = cookies
        self._cookie_settings = cookie_settings or get_cookie_settings()
        self._default_locale = default_locale
        self._probe = probe or DefaultClientRuntimeProbe()
        self._left_tenant_scope = False

        initial, source = self._initial_store_id()
        self._probe.runtime_started(store_id=initial, source=source)
        self.store_provider = StoreProvider(
            initial_store_id=initial,
            cookies=cookies,
            cookie_settings=self._cookie_settings,
            probe=self._probe,
        )

    @classmethod
    def from_document(
        cls,
        document: str,
        cookies: BrowserCookieJar,
        **kwargs,
    ) -> ClientRuntime:
        """Start a runtime from a server-rendered document."""
        return cls(bootstrap=extract_bootstrap(document), cookies=cookies, **kwargs)

    @property
    def bootstrap(self) -> BootstrapPayload | None:
        return self._bootstrap

    @property
    def cookies(self) -> BrowserCookieJar:
        return self._cookies

    def _initial_store_id(self) -> tuple[str | None, str]:
        if self._bootstrap is not None and self._bootstrap.store_id:
            return self._bootstrap.store_id, "bootstrap"
        cookie_value = self._cookies.get(self._cookie_settings.store_id_name)
        if cookie_value:
            return cookie_value, "cookie"
        return None, "none"

    @property
    def store_id(self) -> str | None:
        """Store id for client-originated calls, by channel precedence."""
        if self._left_tenant_scope:
            return None
        if self.store_provider.store_id:
            return self.store_provider.store_id
        if self._bootstrap is not None and self._bootstrap.store_id:
            return self._bootstrap.store_id
        return self._cookies.get(self._cookie_settings.store_id_name)

    @property
    def locale(self) -> Locale:
        cookie_locale = self._cookies.get(self._cookie_settings.locale_name)
        if cookie_locale:
            return parse_locale(cookie_locale, default=self._default_locale)
        if self._bootstrap is not None:
            return self._bootstrap.locale
        return self._default_locale

    def request_context(self) -> RequestContext:
        """Snapshot the client context; read before every outbound call."""
        return RequestContext(store_id=self.store_id, locale=self.locale)

    def set_locale(self, locale: Locale) -> None:
        """Switch the visitor locale (language switcher)."""
        self._cookies.set(
            self._cookie_settings.locale_name,
            locale.value,
            max_age=self._cookie_settings.locale_max_age,
            same_site=self._cookie_settings.same_site,
        )

    def navigate(self, store_id: str | None = None, *, tenant_route: bool = True) -> None:
        """Propagate a client-side navigation.

        Args:
            store_id: Store of the destination route, when it names one.
                ``None`` on a tenant route keeps the current store, or restores
                the bootstrap store after a non-tenant route.
            tenant_route: False when navigating to a non-tenant route; the
                store is then cleared from every client channel.
        """
        if not tenant_route:
            self._left_tenant_scope = True
            self.store_provider.leave_store()
            return

        self._left_tenant_scope = False
        restored = store_id or self.store_id
        if restored:
            self.store_provider.set_store_id(restored)

    def commerce_client(
        self,
        settings: CommerceApiSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> CommerceApiClient:
        """Create a commerce client reading this runtime's context."""
        settings = settings or get_commerce_api_settings()
        return CommerceApiClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            context_source=self.request_context,
            http_client=http_client,
        )
