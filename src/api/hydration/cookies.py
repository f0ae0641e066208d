"""Host-bound cookie jar of the client runtime.

Models the cookies a browser holds for one storefront host. Cookies written
here are host-only: no ``Domain`` attribute is set, so a store id persisted
on ``shop1.example.com`` is never sent to ``shop2.example.com``.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from http.cookiejar import Cookie
from urllib.parse import quote, unquote

import httpx


class BrowserCookieJar:
    """Cookies held by the client for a single host."""

    def __init__(self, host: str, clock: Callable[[], float] = time.time):
        """Initialize the jar.

        Args:
            host: Host the cookies belong to (port is ignored).
            clock: Seconds-since-epoch source, used for expiry.
        """
        self._host = host.split(":", 1)[0].lower()
        self._clock = clock
        self._cookies = httpx.Cookies()

    @property
    def host(self) -> str:
        return self._host

    def _find(self, name: str) -> Cookie | None:
        now = int(self._clock())
        for cookie in self._cookies.jar:
            if cookie.name == name and not cookie.is_expired(now):
                return cookie
        return None

    def get(self, name: str) -> str | None:
        """Return the decoded value of a live cookie, or None."""
        cookie = self._find(name)
        if cookie is None or cookie.value is None:
            return None
        return unquote(cookie.value)

    def attributes(self, name: str) -> Cookie | None:
        """Return the stored cookie with its attributes, or None."""
        return self._find(name)

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: int,
        path: str = "/",
        same_site: str = "lax",
    ) -> None:
        """Write a host-only cookie.

        Args:
            name: Cookie name.
            value: Raw value; percent-encoded on write.
            max_age: Lifetime in seconds. Zero or less deletes the cookie.
            path: Cookie path.
            same_site: SameSite attribute.
        """
        if max_age <= 0:
            self.delete(name, path=path)
            return

        cookie = Cookie(
            version=0,
            name=name,
            value=quote(value, safe=""),
            port=None,
            port_specified=False,
            domain=self._host,
            domain_specified=False,
            domain_initial_dot=False,
            path=path,
            path_specified=True,
            secure=False,
            expires=int(self._clock()) + max_age,
            discard=False,
            comment=None,
            comment_url=None,
            rest={"SameSite": same_site},
        )
        self._cookies.jar.set_cookie(cookie)

    def delete(self, name: str, path: str = "/") -> None:
        """Remove a cookie if present."""
        try:
            self._cookies.jar.clear(self._host, path, name)
        except KeyError:
            return

    def absorb(self, response: httpx.Response) -> None:
        """Store the cookies a server response sets (``Set-Cookie``)."""
        self._cookies.extract_cookies(response)

    def as_dict(self) -> dict[str, str]:
        """Live cookies as a name to decoded value mapping."""
        now = int(self._clock())
        return {
            cookie.name: unquote(cookie.value or "")
            for cookie in self._cookies.jar
            if not cookie.is_expired(now)
        }
