"""Visitor identity manager.

Flow:
1. Look for the visitor id in the cookie (authoritative).
2. Fall back to the local storage mirror.
3. Generate a new UUID v4 if neither has one.
4. Always write the id back to both, refreshing the cookie lifetime.

The device fingerprint is computed once and cached in local storage.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

from hydration.cookies import BrowserCookieJar
from infrastructure.settings import CookieSettings, get_cookie_settings
from visitors.application.observability import DefaultVisitorProbe, VisitorProbe
from visitors.domain.value_objects import VisitorIdentity
from visitors.ports.gateways import IDeviceFingerprinter, ILocalStorage

VISITOR_ID_STORAGE_KEY = "sf_visitor_id"
VISITOR_FINGERPRINT_KEY = "sf_visitor_fp"


def _new_visitor_id() -> str:
    return str(uuid.uuid4())


class VisitorIdentityManager:
    """Maintains the visitor id and fingerprint of one client."""

    def __init__(
        self,
        cookies: BrowserCookieJar,
        storage: ILocalStorage,
        fingerprinter: IDeviceFingerprinter,
        cookie_settings: CookieSettings | None = None,
        probe: VisitorProbe | None = None,
        id_factory: Callable[[], str] = _new_visitor_id,
    ):
        self._cookies = cookies
        self._storage = storage
        self._fingerprinter = fingerprinter
        self._cookie_settings = cookie_settings or get_cookie_settings()
        self._probe = probe or DefaultVisitorProbe()
        self._id_factory = id_factory
        self._is_new_visitor = False
        self._fingerprint: str | None = None

    def ensure_visitor_id(self) -> str:
        """Return the visitor id, creating and persisting one if needed."""
        visitor_id = self._cookies.get(self._cookie_settings.visitor_id_name)
        if visitor_id:
            self._probe.visitor_id_restored(visitor_id, source="cookie")
        else:
            visitor_id = self._storage.get_item(VISITOR_ID_STORAGE_KEY)
            if visitor_id:
                self._probe.visitor_id_restored(visitor_id, source="local_storage")

        if not visitor_id:
            visitor_id = self._id_factory()
            self._is_new_visitor = True
            self._probe.visitor_id_generated(visitor_id)

        self._cookies.set(
            self._cookie_settings.visitor_id_name,
            visitor_id,
            max_age=self._cookie_settings.visitor_id_max_age,
            same_site=self._cookie_settings.same_site,
        )
        self._storage.set_item(VISITOR_ID_STORAGE_KEY, visitor_id)
        return visitor_id

    async def ensure_fingerprint(self) -> str:
        """Return the device fingerprint, or "" when it cannot be computed."""
        if self._fingerprint:
            return self._fingerprint

        cached = self._storage.get_item(VISITOR_FINGERPRINT_KEY)
        if cached:
            self._fingerprint = cached
            return cached

        try:
            fingerprint = await self._fingerprinter.fingerprint()
        except Exception as e:
            self._probe.fingerprint_failed(e)
            return ""

        self._fingerprint = fingerprint
        self._storage.set_item(VISITOR_FINGERPRINT_KEY, fingerprint)
        return fingerprint

    async def identify(self) -> VisitorIdentity:
        """Resolve the full identity of the visitor."""
        visitor_id = self.ensure_visitor_id()
        fingerprint = await self.ensure_fingerprint()
        return VisitorIdentity(
            visitor_id=visitor_id,
            fingerprint=fingerprint or None,
            is_new_visitor=self._is_new_visitor,
        )
