"""Reactive holder of the client-side store id.

The provider is the single writer of the store-id cookie. Every change is
persisted to the cookie in the same synchronous step as the in-memory
update, before subscribers are notified, so a full page reload issued from
a subscriber already sees the new value.
"""

from __future__ import annotations

from collections.abc import Callable

from hydration.cookies import BrowserCookieJar
from hydration.observability import ClientRuntimeProbe, DefaultClientRuntimeProbe
from infrastructure.settings import CookieSettings

StoreSubscriber = Callable[[str | None], None]


class StoreProvider:
    """Client copy of the active store id."""

    def __init__(
        self,
        initial_store_id: str | None,
        cookies: BrowserCookieJar,
        cookie_settings: CookieSettings,
        probe: ClientRuntimeProbe | None = None,
    ):
        self._store_id = initial_store_id or None
        self._cookies = cookies
        self._cookie_settings = cookie_settings
        self._probe = probe or DefaultClientRuntimeProbe()
        self._subscribers: list[StoreSubscriber] = []

        if self._store_id:
            self._persist(self._store_id)

    @property
    def store_id(self) -> str | None:
        return self._store_id

    def subscribe(self, callback: StoreSubscriber) -> Callable[[], None]:
        """Register ``callback`` for store id changes.

        Returns:
            A function that removes the subscription. Calling it twice is a
            no-op.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set_store_id(self, store_id: str) -> None:
        """Make ``store_id`` the active store.

        Raises:
            ValueError: If ``store_id`` is empty. Leaving a store goes through
                ``leave_store`` so the value never silently regresses.
        """
        if not store_id:
            raise ValueError("store_id must be non-empty; use leave_store() to clear it")

        previous = self._store_id
        if store_id == previous:
            return

        self._store_id = store_id
        self._persist(store_id)
        self._probe.store_changed(previous=previous, current=store_id)
        self._notify()

    def leave_store(self) -> None:
        """Clear the active store on navigation to a non-tenant route."""
        previous = self._store_id
        self._store_id = None
        self._cookies.delete(self._cookie_settings.store_id_name)
        self._probe.store_left(previous=previous)
        if previous is not None:
            self._notify()

    def _persist(self, store_id: str) -> None:
        self._cookies.set(
            self._cookie_settings.store_id_name,
            store_id,
            max_age=self._cookie_settings.store_id_max_age,
            same_site=self._cookie_settings.same_site,
        )

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self._store_id)
            except Exception as e:
                self._probe.subscriber_failed(e)
