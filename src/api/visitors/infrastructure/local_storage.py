"""In-memory local storage for the client runtime."""

from __future__ import annotations

from visitors.ports.gateways import ILocalStorage


class InMemoryLocalStorage(ILocalStorage):
    """Local storage held in memory for one client.

    Args:
        enabled: When False the storage behaves like a browser with storage
            disabled: every read misses and every write is dropped.
    """

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self._items: dict[str, str] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get_item(self, key: str) -> str | None:
        if not self._enabled:
            return None
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not self._enabled:
            return
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        """Drop every item (the visitor cleared site data)."""
        self._items.clear()
