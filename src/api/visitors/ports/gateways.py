"""Gateway and storage protocols (ports) for the visitors bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from visitors.domain.value_objects import TrackVisitorParams


@runtime_checkable
class IVisitorTrackingGateway(Protocol):
    """Reports visits to the commerce API."""

    async def track(self, params: TrackVisitorParams) -> None:
        """Report a visit.

        Raises:
            TrackingFailure: If the visit could not be reported
        """
        ...


@runtime_checkable
class ILocalStorage(Protocol):
    """Per-origin key/value storage of the client.

    Implementations may be disabled (private browsing): reads then return
    None and writes are dropped, never raising.
    """

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a value if present."""
        ...


@runtime_checkable
class IDeviceFingerprinter(Protocol):
    """Derives a stable fingerprint of the visitor's device."""

    async def fingerprint(self) -> str:
        """Return the device fingerprint.

        Raises:
            FingerprintUnavailableError: If the device signals are missing
        """
        ...
