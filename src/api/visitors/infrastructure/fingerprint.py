"""Device fingerprinting.

The fingerprint is a SHA-256 digest of canonicalized device signals. It is
stable for a device as long as its signals are, and carries no signal in
the clear. Hashing runs in a worker thread so the event loop never blocks on
it.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
from collections.abc import Callable
from dataclasses import asdict, dataclass

from visitors.ports.exceptions import FingerprintUnavailableError
from visitors.ports.gateways import IDeviceFingerprinter


@dataclass(frozen=True)
class DeviceSignals:
    """Browser and device attributes the fingerprint is derived from."""

    user_agent: str
    language: str | None = None
    languages: tuple[str, ...] = ()
    platform: str | None = None
    timezone: str | None = None
    screen_resolution: tuple[int, int] | None = None
    color_depth: int | None = None
    hardware_concurrency: int | None = None
    device_memory: float | None = None
    touch_support: bool = False

    def canonical(self) -> str:
        """Deterministic serialization: sorted keys, no whitespace."""
        return json.dumps(asdict(self), sort_keys=True, separators=(",", ":"))


def compute_fingerprint(signals: DeviceSignals) -> str:
    """Hash device signals into a hex fingerprint.

    Raises:
        FingerprintUnavailableError: If the signals carry no user agent.
    """
    if not signals.user_agent:
        raise FingerprintUnavailableError("device signals carry no user agent")
    return hashlib.sha256(signals.canonical().encode("utf-8")).hexdigest()


class DeviceFingerprinter(IDeviceFingerprinter):
    """Computes fingerprints off the event loop."""

    def __init__(self, signals_source: Callable[[], DeviceSignals]):
        """Initialize the fingerprinter.

        Args:
            signals_source: Collects the current device signals. May raise.
        """
        self._signals_source = signals_source

    async def fingerprint(self) -> str:
        """Collect signals and hash them in a worker thread."""
        return await asyncio.to_thread(self._collect_and_hash)

    def _collect_and_hash(self) -> str:
        return compute_fingerprint(self._signals_source())
