"""Visitor identity and visit tracking bounded context.

The client-side surface: ``VisitorIdentityManager`` keeps a durable visitor
id and a cached device fingerprint, ``VisitorTracker`` reports a visit at
most once per page lifecycle through ``VisitorTrackingService``.
"""

from visitors.application.identity import VisitorIdentityManager
from visitors.application.tracking import VisitorTracker, VisitorTrackingService
from visitors.domain.value_objects import TrackVisitorParams, VisitorIdentity
from visitors.infrastructure.fingerprint import DeviceFingerprinter, DeviceSignals
from visitors.infrastructure.local_storage import InMemoryLocalStorage

__all__ = [
    "DeviceFingerprinter",
    "DeviceSignals",
    "InMemoryLocalStorage",
    "TrackVisitorParams",
    "VisitorIdentity",
    "VisitorIdentityManager",
    "VisitorTracker",
    "VisitorTrackingService",
]
