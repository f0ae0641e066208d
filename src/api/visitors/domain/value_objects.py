"""Value objects for the visitors domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class VisitorIdentity:
    """Durable identity of an anonymous visitor.

    Attributes:
        visitor_id: UUID string; the cookie copy is authoritative.
        fingerprint: Device fingerprint, or None when it could not be computed.
        is_new_visitor: Whether the id was generated during this page load.
    """

    visitor_id: str
    fingerprint: str | None = None
    is_new_visitor: bool = False


@dataclass(frozen=True)
class TrackVisitorParams:
    """A single visit to report to the commerce API."""

    store_id: str
    visitor_id: str
    fingerprint: str | None = None
    user_agent: str | None = None
    language: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Wire representation; optional fields are left out when unset."""
        payload: dict[str, Any] = {
            "storeId": self.store_id,
            "visitorId": self.visitor_id,
        }
        if self.fingerprint:
            payload["fingerprint"] = self.fingerprint
        if self.user_agent:
            payload["userAgent"] = self.user_agent
        if self.language:
            payload["language"] = self.language
        return payload
