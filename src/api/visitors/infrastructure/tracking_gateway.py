"""Commerce API implementation of IVisitorTrackingGateway."""

from __future__ import annotations

from infrastructure.commerce import ApiError, CommerceApiClient
from infrastructure.commerce.endpoints import VISITOR_TRACK
from visitors.domain.value_objects import TrackVisitorParams
from visitors.ports.exceptions import TrackingFailure
from visitors.ports.gateways import IVisitorTrackingGateway


class CommerceVisitorTrackingGateway(IVisitorTrackingGateway):
    """Reports visits through the shared commerce client.

    The endpoint answers 204 No Content.
    """

    def __init__(self, client: CommerceApiClient):
        self._client = client

    async def track(self, params: TrackVisitorParams) -> None:
        try:
            await self._client.post_no_content(VISITOR_TRACK, params.to_payload())
        except ApiError as e:
            raise TrackingFailure(e.message) from e
