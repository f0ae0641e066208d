"""Fire-and-forget visit tracking.

Tracking must never break a page: failures are swallowed, never retried, and
only logged in development.
"""

from __future__ import annotations

import asyncio

from infrastructure.settings import StorefrontSettings
from visitors.application.observability import DefaultVisitorProbe, VisitorProbe
from visitors.domain.value_objects import TrackVisitorParams, VisitorIdentity
from visitors.ports.gateways import IVisitorTrackingGateway


class VisitorTrackingService:
    """Reports visits through the tracking gateway."""

    def __init__(
        self,
        gateway: IVisitorTrackingGateway,
        settings: StorefrontSettings,
        probe: VisitorProbe | None = None,
    ):
        self._gateway = gateway
        self._settings = settings
        self._probe = probe or DefaultVisitorProbe()

    async def track(self, params: TrackVisitorParams) -> None:
        """Report a visit. Never raises."""
        try:
            await self._gateway.track(params)
        except Exception as e:
            if self._settings.is_development:
                self._probe.tracking_failed(params.store_id, e)


class VisitorTracker:
    """Issues at most one visit report per page lifecycle.

    Renders may happen before the visitor identity is known; the report is
    sent on the first render that has both a store and an identity, and
    never again for this tracker.
    """

    def __init__(
        self,
        service: VisitorTrackingService,
        probe: VisitorProbe | None = None,
    ):
        self._service = service
        self._probe = probe or DefaultVisitorProbe()
        self._tracked = False
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def tracked(self) -> bool:
        return self._tracked

    def on_render(
        self,
        store_id: str | None,
        identity: VisitorIdentity | None,
        *,
        user_agent: str | None = None,
        language: str | None = None,
    ) -> asyncio.Task[None] | None:
        """Schedule the visit report if this is the first eligible render.

        Must be called from a running event loop.

        Returns:
            The detached task, or None when nothing was scheduled.
        """
        if self._tracked or identity is None or not store_id:
            return None

        self._tracked = True
        params = TrackVisitorParams(
            store_id=store_id,
            visitor_id=identity.visitor_id,
            fingerprint=identity.fingerprint,
            user_agent=user_agent,
            language=language,
        )
        self._probe.tracking_scheduled(store_id, identity.visitor_id)

        task = asyncio.create_task(self._service.track(params))
        # Keep a reference until done so the task is not garbage collected
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for scheduled reports to finish (page unload, tests)."""
        if self._tasks:
            await asyncio.gather(*self._tasks)
