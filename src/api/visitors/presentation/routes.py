"""HTTP routes for visitor server actions."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status

from infrastructure.settings import CookieSettings, get_cookie_settings
from tenancy.application.services import StoreResolutionService
from tenancy.dependencies import get_store_resolution_service
from visitors.application.tracking import VisitorTrackingService
from visitors.dependencies import get_visitor_tracking_service
from visitors.domain.value_objects import TrackVisitorParams
from visitors.presentation.models import TrackVisitorRequest

router = APIRouter(
    prefix="/actions/visitors",
    tags=["visitors"],
)


@router.post(
    "/track",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def track_visitor(
    body: TrackVisitorRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    resolution: Annotated[StoreResolutionService, Depends(get_store_resolution_service)],
    tracking: Annotated[VisitorTrackingService, Depends(get_visitor_tracking_service)],
    cookie_settings: Annotated[CookieSettings, Depends(get_cookie_settings)],
) -> Response:
    """Report a visit without making the caller wait.

    Responds 204 immediately; the report is sent in a background task that
    still runs inside this request's scope, so it carries the store header.
    Nothing is reported when neither a store nor a visitor id is known.
    """
    store_id = await resolution.bind_action_context(request.cookies, cookie_settings)
    visitor_id = body.visitor_id or request.cookies.get(cookie_settings.visitor_id_name)

    if store_id and visitor_id:
        params = TrackVisitorParams(
            store_id=store_id,
            visitor_id=visitor_id,
            fingerprint=body.fingerprint,
            user_agent=body.user_agent or request.headers.get("user-agent"),
            language=body.language,
        )
        background_tasks.add_task(tracking.track, params)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
