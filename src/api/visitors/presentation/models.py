"""Pydantic models for visitor action requests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TrackVisitorRequest(BaseModel):
    """Request model for the visit tracking action.

    The store is not part of the body: it is taken from the request context
    (store-id cookie, or the request host).
    """

    model_config = ConfigDict(populate_by_name=True)

    visitor_id: str | None = Field(
        default=None,
        alias="visitorId",
        description="Visitor id; defaults to the visitor cookie",
        max_length=64,
    )
    fingerprint: str | None = Field(default=None, max_length=128)
    user_agent: str | None = Field(default=None, alias="userAgent", max_length=512)
    language: str | None = Field(default=None, max_length=35)
