"""Pydantic models for storefront action requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from storefront.domain.value_objects import ProductReview, ReviewResult


class SubmitReviewRequest(BaseModel):
    """Request model for submitting a product review."""

    name: str = Field(..., description="Reviewer display name", min_length=1, max_length=100)
    stars: int = Field(..., description="Rating", ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)

    def to_domain(self) -> ProductReview:
        return ProductReview(name=self.name, stars=self.stars, comment=self.comment)


class ReviewResultResponse(BaseModel):
    """Response model for a review submission."""

    success: bool
    error: str | None = None

    @classmethod
    def from_domain(cls, result: ReviewResult) -> ReviewResultResponse:
        return cls(success=result.success, error=result.error)
