"""Product review submission."""

from __future__ import annotations

from storefront.application.observability import DefaultPageProbe, PageProbe
from storefront.domain.value_objects import ProductReview, ReviewResult
from storefront.ports.exceptions import ReviewSubmissionError
from storefront.ports.gateways import ICatalogGateway


class ReviewService:
    """Submits reviews in the current request's store."""

    def __init__(self, gateway: ICatalogGateway, probe: PageProbe | None = None):
        self._gateway = gateway
        self._probe = probe or DefaultPageProbe()

    async def submit(self, product_id: str, review: ProductReview) -> ReviewResult:
        """Submit a review; upstream rejections become a failed result."""
        try:
            await self._gateway.submit_review(product_id, review)
        except ReviewSubmissionError as e:
            self._probe.review_rejected(product_id, message=str(e))
            return ReviewResult(success=False, error=str(e))
        return ReviewResult(success=True)
