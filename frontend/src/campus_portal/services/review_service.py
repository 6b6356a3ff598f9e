"""
Review Service
"""

from typing import List

from campus_portal.schemas.review import RatingSummary, Review, ReviewCreate
from campus_portal.services.api_client import ApiClient


class ReviewService:
    """Service for /reviews"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def for_facility(self, facility_id: int) -> List[Review]:
        return [Review.model_validate(item) for item in await self.api.get(f"/reviews/facility/{facility_id}")]

    async def rating(self, facility_id: int) -> RatingSummary:
        return RatingSummary.model_validate(await self.api.get(f"/reviews/facility/{facility_id}/rating"))

    async def submit(self, review: ReviewCreate) -> Review:
        return Review.model_validate(await self.api.post("/reviews", json=review.to_api()))
