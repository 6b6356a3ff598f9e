"""
Review Schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from campus_portal.schemas.base import ApiModel, Ref
from campus_portal.schemas.facility import FacilitySummary
from campus_portal.schemas.user import UserSummary

RATING_LABELS = ["", "Poor", "Fair", "Good", "Great", "Excellent"]


class Review(ApiModel):
    id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    facility: Optional[FacilitySummary] = None
    booking: Optional[Ref] = None

    @property
    def author_initials(self) -> str:
        if not self.user or not self.user.name:
            return "?"
        return "".join(part[0] for part in self.user.name.split() if part)[:2].upper()


class RatingSummary(ApiModel):
    facility_id: int
    average_rating: float = 0.0
    total_reviews: int = 0


class ReviewCreate(ApiModel):
    """Body for POST /reviews"""

    facility: Ref
    user: Ref
    booking: Ref
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
