"""
Approval Service
Admin decisions on bookings that need approval
"""

from typing import List, Optional

from campus_portal.schemas.booking import Booking, BookingApproval
from campus_portal.services.api_client import ApiClient


class ApprovalService:
    """Service for /approvals"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def pending(self) -> List[Booking]:
        return [Booking.model_validate(item) for item in await self.api.get("/approvals/pending")]

    async def approve(self, booking_id: int, remarks: Optional[str] = None) -> BookingApproval:
        data = await self.api.post(f"/approvals/{booking_id}/approve", json={"remarks": remarks or ""})
        return BookingApproval.model_validate(data)

    async def reject(self, booking_id: int, remarks: Optional[str] = None) -> BookingApproval:
        data = await self.api.post(f"/approvals/{booking_id}/reject", json={"remarks": remarks or ""})
        return BookingApproval.model_validate(data)
