"""
Booking Schemas
Bookings, approvals and waitlist entries as the API returns them,
plus the request bodies the portal sends
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from campus_portal.schemas.base import ApiModel, Ref
from campus_portal.schemas.facility import Facility
from campus_portal.schemas.user import User


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    EXPIRED = "EXPIRED"
    REJECTED = "REJECTED"
    ACTIVE = "ACTIVE"
    NO_SHOW = "NO_SHOW"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


# Tabs on the "My Bookings" page
MY_BOOKING_FILTERS = ["ALL", "CONFIRMED", "COMPLETED", "CANCELLED", "REJECTED", "EXPIRED"]


class Booking(ApiModel):
    """Booking as returned by the API"""

    id: int
    facility: Optional[Facility] = None
    user: Optional[User] = None
    date: date
    start_time: str
    end_time: str
    purpose: str = ""
    attendees: int = 1
    status: BookingStatus
    notes: Optional[str] = None
    is_recurring: bool = False
    created_at: Optional[datetime] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    extension_count: Optional[int] = None
    max_extensions: Optional[int] = None

    @property
    def time_range(self) -> str:
        return f"{self.start_time[:5]}–{self.end_time[:5]}"

    # Actions the UI offers per status; the API decides whether they succeed
    @property
    def can_cancel(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @property
    def can_review(self) -> bool:
        return self.status == BookingStatus.COMPLETED

    @property
    def can_extend(self) -> bool:
        if self.status not in (BookingStatus.CONFIRMED, BookingStatus.ACTIVE):
            return False
        if self.extension_count is not None and self.max_extensions is not None:
            return self.extension_count < self.max_extensions
        return True

    def admin_actions(self) -> List[str]:
        """Admin menu entries for this booking, in display order"""
        actions = []
        if self.status == BookingStatus.CONFIRMED:
            actions.append("check-in")
        if self.status in (BookingStatus.ACTIVE, BookingStatus.CONFIRMED):
            actions.append("check-out")
        if self.status not in (BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.REJECTED):
            actions.append("cancel")
        actions.append("delete")
        return actions


class BookingCreate(ApiModel):
    """Body for POST /bookings"""

    facility: Ref
    user: Ref
    date: date
    start_time: str
    end_time: str
    purpose: str
    attendees: int = Field(1, ge=1)
    notes: Optional[str] = None
    is_recurring: bool = False


class BookingDraft(ApiModel):
    """Booking form state carried between wizard steps"""

    date: date
    start: Optional[str] = None
    end: Optional[str] = None
    purpose: str = ""
    attendees: int = 1
    notes: str = ""

    @property
    def details_valid(self) -> bool:
        return len(self.purpose.strip()) > 3 and self.attendees >= 1

    def can_proceed(self, step: int) -> bool:
        if step == 1:
            return bool(self.start and self.end)
        if step == 2:
            return self.details_valid
        return bool(self.start and self.end) and self.details_valid

    def to_create(self, facility_id: int, user_id: int) -> BookingCreate:
        if not (self.start and self.end):
            raise ValueError("Select a start and end slot first")
        return BookingCreate(
            facility=Ref(id=facility_id),
            user=Ref(id=user_id),
            date=self.date,
            start_time=f"{self.start}:00",
            end_time=f"{self.end}:00",
            purpose=self.purpose,
            attendees=self.attendees,
            notes=self.notes or None,
        )


class ApprovalDecision(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class BookingApproval(ApiModel):
    id: int
    booking: Booking
    reviewed_by: Optional[User] = None
    decision: ApprovalDecision
    remarks: Optional[str] = None
    decided_at: Optional[datetime] = None


class WaitlistStatus(str, Enum):
    WAITING = "WAITING"
    PROMOTED = "PROMOTED"
    EXPIRED = "EXPIRED"


class WaitlistEntry(ApiModel):
    id: int
    facility: Optional[Facility] = None
    date: date
    start_time: str
    end_time: str
    purpose: Optional[str] = None
    position: Optional[int] = None
    status: WaitlistStatus = WaitlistStatus.WAITING
    joined_at: Optional[datetime] = None


class WaitlistJoin(ApiModel):
    """Body for POST /waitlist"""

    facility: Ref
    date: date
    start_time: str
    end_time: str
    purpose: str
