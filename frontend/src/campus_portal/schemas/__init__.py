"""
Pydantic Schemas Package
Exports the API resource mirrors and request bodies
"""

from campus_portal.schemas.base import ApiModel, Ref
from campus_portal.schemas.booking import (
    ApprovalDecision,
    Booking,
    BookingApproval,
    BookingCreate,
    BookingDraft,
    BookingStatus,
    WaitlistEntry,
    WaitlistJoin,
    WaitlistStatus,
)
from campus_portal.schemas.facility import (
    AvailabilityResponse,
    Facility,
    FacilitySearch,
    FacilitySummary,
    FacilityType,
    MaintenanceSchedule,
    TimeSlot,
)
from campus_portal.schemas.notification import Notification, UnreadNotifications
from campus_portal.schemas.review import RatingSummary, Review, ReviewCreate
from campus_portal.schemas.user import (
    AuthResponse,
    Department,
    LoginRequest,
    PasswordChange,
    RegisterRequest,
    User,
    UserRole,
    UserSummary,
    UserUpdate,
)

__all__ = [
    "ApiModel",
    "Ref",
    # User schemas
    "User",
    "UserRole",
    "UserSummary",
    "UserUpdate",
    "Department",
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "PasswordChange",
    # Facility schemas
    "Facility",
    "FacilityType",
    "FacilitySummary",
    "FacilitySearch",
    "TimeSlot",
    "AvailabilityResponse",
    "MaintenanceSchedule",
    # Booking schemas
    "Booking",
    "BookingCreate",
    "BookingDraft",
    "BookingStatus",
    "BookingApproval",
    "ApprovalDecision",
    "WaitlistEntry",
    "WaitlistJoin",
    "WaitlistStatus",
    # Review schemas
    "Review",
    "ReviewCreate",
    "RatingSummary",
    # Notification schemas
    "Notification",
    "UnreadNotifications",
]
