"""
Tests for Pydantic Schemas
"""

from datetime import date

import pytest
from pydantic import ValidationError

from campus_portal.schemas.booking import Booking, BookingDraft, BookingStatus
from campus_portal.schemas.facility import DEFAULT_IMAGE, PLACEHOLDER_IMAGES, Facility, FacilitySearch
from campus_portal.schemas.review import ReviewCreate
from campus_portal.schemas.user import RegisterRequest, UserRole, UserUpdate


class TestFacilitySchema:
    def test_reads_camel_case(self, facility_payload):
        """Test facilities parse from camelCase JSON"""
        facility = Facility.model_validate(facility_payload)
        assert facility.has_wifi is True
        assert facility.type_name == "Computer Laboratory"
        assert facility.requires_approval is False

    def test_image_falls_back_to_type_placeholder(self, facility_payload):
        """Test the image falls back to the type placeholder"""
        facility = Facility.model_validate(facility_payload)
        assert facility.image == PLACEHOLDER_IMAGES["Computer Laboratory"]

    def test_image_prefers_own_photo(self, facility_payload):
        """Test the facility's own image wins"""
        facility = Facility.model_validate({**facility_payload, "imageUrl": "https://cdn.example/lab.jpg"})
        assert facility.image == "https://cdn.example/lab.jpg"

    def test_image_default_for_unknown_type(self, facility_payload):
        """Test unknown types get the default image"""
        facility = Facility.model_validate({**facility_payload, "facilityType": {"id": 9, "name": "Chapel"}})
        assert facility.image == DEFAULT_IMAGE

    def test_amenities(self, facility_payload):
        """Test amenity labels follow the facility flags"""
        facility = Facility.model_validate(facility_payload)
        assert [a["label"] for a in facility.amenities()] == ["Wi-Fi", "Projector"]
        assert len(facility.amenities(include_missing=True)) == 8

    def test_search_params_skip_unset(self):
        """Test unset search filters are left out"""
        filters = FacilitySearch(name="", has_projector=False, has_air_conditioning=True)
        assert filters.to_params() == {"hasAirConditioning": "true"}
        assert FacilitySearch().is_empty


class TestBookingSchema:
    def test_actions_for_confirmed(self, booking_payload):
        """Test actions allowed on a confirmed booking"""
        booking = Booking.model_validate(booking_payload)
        assert booking.can_cancel
        assert booking.can_extend
        assert not booking.can_review
        assert booking.admin_actions() == ["check-in", "check-out", "cancel", "delete"]
        assert booking.time_range == "09:00–11:00"

    def test_actions_for_completed(self, booking_payload):
        """Test actions allowed on a completed booking"""
        booking = Booking.model_validate({**booking_payload, "status": "COMPLETED"})
        assert booking.can_review
        assert not booking.can_cancel
        assert not booking.can_extend
        assert booking.admin_actions() == ["delete"]

    def test_actions_for_active(self, booking_payload):
        """Test actions allowed on an active booking"""
        booking = Booking.model_validate({**booking_payload, "status": "ACTIVE"})
        assert booking.admin_actions() == ["check-out", "cancel", "delete"]

    def test_extend_limited_by_max_extensions(self, booking_payload):
        """Test extension stops at the maximum"""
        booking = Booking.model_validate({**booking_payload, "extensionCount": 2, "maxExtensions": 2})
        assert not booking.can_extend

    def test_status_label(self):
        """Test status labels are title case"""
        assert BookingStatus.NO_SHOW.label == "No show"


class TestBookingDraft:
    def test_details_require_purpose_longer_than_three(self):
        """Test the purpose must be longer than three characters"""
        assert not BookingDraft(date=date(2026, 10, 20), purpose=" abc ").details_valid
        assert BookingDraft(date=date(2026, 10, 20), purpose="Exam").details_valid

    def test_details_require_attendee(self):
        """Test at least one attendee is required"""
        assert not BookingDraft(date=date(2026, 10, 20), purpose="Exam prep", attendees=0).details_valid

    def test_steps(self):
        """Test each wizard step's prerequisites"""
        draft = BookingDraft(date=date(2026, 10, 20), start="09:00")
        assert not draft.can_proceed(1)
        draft = BookingDraft(date=date(2026, 10, 20), start="09:00", end="10:00", purpose="Exam prep")
        assert draft.can_proceed(1)
        assert draft.can_proceed(2)
        assert draft.can_proceed(3)

    def test_to_create_requires_slots(self):
        """Test a booking body needs both slots"""
        with pytest.raises(ValueError):
            BookingDraft(date=date(2026, 10, 20), purpose="Exam prep").to_create(3, 1)


class TestUserSchemas:
    def test_register_keeps_only_role_specific_id(self):
        """Test registration keeps only the id for the chosen role"""
        body = RegisterRequest.from_form("Grace", "grace@campus.edu", "pw", UserRole.STAFF, "S1", "T9")
        assert body.staff_id == "T9"
        assert body.student_id is None

    def test_register_department_ref(self):
        """Test the department is sent as a reference"""
        body = RegisterRequest.from_form("Grace", "grace@campus.edu", "pw", UserRole.VISITOR, department_id=4)
        assert body.to_api()["department"] == {"id": 4}

    def test_update_rejects_blank_name(self):
        """Test profile updates reject a blank name"""
        with pytest.raises(ValidationError):
            UserUpdate(name="   ")

    def test_review_rating_bounds(self):
        """Test review ratings stay within 1 to 5"""
        with pytest.raises(ValidationError):
            ReviewCreate(facility={"id": 1}, user={"id": 1}, booking={"id": 1}, rating=0)
