"""
Tests for Booking Pages
Booking wizard, my bookings and reviews
"""

import json
from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient

WIZARD = "/dashboard/book/3"


class TestBookingWizard:
    """Test the three booking steps"""

    def test_step_one_links_slots(self, student_client: TestClient, api_mock, facility_payload, slots_payload):
        """Test step 1 links each available slot and marks booked ones"""
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))
        api_mock.get("/facilities/3/availability").mock(return_value=httpx.Response(200, json=slots_payload))

        response = student_client.get(f"{WIZARD}?on=2026-10-20")

        assert response.status_code == 200
        assert "start=08%3A00" in response.text
        assert 'title="Booked"' in response.text

    def test_step_one_shows_selection(self, student_client: TestClient, api_mock, facility_payload, slots_payload):
        """Test step 1 summarises a half-made selection"""
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))
        api_mock.get("/facilities/3/availability").mock(return_value=httpx.Response(200, json=slots_payload))

        response = student_client.get(f"{WIZARD}?on=2026-10-20&start=10:00")

        assert "Start: 10:00 - select your end slot" in response.text

    def test_step_two_needs_slots(self, student_client: TestClient, api_mock, facility_payload, slots_payload):
        """Test step 2 falls back to step 1 without both slots"""
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))
        api_mock.get("/facilities/3/availability").mock(return_value=httpx.Response(200, json=slots_payload))

        response = student_client.get(f"{WIZARD}?step=2&on=2026-10-20&start=10:00")

        assert "Select a start and an end slot to continue." in response.text

    def test_step_three_needs_details(self, student_client: TestClient, api_mock, facility_payload):
        """Test step 3 falls back to step 2 with a short purpose"""
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))

        response = student_client.get(f"{WIZARD}?step=3&on=2026-10-20&start=10:00&end=11:00&purpose=abc")

        assert "more than 3 characters" in response.text
        assert 'name="purpose"' in response.text

    def test_date_form_with_cleared_date(self, student_client: TestClient, api_mock, facility_payload, slots_payload):
        """Test the step 1 date form submitted with an empty date shows today's slots"""
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))
        route = api_mock.get("/facilities/3/availability").mock(return_value=httpx.Response(200, json=slots_payload))

        response = student_client.get(f"{WIZARD}?step=1&purpose=&attendees=1&notes=&on=")

        assert response.status_code == 200
        assert route.calls.last.request.url.params["date"] == date.today().isoformat()

    def test_details_form_with_blank_attendees(self, student_client: TestClient, api_mock, facility_payload):
        """Test the step 2 form submitted with no attendees stays on step 2"""
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))

        response = student_client.get(
            f"{WIZARD}?step=3&on=2026-10-20&start=10:00&end=11:00&purpose=Revision&attendees=&notes="
        )

        assert response.status_code == 200
        assert "at least 1 attendee" in response.text
        assert 'name="attendees"' in response.text

    def test_details_form_as_submitted(self, student_client: TestClient, api_mock, facility_payload):
        """Test the step 2 form with every field filled reaches the confirm step"""
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))

        response = student_client.get(
            f"{WIZARD}?step=3&on=2026-10-20&start=10:00&end=11:00&purpose=Revision&attendees=2&notes="
        )

        assert response.status_code == 200
        assert "Confirm booking" in response.text
        assert 'name="attendees" value="2"' in response.text

    @pytest.mark.parametrize(
        "requires_approval,expected",
        [(False, "Auto CONFIRMED"), (True, "Will be PENDING")],
    )
    def test_confirm_step_shows_outcome(
        self, student_client: TestClient, api_mock, facility_payload, requires_approval, expected
    ):
        """Test the confirm step predicts the booking status"""
        facility = {**facility_payload, "facilityType": {"id": 2, "name": "Auditorium", "requiresApproval": requires_approval}}
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility))

        response = student_client.get(f"{WIZARD}?step=3&on=2026-10-20&start=10:00&end=11:00&purpose=Revision&attendees=3")

        assert expected in response.text
        assert "Revision" in response.text

    def test_submit_pending(self, student_client: TestClient, api_mock, booking_payload):
        """Test submitting a booking that needs approval"""
        route = api_mock.post("/bookings").mock(
            return_value=httpx.Response(201, json={**booking_payload, "status": "PENDING"})
        )

        response = student_client.post(
            WIZARD,
            data={"on": "2026-10-20", "start": "10:00", "end": "11:00", "purpose": "Revision", "attendees": "3"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"].startswith("/dashboard/bookings?msg=")
        assert "pending+admin+approval" in response.headers["location"]
        body = json.loads(route.calls.last.request.content)
        assert body["user"] == {"id": 1}
        assert body["startTime"] == "10:00:00"
        assert body["attendees"] == 3

    def test_submit_confirmed(self, student_client: TestClient, api_mock, booking_payload):
        """Test submitting a booking that is confirmed straight away"""
        api_mock.post("/bookings").mock(return_value=httpx.Response(201, json=booking_payload))

        response = student_client.post(
            WIZARD,
            data={"on": "2026-10-20", "start": "10:00", "end": "11:00", "purpose": "Revision"},
            follow_redirects=False,
        )

        assert "Booking+confirmed" in response.headers["location"]

    def test_submit_failure_inline(self, student_client: TestClient, api_mock, facility_payload):
        """Test a rejected booking re-renders the confirm step with the message"""
        api_mock.post("/bookings").mock(return_value=httpx.Response(409, json={"message": "Slot already booked"}))
        api_mock.get("/facilities/3").mock(return_value=httpx.Response(200, json=facility_payload))

        response = student_client.post(
            WIZARD,
            data={"on": "2026-10-20", "start": "10:00", "end": "11:00", "purpose": "Revision"},
        )

        assert response.status_code == 400
        assert "Slot already booked" in response.text


class TestMyBookings:
    """Test the bookings list and its actions"""

    def test_filter_and_stats(self, student_client: TestClient, api_mock, booking_payload):
        """Test the status filter and the review link on completed bookings"""
        completed = {**booking_payload, "id": 11, "status": "COMPLETED", "purpose": "Past seminar"}
        api_mock.get("/bookings/my").mock(return_value=httpx.Response(200, json=[booking_payload, completed]))

        response = student_client.get("/dashboard/bookings?status=completed")

        assert response.status_code == 200
        assert "Past seminar" in response.text
        assert "Study group" not in response.text
        assert "/dashboard/review/11" in response.text

    def test_confirmed_offers_cancel_and_extend(self, student_client: TestClient, api_mock, booking_payload):
        """Test confirmed bookings can be cancelled and extended"""
        api_mock.get("/bookings/my").mock(return_value=httpx.Response(200, json=[booking_payload]))

        response = student_client.get("/dashboard/bookings")

        assert "/dashboard/bookings/10/cancel" in response.text
        assert "/dashboard/bookings/10/extend" in response.text

    def test_cancel(self, student_client: TestClient, api_mock, booking_payload):
        """Test cancelling keeps the current filter"""
        route = api_mock.patch("/bookings/10/cancel").mock(
            return_value=httpx.Response(200, json={**booking_payload, "status": "CANCELLED"})
        )

        response = student_client.post("/dashboard/bookings/10/cancel", data={"status": "CONFIRMED"}, follow_redirects=False)

        assert route.called
        assert response.headers["location"].startswith("/dashboard/bookings?status=CONFIRMED&msg=")

    def test_extend(self, student_client: TestClient, api_mock, booking_payload):
        """Test extending reports the new end time"""
        api_mock.patch("/bookings/10/extend").mock(
            return_value=httpx.Response(200, json={**booking_payload, "endTime": "12:00:00"})
        )

        response = student_client.post("/dashboard/bookings/10/extend", follow_redirects=False)

        assert "extended+until+12%3A00" in response.headers["location"]

    def test_extend_failure(self, student_client: TestClient, api_mock):
        """Test a refused extension flashes the API message"""
        api_mock.patch("/bookings/10/extend").mock(
            return_value=httpx.Response(400, json={"message": "Maximum extensions reached"})
        )

        response = student_client.post("/dashboard/bookings/10/extend", follow_redirects=False)

        assert "error=Maximum+extensions+reached" in response.headers["location"]


class TestReview:
    """Test reviewing a completed booking"""

    def test_form_for_completed_booking(self, student_client: TestClient, api_mock, booking_payload):
        """Test the review form for a completed booking"""
        api_mock.get("/bookings/my").mock(
            return_value=httpx.Response(200, json=[{**booking_payload, "status": "COMPLETED"}])
        )

        response = student_client.get("/dashboard/review/10")

        assert response.status_code == 200
        assert "Excellent" in response.text

    def test_not_reviewable_when_not_completed(self, student_client: TestClient, api_mock, booking_payload):
        """Test bookings that are not completed cannot be reviewed"""
        api_mock.get("/bookings/my").mock(return_value=httpx.Response(200, json=[booking_payload]))

        response = student_client.get("/dashboard/review/10")

        assert "Only completed bookings can be reviewed." in response.text

    def test_missing_booking(self, student_client: TestClient, api_mock):
        """Test reviewing an unknown booking"""
        api_mock.get("/bookings/my").mock(return_value=httpx.Response(200, json=[]))

        response = student_client.get("/dashboard/review/10")

        assert response.status_code == 404
        assert "Booking not found." in response.text

    def test_rating_required(self, student_client: TestClient, api_mock, booking_payload):
        """Test a review without a rating is rejected before calling the API"""
        api_mock.get("/bookings/my").mock(
            return_value=httpx.Response(200, json=[{**booking_payload, "status": "COMPLETED"}])
        )
        route = api_mock.post("/reviews")

        response = student_client.post("/dashboard/review/10", data={"rating": "0", "comment": "ok"})

        assert response.status_code == 400
        assert "Please select a rating." in response.text
        assert not route.called

    def test_submit(self, student_client: TestClient, api_mock, booking_payload):
        """Test submitting a review"""
        api_mock.get("/bookings/my").mock(
            return_value=httpx.Response(200, json=[{**booking_payload, "status": "COMPLETED"}])
        )
        route = api_mock.post("/reviews").mock(return_value=httpx.Response(201, json={"id": 1, "rating": 4}))

        response = student_client.post(
            "/dashboard/review/10", data={"rating": "4", "comment": "Quiet and clean"}, follow_redirects=False
        )

        assert response.status_code == 303
        assert json.loads(route.calls.last.request.content) == {
            "facility": {"id": 3},
            "user": {"id": 1},
            "booking": {"id": 10},
            "rating": 4,
            "comment": "Quiet and clean",
        }
