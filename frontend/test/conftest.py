"""
Pytest Configuration and Fixtures
"""

from typing import Generator
from unittest.mock import AsyncMock

import pytest
import respx
from fastapi.testclient import TestClient

from campus_portal.config import settings
from campus_portal.main import app
from campus_portal.schemas.user import UserRole
from campus_portal.utils.session import PortalSession, encode_session

API_TOKEN = "api-token-123"


def make_session(role: UserRole = UserRole.STUDENT, user_id: int = 1, name: str = "Ada Lovelace") -> PortalSession:
    return PortalSession(token=API_TOKEN, user_id=user_id, name=name, email="ada@campus.edu", role=role)


@pytest.fixture(scope="function")
def api_mock() -> Generator[respx.MockRouter, None, None]:
    """Stub of the booking API; every outbound call must match a route"""
    with respx.mock(base_url=settings.API_BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture(scope="function")
def client(api_mock) -> Generator[TestClient, None, None]:
    """Test client without a session"""
    with TestClient(app) as test_client:
        yield test_client


def _signed_in(client: TestClient, role: UserRole, user_id: int = 1) -> TestClient:
    client.cookies.set(settings.SESSION_COOKIE_NAME, encode_session(make_session(role, user_id)))
    return client


@pytest.fixture
def student_client(client: TestClient) -> TestClient:
    return _signed_in(client, UserRole.STUDENT)


@pytest.fixture
def staff_client(client: TestClient) -> TestClient:
    return _signed_in(client, UserRole.STAFF)


@pytest.fixture
def security_client(client: TestClient) -> TestClient:
    return _signed_in(client, UserRole.SECURITY)


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    return _signed_in(client, UserRole.ADMIN, user_id=99)


@pytest.fixture
def user_payload() -> dict:
    return {
        "id": 1,
        "name": "Ada Lovelace",
        "email": "ada@campus.edu",
        "role": "STUDENT",
        "studentId": "S1234",
        "phone": "0244000000",
        "isActive": True,
        "department": {"id": 2, "name": "Computer Science"},
    }


@pytest.fixture
def facility_payload() -> dict:
    return {
        "id": 3,
        "name": "Main Computer Lab",
        "location": "Block B",
        "capacity": 40,
        "facilityType": {"id": 2, "name": "Computer Laboratory", "requiresApproval": False},
        "hasWifi": True,
        "hasProjector": True,
        "hasAirConditioning": False,
        "openingTime": "07:00:00",
        "closingTime": "21:00:00",
        "isAvailable": True,
    }


@pytest.fixture
def booking_payload(facility_payload: dict, user_payload: dict) -> dict:
    return {
        "id": 10,
        "facility": facility_payload,
        "user": user_payload,
        "date": "2026-10-20",
        "startTime": "09:00:00",
        "endTime": "11:00:00",
        "purpose": "Study group",
        "attendees": 4,
        "status": "CONFIRMED",
        "isRecurring": False,
        "createdAt": "2026-10-18T08:30:00",
    }


@pytest.fixture
def notification_payload() -> dict:
    return {
        "id": 5,
        "title": "Booking confirmed",
        "message": "Your booking for Main Computer Lab is confirmed.",
        "type": "BOOKING_CONFIRMED",
        "isRead": False,
        "createdAt": "2026-10-18T08:31:00",
        "booking": {"id": 10},
    }


@pytest.fixture
def slots_payload() -> dict:
    return {
        "facilityId": 3,
        "facilityName": "Main Computer Lab",
        "date": "2026-10-20",
        "slots": [
            {"startTime": "08:00", "endTime": "09:00", "available": True},
            {"startTime": "09:00", "endTime": "10:00", "available": False},
            {"startTime": "10:00", "endTime": "11:00", "available": True},
            {"startTime": "11:00", "endTime": "12:00", "available": True},
        ],
    }


@pytest.fixture
def mock_notification_service(mocker):
    """Replace the notification service used by the notification pages"""
    mock_service = mocker.patch("campus_portal.routes.notification.NotificationService")
    instance = mock_service.return_value
    instance.unread = AsyncMock()
    instance.mark_all_read = AsyncMock(return_value=None)
    return instance
