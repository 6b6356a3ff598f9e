"""
Tests for Application Error Pages
"""

from typing import Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from campus_portal.config import settings
from campus_portal.main import api_error_handler, app, global_exception_handler
from campus_portal.schemas.user import UserRole
from campus_portal.services.api_client import ApiError
from campus_portal.utils.session import PortalSession, encode_session

STUDENT = PortalSession(token="tok", user_id=1, name="Ada Lovelace", email="ada@campus.edu", role=UserRole.STUDENT)


def build_request(path: str = "/dashboard", session: Optional[PortalSession] = None) -> Request:
    headers = []
    if session is not None:
        cookie = f"{settings.SESSION_COOKIE_NAME}={encode_session(session)}"
        headers.append((b"cookie", cookie.encode()))
    return Request({"type": "http", "method": "GET", "path": path, "query_string": b"", "headers": headers})


class TestErrorHandlers:
    """Test the application-wide exception handlers"""

    @pytest.mark.asyncio
    async def test_api_error_page_keeps_sidebar(self):
        """Test a signed-in user sees the error inside their own layout"""
        response = await api_error_handler(build_request(session=STUDENT), ApiError(500, "Booking service exploded"))

        body = response.body.decode()
        assert response.status_code == 502
        assert "Booking service exploded" in body
        assert 'href="/dashboard/bookings"' in body
        assert "Ada Lovelace" in body

    @pytest.mark.asyncio
    async def test_api_error_page_without_session(self):
        """Test the error page falls back to the public layout"""
        response = await api_error_handler(build_request(), ApiError(500, "Booking service exploded"))

        body = response.body.decode()
        assert response.status_code == 502
        assert "Booking service exploded" in body
        assert 'href="/dashboard/bookings"' not in body

    @pytest.mark.asyncio
    async def test_unauthorized_ends_session(self):
        """Test a rejected API token clears the cookie and returns to sign-in"""
        response = await api_error_handler(build_request(session=STUDENT), ApiError(401, "Token expired"))

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert settings.SESSION_COOKIE_NAME in response.headers["set-cookie"]

    @pytest.mark.asyncio
    async def test_unexpected_error_page(self):
        """Test an unexpected exception renders the generic error page"""
        response = await global_exception_handler(build_request(session=STUDENT), RuntimeError("boom"))

        body = response.body.decode()
        assert response.status_code == 500
        assert "Something went wrong. Please try again." in body
        assert "Ada Lovelace" in body
        assert "boom" not in body


class TestErrorPagesThroughApp:
    """Test error pages produced while serving a page"""

    def test_unexpected_error_while_rendering_page(self, api_mock, mocker):
        """Test a bug in a page handler becomes a 500 page"""
        service = mocker.patch("campus_portal.routes.dashboard.FacilityService").return_value
        service.types = AsyncMock(side_effect=RuntimeError("boom"))
        service.browse = AsyncMock(return_value=[])

        with TestClient(app, raise_server_exceptions=False) as client:
            client.cookies.set(settings.SESSION_COOKIE_NAME, encode_session(STUDENT))
            response = client.get("/dashboard")

        assert response.status_code == 500
        assert "Something went wrong. Please try again." in response.text
