"""
Admin Console Routes
Overview figures and booking analytics
"""

import asyncio
import logging
from datetime import date

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_admin_session, get_api
from campus_portal.schemas.booking import BookingStatus
from campus_portal.services.analytics import EMPTY, TIME_RANGES, build_report, count_status
from campus_portal.services.api_client import ApiClient, ApiError, inline_error, settled
from campus_portal.services.booking_service import BookingService
from campus_portal.services.facility_service import FacilityService
from campus_portal.services.user_service import UserService
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("", response_class=HTMLResponse)
async def admin_overview(
    request: Request,
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """
    Console overview

    The three fetches are independent: a failing one shows its figures as
    "—" and the others still render.
    """
    bookings_result, facilities_result, users_result = await asyncio.gather(
        BookingService(api).all(),
        FacilityService(api).list(),
        UserService(api).list(),
        return_exceptions=True,
    )
    bookings = settled(bookings_result)
    facilities = settled(facilities_result)
    users = settled(users_result)

    recent = []
    if bookings:
        recent = sorted(bookings, key=lambda b: (b.created_at is not None, b.created_at, b.id), reverse=True)[:5]

    stats = [
        ("Total Bookings", len(bookings) if bookings is not None else EMPTY),
        ("Confirmed", count_status(bookings, BookingStatus.CONFIRMED) if bookings is not None else EMPTY),
        ("Facilities", len(facilities) if facilities is not None else EMPTY),
        ("Users", len(users) if users is not None else EMPTY),
    ]

    return render(
        request,
        "admin/overview.html",
        {"stats": stats, "recent": recent, "bookings_failed": bookings is None},
        session=session,
    )


@router.get("/analytics", response_class=HTMLResponse)
async def admin_analytics(
    request: Request,
    days: int = 30,
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """Booking analytics computed from the full booking list"""
    bookings_result, facilities_result, users_result = await asyncio.gather(
        BookingService(api).all(),
        FacilityService(api).list(),
        UserService(api).list(),
        return_exceptions=True,
    )

    error = None
    if isinstance(bookings_result, ApiError):
        error = inline_error(bookings_result)
        bookings = []
    else:
        bookings = settled(bookings_result, [])

    facilities = settled(facilities_result, [])
    users = settled(users_result, [])

    report = build_report(bookings, days, date.today())
    return render(
        request,
        "admin/analytics.html",
        {
            "report": report,
            "ranges": TIME_RANGES,
            "facility_count": len(facilities),
            "user_count": len(users),
            "error": error,
        },
        session=session,
    )
