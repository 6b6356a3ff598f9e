"""
Dashboard Routes
Facility browsing and detail pages for students, staff, visitors and security
"""

import asyncio
import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_api, get_member_session, require_role
from campus_portal.schemas.base import Ref
from campus_portal.schemas.booking import WaitlistJoin
from campus_portal.schemas.facility import FacilitySearch
from campus_portal.schemas.review import RatingSummary
from campus_portal.schemas.user import UserRole
from campus_portal.services.api_client import ApiClient, ApiError, inline_error, settled
from campus_portal.services.booking_service import BookingService
from campus_portal.services.facility_service import FacilityService
from campus_portal.services.review_service import ReviewService
from campus_portal.services.waitlist_service import WaitlistService
from campus_portal.utils.formatting import greeting
from campus_portal.utils.forms import optional_date, optional_int
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_class=HTMLResponse)
async def dashboard_home(
    request: Request,
    q: str = "",
    type_id: str = "",
    min_capacity: str = "",
    wifi: bool = False,
    projector: bool = False,
    ac: bool = False,
    available: bool = False,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """Browse facilities with search and filters"""
    service = FacilityService(api)
    type_filter, capacity_filter = optional_int(type_id), optional_int(min_capacity)
    filters = FacilitySearch(
        name=q.strip() or None,
        type_id=type_filter,
        min_capacity=capacity_filter,
        has_wifi=wifi or None,
        has_projector=projector or None,
        has_air_conditioning=ac or None,
    )

    types_result, facilities_result = await asyncio.gather(
        service.types(),
        service.browse(filters, only_available=available),
        return_exceptions=True,
    )

    error = None
    facilities = []
    if isinstance(facilities_result, ApiError):
        error = inline_error(facilities_result) or "Failed to load facilities."
    else:
        facilities = settled(facilities_result, [])

    return render(
        request,
        "dashboard/home.html",
        {
            "greeting": greeting(datetime.now().hour),
            "weekday": datetime.now().strftime("%A"),
            "facilities": facilities,
            "types": settled(types_result, []),
            "error": error,
            "filters": {
                "q": q,
                "type_id": type_filter,
                "min_capacity": capacity_filter,
                "wifi": wifi,
                "projector": projector,
                "ac": ac,
                "available": available,
            },
            "has_filters": bool(type_filter or capacity_filter or wifi or projector or ac or available),
        },
        session=session,
    )


@router.get("/facilities/{facility_id}", response_class=HTMLResponse)
async def facility_detail(
    request: Request,
    facility_id: int,
    tab: str = "slots",
    on: str = "",
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """Facility details with its availability, reviews and maintenance windows"""
    facilities = FacilityService(api)
    reviews = ReviewService(api)
    day = optional_date(on) or date.today()

    facility_result, reviews_result, rating_result = await asyncio.gather(
        facilities.get(facility_id),
        reviews.for_facility(facility_id),
        reviews.rating(facility_id),
        return_exceptions=True,
    )
    facility = settled(facility_result)
    if facility is None:
        return render(request, "not_found.html", {"what": "Facility"}, session=session, status_code=404)

    slots_result, maintenance_result = await asyncio.gather(
        facilities.availability(facility_id, day),
        facilities.maintenance(facility_id),
        return_exceptions=True,
    )
    availability = settled(slots_result)
    maintenance = [m for m in settled(maintenance_result, []) if m.is_upcoming(date.today())]

    return render(
        request,
        "dashboard/facility.html",
        {
            "facility": facility,
            "reviews": settled(reviews_result, []),
            "rating": settled(rating_result, RatingSummary(facility_id=facility_id)),
            "tab": "reviews" if tab == "reviews" else "slots",
            "on": day,
            "slots": availability.slots if availability else [],
            "maintenance": maintenance,
        },
        session=session,
    )


@router.post("/facilities/{facility_id}/waitlist")
async def join_waitlist(
    facility_id: int,
    on: date = Form(...),
    start: str = Form(...),
    end: str = Form(...),
    purpose: str = Form("Waitlist request"),
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """Queue for a slot that is already booked"""
    back = f"/dashboard/facilities/{facility_id}?on={on.isoformat()}"
    entry = WaitlistJoin(
        facility=Ref(id=facility_id),
        date=on,
        start_time=f"{start[:5]}:00",
        end_time=f"{end[:5]}:00",
        purpose=purpose.strip() or "Waitlist request",
    )
    try:
        joined = await WaitlistService(api).join(entry)
    except ApiError as e:
        return redirect_to(back, error=inline_error(e))

    position = f" You are number {joined.position} in the queue." if joined.position else ""
    return redirect_to(back, msg=f"Added to the waitlist for {start[:5]}.{position}")


@router.get("/waitlist", response_class=HTMLResponse)
async def my_waitlist(
    request: Request,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """The user's waitlist entries"""
    entries, error = [], None
    try:
        entries = await WaitlistService(api).my()
    except ApiError as e:
        error = inline_error(e)

    return render(request, "dashboard/waitlist.html", {"entries": entries, "error": error}, session=session)


@router.post("/waitlist/{entry_id}/leave")
async def leave_waitlist(
    entry_id: int,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    try:
        await WaitlistService(api).leave(entry_id)
    except ApiError as e:
        return redirect_to("/dashboard/waitlist", error=inline_error(e))
    return redirect_to("/dashboard/waitlist", msg="Left the waitlist.")


@router.get("/today", response_class=HTMLResponse)
async def todays_bookings(
    request: Request,
    session: PortalSession = Depends(require_role(UserRole.SECURITY, UserRole.ADMIN, redirect_to="/dashboard")),
    api: ApiClient = Depends(get_api),
):
    """Read-only list of today's bookings for access control at the door"""
    bookings, error = [], None
    try:
        bookings = await BookingService(api).today()
    except ApiError as e:
        error = inline_error(e)

    bookings.sort(key=lambda b: b.start_time)
    return render(
        request,
        "dashboard/today.html",
        {"bookings": bookings, "error": error, "today": date.today()},
        session=session,
    )
