"""
Admin Booking Routes
All bookings with status tabs and actions, and booking on behalf of a user
"""

import asyncio
import logging
from collections import Counter
from datetime import date
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_admin_session, get_api
from campus_portal.schemas.booking import BookingDraft
from campus_portal.services.api_client import ApiClient, ApiError, inline_error, settled
from campus_portal.services.booking_service import BookingService
from campus_portal.services.facility_service import FacilityService
from campus_portal.services.slot_picker import SlotSelection, slot_grid
from campus_portal.services.user_service import UserService
from campus_portal.utils.forms import optional_date, optional_int
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/bookings", tags=["Admin Bookings"])

USER_RESULTS_LIMIT = 20

ACTION_MESSAGES = {
    "check-in": "Booking checked in.",
    "check-out": "Booking checked out.",
    "cancel": "Booking cancelled.",
    "delete": "Booking deleted.",
}


@router.get("", response_class=HTMLResponse)
async def bookings_page(
    request: Request,
    status: str = "ALL",
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """All bookings; tabs are ALL plus each status present, with counts"""
    bookings, error = [], None
    try:
        bookings = await BookingService(api).all()
    except ApiError as e:
        error = inline_error(e)

    counts = Counter(b.status.value for b in bookings)
    tabs = [("ALL", len(bookings))] + sorted(counts.items())
    status = status.upper() if status.upper() in counts else "ALL"
    shown = bookings if status == "ALL" else [b for b in bookings if b.status.value == status]

    return render(
        request,
        "admin/bookings.html",
        {
            "bookings": shown,
            "status": status,
            "tabs": tabs,
            "error": error,
            "action_labels": {"check-in": "Check In", "check-out": "Check Out", "cancel": "Cancel", "delete": "Delete"},
        },
        session=session,
    )


@router.post("/{booking_id}/{action}")
async def booking_action(
    booking_id: int,
    action: str,
    status: str = Form("ALL"),
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """Check in, check out, cancel or delete a booking"""
    service = BookingService(api)
    handlers = {
        "check-in": service.check_in,
        "check-out": service.check_out,
        "cancel": service.cancel,
        "delete": service.remove,
    }
    if action not in handlers:
        return redirect_to("/admin/bookings", error="Unknown booking action.", status=status)

    try:
        await handlers[action](booking_id)
    except ApiError as e:
        return redirect_to("/admin/bookings", error=inline_error(e), status=status)

    logger.info(f"Admin {session.user_id} ran {action} on booking {booking_id}")
    return redirect_to("/admin/bookings", msg=ACTION_MESSAGES[action], status=status)


def new_booking_url(state: Dict[str, Any], **changes: Any) -> str:
    """Link to the new-booking page with some of its state replaced"""
    params = {**state, **changes}
    query = {key: value for key, value in params.items() if value not in (None, "")}
    return f"/admin/bookings/new?{urlencode(query)}" if query else "/admin/bookings/new"


def _matches(text: str, *fields: Optional[str]) -> bool:
    needle = text.strip().lower()
    return not needle or any(needle in (field or "").lower() for field in fields)


@router.get("/new", response_class=HTMLResponse)
async def new_booking_page(
    request: Request,
    facility_q: str = "",
    facility_id: str = "",
    user_q: str = "",
    user_id: str = "",
    on: str = "",
    start: Optional[str] = None,
    end: Optional[str] = None,
    purpose: str = "",
    attendees: str = "1",
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """Book a facility on behalf of a user"""
    facilities_service = FacilityService(api)
    day = optional_date(on) or date.today()
    seats = optional_int(attendees, 1)
    selection = SlotSelection.from_query(start, end)

    facilities_result, users_result = await asyncio.gather(
        facilities_service.list(),
        UserService(api).list(),
        return_exceptions=True,
    )
    facilities = settled(facilities_result, [])
    users = settled(users_result, [])
    load_error = None
    if isinstance(facilities_result, ApiError) or isinstance(users_result, ApiError):
        load_error = "Some data could not be loaded."

    facility = next((f for f in facilities if f.id == optional_int(facility_id)), None)
    user = next((u for u in users if u.id == optional_int(user_id)), None)

    state = {
        "facility_q": facility_q,
        "facility_id": facility.id if facility else None,
        "user_q": user_q,
        "user_id": user.id if user else None,
        "on": day.isoformat(),
        "start": selection.start,
        "end": selection.end,
        "purpose": purpose,
        "attendees": seats,
    }

    cells, slots_error = [], None
    if facility is not None:
        try:
            availability = await facilities_service.availability(facility.id, day)
            cells = slot_grid(availability.slots, selection)
        except ApiError as e:
            slots_error = inline_error(e)

    return render(
        request,
        "admin/new_booking.html",
        {
            "state": state,
            "facility": facility,
            "user": user,
            "facility_matches": [f for f in facilities if _matches(facility_q, f.name, f.location)],
            "user_matches": [u for u in users if _matches(user_q, u.name, u.email)][:USER_RESULTS_LIMIT],
            "facility_links": {f.id: new_booking_url(state, facility_id=f.id, start=None, end=None) for f in facilities},
            "user_links": {u.id: new_booking_url(state, user_id=u.id) for u in users},
            "cells": cells,
            "slot_links": {
                cell["label"]: new_booking_url(state, start=cell["next"].start, end=cell["next"].end)
                for cell in cells
                if cell["next"]
            },
            "selection": selection,
            "slots_error": slots_error,
            "load_error": load_error,
        },
        session=session,
    )


@router.post("/new")
async def create_booking_for_user(
    facility_id: int = Form(...),
    user_id: Optional[int] = Form(None),
    on: date = Form(...),
    start: str = Form(""),
    end: str = Form(""),
    purpose: str = Form(""),
    attendees: int = Form(1),
    notes: str = Form(""),
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    draft = BookingDraft(date=on, start=start or None, end=end or None, purpose=purpose, attendees=attendees, notes=notes)
    state = {
        "facility_id": facility_id,
        "user_id": user_id,
        "on": on.isoformat(),
        "start": draft.start,
        "end": draft.end,
        "purpose": purpose,
        "attendees": attendees,
    }

    if user_id is None:
        return redirect_to(new_booking_url(state), error="Select a user for the booking.")
    if not draft.can_proceed(1):
        return redirect_to(new_booking_url(state), error="Select a start and an end slot.")
    if not draft.details_valid:
        return redirect_to(new_booking_url(state), error="Purpose must be more than 3 characters.")

    try:
        booking = await BookingService(api).create(draft.to_create(facility_id, user_id))
    except ApiError as e:
        return redirect_to(new_booking_url(state), error=inline_error(e))

    logger.info(f"Admin {session.user_id} booked facility {facility_id} for user {user_id} -> booking {booking.id}")
    return redirect_to("/admin/bookings", msg=f"Booking #{booking.id} created ({booking.status.label}).")
