"""
Booking Routes
Three-step booking wizard, the user's bookings and post-booking reviews
"""

import logging
from datetime import date
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_api, get_member_session
from campus_portal.schemas.base import Ref
from campus_portal.schemas.booking import MY_BOOKING_FILTERS, BookingDraft, BookingStatus
from campus_portal.schemas.review import RATING_LABELS, ReviewCreate
from campus_portal.services.analytics import count_status
from campus_portal.services.api_client import ApiClient, ApiError, inline_error
from campus_portal.services.booking_service import BookingService
from campus_portal.services.facility_service import FacilityService
from campus_portal.services.review_service import ReviewService
from campus_portal.services.slot_picker import SlotSelection, slot_grid
from campus_portal.utils.forms import optional_date, optional_int
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Bookings"])

WIZARD_STEPS = ["Select Slot", "Details", "Confirm"]


def wizard_url(facility_id: int, step: int, draft: BookingDraft, selection: Optional[SlotSelection] = None) -> str:
    """Link to a wizard step carrying the form state in the query string"""
    params = {"step": step, "on": draft.date.isoformat()}
    if selection is None:
        selection = SlotSelection.from_query(draft.start, draft.end)
    params.update(selection.as_query())
    if draft.purpose:
        params["purpose"] = draft.purpose
    params["attendees"] = draft.attendees
    if draft.notes:
        params["notes"] = draft.notes
    return f"/dashboard/book/{facility_id}?{urlencode(params)}"


@router.get("/book/{facility_id}", response_class=HTMLResponse)
async def booking_wizard(
    request: Request,
    facility_id: int,
    step: int = 1,
    on: str = "",
    start: Optional[str] = None,
    end: Optional[str] = None,
    purpose: str = "",
    attendees: str = "1",
    notes: str = "",
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """
    Booking wizard

    Step 1 picks the slots, step 2 the details and step 3 confirms. A step
    whose prerequisites are missing falls back to the earlier step.
    """
    service = FacilityService(api)
    selection = SlotSelection.from_query(start, end)
    draft = BookingDraft(
        date=optional_date(on) or date.today(),
        start=selection.start,
        end=selection.end,
        purpose=purpose,
        attendees=optional_int(attendees, 0),
        notes=notes,
    )

    try:
        facility = await service.get(facility_id)
    except ApiError as e:
        inline_error(e)
        return render(request, "not_found.html", {"what": "Facility"}, session=session, status_code=404)

    error = None
    if step >= 2 and not draft.can_proceed(1):
        step, error = 1, "Select a start and an end slot to continue."
    elif step >= 3 and not draft.can_proceed(2):
        step, error = 2, "Enter a purpose of more than 3 characters and at least 1 attendee."
    step = min(max(step, 1), 3)

    cells, slots_error = [], None
    if step == 1:
        try:
            availability = await service.availability(facility_id, draft.date)
            cells = slot_grid(availability.slots, selection)
        except ApiError as e:
            slots_error = inline_error(e)

    return render(
        request,
        "dashboard/book.html",
        {
            "facility": facility,
            "step": step,
            "steps": WIZARD_STEPS,
            "draft": draft,
            "selection": selection,
            "cells": cells,
            "slot_links": {
                cell["label"]: wizard_url(facility_id, 1, draft, cell["next"]) for cell in cells if cell["next"]
            },
            "slots_error": slots_error,
            "error": error,
            "next_url": wizard_url(facility_id, step + 1, draft) if step < 3 else None,
            "back_url": wizard_url(facility_id, step - 1, draft) if step > 1 else None,
        },
        session=session,
    )


@router.post("/book/{facility_id}")
async def submit_booking(
    request: Request,
    facility_id: int,
    on: date = Form(...),
    start: str = Form(...),
    end: str = Form(...),
    purpose: str = Form(...),
    attendees: int = Form(1),
    notes: str = Form(""),
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """Create the booking from the confirm step"""
    draft = BookingDraft(date=on, start=start, end=end, purpose=purpose, attendees=attendees, notes=notes)
    if not draft.can_proceed(3):
        return redirect_to(wizard_url(facility_id, 2, draft), error="Complete the booking details first.")

    try:
        booking = await BookingService(api).create(draft.to_create(facility_id, session.user_id))
    except ApiError as e:
        message = inline_error(e) or "Booking failed. Please try again."
        try:
            facility = await FacilityService(api).get(facility_id)
        except ApiError as lookup_error:
            inline_error(lookup_error)
            return redirect_to(wizard_url(facility_id, 3, draft), error=message)
        return render(
            request,
            "dashboard/book.html",
            {
                "facility": facility,
                "step": 3,
                "steps": WIZARD_STEPS,
                "draft": draft,
                "selection": SlotSelection.from_query(start, end),
                "cells": [],
                "slot_links": {},
                "slots_error": None,
                "error": message,
                "next_url": None,
                "back_url": wizard_url(facility_id, 2, draft),
            },
            session=session,
            status_code=400,
        )

    logger.info(f"User {session.user_id} booked facility {facility_id} -> booking {booking.id} ({booking.status.value})")

    if booking.status == BookingStatus.PENDING:
        msg = "Booking submitted and is pending admin approval. You will be notified once it is reviewed."
    else:
        msg = "Booking confirmed! You will receive a confirmation notification shortly."
    return redirect_to("/dashboard/bookings", msg=msg)


@router.get("/bookings", response_class=HTMLResponse)
async def my_bookings(
    request: Request,
    status: str = "ALL",
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """The user's bookings with status filter and summary counts"""
    status = status.upper() if status.upper() in MY_BOOKING_FILTERS else "ALL"
    bookings, error = [], None
    try:
        bookings = await BookingService(api).my()
    except ApiError as e:
        error = inline_error(e)

    shown = bookings if status == "ALL" else [b for b in bookings if b.status.value == status]
    stats = [
        ("Total", len(bookings)),
        ("Confirmed", count_status(bookings, BookingStatus.CONFIRMED)),
        ("Completed", count_status(bookings, BookingStatus.COMPLETED)),
        ("Cancelled", count_status(bookings, BookingStatus.CANCELLED)),
    ]

    return render(
        request,
        "dashboard/bookings.html",
        {
            "bookings": shown,
            "status": status,
            "filters": MY_BOOKING_FILTERS,
            "stats": stats,
            "error": error,
        },
        session=session,
    )


@router.post("/bookings/{booking_id}/cancel")
async def cancel_booking(
    booking_id: int,
    status: str = Form("ALL"),
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    try:
        await BookingService(api).cancel(booking_id)
    except ApiError as e:
        return redirect_to("/dashboard/bookings", error=inline_error(e), status=status)
    logger.info(f"User {session.user_id} cancelled booking {booking_id}")
    return redirect_to("/dashboard/bookings", msg="Booking cancelled.", status=status)


@router.post("/bookings/{booking_id}/extend")
async def extend_booking(
    booking_id: int,
    status: str = Form("ALL"),
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """Extend a confirmed or active booking by one slot"""
    try:
        booking = await BookingService(api).extend(booking_id)
    except ApiError as e:
        return redirect_to("/dashboard/bookings", error=inline_error(e), status=status)
    return redirect_to("/dashboard/bookings", msg=f"Booking extended until {booking.end_time[:5]}.", status=status)


async def _reviewable_booking(api: ApiClient, booking_id: int):
    """The user's booking and why it cannot be reviewed, if it cannot"""
    bookings = await BookingService(api).my()
    booking = next((b for b in bookings if b.id == booking_id), None)
    if booking is None:
        return None, "Booking not found."
    if not booking.can_review or booking.facility is None:
        return booking, "Only completed bookings can be reviewed."
    return booking, None


@router.get("/review/{booking_id}", response_class=HTMLResponse)
async def review_page(
    request: Request,
    booking_id: int,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    try:
        booking, problem = await _reviewable_booking(api, booking_id)
    except ApiError as e:
        booking, problem = None, inline_error(e)

    return render(
        request,
        "dashboard/review.html",
        {"booking": booking, "problem": problem, "labels": RATING_LABELS, "rating": 0, "comment": "", "error": None},
        session=session,
        status_code=404 if booking is None else 200,
    )


@router.post("/review/{booking_id}")
async def submit_review(
    request: Request,
    booking_id: int,
    rating: int = Form(0),
    comment: str = Form(""),
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """Rate a completed booking's facility"""
    try:
        booking, problem = await _reviewable_booking(api, booking_id)
    except ApiError as e:
        booking, problem = None, inline_error(e)

    context = {"booking": booking, "problem": problem, "labels": RATING_LABELS, "rating": rating, "comment": comment}
    if problem:
        return render(request, "dashboard/review.html", {**context, "error": None}, session=session, status_code=400)

    if not 1 <= rating <= 5:
        return render(
            request, "dashboard/review.html", {**context, "error": "Please select a rating."}, session=session, status_code=400
        )

    review = ReviewCreate(
        facility=Ref(id=booking.facility.id),
        user=Ref(id=session.user_id),
        booking=Ref(id=booking.id),
        rating=rating,
        comment=comment.strip() or None,
    )
    try:
        await ReviewService(api).submit(review)
    except ApiError as e:
        return render(
            request, "dashboard/review.html", {**context, "error": inline_error(e)}, session=session, status_code=400
        )

    return redirect_to("/dashboard/bookings", msg="Thank you! Your review has been submitted.")
