"""
Approval Routes
Pending bookings awaiting an admin decision
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_admin_session, get_api
from campus_portal.services.api_client import ApiClient, ApiError, inline_error
from campus_portal.services.approval_service import ApprovalService
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/approvals", tags=["Approvals"])


@router.get("", response_class=HTMLResponse)
async def approvals_page(
    request: Request,
    approved: int = 0,
    rejected: int = 0,
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """Pending list with the decisions made so far in this sitting"""
    pending, error = [], None
    try:
        pending = await ApprovalService(api).pending()
    except ApiError as e:
        error = inline_error(e)

    return render(
        request,
        "admin/approvals.html",
        {"pending": pending, "approved": approved, "rejected": rejected, "error": error},
        session=session,
    )


@router.post("/{booking_id}/{decision}")
async def decide(
    booking_id: int,
    decision: str,
    remarks: str = Form(""),
    approved: int = Form(0),
    rejected: int = Form(0),
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """Approve or reject a pending booking"""
    service = ApprovalService(api)
    counters = {"approved": approved, "rejected": rejected}

    if decision not in ("approve", "reject"):
        return redirect_to("/admin/approvals", error="Unknown decision.", **counters)

    try:
        if decision == "approve":
            await service.approve(booking_id, remarks.strip() or None)
        else:
            await service.reject(booking_id, remarks.strip() or None)
    except ApiError as e:
        return redirect_to("/admin/approvals", error=inline_error(e), **counters)

    outcome = "approved" if decision == "approve" else "rejected"
    counters[outcome] += 1
    logger.info(f"Admin {session.user_id} {outcome} booking {booking_id}")
    msg = f"Booking #{booking_id} {outcome}."
    return redirect_to("/admin/approvals", msg=msg, **counters)
