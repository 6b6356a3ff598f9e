"""
Admin Facility Routes
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_admin_session, get_api
from campus_portal.services.api_client import ApiClient, ApiError, inline_error
from campus_portal.services.facility_service import FacilityService
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/facilities", tags=["Admin Facilities"])


@router.get("", response_class=HTMLResponse)
async def facilities_page(
    request: Request,
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    facilities, error = [], None
    try:
        facilities = await FacilityService(api).list()
    except ApiError as e:
        error = inline_error(e)

    available = sum(1 for f in facilities if f.is_available)
    return render(
        request,
        "admin/facilities.html",
        {
            "facilities": facilities,
            "available": available,
            "unavailable": len(facilities) - available,
            "error": error,
        },
        session=session,
    )


@router.post("/{facility_id}/toggle")
async def toggle_facility(
    facility_id: int,
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    try:
        facility = await FacilityService(api).toggle_availability(facility_id)
    except ApiError as e:
        return redirect_to("/admin/facilities", error=inline_error(e))

    state = "available" if facility.is_available else "unavailable"
    logger.info(f"Admin {session.user_id} marked facility {facility_id} {state}")
    return redirect_to("/admin/facilities", msg=f"{facility.name} is now {state}.")


@router.post("/{facility_id}/delete")
async def delete_facility(
    facility_id: int,
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    try:
        await FacilityService(api).remove(facility_id)
    except ApiError as e:
        return redirect_to("/admin/facilities", error=inline_error(e))

    logger.info(f"Admin {session.user_id} deleted facility {facility_id}")
    return redirect_to("/admin/facilities", msg="Facility deleted.")
