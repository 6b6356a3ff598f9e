"""
Profile Routes
Edit own details and change password
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from campus_portal.dependencies.auth import get_api, get_member_session
from campus_portal.schemas.user import UserRole, UserUpdate
from campus_portal.services.api_client import ApiClient, ApiError, inline_error
from campus_portal.services.auth_service import AuthService
from campus_portal.services.user_service import UserService
from campus_portal.utils.session import PortalSession, set_session_cookie
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard/profile", tags=["Profile"])


async def _profile_page(request: Request, session: PortalSession, api: ApiClient, error=None, password_error=None):
    try:
        user = await AuthService(api).me()
    except ApiError as e:
        inline_error(e)
        user = None
        error = error or e.message

    return render(
        request,
        "dashboard/profile.html",
        {"user": user, "error": error, "password_error": password_error},
        session=session,
        status_code=400 if (error or password_error) and user is not None else 200,
    )


@router.get("", response_class=HTMLResponse)
async def profile_page(
    request: Request,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    return await _profile_page(request, session, api)


@router.post("")
async def update_profile(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(""),
    student_id: str = Form(""),
    staff_id: str = Form(""),
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    """Save profile fields and refresh the session snapshot"""
    try:
        changes = UserUpdate(
            name=name,
            email=email,
            phone=phone or None,
            student_id=(student_id or None) if session.role == UserRole.STUDENT else None,
            staff_id=(staff_id or None) if session.role == UserRole.STAFF else None,
        )
    except ValidationError:
        return await _profile_page(request, session, api, error="Name cannot be empty.")

    try:
        user = await UserService(api).update(session.user_id, changes)
    except ApiError as e:
        return await _profile_page(request, session, api, error=inline_error(e))

    response = redirect_to("/dashboard/profile", msg="Profile updated.")
    set_session_cookie(response, PortalSession.from_user(session.token, user))
    return response


@router.post("/password")
async def change_password(
    request: Request,
    current_password: str = Form(...),
    new_password: str = Form(...),
    confirm_password: str = Form(...),
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    if new_password != confirm_password:
        return await _profile_page(request, session, api, password_error="New passwords do not match.")

    try:
        await AuthService(api).change_password(current_password, new_password)
    except ApiError as e:
        return await _profile_page(request, session, api, password_error=inline_error(e))

    logger.info(f"User {session.user_id} changed their password")
    return redirect_to("/dashboard/profile", msg="Password changed.")
