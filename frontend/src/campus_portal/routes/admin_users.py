"""
Admin User Routes
Role changes, activation and removal of accounts
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_admin_session, get_api
from campus_portal.schemas.user import UserRole
from campus_portal.services.api_client import ApiClient, ApiError, inline_error
from campus_portal.services.user_service import UserService
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/users", tags=["Admin Users"])

ROLE_FILTERS = ["ALL"] + [role.value for role in UserRole]


@router.get("", response_class=HTMLResponse)
async def users_page(
    request: Request,
    role: str = "ALL",
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    role = role.upper() if role.upper() in ROLE_FILTERS else "ALL"
    users, error = [], None
    try:
        users = await UserService(api).list()
    except ApiError as e:
        error = inline_error(e)

    shown = users if role == "ALL" else [u for u in users if u.role.value == role]
    return render(
        request,
        "admin/users.html",
        {
            "users": shown,
            "role": role,
            "filters": ROLE_FILTERS,
            "roles": [r.value for r in UserRole],
            "error": error,
        },
        session=session,
    )


@router.post("/{user_id}/role")
async def change_role(
    user_id: int,
    role: UserRole = Form(...),
    current_role: UserRole = Form(...),
    filter_role: str = Form("ALL"),
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    """Change a user's role; choosing the same role is a no-op"""
    if role == current_role:
        return redirect_to("/admin/users", role=filter_role)

    try:
        user = await UserService(api).change_role(user_id, role)
    except ApiError as e:
        return redirect_to("/admin/users", error=inline_error(e), role=filter_role)

    logger.info(f"Admin {session.user_id} changed role of user {user_id} to {role.value}")
    return redirect_to("/admin/users", msg=f"{user.name} is now {role.value}.", role=filter_role)


@router.post("/{user_id}/activate")
async def activate_user(
    user_id: int,
    filter_role: str = Form("ALL"),
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    try:
        user = await UserService(api).activate(user_id)
    except ApiError as e:
        return redirect_to("/admin/users", error=inline_error(e), role=filter_role)
    return redirect_to("/admin/users", msg=f"{user.name} activated.", role=filter_role)


@router.post("/{user_id}/deactivate")
async def deactivate_user(
    user_id: int,
    filter_role: str = Form("ALL"),
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    try:
        user = await UserService(api).deactivate(user_id)
    except ApiError as e:
        return redirect_to("/admin/users", error=inline_error(e), role=filter_role)
    return redirect_to("/admin/users", msg=f"{user.name} deactivated.", role=filter_role)


@router.post("/{user_id}/delete")
async def delete_user(
    user_id: int,
    filter_role: str = Form("ALL"),
    session: PortalSession = Depends(get_admin_session),
    api: ApiClient = Depends(get_api),
):
    try:
        await UserService(api).remove(user_id)
    except ApiError as e:
        return redirect_to("/admin/users", error=inline_error(e), role=filter_role)

    logger.info(f"Admin {session.user_id} deleted user {user_id}")
    return redirect_to("/admin/users", msg="User deleted.", role=filter_role)
