"""
Authentication Routes
Sign-in and registration page, session start and end
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_api, get_session
from campus_portal.schemas.user import REGISTRATION_ROLES, RegisterRequest, UserRole
from campus_portal.services.api_client import ApiClient, ApiError
from campus_portal.services.auth_service import AuthService
from campus_portal.services.user_service import UserService
from campus_portal.utils.session import PortalSession, clear_session_cookie, set_session_cookie
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


async def _auth_page(request: Request, api: ApiClient, mode: str = "login", error: Optional[str] = None, **form):
    """Render the sign-in page; the department list is optional"""
    try:
        departments = await UserService(api).departments()
    except ApiError as e:
        logger.info(f"Departments unavailable for registration form: {e.message}")
        departments = []

    return render(
        request,
        "login.html",
        {
            "mode": "register" if mode == "register" else "login",
            "error": error,
            "roles": REGISTRATION_ROLES,
            "departments": departments,
            "form": form,
        },
        status_code=400 if error else 200,
    )


@router.get("/", response_class=HTMLResponse)
async def auth_page(
    request: Request,
    mode: str = "login",
    session: Optional[PortalSession] = Depends(get_session),
    api: ApiClient = Depends(get_api),
):
    """Sign-in / registration page; signed-in users go to their landing page"""
    if session is not None:
        return redirect_to(session.home)
    return await _auth_page(request, api.with_token(None), mode)


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    api: ApiClient = Depends(get_api),
):
    """Exchange credentials for an API token and start the session"""
    api = api.with_token(None)
    try:
        auth = await AuthService(api).login(email, password)
    except ApiError as e:
        return await _auth_page(request, api, "login", e.message or "Login failed. Please try again.", email=email)

    session = PortalSession.from_user(auth.token, auth.user)
    logger.info(f"User {auth.user.id} signed in as {auth.user.role.value}")

    response = redirect_to(session.home)
    set_session_cookie(response, session)
    return response


@router.post("/register")
async def register(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    role: UserRole = Form(UserRole.STUDENT),
    student_id: str = Form(""),
    staff_id: str = Form(""),
    phone: str = Form(""),
    department_id: Optional[int] = Form(None),
    api: ApiClient = Depends(get_api),
):
    """Create an account and sign straight in"""
    api = api.with_token(None)
    form = {"name": name, "email": email, "role": role.value, "student_id": student_id, "staff_id": staff_id, "phone": phone}

    if role not in [r for r, _ in REGISTRATION_ROLES]:
        return await _auth_page(request, api, "register", "This role cannot be chosen at registration.", **form)

    body = RegisterRequest.from_form(name, email, password, role, student_id, staff_id, phone, department_id)
    try:
        auth = await AuthService(api).register(body)
    except ApiError as e:
        return await _auth_page(request, api, "register", e.message or "Registration failed. Please try again.", **form)

    logger.info(f"User {auth.user.id} registered as {auth.user.role.value}")

    response = redirect_to("/dashboard")
    set_session_cookie(response, PortalSession.from_user(auth.token, auth.user))
    return response


@router.post("/logout")
async def logout(api: ApiClient = Depends(get_api)):
    """End the session; the API call is best effort"""
    if api.token:
        try:
            await AuthService(api).logout()
        except ApiError as e:
            logger.info(f"Logout call failed, clearing session anyway: {e.message}")

    response = redirect_to("/")
    clear_session_cookie(response)
    return response
