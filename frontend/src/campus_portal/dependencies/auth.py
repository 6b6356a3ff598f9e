"""
Authentication Dependencies
FastAPI dependencies for reading the session and gating pages by role
"""

from typing import Optional

from fastapi import Depends, Request

from campus_portal.config import settings
from campus_portal.schemas.user import UserRole
from campus_portal.services.api_client import ApiClient
from campus_portal.utils.session import PortalSession, decode_session


class PageRedirect(Exception):
    """Raised by page dependencies to send the browser elsewhere"""

    def __init__(self, location: str, clear_session: bool = False):
        super().__init__(location)
        self.location = location
        self.clear_session = clear_session


def get_session(request: Request) -> Optional[PortalSession]:
    """Session from the cookie, or None when absent or invalid"""
    return decode_session(request.cookies.get(settings.SESSION_COOKIE_NAME))


def get_api(request: Request, session: Optional[PortalSession] = Depends(get_session)) -> ApiClient:
    """API client for this request, authenticated when a session exists"""
    return ApiClient(request.app.state.http_client, token=session.token if session else None)


async def get_current_session(
    request: Request,
    session: Optional[PortalSession] = Depends(get_session),
) -> PortalSession:
    """
    Require a signed-in user

    Raises:
        PageRedirect: To the sign-in page when there is no valid session
    """
    if session is None:
        # A cookie that no longer decodes is dropped on the way out
        stale = settings.SESSION_COOKIE_NAME in request.cookies
        raise PageRedirect("/", clear_session=stale)
    return session


def require_role(*allowed_roles: UserRole, redirect_to: Optional[str] = None):
    """
    Dependency factory restricting a page to some roles

    Usage:
        @router.get("/admin", dependencies=[Depends(require_role(UserRole.ADMIN))])

    Args:
        allowed_roles: Roles that may see the page
        redirect_to: Where other roles go, defaults to their own landing page

    Returns:
        Dependency function
    """

    async def role_checker(session: PortalSession = Depends(get_current_session)) -> PortalSession:
        if session.role not in allowed_roles:
            raise PageRedirect(redirect_to or session.home)
        return session

    return role_checker


async def get_member_session(session: PortalSession = Depends(get_current_session)) -> PortalSession:
    """Dashboard pages: any signed-in user except admins, who go to the console"""
    if session.is_admin:
        raise PageRedirect("/admin")
    return session


async def get_admin_session(
    session: PortalSession = Depends(require_role(UserRole.ADMIN, redirect_to="/dashboard")),
) -> PortalSession:
    """Admin console pages"""
    return session
