"""
Template rendering utilities
"""

from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from campus_portal.config import settings
from campus_portal.utils.formatting import format_datetime, initials, relative_time, title_case
from campus_portal.utils.session import PortalSession

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["relative_time"] = relative_time
templates.env.filters["initials"] = initials
templates.env.filters["title_case"] = title_case
templates.env.filters["datetime"] = format_datetime
templates.env.globals["app_name"] = settings.APP_NAME
templates.env.globals["poll_seconds"] = settings.NOTIFICATION_POLL_SECONDS


def render(
    request: Request,
    template_name: str,
    context: Optional[Dict[str, Any]] = None,
    session: Optional[PortalSession] = None,
    status_code: int = 200,
):
    """Render a page with the request, session and any flash message in context"""
    page_context = {
        "session": session,
        "flash": request.query_params.get("msg"),
        "flash_error": request.query_params.get("error"),
    }
    page_context.update(context or {})
    return templates.TemplateResponse(request, template_name, page_context, status_code=status_code)


def redirect_to(url: str, msg: Optional[str] = None, error: Optional[str] = None, **params: Any) -> RedirectResponse:
    """303 redirect after a form post, optionally carrying a flash message"""
    query = {key: value for key, value in params.items() if value is not None}
    if msg:
        query["msg"] = msg
    if error:
        query["error"] = error
    if query:
        url = f"{url}{'&' if '?' in url else '?'}{urlencode(query)}"
    return RedirectResponse(url, status_code=303)
