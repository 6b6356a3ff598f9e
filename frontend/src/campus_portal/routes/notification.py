"""
Notification Routes
Notification list, read/delete actions and the unread count for the bell
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from campus_portal.dependencies.auth import get_api, get_current_session, get_member_session
from campus_portal.services.api_client import ApiClient, ApiError, inline_error
from campus_portal.services.notification_service import NotificationService
from campus_portal.utils.session import PortalSession
from campus_portal.utils.templates import redirect_to, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard/notifications", tags=["Notifications"])


async def _ignore_failure(action, description: str) -> None:
    """Run a notification action; the page re-renders whether it worked or not"""
    try:
        await action
    except ApiError as e:
        inline_error(e)
        logger.info(f"Notification action '{description}' failed: {e.message}")


@router.get("", response_class=HTMLResponse)
async def notifications_page(
    request: Request,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    notifications, error = [], None
    try:
        notifications = await NotificationService(api).my()
    except ApiError as e:
        error = inline_error(e)

    notifications.sort(key=lambda n: n.created_at, reverse=True)
    return render(
        request,
        "dashboard/notifications.html",
        {
            "notifications": notifications,
            "unread_count": sum(1 for n in notifications if not n.is_read),
            "error": error,
        },
        session=session,
    )


@router.get("/unread")
async def unread_count(
    session: PortalSession = Depends(get_current_session),
    api: ApiClient = Depends(get_api),
):
    """Unread count polled by the notification bell"""
    try:
        unread = await NotificationService(api).unread()
    except ApiError as e:
        inline_error(e)
        return {"count": 0}
    return {"count": unread.count}


@router.post("/read-all")
async def mark_all_read(
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    await _ignore_failure(NotificationService(api).mark_all_read(), "read-all")
    return redirect_to("/dashboard/notifications")


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    await _ignore_failure(NotificationService(api).mark_read(notification_id), f"read {notification_id}")
    return redirect_to("/dashboard/notifications")


@router.post("/{notification_id}/delete")
async def delete_notification(
    notification_id: int,
    session: PortalSession = Depends(get_member_session),
    api: ApiClient = Depends(get_api),
):
    await _ignore_failure(NotificationService(api).delete(notification_id), f"delete {notification_id}")
    return redirect_to("/dashboard/notifications")
