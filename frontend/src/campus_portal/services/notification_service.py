"""
Notification Service
In-app notifications for the signed-in user
"""

from typing import List

from campus_portal.schemas.notification import Notification, UnreadNotifications
from campus_portal.services.api_client import ApiClient


class NotificationService:
    """Service for /notifications"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def my(self) -> List[Notification]:
        return [Notification.model_validate(item) for item in await self.api.get("/notifications/my")]

    async def unread(self) -> UnreadNotifications:
        return UnreadNotifications.model_validate(await self.api.get("/notifications/my/unread"))

    async def mark_read(self, notification_id: int) -> Notification:
        return Notification.model_validate(await self.api.patch(f"/notifications/{notification_id}/read"))

    async def mark_all_read(self) -> None:
        await self.api.patch("/notifications/read-all")

    async def delete(self, notification_id: int) -> None:
        await self.api.delete(f"/notifications/{notification_id}")
