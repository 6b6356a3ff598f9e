"""
Notification Schemas
"""

from datetime import datetime
from typing import List, Optional

from campus_portal.schemas.base import ApiModel, Ref


class Notification(ApiModel):
    id: int
    title: str
    message: str
    type: str
    is_read: bool = False
    created_at: datetime
    booking: Optional[Ref] = None


class UnreadNotifications(ApiModel):
    count: int
    notifications: List[Notification] = []
