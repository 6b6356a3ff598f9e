"""
Waitlist Service
Queueing for a slot that is already booked
"""

from typing import List

from campus_portal.schemas.booking import WaitlistEntry, WaitlistJoin
from campus_portal.services.api_client import ApiClient


class WaitlistService:
    """Service for /waitlist"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def my(self) -> List[WaitlistEntry]:
        return [WaitlistEntry.model_validate(item) for item in await self.api.get("/waitlist/my")]

    async def join(self, entry: WaitlistJoin) -> WaitlistEntry:
        return WaitlistEntry.model_validate(await self.api.post("/waitlist", json=entry.to_api()))

    async def leave(self, entry_id: int) -> None:
        await self.api.delete(f"/waitlist/{entry_id}")
