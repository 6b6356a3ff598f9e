"""
Facility Service
Facility browsing, availability and admin facility actions
"""

from datetime import date
from typing import List

from campus_portal.schemas.facility import (
    AvailabilityResponse,
    Facility,
    FacilitySearch,
    FacilityType,
    MaintenanceSchedule,
)
from campus_portal.services.api_client import ApiClient


class FacilityService:
    """Service for /facilities, /facility-types and /maintenance"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list(self) -> List[Facility]:
        return [Facility.model_validate(item) for item in await self.api.get("/facilities")]

    async def get(self, facility_id: int) -> Facility:
        return Facility.model_validate(await self.api.get(f"/facilities/{facility_id}"))

    async def search(self, filters: FacilitySearch) -> List[Facility]:
        params = filters.to_params()
        data = await self.api.get("/facilities/search", params=params or None)
        return [Facility.model_validate(item) for item in data]

    async def browse(self, filters: FacilitySearch, only_available: bool = False) -> List[Facility]:
        """Search when any server-side filter is set, else list everything"""
        facilities = await self.list() if filters.is_empty else await self.search(filters)
        if only_available:
            return [f for f in facilities if f.is_available]
        return facilities

    async def availability(self, facility_id: int, on: date) -> AvailabilityResponse:
        data = await self.api.get(f"/facilities/{facility_id}/availability", params={"date": on.isoformat()})
        return AvailabilityResponse.model_validate(data)

    async def toggle_availability(self, facility_id: int) -> Facility:
        return Facility.model_validate(await self.api.patch(f"/facilities/{facility_id}/toggle-availability"))

    async def remove(self, facility_id: int) -> None:
        await self.api.delete(f"/facilities/{facility_id}")

    async def types(self) -> List[FacilityType]:
        return [FacilityType.model_validate(item) for item in await self.api.get("/facility-types")]

    async def maintenance(self, facility_id: int) -> List[MaintenanceSchedule]:
        data = await self.api.get(f"/maintenance/facility/{facility_id}")
        return [MaintenanceSchedule.model_validate(item) for item in data]
