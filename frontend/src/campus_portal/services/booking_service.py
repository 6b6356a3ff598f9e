"""
Booking Service
Booking lifecycle calls against /bookings
"""

from typing import List

from campus_portal.schemas.booking import Booking, BookingCreate
from campus_portal.services.api_client import ApiClient


class BookingService:
    """Service for /bookings"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def my(self) -> List[Booking]:
        return [Booking.model_validate(item) for item in await self.api.get("/bookings/my")]

    async def all(self) -> List[Booking]:
        return [Booking.model_validate(item) for item in await self.api.get("/bookings")]

    async def today(self) -> List[Booking]:
        return [Booking.model_validate(item) for item in await self.api.get("/bookings/today")]

    async def create(self, booking: BookingCreate) -> Booking:
        return Booking.model_validate(await self.api.post("/bookings", json=booking.to_api()))

    async def cancel(self, booking_id: int) -> Booking:
        return Booking.model_validate(await self.api.patch(f"/bookings/{booking_id}/cancel"))

    async def check_in(self, booking_id: int) -> Booking:
        return Booking.model_validate(await self.api.patch(f"/bookings/{booking_id}/check-in"))

    async def check_out(self, booking_id: int) -> Booking:
        return Booking.model_validate(await self.api.patch(f"/bookings/{booking_id}/check-out"))

    async def extend(self, booking_id: int) -> Booking:
        return Booking.model_validate(await self.api.patch(f"/bookings/{booking_id}/extend"))

    async def remove(self, booking_id: int) -> None:
        await self.api.delete(f"/bookings/{booking_id}")
