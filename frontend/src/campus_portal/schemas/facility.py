"""
Facility Schemas
Facilities, facility types, availability slots and maintenance windows
"""

from datetime import date, datetime
from typing import Dict, List, Optional

from campus_portal.schemas.base import ApiModel

# Placeholder photos per facility type name
PLACEHOLDER_IMAGES: Dict[str, str] = {
    "Lecture Hall": "https://images.unsplash.com/photo-1541829070764-84a7d30dd3f3?w=800&q=80",
    "Computer Laboratory": "https://images.unsplash.com/photo-1580582932707-520aed937b7b?w=800&q=80",
    "Auditorium": "https://images.unsplash.com/photo-1503095396549-807759245b35?w=800&q=80",
    "Sports Facility": "https://images.unsplash.com/photo-1574629810360-7efbbe195018?w=800&q=80",
    "Conference Room": "https://images.unsplash.com/photo-1497366216548-37526070297c?w=800&q=80",
    "Workshop Room": "https://images.unsplash.com/photo-1522071820081-009f0129c71c?w=800&q=80",
}
DEFAULT_IMAGE = "https://images.unsplash.com/photo-1562774053-701939374585?w=800&q=80"

AMENITY_LABELS = [
    ("has_wifi", "Wi-Fi"),
    ("has_projector", "Projector"),
    ("has_air_conditioning", "Air Conditioning"),
    ("has_whiteboard", "Whiteboard"),
    ("has_pa_system", "PA System"),
    ("has_video_conferencing", "Video Conferencing"),
    ("is_wheelchair_accessible", "Wheelchair Accessible"),
    ("is_outdoor", "Outdoor"),
]


class FacilityType(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    requires_approval: bool = False


class Facility(ApiModel):
    """Facility as returned by the API"""

    id: int
    name: str
    location: str = ""
    capacity: int = 0
    facility_type: Optional[FacilityType] = None

    has_projector: bool = False
    has_air_conditioning: bool = False
    has_whiteboard: bool = False
    has_pa_system: bool = False
    has_video_conferencing: bool = False
    has_wifi: bool = False
    is_outdoor: bool = False
    is_wheelchair_accessible: bool = False

    opening_time: Optional[str] = None
    closing_time: Optional[str] = None
    is_available: bool = True
    image_url: Optional[str] = None
    rules: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def type_name(self) -> str:
        return self.facility_type.name if self.facility_type else ""

    @property
    def requires_approval(self) -> bool:
        return bool(self.facility_type and self.facility_type.requires_approval)

    @property
    def image(self) -> str:
        """Own photo, else the placeholder for its type, else the default"""
        return self.image_url or PLACEHOLDER_IMAGES.get(self.type_name) or DEFAULT_IMAGE

    def amenities(self, include_missing: bool = False) -> List[Dict[str, object]]:
        items = [{"label": label, "active": bool(getattr(self, attr))} for attr, label in AMENITY_LABELS]
        if include_missing:
            return items
        return [item for item in items if item["active"]]


class FacilitySummary(ApiModel):
    """Nested facility reference carried by reviews"""

    id: int
    name: str


class TimeSlot(ApiModel):
    start_time: str
    end_time: str
    available: bool


class AvailabilityResponse(ApiModel):
    facility_id: int
    facility_name: Optional[str] = None
    date: date
    slots: List[TimeSlot] = []


class FacilitySearch(ApiModel):
    """Server-side search filters; unset filters are left out of the query"""

    name: Optional[str] = None
    type_id: Optional[int] = None
    min_capacity: Optional[int] = None
    has_wifi: Optional[bool] = None
    has_projector: Optional[bool] = None
    has_air_conditioning: Optional[bool] = None

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for key, value in self.model_dump(by_alias=True).items():
            if value is None or value is False or value == "":
                continue
            params[key] = "true" if value is True else str(value)
        return params

    @property
    def is_empty(self) -> bool:
        return not self.to_params()


class MaintenanceSchedule(ApiModel):
    id: int
    start_date: date
    end_date: date
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_upcoming(self, today: date) -> bool:
        return self.end_date >= today
