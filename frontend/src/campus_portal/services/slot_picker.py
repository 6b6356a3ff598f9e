"""
Slot Selection
Start/end slot picking for the booking forms. Slots are "HH:MM" start times,
so string order is time order.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from campus_portal.schemas.facility import TimeSlot


@dataclass(frozen=True)
class SlotSelection:
    """Selected start and end slot; both None before the first click"""

    start: Optional[str] = None
    end: Optional[str] = None

    @classmethod
    def from_query(cls, start: Optional[str], end: Optional[str]) -> "SlotSelection":
        # An end without a start cannot come from clicking
        if not start:
            return cls()
        return cls(start=start, end=end or None)

    def click(self, slot: str) -> "SlotSelection":
        """Selection after clicking `slot`"""
        if not self.start:
            return SlotSelection(start=slot)
        if slot == self.start:
            return SlotSelection()
        if not self.end:
            return SlotSelection(start=self.start, end=slot)
        return SlotSelection(start=slot)

    def is_selected(self, slot: str) -> bool:
        if slot == self.start or slot == self.end:
            return True
        return bool(self.start and self.end and self.start < slot < self.end)

    @property
    def complete(self) -> bool:
        return bool(self.start and self.end)

    @property
    def summary(self) -> str:
        if not self.start:
            return ""
        if not self.end:
            return f"Start: {self.start} - select your end slot"
        return f"Selected: {self.start} to {self.end}"

    def as_query(self) -> Dict[str, str]:
        params = {}
        if self.start:
            params["start"] = self.start
        if self.end:
            params["end"] = self.end
        return params


def slot_grid(slots: List[TimeSlot], selection: SlotSelection) -> List[Dict[str, object]]:
    """
    Render-ready slot cells

    Each available cell carries the selection a click on it would produce;
    booked cells carry none and are not clickable.
    """
    cells = []
    for slot in slots:
        label = slot.start_time[:5]
        cells.append(
            {
                "label": label,
                "end_label": slot.end_time[:5],
                "available": slot.available,
                "selected": slot.available and selection.is_selected(label),
                "next": selection.click(label) if slot.available else None,
            }
        )
    return cells
