"""
Display helpers shared by templates
"""

from datetime import datetime, timezone
from typing import Optional


def greeting(hour: int) -> str:
    if hour < 12:
        return "Good morning"
    if hour < 17:
        return "Good afternoon"
    return "Good evening"


def relative_time(moment: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Short age of a timestamp: "just now", "5m ago", "3h ago", "2d ago" """
    if moment is None:
        return ""
    if now is None:
        now = datetime.now(timezone.utc) if moment.tzinfo else datetime.now()
    minutes = int((now - moment).total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def initials(name: Optional[str]) -> str:
    if not name:
        return "?"
    return "".join(part[0] for part in name.split() if part)[:2].upper()


def title_case(value: str) -> str:
    """CONFIRMED -> Confirmed"""
    return value[:1].upper() + value[1:].lower() if value else value


def format_datetime(moment: Optional[datetime]) -> str:
    if moment is None:
        return "—"
    return f"{moment.strftime('%b')} {moment.day}, {moment.year}, {moment.strftime('%I:%M %p').lstrip('0')}"
