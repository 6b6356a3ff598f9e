"""
Booking Analytics
Reducers over the already-fetched booking list for the admin analytics page
"""

from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional

from campus_portal.schemas.booking import Booking, BookingStatus

DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
HOURS = list(range(6, 23))  # 06:00 - 22:00
TIME_RANGES = (7, 14, 30)
EMPTY = "—"


def parse_hour(time_str: str) -> int:
    return int(time_str.split(":")[0])


def duration_hours(start: str, end: str) -> int:
    """Whole-hour span between two HH:MM[:SS] times, never negative"""
    return max(0, parse_hour(end) - parse_hour(start))


def bookings_per_day(bookings: List[Booking], days: int = 30, today: Optional[date] = None) -> List[Dict]:
    """Booking counts for each of the last `days` days, oldest first"""
    today = today or date.today()
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    counts = Counter(b.date for b in bookings)
    return [{"day": f"{d.strftime('%b')} {d.day}", "date": d.isoformat(), "count": counts.get(d, 0)} for d in window]


def top_facilities(bookings: List[Booking], n: int = 8) -> List[Dict]:
    """Most-booked facilities, long names shortened for the chart"""
    counts = Counter(b.facility.name if b.facility else "Unknown" for b in bookings)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:n]
    return [{"name": name if len(name) <= 22 else name[:20] + "…", "count": count} for name, count in ranked]


def role_breakdown(bookings: List[Booking]) -> List[Dict]:
    counts = Counter(b.user.role.value if b.user else "UNKNOWN" for b in bookings)
    return [{"name": role, "value": value} for role, value in counts.items()]


def peak_heatmap(bookings: List[Booking]) -> List[List[int]]:
    """
    Bookings per weekday (rows, Mon first) and hour (columns, 6..22)

    A booking counts once for every hour it covers, start hour included,
    end hour excluded.
    """
    grid = [[0 for _ in HOURS] for _ in DAYS]
    for booking in bookings:
        row = booking.date.weekday()
        start_hour = parse_hour(booking.start_time)
        end_hour = parse_hour(booking.end_time)
        for hour in range(start_hour, end_hour):
            if hour > 22:
                break
            if hour in HOURS:
                grid[row][HOURS.index(hour)] += 1
    return grid


def count_status(bookings: List[Booking], status: BookingStatus) -> int:
    return sum(1 for b in bookings if b.status == status)


def average_duration(bookings: List[Booking]) -> str:
    timed = [b for b in bookings if b.start_time and b.end_time]
    if not timed:
        return EMPTY
    avg = sum(duration_hours(b.start_time, b.end_time) for b in timed) / len(timed)
    return f"{avg:.1f}h"


def cancellation_rate(bookings: List[Booking]) -> str:
    if not bookings:
        return EMPTY
    cancelled = count_status(bookings, BookingStatus.CANCELLED)
    return f"{cancelled / len(bookings) * 100:.1f}%"


def bookings_in_month(bookings: List[Booking], today: Optional[date] = None) -> List[Booking]:
    month = (today or date.today()).strftime("%Y-%m")
    return [b for b in bookings if b.date.isoformat().startswith(month)]


def build_report(bookings: List[Booking], days: int = 30, today: Optional[date] = None) -> Dict:
    """Everything the analytics page shows, computed in one pass per metric"""
    if days not in TIME_RANGES:
        days = 30
    per_day = bookings_per_day(bookings, days, today)
    facilities = top_facilities(bookings)
    heatmap = peak_heatmap(bookings)
    return {
        "total": len(bookings),
        "this_month": len(bookings_in_month(bookings, today)),
        "confirmed": count_status(bookings, BookingStatus.CONFIRMED),
        "cancelled": count_status(bookings, BookingStatus.CANCELLED),
        "completed": count_status(bookings, BookingStatus.COMPLETED),
        "avg_duration": average_duration(bookings),
        "cancel_rate": cancellation_rate(bookings),
        "days": days,
        "per_day": per_day,
        "max_day": max([1] + [d["count"] for d in per_day]),
        "facilities": facilities,
        "max_facility": max([1] + [f["count"] for f in facilities]),
        "roles": role_breakdown(bookings),
        "heatmap": heatmap,
        "max_heat": max([1] + [cell for row in heatmap for cell in row]),
        "day_labels": DAYS,
        "hour_labels": HOURS,
    }
