"""Company holiday calendar and the Sunday-first month view shown on the calendar page."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from typing import Any, Optional

from ..common.datetime_utils import today
from ..common.validators import require_month, require_year
from ..core.constants import DEFAULT_LOCATION, HOLIDAY_LOCATIONS
from ..core.exceptions import ValidationError
from ..periods.grid import Period

_ALL = HOLIDAY_LOCATIONS
_SOUTH = ("Bangalore", "Chennai", "Coimbatore")
_WEST = ("Pune", "Mumbai")


@dataclass(frozen=True)
class Holiday:
    date: str
    reason: str
    locations: tuple[str, ...]

    def as_dict(self) -> dict:
        return {"date": self.date, "reason": self.reason, "locations": list(self.locations)}


HOLIDAYS: tuple[Holiday, ...] = (
    Holiday("2025-01-01", "New Year", _ALL),
    Holiday("2025-01-14", "Pongal / Makara Sankranti", _ALL),
    Holiday("2025-03-31", "Ramzan", _ALL),
    Holiday("2025-05-01", "Maharashtra Day/May day", _ALL),
    Holiday("2025-08-15", "Independence Day", _ALL),
    Holiday("2025-08-27", "Ganesh Chaturthi / Vinayaka Vrata", _ALL),
    Holiday("2025-10-01", "Ayudha Pooja", _SOUTH),
    Holiday("2025-10-02", "Gandhi Jayanthi/Dasara", _ALL),
    Holiday("2025-10-20", "Diwali (Dhanatrayodashi) / Naraka Chaturdashi", _SOUTH),
    Holiday("2025-10-21", "Diwali Amavasya (Laxmi Pujan)", _WEST),
    Holiday("2025-10-22", "Balipadyami, Diwali", _WEST),
    Holiday("2025-12-25", "Christmas", _ALL),
)

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def require_location(value: Optional[str]) -> str:
    location = (value or DEFAULT_LOCATION).strip()
    if location not in HOLIDAY_LOCATIONS:
        raise ValidationError(f"location must be one of {', '.join(HOLIDAY_LOCATIONS)}")
    return location


def holidays_for(year: int, month: int, location: str) -> list[Holiday]:
    prefix = f"{year:04d}-{month:02d}-"
    return [h for h in HOLIDAYS if h.date.startswith(prefix) and location in h.locations]


def month_calendar(year: Any = None, month: Any = None, location: Optional[str] = None) -> dict:
    """Weeks of the month as 7-slot rows starting Sunday; slots outside the month are None."""
    now = today()
    year = now.year if year in (None, "") else require_year(year)
    month = now.month if month in (None, "") else require_month(month)
    location = require_location(location)
    period = Period(year, month)

    by_date = {h.date: h for h in holidays_for(year, month, location)}
    weeks = []
    for week in calendar.Calendar(firstweekday=6).monthdayscalendar(year, month):
        row = []
        for day in week:
            if day == 0:
                row.append(None)
                continue
            key = period.date_key(day)
            holiday = by_date.get(key)
            row.append({"day": day, "date": key, "holiday": holiday.reason if holiday else None})
        weeks.append(row)

    return {
        "year": year,
        "month": month,
        "month_name": calendar.month_name[month],
        "location": location,
        "locations": list(HOLIDAY_LOCATIONS),
        "day_names": list(DAY_NAMES),
        "weeks": weeks,
        "holidays": [h.as_dict() for h in by_date.values()],
    }
