"""Period grid calculator.

Pure date arithmetic for a (year, month) selection. Months are one-based
(1 = January) everywhere in this package; callers holding a zero-based month
convert once with ``month_from_zero_based``.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from ..core.constants import DATE_KEY_FORMAT

WEEK_LENGTH = 7


def month_from_zero_based(month0: int) -> int:
    """0-11 (calendar widget convention) -> 1-12."""
    return int(month0) + 1


def month_to_zero_based(month: int) -> int:
    return int(month) - 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def date_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


@dataclass(frozen=True)
class Period:
    """A (year, month) selection; never stored."""

    year: int
    month: int

    @property
    def days_in_month(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, self.days_in_month)

    def date_key(self, day: int) -> str:
        return date_key(self.year, self.month, day)

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month


@dataclass(frozen=True)
class WeekRange:
    start: date
    end: date

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def as_dict(self) -> dict:
        return {
            "start": self.start.strftime(DATE_KEY_FORMAT),
            "end": self.end.strftime(DATE_KEY_FORMAT),
            "label": format_range(self),
        }


def weeks_in_month(year: int, month: int) -> list[WeekRange]:
    """Monday-start 7-day ranges covering the month.

    The first range starts on the Monday on/before the 1st; ranges continue
    while their start is not after the last day of the month, so boundary
    ranges may include days of the neighbouring months.
    """

    first = date(year, month, 1)
    last = date(year, month, days_in_month(year, month))

    # date.weekday(): Monday=0 .. Sunday=6, so Sunday shifts back 6 days.
    start = first - timedelta(days=first.weekday())

    weeks: list[WeekRange] = []
    while start <= last:
        weeks.append(WeekRange(start=start, end=start + timedelta(days=WEEK_LENGTH - 1)))
        start += timedelta(days=WEEK_LENGTH)
    return weeks


def week_range(year: int, month: int, index: int) -> WeekRange:
    weeks = weeks_in_month(year, month)
    if not 0 <= index < len(weeks):
        raise IndexError(f"week index {index} out of range for {year}-{month:02d} ({len(weeks)} weeks)")
    return weeks[index]


def weekdays_in_month(year: int, month: int) -> list[int]:
    """Day-of-month numbers falling on Monday..Friday, ascending."""
    return [
        day
        for day in range(1, days_in_month(year, month) + 1)
        if date(year, month, day).weekday() < 5
    ]


def format_range(week: WeekRange) -> str:
    # Presentation only; the dates themselves are the keys.
    return f"{week.start.strftime('%x')} - {week.end.strftime('%x')}"
