from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_KEY_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def format_date_key(value: date) -> str:
    return value.strftime(DATE_KEY_FORMAT)


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()
