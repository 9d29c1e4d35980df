from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()
