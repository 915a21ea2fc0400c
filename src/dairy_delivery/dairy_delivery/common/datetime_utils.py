from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Tuple

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def is_iso_date(value: object) -> bool:
    return isinstance(value, str) and bool(ISO_DATE_RE.match(value))


def today_iso() -> str:
    return date.today().strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_prefix(month_index: int, year: int) -> str:
    """Build the ``YYYY-MM`` prefix for a zero-indexed month."""
    return f"{int(year):04d}-{int(month_index) + 1:02d}"


def current_month(today: Optional[date] = None) -> Tuple[int, int]:
    """Return (zero-indexed month, year) for today."""
    today = today or date.today()
    return today.month - 1, today.year
