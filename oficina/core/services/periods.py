"""
UTC period arithmetic shared by the stock and dashboard reports.

Month windows are half-open: [00:00 UTC of day 1, 00:00 UTC of day 1 of the
next month). Day windows follow the same convention.
"""

import re
from dataclasses import dataclass
from datetime import MAXYEAR, UTC, date, datetime, timedelta

from oficina.core.exceptions import InvalidRangeError

_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


@dataclass(frozen=True)
class Period:
    """Half-open UTC time window."""

    label: str
    start: datetime
    end: datetime

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()


def month_window(selector: str | None = None, now: datetime | None = None) -> Period:
    """
    Resolve a "YYYY-MM" selector into its UTC month window.

    An empty selector means the current UTC month.

    Raises:
        InvalidRangeError: selector is not numeric YYYY-MM or month is outside 1-12
    """
    if selector is None or not selector.strip():
        current = (now or datetime.now(UTC)).astimezone(UTC)
        year, month = current.year, current.month
    else:
        match = _MONTH_RE.match(selector)
        if not match:
            raise InvalidRangeError(selector, "expected month as YYYY-MM")
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12 or year < 1:
            raise InvalidRangeError(selector, "month must be between 01 and 12")
        # The window end must still be a representable datetime
        if (year, month) == (MAXYEAR, 12):
            raise InvalidRangeError(selector, "month is past the last supported month")

    start = datetime(year, month, 1, tzinfo=UTC)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=UTC)
    else:
        end = datetime(year, month + 1, 1, tzinfo=UTC)
    return Period(label=f"{year:04d}-{month:02d}", start=start, end=end)


def day_window(now: datetime | None = None, offset_days: int = 0, span_days: int = 1) -> Period:
    """UTC window of `span_days` days starting `offset_days` after today's midnight."""
    current = (now or datetime.now(UTC)).astimezone(UTC)
    midnight = datetime(current.year, current.month, current.day, tzinfo=UTC)
    start = midnight + timedelta(days=offset_days)
    end = start + timedelta(days=span_days)
    return Period(label=start.date().isoformat(), start=start, end=end)


def parse_date(value: str | date, field: str = "date") -> date:
    """Parse an ISO date (YYYY-MM-DD), raising InvalidRangeError on failure."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (ValueError, AttributeError):
        raise InvalidRangeError(value, f"{field} must be an ISO date (YYYY-MM-DD)")


def add_months(start: date, months: int) -> date:
    """
    Advance a date by calendar months.

    Day overflow rolls into the following month, so 31 Jan + 1 month is
    3 Mar (2 Mar in leap years) rather than being clamped to 28/29 Feb.

    Raises:
        InvalidRangeError: result falls outside the representable date range
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    try:
        return date(year, month, 1) + timedelta(days=start.day - 1)
    except (ValueError, OverflowError) as e:
        raise InvalidRangeError(start, f"cannot advance {months} months") from e
