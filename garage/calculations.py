"""Helper functions for maintenance date handling."""

import re
from datetime import date, datetime, time
from typing import Optional, Union

from dateutil import parser
from dateutil.relativedelta import relativedelta

from .errors import ValidationError
from .status import ScheduleStatus

DateInput = Union[datetime, date, str]

# Calendar date at the start of an ISO string: YYYY-MM-DD or YYYYMMDD
FULL_DATE = re.compile(r"\d{4}-\d{2}-\d{2}|\d{8}")


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def to_local_datetime(value: DateInput) -> datetime:
    """
    Convert a date-like value to an aware local datetime.

    - datetime: naive values are taken as local time
    - date: local midnight (missing time defaults to start of day)
    - str: ISO-8601 with a full calendar date (year, month and day);
      date-only strings become local midnight
    """
    if isinstance(value, datetime):
        return value.astimezone()
    if isinstance(value, date):
        return datetime.combine(value, time.min).astimezone()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Invalid date: empty value")
        if not FULL_DATE.match(text):
            raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
        try:
            return parser.isoparse(text).astimezone()
        except (ValueError, OverflowError) as e:
            raise ValidationError(f"Invalid date: {value!r}") from e
    raise ValidationError(f"Invalid date: {value!r}")


def start_of_today(now: Optional[datetime] = None) -> datetime:
    """Local midnight of the day containing `now`."""
    now = now if now is not None else local_now()
    return now.astimezone().replace(hour=0, minute=0, second=0, microsecond=0)


def is_past(when: datetime, now: Optional[datetime] = None) -> bool:
    """Past/current when `when <= start_of_today`."""
    return when <= start_of_today(now)


def lead_window_end(lead_days: int, now: Optional[datetime] = None) -> datetime:
    """Upper bound of the look-ahead window: now + lead_days."""
    if isinstance(lead_days, bool) or not isinstance(lead_days, int) or lead_days < 0:
        raise ValidationError(f"Invalid lead days: {lead_days!r}")
    now = now if now is not None else local_now()
    return now.astimezone() + relativedelta(days=lead_days)


def is_due_soon(when: datetime, lead_days: int, now: Optional[datetime] = None) -> bool:
    """True when start_of_today < when <= now + lead_days."""
    return start_of_today(now) < when <= lead_window_end(lead_days, now)


def check_schedule(
    when: datetime, lead_days: int = 7, now: Optional[datetime] = None
) -> ScheduleStatus:
    """
    Classify a maintenance date.

    - DONE: on or before start of today
    - DUE_SOON: inside the lead window
    - SCHEDULED: beyond the lead window
    """
    if is_past(when, now):
        return ScheduleStatus.DONE
    if is_due_soon(when, lead_days, now):
        return ScheduleStatus.DUE_SOON
    return ScheduleStatus.SCHEDULED
