"""Session-window evaluation: is an event currently in progress?

Event dates and times are stored as naive local values; they are
interpreted in ``settings.EVENT_TIMEZONE``. The window is inclusive at both
ends: ``start <= now <= start + event_hours``.
"""
import logging
import math
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

import pytz

from app.config import settings

logger = logging.getLogger(__name__)

DateLike = Union[date, str, None]
TimeLike = Union[time, str, None]


def _parse_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def _parse_time(value: TimeLike) -> time:
    if value is None or value == "":
        return time(0, 0)
    if isinstance(value, time):
        return value
    return time.fromisoformat(value)


def event_start(
    event_date: DateLike,
    event_time: TimeLike,
    tz: Optional[pytz.BaseTzInfo] = None,
) -> Optional[datetime]:
    """Return the timezone-aware start instant, or None when the date is unusable."""
    tz = tz or pytz.timezone(settings.EVENT_TIMEZONE)
    try:
        day = _parse_date(event_date)
        clock = _parse_time(event_time)
    except (TypeError, ValueError):
        logger.debug("Unparseable event schedule: date=%r time=%r", event_date, event_time)
        return None
    if day is None:
        return None
    return tz.localize(datetime.combine(day, clock.replace(tzinfo=None)))


def is_event_in_session(
    event_date: DateLike,
    event_time: TimeLike,
    event_hours: Optional[float],
    now: Optional[datetime] = None,
    tz: Optional[pytz.BaseTzInfo] = None,
) -> bool:
    """Return True iff ``now`` lies within ``[start, start + event_hours]``.

    A missing time means midnight. A missing date, missing or negative
    duration, or malformed input yields False instead of raising.
    """
    tz = tz or pytz.timezone(settings.EVENT_TIMEZONE)
    if event_hours is None:
        return False
    try:
        hours = float(event_hours)
    except (TypeError, ValueError, OverflowError):
        return False
    if not math.isfinite(hours) or hours < 0:
        return False

    start = event_start(event_date, event_time, tz)
    if start is None:
        return False
    try:
        end = start + timedelta(hours=hours)
    except (OverflowError, ValueError):
        logger.debug("Event duration out of range: %r hours from %s", event_hours, start)
        return False

    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = tz.localize(now)
    return start <= now <= end
