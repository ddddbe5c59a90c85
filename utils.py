"""
Utility functions for time conversion, windows and duration formatting
"""

import enum
import logging
from datetime import datetime, timedelta, timezone

from config import IST, PAST_WINDOW_DAYS

logger = logging.getLogger(__name__)

CODECHEF_DATE_FORMAT = '%d %b %Y %H:%M:%S'


class TimeWindow(enum.Enum):
    """Which contests a request is interested in"""

    UPCOMING = 'upcoming'
    PAST = 'past'

    @classmethod
    def parse(cls, value, default: 'TimeWindow' = None) -> 'TimeWindow':
        """Resolve a window name, falling back to ``default`` (or UPCOMING)"""
        fallback = default or cls.UPCOMING
        if not value:
            return fallback
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(f"Unknown time window {value!r}, using {fallback.value}")
            return fallback

    def contains(self, start_unix: int, now: datetime) -> bool:
        """Check whether a contest starting at ``start_unix`` falls in this window"""
        now_unix = now.timestamp()
        if self is TimeWindow.UPCOMING:
            return start_unix > now_unix
        earliest = (now - timedelta(days=PAST_WINDOW_DAYS)).timestamp()
        return earliest <= start_unix <= now_unix


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC"""
    if dt.tzinfo is None:
        # Naive CodeChef dates are IST
        dt = dt.replace(tzinfo=IST)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    """Format datetime as an ISO-8601 UTC string with millisecond precision"""
    utc = to_utc(dt)
    return utc.strftime('%Y-%m-%dT%H:%M:%S.') + f"{utc.microsecond // 1000:03d}Z"


def unix_to_iso(seconds: int) -> str:
    return to_iso(datetime.fromtimestamp(seconds, tz=timezone.utc))


def parse_codechef_date(value: str) -> datetime:
    """Parse a CodeChef date, either ISO (``2025-10-22T20:00:00+05:30``) or
    listing style (``22 Oct 2025  20:00:00``), into an aware UTC datetime.
    """
    text = ' '.join(str(value).split())
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        dt = datetime.strptime(text, CODECHEF_DATE_FORMAT)
    return to_utc(dt)


def format_duration(seconds: int) -> str:
    """Format a second count as "<H> hours <M> minutes" (sub-minute remainder dropped)"""
    seconds = int(seconds)
    if seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")
    hours, remainder = divmod(seconds, 3600)
    return f"{hours} hours {remainder // 60} minutes"


def duration_between(start: datetime, end: datetime) -> str:
    return format_duration(int((end - start).total_seconds()))
