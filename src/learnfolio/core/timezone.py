"""Timestamp helpers; all stored times are US/Eastern aware datetimes."""

from datetime import datetime
from typing import Union

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")

# Values above this are treated as epoch milliseconds (browser Date.now()).
_EPOCH_MS_THRESHOLD = 10_000_000_000


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_timestamp(value: Union[str, int, float]) -> datetime:
    """
    Parse a stored timestamp into an Eastern datetime.

    Accepts ISO-8601 strings (naive strings are assumed Eastern) and
    epoch seconds or milliseconds.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if value > _EPOCH_MS_THRESHOLD else value
        return datetime.fromtimestamp(seconds, tz=pytz.utc).astimezone(EASTERN_TZ)
    return to_eastern(date_parser.parse(str(value)))


def to_iso(dt: datetime) -> str:
    """Serialize a datetime as ISO-8601 in Eastern time."""
    return to_eastern(dt).isoformat()
