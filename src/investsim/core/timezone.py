"""Timezone utilities for market time."""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

from investsim.config.settings import get_settings


def market_tz() -> pytz.BaseTzInfo:
    """Return the configured market timezone."""
    return pytz.timezone(get_settings().market_timezone)


def now_market() -> datetime:
    """Return current time in the market timezone."""
    return datetime.now(market_tz())


def to_market(dt: datetime) -> datetime:
    """Convert a datetime to the market timezone."""
    tz = market_tz()
    if dt.tzinfo is None:
        # Assume naive datetime is already market time
        return tz.localize(dt)
    return dt.astimezone(tz)


def parse_datetime_market(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in the market timezone.

    If no timezone is provided in the string, assumes market time.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or market_tz()
        dt = tz.localize(dt)
    return to_market(dt)


def to_storage(dt: Optional[datetime]) -> Optional[datetime]:
    """Return naive market wall time for DateTime columns (SQLite drops tzinfo)."""
    if dt is None:
        return None
    return to_market(dt).replace(tzinfo=None)


def from_storage(dt: Optional[datetime]) -> Optional[datetime]:
    """Re-attach the market timezone to a value read from a DateTime column."""
    if dt is None:
        return None
    return to_market(dt)
