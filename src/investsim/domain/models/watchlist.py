"""Watchlist domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class WatchlistItem:
    """A symbol a user follows without holding it."""

    user_id: str
    symbol: str
    added_at: Optional[datetime] = field(default=None)
