"""Watchlist repository protocol."""

from typing import Protocol, Optional

from investsim.domain.models import WatchlistItem


class WatchlistRepository(Protocol):
    """Interface for watchlist data access."""

    def get(self, user_id: str, symbol: str) -> Optional[WatchlistItem]:
        """Get a watchlist entry."""
        ...

    def add(self, item: WatchlistItem) -> WatchlistItem:
        """Add a symbol to a user's watchlist."""
        ...

    def remove(self, user_id: str, symbol: str) -> None:
        """Remove a symbol from a user's watchlist."""
        ...

    def list_by_user(self, user_id: str) -> list[WatchlistItem]:
        """List a user's watchlist, oldest entry first."""
        ...
