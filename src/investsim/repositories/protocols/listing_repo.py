"""Market listing repository protocol."""

from typing import Protocol, Optional

from investsim.domain.models import AssetType, MarketListing


class ListingRepository(Protocol):
    """Interface for market listing data access."""

    def get(self, symbol: str) -> Optional[MarketListing]:
        """Get a listing by symbol."""
        ...

    def get_many(self, symbols: list[str]) -> list[MarketListing]:
        """Get listings for the given symbols (missing ones omitted)."""
        ...

    def list_all(self, asset_type: Optional[AssetType] = None) -> list[MarketListing]:
        """List listings ordered by name, optionally filtered by asset type."""
        ...

    def search(self, term: str, limit: int = 5) -> list[MarketListing]:
        """Case-insensitive substring search on symbol."""
        ...

    def upsert(self, listing: MarketListing) -> MarketListing:
        """Insert or update a listing."""
        ...

    def count(self) -> int:
        """Number of listings."""
        ...
