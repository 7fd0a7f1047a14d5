"""Repository layer - data access abstractions and implementations."""

from investsim.repositories.protocols import (
    AccountRepository,
    HoldingRepository,
    ListingRepository,
    TradeRepository,
    WatchlistRepository,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "HoldingRepository",
    "ListingRepository",
    "TradeRepository",
    "WatchlistRepository",
    "UnitOfWork",
]
