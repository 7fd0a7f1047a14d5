"""Repository protocol definitions (interfaces)."""

from investsim.repositories.protocols.account_repo import AccountRepository
from investsim.repositories.protocols.holding_repo import HoldingRepository
from investsim.repositories.protocols.listing_repo import ListingRepository
from investsim.repositories.protocols.trade_repo import TradeRepository
from investsim.repositories.protocols.watchlist_repo import WatchlistRepository
from investsim.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "HoldingRepository",
    "ListingRepository",
    "TradeRepository",
    "WatchlistRepository",
    "UnitOfWork",
]
