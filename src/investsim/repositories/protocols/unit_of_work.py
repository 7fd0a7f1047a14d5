"""Unit of work protocol."""

from typing import Protocol

from investsim.repositories.protocols.account_repo import AccountRepository
from investsim.repositories.protocols.holding_repo import HoldingRepository
from investsim.repositories.protocols.listing_repo import ListingRepository
from investsim.repositories.protocols.trade_repo import TradeRepository
from investsim.repositories.protocols.watchlist_repo import WatchlistRepository


class UnitOfWork(Protocol):
    """
    Groups repository writes into one all-or-nothing commit.

    Repositories only flush; nothing is visible to other sessions until
    ``commit`` succeeds. Leaving the ``with`` block on an exception rolls back.
    """

    accounts: AccountRepository
    holdings: HoldingRepository
    listings: ListingRepository
    trades: TradeRepository
    watchlist: WatchlistRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def refresh(self) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
