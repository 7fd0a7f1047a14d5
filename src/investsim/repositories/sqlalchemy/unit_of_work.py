"""SQLAlchemy unit of work."""

import logging

from sqlalchemy.orm import Session

from investsim.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from investsim.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from investsim.repositories.sqlalchemy.listing_repo import SqlAlchemyListingRepository
from investsim.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from investsim.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """
    Unit of work over a single SQLAlchemy session.

    All repositories share the session, so their flushed writes land in one
    database transaction that ``commit`` publishes and ``rollback`` discards.
    The session's lifecycle (creation/close) stays with the caller.
    """

    def __init__(self, db: Session):
        self._db = db
        self.accounts = SqlAlchemyAccountRepository(db)
        self.holdings = SqlAlchemyHoldingRepository(db)
        self.listings = SqlAlchemyListingRepository(db)
        self.trades = SqlAlchemyTradeRepository(db)
        self.watchlist = SqlAlchemyWatchlistRepository(db)

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            self.rollback()

    def refresh(self) -> None:
        """Drop cached row state so the next reads see the latest committed data."""
        self._db.expire_all()

    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()
