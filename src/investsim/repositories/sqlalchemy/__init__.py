"""SQLAlchemy repository implementations."""

from investsim.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from investsim.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from investsim.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from investsim.repositories.sqlalchemy.listing_repo import SqlAlchemyListingRepository
from investsim.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from investsim.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository
from investsim.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyListingRepository",
    "SqlAlchemyTradeRepository",
    "SqlAlchemyWatchlistRepository",
    "SqlAlchemyUnitOfWork",
]
