"""SQLAlchemy implementation of WatchlistRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from investsim.core.timezone import to_storage, from_storage
from investsim.domain.models import WatchlistItem
from investsim.repositories.sqlalchemy.orm_models import WatchlistItemORM


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str, symbol: str) -> Optional[WatchlistItem]:
        """Get a watchlist entry."""
        orm_item = (
            self._db.query(WatchlistItemORM)
            .filter(
                WatchlistItemORM.user_id == user_id,
                WatchlistItemORM.symbol == symbol,
            )
            .first()
        )
        return self._to_domain(orm_item) if orm_item else None

    def add(self, item: WatchlistItem) -> WatchlistItem:
        """Add a symbol to a user's watchlist."""
        orm_item = WatchlistItemORM(
            user_id=item.user_id,
            symbol=item.symbol,
            added_at=to_storage(item.added_at),
        )
        self._db.add(orm_item)
        self._db.flush()
        return self._to_domain(orm_item)

    def remove(self, user_id: str, symbol: str) -> None:
        """Remove a symbol from a user's watchlist."""
        self._db.query(WatchlistItemORM).filter(
            WatchlistItemORM.user_id == user_id,
            WatchlistItemORM.symbol == symbol,
        ).delete()
        self._db.flush()

    def list_by_user(self, user_id: str) -> list[WatchlistItem]:
        """List a user's watchlist, oldest entry first."""
        orm_items = (
            self._db.query(WatchlistItemORM)
            .filter(WatchlistItemORM.user_id == user_id)
            .order_by(WatchlistItemORM.added_at, WatchlistItemORM.id)
            .all()
        )
        return [self._to_domain(i) for i in orm_items]

    @staticmethod
    def _to_domain(orm: WatchlistItemORM) -> WatchlistItem:
        """Convert ORM model to domain model."""
        return WatchlistItem(
            user_id=orm.user_id,
            symbol=orm.symbol,
            added_at=from_storage(orm.added_at),
        )
