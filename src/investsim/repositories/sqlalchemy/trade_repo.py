"""SQLAlchemy implementation of TradeRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from investsim.core.timezone import to_storage, from_storage
from investsim.domain.models import TradeAction, TradeRecord, TradeStatus
from investsim.repositories.sqlalchemy.orm_models import TradeRecordORM


class SqlAlchemyTradeRepository:
    """SQLAlchemy-backed trade record repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, trade: TradeRecord) -> TradeRecord:
        """Append a new trade record."""
        orm_trade = TradeRecordORM(
            trade_id=trade.trade_id,
            user_id=trade.user_id,
            symbol=trade.symbol,
            action=trade.action,
            quantity=trade.quantity,
            price=trade.price,
            total_amount=trade.total_amount,
            status=trade.status,
            created_at=to_storage(trade.created_at),
            completed_at=to_storage(trade.completed_at),
        )
        self._db.add(orm_trade)
        self._db.flush()
        return self._to_domain(orm_trade)

    def get_by_id(self, trade_id: str) -> Optional[TradeRecord]:
        """Retrieve a trade record by ID."""
        orm_trade = self._db.get(TradeRecordORM, trade_id)
        return self._to_domain(orm_trade) if orm_trade else None

    def update_status(
        self,
        trade_id: str,
        status: TradeStatus,
        completed_at: Optional[datetime] = None,
    ) -> TradeRecord:
        """Apply the terminal status transition of a trade record."""
        orm_trade = self._db.get(TradeRecordORM, trade_id)
        if orm_trade is None:
            raise ValueError(f"Trade not found: {trade_id}")

        orm_trade.status = status
        orm_trade.completed_at = to_storage(completed_at)
        self._db.flush()
        return self._to_domain(orm_trade)

    def query(
        self,
        user_id: Optional[str] = None,
        actions: Optional[list[TradeAction]] = None,
        statuses: Optional[list[TradeStatus]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[TradeRecord]:
        """Query trade records, newest first."""
        query = self._db.query(TradeRecordORM)

        conditions = []
        if user_id:
            conditions.append(TradeRecordORM.user_id == user_id)
        if actions:
            conditions.append(TradeRecordORM.action.in_(actions))
        if statuses:
            conditions.append(TradeRecordORM.status.in_(statuses))
        if start_date:
            conditions.append(TradeRecordORM.created_at >= to_storage(start_date))
        if end_date:
            conditions.append(TradeRecordORM.created_at <= to_storage(end_date))

        if conditions:
            query = query.filter(and_(*conditions))

        query = query.order_by(TradeRecordORM.created_at.desc(), TradeRecordORM.trade_id)
        if limit:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    @staticmethod
    def _to_domain(orm: TradeRecordORM) -> TradeRecord:
        """Convert ORM model to domain model."""
        return TradeRecord(
            trade_id=orm.trade_id,
            user_id=orm.user_id,
            symbol=orm.symbol,
            action=orm.action,
            quantity=Decimal(str(orm.quantity)),
            price=Decimal(str(orm.price)),
            total_amount=Decimal(str(orm.total_amount)),
            status=orm.status,
            created_at=from_storage(orm.created_at),
            completed_at=from_storage(orm.completed_at),
        )
