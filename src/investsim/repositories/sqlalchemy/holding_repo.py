"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from investsim.core.timezone import to_storage, from_storage
from investsim.domain.models import Holding
from investsim.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str, symbol: str) -> Optional[Holding]:
        """Get the holding for one symbol."""
        orm_holding = self._db.get(HoldingORM, (user_id, symbol))
        return self._to_domain(orm_holding) if orm_holding else None

    def list_by_user(self, user_id: str) -> list[Holding]:
        """List all holdings of a user, ordered by symbol."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.user_id == user_id)
            .order_by(HoldingORM.symbol)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def create(self, holding: Holding) -> Holding:
        """Insert a new holding."""
        orm_holding = HoldingORM(
            user_id=holding.user_id,
            symbol=holding.symbol,
            quantity=holding.quantity,
            average_cost=holding.average_cost,
            asset_type=holding.asset_type,
            created_at=to_storage(holding.created_at),
            updated_at=to_storage(holding.updated_at),
        )
        self._db.add(orm_holding)
        self._db.flush()
        return self._to_domain(orm_holding)

    def update(self, holding: Holding) -> Holding:
        """Update quantity and average cost of an existing holding."""
        orm_holding = self._db.get(HoldingORM, (holding.user_id, holding.symbol))
        if orm_holding is None:
            raise ValueError(f"Holding not found: {holding.user_id}/{holding.symbol}")

        orm_holding.quantity = holding.quantity
        orm_holding.average_cost = holding.average_cost
        orm_holding.updated_at = to_storage(holding.updated_at)
        self._db.flush()
        return self._to_domain(orm_holding)

    def delete(self, user_id: str, symbol: str) -> None:
        """Delete a holding."""
        orm_holding = self._db.get(HoldingORM, (user_id, symbol))
        if orm_holding is not None:
            self._db.delete(orm_holding)
            self._db.flush()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            user_id=orm.user_id,
            symbol=orm.symbol,
            quantity=Decimal(str(orm.quantity)),
            average_cost=Decimal(str(orm.average_cost)),
            asset_type=orm.asset_type,
            created_at=from_storage(orm.created_at),
            updated_at=from_storage(orm.updated_at),
        )
