"""Trade recorder: append-only audit trail of balance-affecting actions."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from investsim.core.exceptions import NotFoundError, ValidationError
from investsim.core.timezone import now_market
from investsim.domain.models import TradeAction, TradeRecord, TradeStatus
from investsim.repositories.protocols import TradeRepository

logger = logging.getLogger(__name__)


class TradeRecorder:
    """
    Appends trade records and applies their terminal status transition.

    Records are written as pending inside the same unit of work as the
    balance change they describe, then completed once that unit commits.
    """

    def __init__(self, trade_repo: TradeRepository):
        self._trade_repo = trade_repo

    def record(
        self,
        user_id: str,
        symbol: str,
        action: TradeAction,
        quantity: Decimal,
        price: Decimal,
        total_amount: Decimal,
    ) -> TradeRecord:
        """Append a pending trade record."""
        trade = TradeRecord(
            trade_id=str(uuid.uuid4()),
            user_id=user_id,
            symbol=symbol,
            action=action,
            quantity=quantity,
            price=price,
            total_amount=total_amount,
            status=TradeStatus.PENDING,
            created_at=now_market(),
        )
        return self._trade_repo.create(trade)

    def complete(self, trade_id: str) -> TradeRecord:
        """Move a pending record to completed; an already completed record is returned as is."""
        return self._transition(trade_id, TradeStatus.COMPLETED)

    def mark_failed(self, trade_id: str) -> TradeRecord:
        """Move a pending record to failed."""
        return self._transition(trade_id, TradeStatus.FAILED)

    def get_trade(self, trade_id: str) -> TradeRecord:
        trade = self._trade_repo.get_by_id(trade_id)
        if trade is None:
            raise NotFoundError("Trade", trade_id)
        return trade

    def list_trades(
        self,
        user_id: str,
        action: Optional[TradeAction] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[TradeRecord]:
        """Trade history of a user, newest first."""
        return self._trade_repo.query(
            user_id=user_id,
            actions=[action] if action else None,
            start_date=start,
            end_date=end,
            limit=limit,
        )

    def reconcile_pending(self, older_than: Optional[datetime] = None) -> list[TradeRecord]:
        """
        Complete records left pending by a failed finalization.

        A pending record only ever exists alongside its committed balance
        change, so completing it is always the correct repair.
        """
        pending = self._trade_repo.query(
            statuses=[TradeStatus.PENDING],
            end_date=older_than,
        )
        repaired = []
        for trade in pending:
            logger.info(
                "Completing stuck pending trade %s (%s %s)",
                trade.trade_id,
                trade.action.value,
                trade.symbol,
            )
            repaired.append(self.complete(trade.trade_id))
        return repaired

    def _transition(self, trade_id: str, status: TradeStatus) -> TradeRecord:
        trade = self.get_trade(trade_id)
        # Repeating the transition a record already made is a no-op
        if trade.status == status:
            return trade
        if trade.status.is_terminal:
            raise ValidationError(
                f"Trade {trade_id} is already {trade.status.value}",
                code="ILLEGAL_STATUS_TRANSITION",
            )
        return self._trade_repo.update_status(trade_id, status, completed_at=now_market())
