"""Trade record domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from investsim.domain.models.enums import TradeAction, TradeStatus


@dataclass
class TradeRecord:
    """
    Audit entry for a balance-affecting action.

    Append-only: the only permitted mutation is the terminal status
    transition from pending to completed or failed.
    Deposits carry the cash sentinel symbol with quantity 1 and
    price equal to the deposited amount.
    """

    trade_id: str
    user_id: str
    symbol: str
    action: TradeAction
    quantity: Decimal
    price: Decimal
    total_amount: Decimal
    status: TradeStatus = TradeStatus.PENDING
    created_at: Optional[datetime] = field(default=None)
    completed_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.action, str):
            self.action = TradeAction(self.action)
        if isinstance(self.status, str):
            self.status = TradeStatus(self.status)

    @property
    def cash_impact(self) -> Decimal:
        """
        Signed change this trade applies to the cash balance.

        Positive = cash added, Negative = cash removed.
        """
        if self.action == TradeAction.BUY:
            return -self.total_amount
        return self.total_amount
