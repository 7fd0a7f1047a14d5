"""Trade record repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from investsim.domain.models import TradeAction, TradeRecord, TradeStatus


class TradeRepository(Protocol):
    """Interface for trade record (audit trail) data access."""

    def create(self, trade: TradeRecord) -> TradeRecord:
        """Append a new trade record."""
        ...

    def get_by_id(self, trade_id: str) -> Optional[TradeRecord]:
        """Retrieve a trade record by ID."""
        ...

    def update_status(
        self,
        trade_id: str,
        status: TradeStatus,
        completed_at: Optional[datetime] = None,
    ) -> TradeRecord:
        """Apply the terminal status transition of a trade record."""
        ...

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
        ...
