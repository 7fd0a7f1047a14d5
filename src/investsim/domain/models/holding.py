"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from investsim.domain.models.enums import AssetType


@dataclass
class Holding:
    """
    Open position of one user in one symbol.

    A holding only exists while ``quantity > 0``; a sell that closes the
    position deletes the row instead of leaving it at zero.
    """

    user_id: str
    symbol: str
    quantity: Decimal
    average_cost: Decimal
    asset_type: AssetType = AssetType.STOCK
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)

    @property
    def cost_basis(self) -> Decimal:
        """Total amount paid for the units still held."""
        return self.quantity * self.average_cost
