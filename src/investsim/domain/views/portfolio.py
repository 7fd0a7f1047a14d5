"""View models for quotes, portfolio and trade outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from investsim.domain.models import (
    AssetType,
    Holding,
    ReconcileState,
    TradeRecord,
)


@dataclass
class Quote:
    """Current price and identity metadata for a symbol."""

    symbol: str
    name: str
    price: Decimal
    as_of: datetime
    asset_type: Optional[AssetType] = None
    change_percent: Optional[Decimal] = None


@dataclass
class HoldingView:
    """A holding valued against the latest quote."""

    symbol: str
    name: str
    asset_type: AssetType
    quantity: Decimal
    average_cost: Decimal
    cost_basis: Decimal
    market_value: Decimal
    last_price: Optional[Decimal] = None
    # True when no quote was available and average_cost stood in for the price
    price_is_fallback: bool = False
    profit_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    profit_loss_percent: Optional[Decimal] = None


@dataclass
class AssetTypeSummary:
    """Aggregate of holdings of one asset type."""

    asset_type: AssetType
    holdings_count: int = 0
    cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    market_value: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class PortfolioSnapshot:
    """Cash plus valued holdings for one user."""

    user_id: str
    cash_balance: Decimal
    holdings: list[HoldingView] = field(default_factory=list)
    by_asset_type: list[AssetTypeSummary] = field(default_factory=list)
    total_cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    total_market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_profit_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    total_profit_loss_percent: Optional[Decimal] = None
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    as_of: Optional[datetime] = None


@dataclass
class TradeResult:
    """Outcome of a buy, sell or deposit."""

    trade: TradeRecord
    cash_balance: Decimal
    holdings: list[Holding] = field(default_factory=list)
    state: ReconcileState = ReconcileState.COMPLETED
    warnings: list[str] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """False when the change committed but its trade record is still pending."""
        return self.state == ReconcileState.COMPLETED


@dataclass
class WatchlistEntryView:
    """A watched symbol enriched with listing data."""

    symbol: str
    name: str
    price: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    added_at: Optional[datetime] = None
