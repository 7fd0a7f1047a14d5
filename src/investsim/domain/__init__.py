"""Domain layer - pure business models with no external dependencies."""

from investsim.domain.models import (
    Account,
    Holding,
    MarketListing,
    TradeRecord,
    WatchlistItem,
    AssetType,
    RiskLevel,
    TradeAction,
    TradeStatus,
    ReconcileState,
)

__all__ = [
    "Account",
    "Holding",
    "MarketListing",
    "TradeRecord",
    "WatchlistItem",
    "AssetType",
    "RiskLevel",
    "TradeAction",
    "TradeStatus",
    "ReconcileState",
]
