"""Domain models package."""

from investsim.domain.models.enums import (
    AssetType,
    RiskLevel,
    TradeAction,
    TradeStatus,
    ReconcileState,
)
from investsim.domain.models.account import Account
from investsim.domain.models.holding import Holding
from investsim.domain.models.listing import MarketListing
from investsim.domain.models.trade import TradeRecord
from investsim.domain.models.watchlist import WatchlistItem

__all__ = [
    "AssetType",
    "RiskLevel",
    "TradeAction",
    "TradeStatus",
    "ReconcileState",
    "Account",
    "Holding",
    "MarketListing",
    "TradeRecord",
    "WatchlistItem",
]
