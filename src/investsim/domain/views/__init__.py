"""View models for service outputs."""

from investsim.domain.views.portfolio import (
    Quote,
    HoldingView,
    AssetTypeSummary,
    PortfolioSnapshot,
    TradeResult,
    WatchlistEntryView,
)

__all__ = [
    "Quote",
    "HoldingView",
    "AssetTypeSummary",
    "PortfolioSnapshot",
    "TradeResult",
    "WatchlistEntryView",
]
