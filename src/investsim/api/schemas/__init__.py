"""Pydantic schemas for API request/response."""

from investsim.api.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountListResponse,
)
from investsim.api.schemas.trade import (
    TradeRequest,
    DepositRequest,
    TradeRecordResponse,
    HoldingResponse,
    TradeResultResponse,
    TradeListResponse,
    ReconcileResponse,
)
from investsim.api.schemas.market import (
    ListingResponse,
    ListingListResponse,
    ListingUpsertRequest,
    QuoteResponse,
)
from investsim.api.schemas.portfolio import (
    HoldingViewResponse,
    AssetTypeSummaryResponse,
    PortfolioResponse,
)
from investsim.api.schemas.watchlist import (
    WatchlistAddRequest,
    WatchlistEntryResponse,
    WatchlistResponse,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "AccountListResponse",
    "TradeRequest",
    "DepositRequest",
    "TradeRecordResponse",
    "HoldingResponse",
    "TradeResultResponse",
    "TradeListResponse",
    "ReconcileResponse",
    "ListingResponse",
    "ListingListResponse",
    "ListingUpsertRequest",
    "QuoteResponse",
    "HoldingViewResponse",
    "AssetTypeSummaryResponse",
    "PortfolioResponse",
    "WatchlistAddRequest",
    "WatchlistEntryResponse",
    "WatchlistResponse",
]
