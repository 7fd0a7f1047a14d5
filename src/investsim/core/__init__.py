"""Core utilities and shared functionality."""

from investsim.core.timezone import (
    market_tz,
    now_market,
    to_market,
    parse_datetime_market,
    to_storage,
    from_storage,
)
from investsim.core.exceptions import (
    AppError,
    ValidationError,
    InvalidQuantityError,
    NotFoundError,
    SymbolNotFoundError,
    QuoteUnavailableError,
    InsufficientFundsError,
    InsufficientHoldingsError,
    ConcurrentModificationError,
    RecordingFailedError,
    UndefinedProfitLossError,
)

__all__ = [
    "market_tz",
    "now_market",
    "to_market",
    "parse_datetime_market",
    "to_storage",
    "from_storage",
    "AppError",
    "ValidationError",
    "InvalidQuantityError",
    "NotFoundError",
    "SymbolNotFoundError",
    "QuoteUnavailableError",
    "InsufficientFundsError",
    "InsufficientHoldingsError",
    "ConcurrentModificationError",
    "RecordingFailedError",
    "UndefinedProfitLossError",
]
