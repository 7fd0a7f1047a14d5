"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidQuantityError(ValidationError):
    """Raised when a trade quantity or deposit amount is not acceptable."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_QUANTITY")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str, code: str = "NOT_FOUND"):
        super().__init__(f"{resource} not found: {identifier}", code=code)


class SymbolNotFoundError(NotFoundError):
    """Raised when no quote exists for a ticker symbol."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__("Symbol", symbol, code="SYMBOL_NOT_FOUND")


class QuoteUnavailableError(AppError):
    """Raised when the quote provider cannot produce a usable price."""

    status_code = 503

    def __init__(self, symbol: str, reason: str):
        super().__init__(
            f"Quote unavailable for {symbol}: {reason}",
            code="QUOTE_UNAVAILABLE",
        )


class InsufficientFundsError(AppError):
    """Raised when a debit exceeds the available cash balance."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class InsufficientHoldingsError(AppError):
    """Raised when attempting to sell more units than held."""

    def __init__(self, symbol: str, requested: str, available: str):
        super().__init__(
            f"Insufficient holdings of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_HOLDINGS",
        )


class ConcurrentModificationError(AppError):
    """Raised when the apply step loses a race with another writer on the same account."""

    status_code = 409

    def __init__(self, user_id: str):
        super().__init__(
            f"Account {user_id} was modified concurrently; please retry",
            code="CONCURRENT_MODIFICATION",
        )


class RecordingFailedError(AppError):
    """
    Raised when the trade audit write fails after the balance change committed.

    The balance change is not rolled back; the trade is left pending for
    out-of-band reconciliation.
    """

    status_code = 500

    def __init__(self, trade_id: str, reason: str):
        self.trade_id = trade_id
        super().__init__(
            f"Trade {trade_id} committed but its audit record could not be finalized: {reason}",
            code="RECORDING_FAILED",
        )


class UndefinedProfitLossError(AppError):
    """Raised when profit/loss percent is requested for a zero cost basis."""

    def __init__(self, symbol: str):
        super().__init__(
            f"Profit/loss percent is undefined for {symbol}: cost basis is zero",
            code="UNDEFINED_PROFIT_LOSS",
        )
