"""Enumerations for domain models."""

from enum import Enum


class AssetType(str, Enum):
    """Kinds of instruments offered in the market listings."""

    STOCK = "stock"
    MUTUAL_FUND = "mutual_fund"
    BOND = "bond"


class RiskLevel(str, Enum):
    """Risk classification shown on a listing."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TradeAction(str, Enum):
    """Balance-affecting actions recorded in the trade log."""

    BUY = "buy"
    SELL = "sell"
    DEPOSIT = "deposit"


class TradeStatus(str, Enum):
    """Lifecycle of a trade record; only pending -> completed | failed is allowed."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not TradeStatus.PENDING


class ReconcileState(str, Enum):
    """States a reconciler operation moves through."""

    INITIATED = "Initiated"
    PRICE_RESOLVED = "PriceResolved"
    BALANCE_CHECKED = "BalanceChecked"
    APPLIED = "Applied"
    RECORDED = "Recorded"
    COMPLETED = "Completed"
    FAILED = "Failed"
