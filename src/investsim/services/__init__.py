"""Service layer - business logic orchestration."""

from investsim.services.quote_service import QuoteService, normalize_symbol
from investsim.services.holding_ledger import HoldingLedger
from investsim.services.cash_account import CashAccount
from investsim.services.trade_recorder import TradeRecorder
from investsim.services.reconciler import TransactionReconciler, account_lock
from investsim.services.account_service import AccountService
from investsim.services.market_service import MarketService
from investsim.services.portfolio_service import PortfolioService
from investsim.services.watchlist_service import WatchlistService

__all__ = [
    "QuoteService",
    "normalize_symbol",
    "HoldingLedger",
    "CashAccount",
    "TradeRecorder",
    "TransactionReconciler",
    "account_lock",
    "AccountService",
    "MarketService",
    "PortfolioService",
    "WatchlistService",
]
