"""
Transaction reconciler for buy, sell and deposit.

Each operation resolves its price first, then applies the cash change, the
holding change and a pending trade record as one database transaction while
holding a per-account lock. The record is completed after that commit.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from investsim.core.exceptions import (
    ConcurrentModificationError,
    InsufficientFundsError,
    InvalidQuantityError,
    NotFoundError,
    RecordingFailedError,
    ValidationError,
)
from investsim.domain.models import (
    Account,
    AssetType,
    ReconcileState,
    TradeAction,
    TradeRecord,
)
from investsim.domain.views import Quote, TradeResult
from investsim.repositories.protocols import UnitOfWork
from investsim.services.cash_account import MAX_CASH_AMOUNT, CashAccount
from investsim.services.holding_ledger import HoldingLedger
from investsim.services.quote_service import QuoteService, normalize_symbol
from investsim.services.trade_recorder import TradeRecorder

logger = logging.getLogger(__name__)

T = TypeVar("T")

Number = Union[int, str, Decimal]

CASH_QUANT = Decimal("0.0001")

# One apply attempt plus a single retry after a conflicting write
MAX_APPLY_ATTEMPTS = 2

# One lock per account id. Accounts are never deleted, so the registry is
# bounded by the number of accounts this process has traded for.
_account_locks: dict[str, threading.Lock] = {}
_account_locks_guard = threading.Lock()


def account_lock(user_id: str) -> threading.Lock:
    """Return the process-wide lock that serializes apply steps for one account."""
    with _account_locks_guard:
        lock = _account_locks.get(user_id)
        if lock is None:
            lock = threading.Lock()
            _account_locks[user_id] = lock
        return lock


def parse_quantity(value: Number) -> Decimal:
    """Validate a trade quantity: a positive whole number of units."""
    if isinstance(value, bool):
        raise InvalidQuantityError(f"Quantity must be a whole number, got {value!r}")
    try:
        quantity = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidQuantityError(f"Quantity must be a whole number, got {value!r}")

    if not quantity.is_finite() or quantity != quantity.to_integral_value():
        raise InvalidQuantityError(f"Quantity must be a whole number, got {value!r}")
    if quantity <= 0:
        raise InvalidQuantityError(f"Quantity must be positive, got {value!r}")
    return quantity.quantize(Decimal("1"))


def parse_amount(value: Number) -> Decimal:
    """Validate a deposit amount: positive, at most four decimal places, at most MAX_CASH_AMOUNT."""
    if isinstance(value, bool):
        raise InvalidQuantityError(f"Amount must be a number, got {value!r}")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidQuantityError(f"Amount must be a number, got {value!r}")

    if not amount.is_finite() or amount <= 0:
        raise InvalidQuantityError(f"Amount must be positive, got {value!r}")
    if amount != amount.quantize(CASH_QUANT):
        raise InvalidQuantityError(f"Amount has more than 4 decimal places: {value!r}")
    if amount > MAX_CASH_AMOUNT:
        raise InvalidQuantityError(f"Amount exceeds the maximum of {MAX_CASH_AMOUNT}: {value!r}")
    return amount


def check_trade_total(total: Decimal) -> None:
    """Reject a buy or sell whose value the cash balance cannot hold exactly."""
    if total > MAX_CASH_AMOUNT:
        raise InvalidQuantityError(
            f"Trade total {total} exceeds the maximum of {MAX_CASH_AMOUNT}"
        )


@dataclass
class _Operation:
    """Tracks the state of one reconciler call and logs its transitions."""

    action: TradeAction
    user_id: str
    state: ReconcileState = ReconcileState.INITIATED
    warnings: list[str] = field(default_factory=list)

    def advance(self, state: ReconcileState) -> None:
        logger.debug(
            "%s for %s: %s -> %s",
            self.action.value,
            self.user_id,
            self.state.value,
            state.value,
        )
        self.state = state


class TransactionReconciler:
    """
    Orchestrates quote lookup, cash account, holding ledger and trade recorder.

    The unit of work's session is used for the whole operation; the reconciler
    owns its commits. Only a conflicting concurrent write is retried, and only
    once; every other failure surfaces before anything is committed.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        quote_service: QuoteService,
        cash_symbol: str = "CASH",
    ):
        self._uow = uow
        self._quotes = quote_service
        self._cash = CashAccount(uow.accounts)
        self._ledger = HoldingLedger(uow.holdings)
        self._recorder = TradeRecorder(uow.trades)
        self._cash_symbol = cash_symbol

    def buy(self, user_id: str, symbol: str, quantity: Number) -> TradeResult:
        """
        Buy ``quantity`` units of ``symbol`` at the current quote.

        Raises:
            InvalidQuantityError: quantity is not a positive whole number
            SymbolNotFoundError: no quote for the symbol
            InsufficientFundsError: total exceeds the cash balance
            ConcurrentModificationError: conflict persisted after one retry
        """
        op = _Operation(TradeAction.BUY, user_id)
        try:
            units = parse_quantity(quantity)
            ticker = normalize_symbol(symbol)
            account = self._require_account(user_id)

            quote = self._quotes.get_quote(ticker)
            price = quote.price
            total = units * price
            check_trade_total(total)
            asset_type = self._asset_type_for(quote)
            op.advance(ReconcileState.PRICE_RESOLVED)

            if total > account.cash_balance:
                raise InsufficientFundsError(str(total), str(account.cash_balance))
            op.advance(ReconcileState.BALANCE_CHECKED)

            def apply() -> tuple[Account, TradeRecord]:
                updated = self._cash.debit(user_id, total)
                self._ledger.apply_buy(user_id, ticker, units, price, asset_type)
                trade = self._recorder.record(
                    user_id, ticker, TradeAction.BUY, units, price, total
                )
                return updated, trade

            return self._apply_and_finalize(op, apply)
        except Exception:
            op.advance(ReconcileState.FAILED)
            raise

    def sell(self, user_id: str, symbol: str, quantity: Number) -> TradeResult:
        """
        Sell ``quantity`` units of ``symbol`` at the current quote.

        The position is checked before the quote is resolved. Selling the
        whole position deletes the holding.

        Raises:
            InvalidQuantityError: quantity is not a positive whole number
            InsufficientHoldingsError: fewer units held than requested
            SymbolNotFoundError: no quote for the symbol
            ConcurrentModificationError: conflict persisted after one retry
        """
        op = _Operation(TradeAction.SELL, user_id)
        try:
            units = parse_quantity(quantity)
            ticker = normalize_symbol(symbol)
            self._require_account(user_id)
            self._ledger.check_available(user_id, ticker, units)

            quote = self._quotes.get_quote(ticker)
            price = quote.price
            proceeds = units * price
            check_trade_total(proceeds)
            op.advance(ReconcileState.PRICE_RESOLVED)
            op.advance(ReconcileState.BALANCE_CHECKED)

            def apply() -> tuple[Account, TradeRecord]:
                updated = self._cash.credit(user_id, proceeds)
                self._ledger.apply_sell(user_id, ticker, units)
                trade = self._recorder.record(
                    user_id, ticker, TradeAction.SELL, units, price, proceeds
                )
                return updated, trade

            return self._apply_and_finalize(op, apply)
        except Exception:
            op.advance(ReconcileState.FAILED)
            raise

    def deposit(self, user_id: str, amount: Number) -> TradeResult:
        """
        Add simulated funds to the cash balance.

        Recorded under the cash symbol with quantity 1 and price equal to the amount.
        """
        op = _Operation(TradeAction.DEPOSIT, user_id)
        try:
            value = parse_amount(amount)
            self._require_account(user_id)
            op.advance(ReconcileState.BALANCE_CHECKED)

            def apply() -> tuple[Account, TradeRecord]:
                updated = self._cash.credit(user_id, value)
                trade = self._recorder.record(
                    user_id,
                    self._cash_symbol,
                    TradeAction.DEPOSIT,
                    Decimal("1"),
                    value,
                    value,
                )
                return updated, trade

            return self._apply_and_finalize(op, apply)
        except Exception:
            op.advance(ReconcileState.FAILED)
            raise

    def reconcile_pending(self, older_than: Optional[datetime] = None) -> list[TradeRecord]:
        """Complete trade records whose finalization failed after commit."""
        with self._uow:
            repaired = self._recorder.reconcile_pending(older_than)
            self._uow.commit()
        if repaired:
            logger.info("Completed %d pending trade record(s)", len(repaired))
        return repaired

    def _apply_and_finalize(
        self,
        op: _Operation,
        apply: Callable[[], tuple[Account, TradeRecord]],
    ) -> TradeResult:
        account, trade = self._apply_with_retry(op.user_id, apply)
        op.advance(ReconcileState.APPLIED)
        op.advance(ReconcileState.RECORDED)

        trade = self._finalize(op, trade)
        logger.info(
            "%s %s x%s @ %s for %s (total %s, balance %s, trade %s)",
            trade.action.value,
            trade.symbol,
            trade.quantity,
            trade.price,
            op.user_id,
            trade.total_amount,
            account.cash_balance,
            trade.trade_id,
        )
        return TradeResult(
            trade=trade,
            cash_balance=account.cash_balance,
            holdings=self._ledger.list_holdings(op.user_id),
            state=op.state,
            warnings=op.warnings,
        )

    def _apply_with_retry(self, user_id: str, apply: Callable[[], T]) -> T:
        lock = account_lock(user_id)
        attempt = 1
        while True:
            try:
                with lock:
                    self._uow.refresh()
                    with self._uow:
                        result = apply()
                        self._uow.commit()
                return result
            except (ConcurrentModificationError, StaleDataError) as exc:
                if attempt >= MAX_APPLY_ATTEMPTS:
                    logger.warning("Concurrent modification on %s persisted after retry", user_id)
                    if isinstance(exc, ConcurrentModificationError):
                        raise
                    raise ConcurrentModificationError(user_id) from exc
                logger.warning(
                    "Concurrent modification on %s (attempt %d), retrying apply step",
                    user_id,
                    attempt,
                )
                attempt += 1

    def _finalize(self, op: _Operation, trade: TradeRecord) -> TradeRecord:
        """
        Complete the trade record after the apply step committed.

        A failure here is reported as a warning; the committed change is kept
        and the record stays pending for reconcile_pending.
        """
        try:
            completed = self._recorder.complete(trade.trade_id)
            self._uow.commit()
        except (SQLAlchemyError, ValidationError) as exc:
            # The change is committed either way; only the record is off
            self._uow.rollback()
            error = RecordingFailedError(trade.trade_id, str(exc))
            logger.error(error.message)
            op.warnings.append(error.message)
            return trade

        op.advance(ReconcileState.COMPLETED)
        return completed

    def _require_account(self, user_id: str) -> Account:
        account = self._uow.accounts.get_by_id(user_id)
        if account is None:
            raise NotFoundError("Account", user_id)
        return account

    def _asset_type_for(self, quote: Quote) -> AssetType:
        if quote.asset_type is not None:
            return quote.asset_type
        listing = self._uow.listings.get(quote.symbol)
        if listing is not None:
            return listing.asset_type
        logger.warning("No asset type known for %s, recording it as a stock", quote.symbol)
        return AssetType.STOCK

