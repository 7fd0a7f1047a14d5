"""Holding ledger: per-user, per-symbol quantity and weighted-average cost."""

from decimal import Decimal
from typing import Optional

from investsim.core.exceptions import (
    InsufficientHoldingsError,
    InvalidQuantityError,
    UndefinedProfitLossError,
    ValidationError,
)
from investsim.core.timezone import now_market
from investsim.domain.models import AssetType, Holding
from investsim.domain.views import Quote
from investsim.repositories.protocols import HoldingRepository

AVERAGE_COST_QUANT = Decimal("0.00000001")


class HoldingLedger:
    """
    Maintains open positions.

    Writes go through the repository and are only flushed; the caller's
    unit of work decides whether they commit.
    """

    def __init__(self, holding_repo: HoldingRepository):
        self._holding_repo = holding_repo

    def get(self, user_id: str, symbol: str) -> Optional[Holding]:
        return self._holding_repo.get(user_id, symbol)

    def list_holdings(self, user_id: str) -> list[Holding]:
        return self._holding_repo.list_by_user(user_id)

    def apply_buy(
        self,
        user_id: str,
        symbol: str,
        quantity: Decimal,
        price: Decimal,
        asset_type: AssetType = AssetType.STOCK,
    ) -> Holding:
        """
        Add units bought at ``price`` to a position.

        A new position starts with ``average_cost = price``; an existing one
        gets the quantity-weighted mean of old and new purchase prices.
        """
        if quantity <= 0:
            raise InvalidQuantityError(f"Quantity must be positive, got {quantity}")
        if price <= 0:
            raise ValidationError(f"Price must be positive, got {price}")

        now = now_market()
        existing = self._holding_repo.get(user_id, symbol)
        if existing is None:
            return self._holding_repo.create(
                Holding(
                    user_id=user_id,
                    symbol=symbol,
                    quantity=quantity,
                    average_cost=price,
                    asset_type=asset_type,
                    created_at=now,
                    updated_at=now,
                )
            )

        new_quantity = existing.quantity + quantity
        new_average = (
            (existing.quantity * existing.average_cost + quantity * price) / new_quantity
        ).quantize(AVERAGE_COST_QUANT)
        existing.quantity = new_quantity
        existing.average_cost = new_average
        existing.updated_at = now
        return self._holding_repo.update(existing)

    def apply_sell(self, user_id: str, symbol: str, quantity: Decimal) -> Optional[Holding]:
        """
        Remove units from a position.

        Average cost is left untouched on partial sells. Selling the whole
        position deletes the holding and returns None.

        Raises:
            InsufficientHoldingsError: no position, or fewer units than requested
        """
        if quantity <= 0:
            raise InvalidQuantityError(f"Quantity must be positive, got {quantity}")

        existing = self.check_available(user_id, symbol, quantity)

        remaining = existing.quantity - quantity
        if remaining == 0:
            self._holding_repo.delete(user_id, symbol)
            return None

        existing.quantity = remaining
        existing.updated_at = now_market()
        return self._holding_repo.update(existing)

    def check_available(self, user_id: str, symbol: str, quantity: Decimal) -> Holding:
        """Return the holding if it covers ``quantity`` units."""
        existing = self._holding_repo.get(user_id, symbol)
        available = existing.quantity if existing else Decimal("0")
        if existing is None or quantity > available:
            raise InsufficientHoldingsError(symbol, str(quantity), str(available))
        return existing

    @staticmethod
    def valuation(holding: Holding, quote: Optional[Quote]) -> Decimal:
        """
        Current value of a holding.

        Without a quote the position is valued at its average cost; callers
        that show the number flag it as a fallback.
        """
        price = quote.price if quote is not None else holding.average_cost
        return holding.quantity * price

    @classmethod
    def profit_loss_percent(cls, holding: Holding, quote: Optional[Quote]) -> Decimal:
        """
        Unrealized P/L as a percentage of the cost basis.

        Raises:
            UndefinedProfitLossError: cost basis is zero
        """
        cost_basis = holding.cost_basis
        if cost_basis == 0:
            raise UndefinedProfitLossError(holding.symbol)
        return (cls.valuation(holding, quote) - cost_basis) / cost_basis * 100
