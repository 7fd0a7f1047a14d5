"""Portfolio service: cash plus valued holdings for one user."""

import logging
from decimal import Decimal

from investsim.core.exceptions import NotFoundError, UndefinedProfitLossError
from investsim.core.timezone import now_market
from investsim.domain.models import AssetType
from investsim.domain.views import AssetTypeSummary, HoldingView, PortfolioSnapshot
from investsim.repositories.protocols import UnitOfWork
from investsim.services.holding_ledger import HoldingLedger
from investsim.services.quote_service import QuoteService

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class PortfolioService:
    """
    Computes the portfolio view of an account.

    Holdings are valued at the latest quote. When no quote is available the
    average cost stands in for the price and the holding is flagged with
    ``price_is_fallback``.
    """

    def __init__(self, uow: UnitOfWork, quote_service: QuoteService):
        self._uow = uow
        self._quotes = quote_service
        self._ledger = HoldingLedger(uow.holdings)

    def get_snapshot(self, user_id: str) -> PortfolioSnapshot:
        account = self._uow.accounts.get_by_id(user_id)
        if account is None:
            raise NotFoundError("Account", user_id)

        holdings = self._ledger.list_holdings(user_id)
        quotes = self._quotes.get_quotes([h.symbol for h in holdings]) if holdings else {}

        views: list[HoldingView] = []
        groups: dict[AssetType, AssetTypeSummary] = {}
        total_cost = Decimal("0")
        total_value = Decimal("0")

        for holding in holdings:
            quote = quotes.get(holding.symbol)
            if quote is None:
                logger.warning("No quote for %s, valuing at average cost", holding.symbol)

            market_value = self._ledger.valuation(holding, quote)
            cost_basis = holding.cost_basis
            try:
                pl_percent = self._ledger.profit_loss_percent(holding, quote).quantize(CENT)
            except UndefinedProfitLossError:
                pl_percent = None

            views.append(
                HoldingView(
                    symbol=holding.symbol,
                    name=quote.name if quote else holding.symbol,
                    asset_type=holding.asset_type,
                    quantity=holding.quantity,
                    average_cost=holding.average_cost,
                    cost_basis=cost_basis.quantize(CENT),
                    market_value=market_value.quantize(CENT),
                    last_price=quote.price if quote else None,
                    price_is_fallback=quote is None,
                    profit_loss=(market_value - cost_basis).quantize(CENT),
                    profit_loss_percent=pl_percent,
                )
            )

            summary = groups.setdefault(
                holding.asset_type, AssetTypeSummary(asset_type=holding.asset_type)
            )
            summary.holdings_count += 1
            summary.cost_basis += cost_basis
            summary.market_value += market_value

            total_cost += cost_basis
            total_value += market_value

        by_asset_type = []
        for asset_type in AssetType:
            summary = groups.get(asset_type)
            if summary is not None:
                summary.cost_basis = summary.cost_basis.quantize(CENT)
                summary.market_value = summary.market_value.quantize(CENT)
                by_asset_type.append(summary)

        total_pl = total_value - total_cost
        total_pl_percent = None
        if total_cost != 0:
            total_pl_percent = (total_pl / total_cost * 100).quantize(CENT)

        return PortfolioSnapshot(
            user_id=user_id,
            cash_balance=account.cash_balance,
            holdings=views,
            by_asset_type=by_asset_type,
            total_cost_basis=total_cost.quantize(CENT),
            total_market_value=total_value.quantize(CENT),
            total_profit_loss=total_pl.quantize(CENT),
            total_profit_loss_percent=total_pl_percent,
            total_value=(account.cash_balance + total_value).quantize(CENT),
            as_of=now_market(),
        )
