"""CSV export of trade history and portfolio reports."""

import csv
import io
from pathlib import Path
from typing import Optional

from investsim.domain.models import TradeAction
from investsim.services.portfolio_service import PortfolioService
from investsim.services.trade_recorder import TradeRecorder

TRADE_COLUMNS = [
    "trade_id",
    "created_at",
    "action",
    "symbol",
    "quantity",
    "price",
    "total_amount",
    "status",
    "completed_at",
]

PORTFOLIO_COLUMNS = [
    "symbol",
    "name",
    "asset_type",
    "quantity",
    "average_cost",
    "last_price",
    "cost_basis",
    "market_value",
    "profit_loss",
    "profit_loss_percent",
    "price_is_fallback",
]


class CsvExporter:
    """
    CSV exporter for trade history and portfolio reports.

    Produces CSV text for download, or writes it to a file.
    """

    def __init__(self, trade_recorder: TradeRecorder, portfolio_service: PortfolioService):
        self._recorder = trade_recorder
        self._portfolio = portfolio_service

    def trades_csv(self, user_id: str, action: Optional[TradeAction] = None) -> str:
        """Trade history of a user as CSV text, newest first."""
        trades = self._recorder.list_trades(user_id, action=action)

        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=TRADE_COLUMNS)
        writer.writeheader()
        for trade in trades:
            writer.writerow({
                "trade_id": trade.trade_id,
                "created_at": trade.created_at.isoformat() if trade.created_at else "",
                "action": trade.action.value,
                "symbol": trade.symbol,
                "quantity": str(trade.quantity),
                "price": str(trade.price),
                "total_amount": str(trade.total_amount),
                "status": trade.status.value,
                "completed_at": trade.completed_at.isoformat() if trade.completed_at else "",
            })
        return buffer.getvalue()

    def portfolio_csv(self, user_id: str) -> str:
        """
        Portfolio report as CSV text.

        One row per holding followed by CASH and TOTAL summary rows.
        """
        snapshot = self._portfolio.get_snapshot(user_id)

        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=PORTFOLIO_COLUMNS)
        writer.writeheader()
        for view in snapshot.holdings:
            writer.writerow({
                "symbol": view.symbol,
                "name": view.name,
                "asset_type": view.asset_type.value,
                "quantity": str(view.quantity),
                "average_cost": str(view.average_cost),
                "last_price": str(view.last_price) if view.last_price is not None else "",
                "cost_basis": str(view.cost_basis),
                "market_value": str(view.market_value),
                "profit_loss": str(view.profit_loss),
                "profit_loss_percent": (
                    str(view.profit_loss_percent) if view.profit_loss_percent is not None else ""
                ),
                "price_is_fallback": "yes" if view.price_is_fallback else "no",
            })

        writer.writerow({"symbol": "CASH", "market_value": str(snapshot.cash_balance)})
        writer.writerow({
            "symbol": "TOTAL",
            "cost_basis": str(snapshot.total_cost_basis),
            "market_value": str(snapshot.total_value),
            "profit_loss": str(snapshot.total_profit_loss),
            "profit_loss_percent": (
                str(snapshot.total_profit_loss_percent)
                if snapshot.total_profit_loss_percent is not None
                else ""
            ),
        })
        return buffer.getvalue()

    def export_trades(self, path: str, user_id: str) -> Path:
        """
        Write the trade history of a user to a CSV file.

        Args:
            path: Output file path
            user_id: Account whose trades are exported

        Returns:
            The written file path
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            csvfile.write(self.trades_csv(user_id))
        return file_path
