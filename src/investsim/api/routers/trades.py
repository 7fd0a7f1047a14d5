"""Trade endpoints: buy, sell, deposit and trade history."""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from investsim.api.deps import get_csv_exporter, get_reconciler, get_trade_recorder
from investsim.api.schemas import (
    DepositRequest,
    ReconcileResponse,
    TradeListResponse,
    TradeRecordResponse,
    TradeRequest,
    TradeResultResponse,
)
from investsim.core.timezone import now_market, parse_datetime_market
from investsim.domain.models import TradeAction
from investsim.reports import CsvExporter
from investsim.services import TradeRecorder, TransactionReconciler

router = APIRouter(prefix="/trades", tags=["trades"])

# Pending records younger than this may still be finalized by their own request
RECONCILE_GRACE_SECONDS = 60


@router.post("/buy", response_model=TradeResultResponse)
def buy(
    data: TradeRequest,
    reconciler: TransactionReconciler = Depends(get_reconciler),
) -> TradeResultResponse:
    """Buy units at the current quote."""
    result = reconciler.buy(data.user_id, data.symbol, data.quantity)
    return TradeResultResponse.model_validate(result)


@router.post("/sell", response_model=TradeResultResponse)
def sell(
    data: TradeRequest,
    reconciler: TransactionReconciler = Depends(get_reconciler),
) -> TradeResultResponse:
    """Sell units at the current quote."""
    result = reconciler.sell(data.user_id, data.symbol, data.quantity)
    return TradeResultResponse.model_validate(result)


@router.post("/deposit", response_model=TradeResultResponse)
def deposit(
    data: DepositRequest,
    reconciler: TransactionReconciler = Depends(get_reconciler),
) -> TradeResultResponse:
    """Add simulated funds."""
    result = reconciler.deposit(data.user_id, data.amount)
    return TradeResultResponse.model_validate(result)


@router.get("/", response_model=TradeListResponse)
def list_trades(
    user_id: str = Query(..., description="Account ID"),
    action: Optional[TradeAction] = Query(None, description="buy, sell or deposit"),
    start: Optional[str] = Query(None, description="Earliest created_at (market time if no offset)"),
    end: Optional[str] = Query(None, description="Latest created_at (market time if no offset)"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    recorder: TradeRecorder = Depends(get_trade_recorder),
) -> TradeListResponse:
    """Trade history of a user, newest first."""
    trades = recorder.list_trades(
        user_id,
        action=action,
        start=parse_datetime_market(start) if start else None,
        end=parse_datetime_market(end) if end else None,
        limit=limit,
    )
    return TradeListResponse(
        trades=[TradeRecordResponse.model_validate(t) for t in trades],
        count=len(trades),
    )


@router.post("/reconcile", response_model=ReconcileResponse)
def reconcile_pending(
    older_than_seconds: int = Query(
        RECONCILE_GRACE_SECONDS,
        ge=0,
        description="Only repair records at least this old",
    ),
    reconciler: TransactionReconciler = Depends(get_reconciler),
) -> ReconcileResponse:
    """Complete trade records left pending after a recording failure."""
    cutoff = now_market() - timedelta(seconds=older_than_seconds)
    repaired = reconciler.reconcile_pending(older_than=cutoff)
    return ReconcileResponse(
        completed=len(repaired),
        trade_ids=[t.trade_id for t in repaired],
    )


@router.get("/export")
def export_trades(
    user_id: str = Query(..., description="Account ID"),
    exporter: CsvExporter = Depends(get_csv_exporter),
) -> Response:
    """Download the trade history as CSV."""
    content = exporter.trades_csv(user_id)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="trades_{user_id}.csv"'},
    )


@router.get("/{trade_id}", response_model=TradeRecordResponse)
def get_trade(
    trade_id: str,
    recorder: TradeRecorder = Depends(get_trade_recorder),
) -> TradeRecordResponse:
    """Get a single trade record."""
    return TradeRecordResponse.model_validate(recorder.get_trade(trade_id))
