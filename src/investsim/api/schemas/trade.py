"""Pydantic schemas for trade endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from investsim.domain.models.enums import (
    AssetType,
    ReconcileState,
    TradeAction,
    TradeStatus,
)


class TradeRequest(BaseModel):
    """Request schema for buying or selling."""

    user_id: str = Field(..., description="Account ID")
    symbol: str = Field(..., max_length=20, description="Ticker symbol (case-insensitive)")
    # Validated by the reconciler: positive whole number
    quantity: Decimal = Field(..., description="Number of units")


class DepositRequest(BaseModel):
    """Request schema for adding simulated funds."""

    user_id: str = Field(..., description="Account ID")
    amount: Decimal = Field(..., description="Amount to deposit (> 0)")


class TradeRecordResponse(BaseModel):
    """Response schema for a single trade record."""

    model_config = {"from_attributes": True}

    trade_id: str
    user_id: str
    symbol: str
    action: TradeAction
    quantity: Decimal
    price: Decimal
    total_amount: Decimal
    status: TradeStatus
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class HoldingResponse(BaseModel):
    """Response schema for a holding in a trade result."""

    model_config = {"from_attributes": True}

    symbol: str
    quantity: Decimal
    average_cost: Decimal
    asset_type: AssetType


class TradeResultResponse(BaseModel):
    """Response schema for buy/sell/deposit."""

    model_config = {"from_attributes": True}

    trade: TradeRecordResponse
    cash_balance: Decimal
    holdings: list[HoldingResponse]
    state: ReconcileState
    completed: bool
    warnings: list[str] = Field(default_factory=list)


class TradeListResponse(BaseModel):
    """Response schema for trade history."""

    trades: list[TradeRecordResponse]
    count: int


class ReconcileResponse(BaseModel):
    """Response schema for completing stuck pending trades."""

    completed: int
    trade_ids: list[str]
