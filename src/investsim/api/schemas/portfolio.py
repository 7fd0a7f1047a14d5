"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from investsim.domain.models.enums import AssetType


class HoldingViewResponse(BaseModel):
    """Response schema for a valued holding."""

    model_config = {"from_attributes": True}

    symbol: str
    name: str
    asset_type: AssetType
    quantity: Decimal
    average_cost: Decimal
    cost_basis: Decimal
    market_value: Decimal
    last_price: Optional[Decimal] = None
    price_is_fallback: bool = False
    profit_loss: Decimal
    profit_loss_percent: Optional[Decimal] = None


class AssetTypeSummaryResponse(BaseModel):
    """Response schema for one asset type group."""

    model_config = {"from_attributes": True}

    asset_type: AssetType
    holdings_count: int
    cost_basis: Decimal
    market_value: Decimal


class PortfolioResponse(BaseModel):
    """Response schema for a portfolio snapshot."""

    model_config = {"from_attributes": True}

    user_id: str
    cash_balance: Decimal
    holdings: list[HoldingViewResponse]
    by_asset_type: list[AssetTypeSummaryResponse]
    total_cost_basis: Decimal
    total_market_value: Decimal
    total_profit_loss: Decimal
    total_profit_loss_percent: Optional[Decimal] = None
    total_value: Decimal
    as_of: Optional[datetime] = None
