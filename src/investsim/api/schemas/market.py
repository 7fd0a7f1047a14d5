"""Pydantic schemas for market endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from investsim.domain.models.enums import AssetType, RiskLevel


class ListingResponse(BaseModel):
    """Response schema for a market listing."""

    model_config = {"from_attributes": True}

    symbol: str
    name: str
    asset_type: AssetType
    price: Decimal
    change_percent: Decimal
    risk_level: Optional[RiskLevel] = None
    minimum_investment: Decimal
    description: Optional[str] = None
    updated_at: Optional[datetime] = None


class ListingListResponse(BaseModel):
    """Response schema for listing browse/search."""

    listings: list[ListingResponse]
    count: int


class ListingUpsertRequest(BaseModel):
    """Request schema for creating or updating a listing."""

    name: str = Field(..., max_length=255)
    asset_type: AssetType = Field(..., description="stock, mutual_fund or bond")
    price: Decimal = Field(..., description="Current price (> 0)")
    change_percent: Decimal = Field(default=Decimal("0"))
    risk_level: Optional[RiskLevel] = None
    minimum_investment: Decimal = Field(default=Decimal("0"))
    description: Optional[str] = Field(default=None, max_length=2000)


class QuoteResponse(BaseModel):
    """Response schema for a quote."""

    model_config = {"from_attributes": True}

    symbol: str
    name: str
    price: Decimal
    as_of: datetime
    asset_type: Optional[AssetType] = None
    change_percent: Optional[Decimal] = None
