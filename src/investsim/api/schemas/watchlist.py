"""Pydantic schemas for watchlist endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class WatchlistAddRequest(BaseModel):
    """Request schema for following a symbol."""

    symbol: str = Field(..., max_length=20)


class WatchlistEntryResponse(BaseModel):
    """Response schema for a watched symbol."""

    model_config = {"from_attributes": True}

    symbol: str
    name: str
    price: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    added_at: Optional[datetime] = None


class WatchlistResponse(BaseModel):
    """Response schema for a user's watchlist."""

    items: list[WatchlistEntryResponse]
    count: int
