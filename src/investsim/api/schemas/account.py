"""Pydantic schemas for account endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Request schema for signing up."""

    email: str = Field(..., min_length=3, max_length=255, description="Unique email address")
    full_name: Optional[str] = Field(default=None, max_length=255, description="Display name")


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    user_id: str
    email: str
    full_name: Optional[str] = None
    cash_balance: Decimal
    created_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int
