"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Account:
    """
    A user's investment account.

    Each user owns exactly one portfolio, so the cash balance lives here.
    Created at sign-up with a zero balance and never deleted. ``version``
    is bumped on every balance write and guards against lost updates.
    """

    user_id: str
    email: str
    full_name: Optional[str] = None
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    version: int = 0
    created_at: Optional[datetime] = field(default=None)
