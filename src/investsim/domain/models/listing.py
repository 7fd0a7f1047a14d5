"""Market listing domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from investsim.domain.models.enums import AssetType, RiskLevel


@dataclass
class MarketListing:
    """An instrument users can browse and trade, with its last known price."""

    symbol: str
    name: str
    asset_type: AssetType
    price: Decimal
    change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    risk_level: Optional[RiskLevel] = None
    minimum_investment: Decimal = field(default_factory=lambda: Decimal("0"))
    description: Optional[str] = None
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)
        if isinstance(self.risk_level, str):
            self.risk_level = RiskLevel(self.risk_level)
