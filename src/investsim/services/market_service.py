"""Market service: browsing and maintaining market listings."""

import logging
from decimal import Decimal
from typing import Optional

from investsim.core.exceptions import NotFoundError, ValidationError
from investsim.core.timezone import now_market
from investsim.domain.models import AssetType, MarketListing, RiskLevel
from investsim.providers.stub_provider import stub_listing_rows
from investsim.repositories.protocols import UnitOfWork
from investsim.services.quote_service import normalize_symbol

logger = logging.getLogger(__name__)

# Risk shown on seeded listings, by asset type
_DEFAULT_RISK = {
    AssetType.STOCK: RiskLevel.HIGH,
    AssetType.MUTUAL_FUND: RiskLevel.MEDIUM,
    AssetType.BOND: RiskLevel.LOW,
}

_DEFAULT_MINIMUM_INVESTMENT = {
    AssetType.STOCK: Decimal("0"),
    AssetType.MUTUAL_FUND: Decimal("500"),
    AssetType.BOND: Decimal("1000"),
}


class MarketService:
    """Lists, searches and upserts the instruments users can trade."""

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    def list_listings(self, asset_type: Optional[AssetType] = None) -> list[MarketListing]:
        """List listings ordered by name, optionally for one asset type."""
        return self._uow.listings.list_all(asset_type=asset_type)

    def search(self, term: str, limit: int = 5) -> list[MarketListing]:
        """Case-insensitive substring search on the symbol."""
        term = (term or "").strip()
        if not term:
            return []
        if limit <= 0:
            raise ValidationError(f"Search limit must be positive, got {limit}")
        return self._uow.listings.search(term, limit=limit)

    def get_listing(self, symbol: str) -> MarketListing:
        normalized = normalize_symbol(symbol)
        listing = self._uow.listings.get(normalized)
        if listing is None:
            raise NotFoundError("Listing", normalized)
        return listing

    def upsert_listing(
        self,
        symbol: str,
        name: str,
        asset_type: AssetType,
        price: Decimal,
        change_percent: Decimal = Decimal("0"),
        risk_level: Optional[RiskLevel] = None,
        minimum_investment: Decimal = Decimal("0"),
        description: Optional[str] = None,
    ) -> MarketListing:
        """
        Insert or update a listing.

        The asset type is required and stored as given; it is never derived
        from the ticker.
        """
        normalized = normalize_symbol(symbol)
        if not (name or "").strip():
            raise ValidationError("Listing name must not be empty")
        if asset_type is None:
            raise ValidationError(f"Asset type is required for {normalized}")
        if price is None or price <= 0:
            raise ValidationError(f"Price must be positive, got {price}")
        if minimum_investment < 0:
            raise ValidationError(
                f"Minimum investment must not be negative, got {minimum_investment}"
            )

        listing = MarketListing(
            symbol=normalized,
            name=name.strip(),
            asset_type=asset_type,
            price=price,
            change_percent=change_percent,
            risk_level=risk_level,
            minimum_investment=minimum_investment,
            description=description,
            updated_at=now_market(),
        )
        with self._uow:
            saved = self._uow.listings.upsert(listing)
            self._uow.commit()
        return saved

    def seed_default_listings(self) -> int:
        """
        Populate an empty listings table with the default instruments.

        Returns the number of listings inserted (0 if the table had rows).
        """
        if self._uow.listings.count() > 0:
            return 0

        now = now_market()
        rows = stub_listing_rows()
        with self._uow:
            for symbol, name, asset_type, price, change in rows:
                self._uow.listings.upsert(
                    MarketListing(
                        symbol=symbol,
                        name=name,
                        asset_type=asset_type,
                        price=price,
                        change_percent=change,
                        risk_level=_DEFAULT_RISK[asset_type],
                        minimum_investment=_DEFAULT_MINIMUM_INVESTMENT[asset_type],
                        updated_at=now,
                    )
                )
            self._uow.commit()

        logger.info("Seeded %d market listings", len(rows))
        return len(rows)
