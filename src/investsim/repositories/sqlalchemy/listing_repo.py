"""SQLAlchemy implementation of ListingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from investsim.core.timezone import to_storage, from_storage
from investsim.domain.models import AssetType, MarketListing
from investsim.repositories.sqlalchemy.orm_models import MarketListingORM


class SqlAlchemyListingRepository:
    """SQLAlchemy-backed market listing repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, symbol: str) -> Optional[MarketListing]:
        """Get a listing by symbol."""
        orm_listing = self._db.query(MarketListingORM).filter(
            MarketListingORM.symbol == symbol
        ).first()
        return self._to_domain(orm_listing) if orm_listing else None

    def get_many(self, symbols: list[str]) -> list[MarketListing]:
        """Get listings for the given symbols."""
        if not symbols:
            return []
        orm_listings = (
            self._db.query(MarketListingORM)
            .filter(MarketListingORM.symbol.in_(symbols))
            .all()
        )
        return [self._to_domain(item) for item in orm_listings]

    def list_all(self, asset_type: Optional[AssetType] = None) -> list[MarketListing]:
        """List listings ordered by name."""
        query = self._db.query(MarketListingORM)
        if asset_type is not None:
            query = query.filter(MarketListingORM.asset_type == asset_type)
        query = query.order_by(MarketListingORM.name)
        return [self._to_domain(item) for item in query.all()]

    def search(self, term: str, limit: int = 5) -> list[MarketListing]:
        """Case-insensitive substring search on symbol."""
        orm_listings = (
            self._db.query(MarketListingORM)
            .filter(MarketListingORM.symbol.ilike(f"%{term}%"))
            .order_by(MarketListingORM.symbol)
            .limit(limit)
            .all()
        )
        return [self._to_domain(item) for item in orm_listings]

    def upsert(self, listing: MarketListing) -> MarketListing:
        """Insert or update a listing."""
        orm_listing = self._db.get(MarketListingORM, listing.symbol)

        if orm_listing:
            orm_listing.name = listing.name
            orm_listing.asset_type = listing.asset_type
            orm_listing.price = listing.price
            orm_listing.change_percent = listing.change_percent
            orm_listing.risk_level = listing.risk_level
            orm_listing.minimum_investment = listing.minimum_investment
            orm_listing.description = listing.description
            orm_listing.updated_at = to_storage(listing.updated_at)
        else:
            orm_listing = MarketListingORM(
                symbol=listing.symbol,
                name=listing.name,
                asset_type=listing.asset_type,
                price=listing.price,
                change_percent=listing.change_percent,
                risk_level=listing.risk_level,
                minimum_investment=listing.minimum_investment,
                description=listing.description,
                updated_at=to_storage(listing.updated_at),
            )
            self._db.add(orm_listing)

        self._db.flush()
        return self._to_domain(orm_listing)

    def count(self) -> int:
        """Number of listings."""
        return self._db.query(func.count(MarketListingORM.symbol)).scalar() or 0

    @staticmethod
    def _to_domain(orm: MarketListingORM) -> MarketListing:
        """Convert ORM model to domain model."""
        return MarketListing(
            symbol=orm.symbol,
            name=orm.name,
            asset_type=orm.asset_type,
            price=Decimal(str(orm.price)),
            change_percent=Decimal(str(orm.change_percent)) if orm.change_percent else Decimal("0"),
            risk_level=orm.risk_level,
            minimum_investment=(
                Decimal(str(orm.minimum_investment)) if orm.minimum_investment else Decimal("0")
            ),
            description=orm.description,
            updated_at=from_storage(orm.updated_at),
        )
