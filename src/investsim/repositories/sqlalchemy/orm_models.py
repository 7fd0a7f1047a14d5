"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Integer,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from investsim.repositories.sqlalchemy.database import Base
from investsim.domain.models.enums import (
    AssetType,
    RiskLevel,
    TradeAction,
    TradeStatus,
)


class AccountORM(Base):
    """SQLAlchemy model for Account (one portfolio per user)."""

    __tablename__ = "accounts"

    user_id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    cash_balance = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False)

    holdings = relationship("HoldingORM", back_populates="account")
    trades = relationship("TradeRecordORM", back_populates="account")

    # UPDATEs carry "WHERE version = :old" and bump it; a mismatch raises StaleDataError
    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": lambda v: (v or 0) + 1,
    }


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"

    user_id = Column(String(36), ForeignKey("accounts.user_id"), primary_key=True)
    symbol = Column(String(20), primary_key=True)
    quantity = Column(Numeric(precision=18, scale=4), nullable=False)
    average_cost = Column(Numeric(precision=18, scale=8), nullable=False)
    asset_type = Column(SqlEnum(AssetType), nullable=False, default=AssetType.STOCK)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    account = relationship("AccountORM", back_populates="holdings")


class MarketListingORM(Base):
    """SQLAlchemy model for MarketListing (local quote store)."""

    __tablename__ = "market_listings"

    symbol = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)
    asset_type = Column(SqlEnum(AssetType), nullable=False)
    price = Column(Numeric(precision=18, scale=4), nullable=False)
    change_percent = Column(Numeric(precision=9, scale=4), nullable=False, default=Decimal("0"))
    risk_level = Column(SqlEnum(RiskLevel), nullable=True)
    minimum_investment = Column(Numeric(precision=18, scale=2), nullable=False, default=Decimal("0"))
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime, nullable=False)


class TradeRecordORM(Base):
    """SQLAlchemy model for TradeRecord (audit trail)."""

    __tablename__ = "trades"

    trade_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("accounts.user_id"), nullable=False, index=True)
    symbol = Column(String(20), nullable=False)
    action = Column(SqlEnum(TradeAction), nullable=False)
    quantity = Column(Numeric(precision=18, scale=4), nullable=False)
    price = Column(Numeric(precision=18, scale=4), nullable=False)
    total_amount = Column(Numeric(precision=18, scale=4), nullable=False)
    status = Column(SqlEnum(TradeStatus), nullable=False, default=TradeStatus.PENDING)
    created_at = Column(DateTime, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    account = relationship("AccountORM", back_populates="trades")


class WatchlistItemORM(Base):
    """SQLAlchemy model for WatchlistItem."""

    __tablename__ = "watchlist_items"
    __table_args__ = (UniqueConstraint("user_id", "symbol", name="uq_watchlist_user_symbol"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("accounts.user_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    added_at = Column(DateTime, nullable=False)
