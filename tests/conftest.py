"""
Pytest configuration and fixtures for investsim tests.

This module provides:
- In-memory SQLite database fixtures (and a file-backed one for threads)
- Deterministic quote providers
- Service and repository fixtures
- Factory helpers for accounts, listings and trades
- Time helpers for the market timezone
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
import pytz
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from investsim.main import app
from investsim.api.deps import reset_quote_service
from investsim.config.settings import Settings, set_settings, reset_settings
from investsim.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from investsim.repositories.sqlalchemy import orm_models  # noqa: F401
from investsim.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from investsim.domain.models import Account, AssetType, MarketListing
from investsim.domain.views import Quote
from investsim.reports import CsvExporter
from investsim.services import (
    AccountService,
    MarketService,
    PortfolioService,
    QuoteService,
    TradeRecorder,
    TransactionReconciler,
    WatchlistService,
)

MARKET_TZ = pytz.timezone("Asia/Kolkata")


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def market_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in the market timezone."""
    return MARKET_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return market_datetime(2024, 6, 14, 14, 30, 0)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def file_session_factory(tmp_path) -> sessionmaker:
    """
    Session factory over a file-backed SQLite database.

    Threads each open their own session (and connection) from it, unlike
    the single shared connection of the in-memory engine.
    """
    reset_settings()
    engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrency.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def uow(test_session) -> SqlAlchemyUnitOfWork:
    """Provide test unit of work."""
    return SqlAlchemyUnitOfWork(test_session)


@pytest.fixture
def account_repo(uow):
    return uow.accounts


@pytest.fixture
def holding_repo(uow):
    return uow.holdings


@pytest.fixture
def listing_repo(uow):
    return uow.listings


@pytest.fixture
def trade_repo(uow):
    return uow.trades


@pytest.fixture
def watchlist_repo(uow):
    return uow.watchlist


# =============================================================================
# QUOTE FIXTURES
# =============================================================================


class DeterministicQuoteProvider:
    """
    Deterministic quote provider for testing.

    Prices can be changed between calls with ``set_price``.
    """

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or market_datetime(2024, 6, 14, 15, 30, 0)
        self.quotes: dict[str, tuple[str, AssetType, Decimal]] = {
            "XYZ": ("XYZ Industries", AssetType.STOCK, Decimal("100")),
            "ABC": ("ABC Motors", AssetType.STOCK, Decimal("50")),
            "FUNDY": ("Fundy Growth Fund", AssetType.MUTUAL_FUND, Decimal("25")),
            "GOVB": ("Government Bond 2030", AssetType.BOND, Decimal("1000")),
        }
        self.calls: list[list[str]] = []

    def set_price(self, symbol: str, price: Decimal) -> None:
        name, asset_type, _ = self.quotes[symbol]
        self.quotes[symbol] = (name, asset_type, price)

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """Return deterministic quotes for requested symbols."""
        self.calls.append(list(symbols))
        result = {}
        for symbol in symbols:
            if symbol in self.quotes:
                name, asset_type, price = self.quotes[symbol]
                result[symbol] = Quote(
                    symbol=symbol,
                    name=name,
                    price=price,
                    as_of=self._as_of,
                    asset_type=asset_type,
                )
        return result


class FailingQuoteProvider:
    """Quote provider that always raises an exception."""

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        raise ConnectionError("Network unavailable")


@pytest.fixture
def quote_provider() -> DeterministicQuoteProvider:
    """Provide deterministic quote provider."""
    return DeterministicQuoteProvider()


@pytest.fixture
def failing_provider() -> FailingQuoteProvider:
    """Provide a quote provider that always fails."""
    return FailingQuoteProvider()


@pytest.fixture
def quote_service(quote_provider) -> QuoteService:
    """Provide QuoteService without caching so price changes apply immediately."""
    return QuoteService(provider=quote_provider, cache_ttl_seconds=0)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def account_service(uow) -> AccountService:
    return AccountService(uow)


@pytest.fixture
def market_service(uow) -> MarketService:
    return MarketService(uow)


@pytest.fixture
def watchlist_service(uow) -> WatchlistService:
    return WatchlistService(uow)


@pytest.fixture
def trade_recorder(uow) -> TradeRecorder:
    return TradeRecorder(uow.trades)


@pytest.fixture
def reconciler(uow, quote_service) -> TransactionReconciler:
    """Provide test TransactionReconciler."""
    return TransactionReconciler(uow=uow, quote_service=quote_service, cash_symbol="CASH")


@pytest.fixture
def portfolio_service(uow, quote_service) -> PortfolioService:
    return PortfolioService(uow=uow, quote_service=quote_service)


@pytest.fixture
def csv_exporter(trade_recorder, portfolio_service) -> CsvExporter:
    return CsvExporter(trade_recorder=trade_recorder, portfolio_service=portfolio_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service, reconciler) -> Callable[..., Account]:
    """Factory for creating test accounts, optionally funded by a deposit."""

    def _create_account(
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        cash: Decimal = Decimal("0"),
    ) -> Account:
        if email is None:
            email = f"user-{uuid.uuid4().hex[:8]}@example.com"
        account = account_service.sign_up(email=email, full_name=full_name)
        if cash > 0:
            reconciler.deposit(account.user_id, cash)
        return account_service.get_account(account.user_id)

    return _create_account


@pytest.fixture
def listing_factory(market_service) -> Callable[..., MarketListing]:
    """Factory for creating market listings."""

    def _create_listing(
        symbol: str = "XYZ",
        price: Decimal = Decimal("100"),
        asset_type: AssetType = AssetType.STOCK,
        name: Optional[str] = None,
    ) -> MarketListing:
        return market_service.upsert_listing(
            symbol=symbol,
            name=name or f"{symbol} Corp",
            asset_type=asset_type,
            price=price,
        )

    return _create_listing


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def funded_account(account_factory) -> Account:
    """Account with a 1000 cash balance."""
    return account_factory(email="investor@example.com", cash=Decimal("1000"))


@pytest.fixture
def account_with_position(funded_account, reconciler) -> Account:
    """Account holding 5 XYZ bought at 100, with 500 cash left."""
    reconciler.buy(funded_account.user_id, "XYZ", 5)
    return funded_account


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, tmp_path) -> TestClient:
    """Provide FastAPI test client with test database."""
    # Lifespan startup must not touch the user's data directory
    set_settings(Settings(data_dir=tmp_path, seed_market_listings=False))
    reset_database()
    reset_quote_service()

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_quote_service()
    reset_settings()


@pytest.fixture
def listed_client(client) -> TestClient:
    """Test client with XYZ (stock, 100) and FUNDY (mutual fund, 25) listed."""
    client.put("/market/listings/XYZ", json={
        "name": "XYZ Industries",
        "asset_type": "stock",
        "price": "100",
    })
    client.put("/market/listings/FUNDY", json={
        "name": "Fundy Growth Fund",
        "asset_type": "mutual_fund",
        "price": "25",
    })
    return client
