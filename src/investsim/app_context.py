"""Application context for in-process service management.

Provides access to the services without HTTP, for scripts and the test
suite. Each context owns one database session.
"""

from pathlib import Path
from typing import Optional

from investsim.config.settings import Settings, set_settings, get_settings
from investsim.repositories.sqlalchemy.database import (
    init_db_with_path,
    reset_database,
    get_session,
)
from investsim.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from investsim.providers import ListingQuoteProvider, StubQuoteProvider, YahooQuoteProvider
from investsim.services import (
    AccountService,
    MarketService,
    PortfolioService,
    QuoteService,
    TransactionReconciler,
    WatchlistService,
)
from investsim.reports import CsvExporter
from investsim.services.trade_recorder import TradeRecorder


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily and share the context's unit of work.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize application context.

        Args:
            data_dir: Optional data directory. If not provided, uses default.
        """
        self._data_dir = data_dir
        self._session = None
        self._initialized = False
        self._reset_services()

    def _reset_services(self) -> None:
        self._uow: Optional[SqlAlchemyUnitOfWork] = None
        self._quote_service: Optional[QuoteService] = None
        self._accounts: Optional[AccountService] = None
        self._market: Optional[MarketService] = None
        self._reconciler: Optional[TransactionReconciler] = None
        self._portfolio: Optional[PortfolioService] = None
        self._watchlist: Optional[WatchlistService] = None
        self._exporter: Optional[CsvExporter] = None

    def initialize(self, data_dir: Optional[Path] = None, seed_listings: bool = True) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Args:
            data_dir: Data directory path. Uses default if not provided.
            seed_listings: Populate market listings if the database has none.
        """
        if data_dir:
            self._data_dir = data_dir

        # Update global settings
        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)

        # Reset and reinitialize database
        self.close()
        reset_database()
        init_db_with_path(settings.get_data_dir() / "investsim.db")

        self._reset_services()
        self._initialized = True

        if seed_listings:
            self.market.seed_default_listings()

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Get the current data directory."""
        return get_settings().get_data_dir()

    @property
    def uow(self) -> SqlAlchemyUnitOfWork:
        if self._uow is None:
            if self._session is None:
                self._session = get_session()
            self._uow = SqlAlchemyUnitOfWork(self._session)
        return self._uow

    @property
    def quotes(self) -> QuoteService:
        """Get the QuoteService for the configured provider."""
        if self._quote_service is None:
            settings = get_settings()
            if settings.quote_provider == "yahoo":
                provider = YahooQuoteProvider(settings.quote_fetch_timeout_seconds)
            elif settings.quote_provider == "stub":
                provider = StubQuoteProvider()
            else:
                provider = ListingQuoteProvider(self.uow.listings)
            self._quote_service = QuoteService(
                provider=provider,
                cache_ttl_seconds=settings.quote_cache_ttl_seconds,
            )
        return self._quote_service

    @property
    def accounts(self) -> AccountService:
        if self._accounts is None:
            self._accounts = AccountService(self.uow)
        return self._accounts

    @property
    def market(self) -> MarketService:
        if self._market is None:
            self._market = MarketService(self.uow)
        return self._market

    @property
    def reconciler(self) -> TransactionReconciler:
        if self._reconciler is None:
            self._reconciler = TransactionReconciler(
                uow=self.uow,
                quote_service=self.quotes,
                cash_symbol=get_settings().cash_symbol,
            )
        return self._reconciler

    @property
    def portfolio(self) -> PortfolioService:
        if self._portfolio is None:
            self._portfolio = PortfolioService(uow=self.uow, quote_service=self.quotes)
        return self._portfolio

    @property
    def watchlist(self) -> WatchlistService:
        if self._watchlist is None:
            self._watchlist = WatchlistService(self.uow)
        return self._watchlist

    @property
    def exporter(self) -> CsvExporter:
        if self._exporter is None:
            self._exporter = CsvExporter(
                trade_recorder=TradeRecorder(self.uow.trades),
                portfolio_service=self.portfolio,
            )
        return self._exporter

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None
        self._uow = None
