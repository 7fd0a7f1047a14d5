"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from investsim.repositories.sqlalchemy.database import get_db
from investsim.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from investsim.providers import (
    ListingQuoteProvider,
    StubQuoteProvider,
    YahooQuoteProvider,
)
from investsim.services import (
    AccountService,
    MarketService,
    PortfolioService,
    QuoteService,
    TradeRecorder,
    TransactionReconciler,
    WatchlistService,
)
from investsim.reports import CsvExporter
from investsim.config.settings import get_settings

# Quote service for remote providers, shared across requests so its cache survives
_remote_quote_service: Optional[QuoteService] = None


def get_uow(db: Session = Depends(get_db)) -> SqlAlchemyUnitOfWork:
    """Provide a unit of work over the request's session."""
    return SqlAlchemyUnitOfWork(db)


def get_quote_service(uow: SqlAlchemyUnitOfWork = Depends(get_uow)) -> QuoteService:
    """
    Provide QuoteService for the configured provider.

    The listings provider reads through the request's session, so it gets a
    fresh service per request; stub and yahoo providers share one instance.
    """
    global _remote_quote_service
    settings = get_settings()

    if settings.quote_provider == "listings":
        return QuoteService(
            provider=ListingQuoteProvider(uow.listings),
            cache_ttl_seconds=settings.quote_cache_ttl_seconds,
        )

    if _remote_quote_service is None:
        if settings.quote_provider == "yahoo":
            provider = YahooQuoteProvider(
                fetch_timeout_seconds=settings.quote_fetch_timeout_seconds,
            )
        else:
            provider = StubQuoteProvider()
        _remote_quote_service = QuoteService(
            provider=provider,
            cache_ttl_seconds=settings.quote_cache_ttl_seconds,
        )
    return _remote_quote_service


def reset_quote_service() -> None:
    """Drop the shared quote service (after settings change)."""
    global _remote_quote_service
    _remote_quote_service = None


def get_account_service(uow: SqlAlchemyUnitOfWork = Depends(get_uow)) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(uow)


def get_market_service(uow: SqlAlchemyUnitOfWork = Depends(get_uow)) -> MarketService:
    """Provide MarketService instance."""
    return MarketService(uow)


def get_watchlist_service(uow: SqlAlchemyUnitOfWork = Depends(get_uow)) -> WatchlistService:
    """Provide WatchlistService instance."""
    return WatchlistService(uow)


def get_trade_recorder(uow: SqlAlchemyUnitOfWork = Depends(get_uow)) -> TradeRecorder:
    """Provide TradeRecorder instance (read side of the trade log)."""
    return TradeRecorder(uow.trades)


def get_reconciler(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    quote_service: QuoteService = Depends(get_quote_service),
) -> TransactionReconciler:
    """Provide TransactionReconciler instance."""
    return TransactionReconciler(
        uow=uow,
        quote_service=quote_service,
        cash_symbol=get_settings().cash_symbol,
    )


def get_portfolio_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    quote_service: QuoteService = Depends(get_quote_service),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(uow=uow, quote_service=quote_service)


def get_csv_exporter(
    trade_recorder: TradeRecorder = Depends(get_trade_recorder),
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> CsvExporter:
    """Provide CsvExporter instance."""
    return CsvExporter(trade_recorder=trade_recorder, portfolio_service=portfolio_service)
