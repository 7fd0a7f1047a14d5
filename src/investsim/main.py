"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from investsim.config.settings import get_settings
from investsim.config.logging_config import setup_logging
from investsim.repositories.sqlalchemy.database import init_db, get_session
from investsim.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from investsim.api.routers import (
    accounts_router,
    trades_router,
    market_router,
    portfolio_router,
    watchlist_router,
)
from investsim.core.exceptions import AppError
from investsim.services import MarketService

logger = logging.getLogger(__name__)


def seed_listings() -> int:
    """Insert the default market listings into an empty database."""
    session = get_session()
    try:
        return MarketService(SqlAlchemyUnitOfWork(session)).seed_default_listings()
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    if get_settings().seed_market_listings:
        seed_listings()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Simulated investing: deposits, trades and portfolio tracking",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(trades_router)
app.include_router(market_router)
app.include_router(portfolio_router)
app.include_router(watchlist_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed requests in the same error shape as application errors."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"error": "VALIDATION_ERROR", "message": details or "Invalid request"},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
