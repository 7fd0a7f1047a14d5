"""API routers package."""

from investsim.api.routers.accounts import router as accounts_router
from investsim.api.routers.trades import router as trades_router
from investsim.api.routers.market import router as market_router
from investsim.api.routers.portfolio import router as portfolio_router
from investsim.api.routers.watchlist import router as watchlist_router

__all__ = [
    "accounts_router",
    "trades_router",
    "market_router",
    "portfolio_router",
    "watchlist_router",
]
