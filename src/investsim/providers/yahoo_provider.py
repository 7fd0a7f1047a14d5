"""
Quote provider backed by Yahoo Finance via yfinance.

Fetches run in a worker thread with a timeout; a timeout or transport error
is raised to the caller so the quote service can fall back to its cache.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal, InvalidOperation
from typing import Optional

from investsim.core.timezone import now_market
from investsim.domain.views import Quote

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _to_price(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value)).quantize(Decimal("0.0001"))
    except (InvalidOperation, ValueError):
        return None


def _safe_quote_for_symbol(symbol: str, tickers_obj) -> tuple[Optional[Decimal], str, Optional[Decimal]]:
    """
    Get (price, display_name, change_percent) for one symbol from a yfinance Tickers object.

    On any per-symbol error returns (None, symbol, None).
    """
    try:
        ticker = tickers_obj.tickers.get(symbol)
        if ticker is None:
            return (None, symbol, None)
        info = ticker.info
        if not isinstance(info, dict):
            return (None, symbol, None)
        price = _to_price(info.get("currentPrice") or info.get("regularMarketPrice"))
        name = (info.get("longName") or info.get("shortName") or "").strip() or symbol
        change = _to_price(info.get("regularMarketChangePercent"))
        return (price, name, change)
    except Exception:
        logger.warning("yfinance lookup failed for %s", symbol, exc_info=True)
        return (None, symbol, None)


def _fetch_quotes_impl(symbols: list[str]) -> dict[str, Quote]:
    yf = _get_yf()
    tickers = yf.Tickers(" ".join(symbols))
    as_of = now_market()
    result: dict[str, Quote] = {}
    for symbol in symbols:
        price, name, change = _safe_quote_for_symbol(symbol, tickers)
        if price is None:
            continue
        result[symbol] = Quote(
            symbol=symbol,
            name=name,
            price=price,
            as_of=as_of,
            change_percent=change,
        )
    return result


class YahooQuoteProvider:
    """Fetches live quotes from Yahoo Finance."""

    def __init__(self, fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS):
        self._fetch_timeout = fetch_timeout_seconds

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        if not symbols:
            return {}
        ex = ThreadPoolExecutor(max_workers=1)
        try:
            fut = ex.submit(_fetch_quotes_impl, symbols)
            return fut.result(timeout=self._fetch_timeout)
        finally:
            # A hung fetch is abandoned, not joined
            ex.shutdown(wait=False, cancel_futures=True)
