"""Quote lookup service."""

import logging
from datetime import datetime
from typing import Optional

from investsim.core.exceptions import (
    QuoteUnavailableError,
    SymbolNotFoundError,
    ValidationError,
)
from investsim.core.timezone import now_market
from investsim.domain.views import Quote
from investsim.providers.quote_provider import QuoteProvider

logger = logging.getLogger(__name__)


def normalize_symbol(symbol: Optional[str]) -> str:
    """Strip and uppercase a ticker; empty input is rejected."""
    normalized = (symbol or "").strip().upper()
    if not normalized:
        raise ValidationError("Symbol must not be empty")
    return normalized


class QuoteService:
    """
    Resolves ticker symbols to current prices.

    Wraps a provider with a per-symbol TTL cache and graceful degradation:
    when the provider fails, cached quotes (even stale ones) are served and
    the failure is logged. Lookups never write to the store.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        cache_ttl_seconds: int = 60,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._quote_cache: dict[str, tuple[Quote, datetime]] = {}

    def get_quote(self, symbol: str) -> Quote:
        """
        Resolve one symbol to its current quote.

        Raises:
            ValidationError: empty symbol
            SymbolNotFoundError: the provider has no quote for the symbol
            QuoteUnavailableError: provider down with nothing cached, or unusable price
        """
        normalized = normalize_symbol(symbol)
        quotes, failure = self._lookup([normalized])

        quote = quotes.get(normalized)
        if quote is None:
            if failure is not None:
                raise QuoteUnavailableError(normalized, failure)
            raise SymbolNotFoundError(normalized)
        if quote.price <= 0:
            raise QuoteUnavailableError(normalized, f"non-positive price {quote.price}")
        return quote

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for several symbols.

        Returns dict mapping symbol -> Quote for the symbols that resolved
        to a usable price; the rest are omitted.
        """
        if not symbols:
            return {}

        normalized = list(dict.fromkeys(normalize_symbol(s) for s in symbols))
        quotes, _ = self._lookup(normalized)
        return {s: q for s, q in quotes.items() if q.price > 0}

    def clear_cache(self) -> None:
        self._quote_cache.clear()

    def _lookup(self, symbols: list[str]) -> tuple[dict[str, Quote], Optional[str]]:
        """Serve fresh cache entries, fetch the rest; returns (quotes, failure reason)."""
        result: dict[str, Quote] = {}
        missing: list[str] = []
        for symbol in symbols:
            cached = self._fresh(symbol)
            if cached is not None:
                result[symbol] = cached
            else:
                missing.append(symbol)

        if not missing:
            return result, None

        failure: Optional[str] = None
        try:
            fetched = self._provider.get_quotes(missing)
        except Exception as exc:
            failure = str(exc) or type(exc).__name__
            logger.warning("Quote provider failed for %s: %s", ",".join(missing), failure)
            fetched = {}
            # Graceful degradation: fall back to stale cache entries
            for symbol in missing:
                if symbol in self._quote_cache:
                    result[symbol] = self._quote_cache[symbol][0]

        fetched_at = now_market()
        for symbol, quote in fetched.items():
            if quote.price <= 0:
                logger.warning("Ignoring non-positive price %s for %s", quote.price, symbol)
            else:
                self._quote_cache[symbol] = (quote, fetched_at)
            result[symbol] = quote

        return result, failure

    def _fresh(self, symbol: str) -> Optional[Quote]:
        entry = self._quote_cache.get(symbol)
        if entry is None:
            return None
        quote, fetched_at = entry
        elapsed = (now_market() - fetched_at).total_seconds()
        return quote if elapsed < self._cache_ttl else None

