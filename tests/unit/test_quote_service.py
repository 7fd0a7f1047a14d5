"""
Unit tests for QuoteService.

Tests cover:
- Single and batch lookups, symbol normalization
- SymbolNotFound for unknown symbols
- Quote caching and TTL
- Graceful degradation on provider failure
- Rejection of non-positive prices
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from investsim.core.exceptions import (
    QuoteUnavailableError,
    SymbolNotFoundError,
    ValidationError,
)
from investsim.services import QuoteService

from tests.conftest import DeterministicQuoteProvider, FailingQuoteProvider


# =============================================================================
# GET QUOTE TESTS
# =============================================================================


class TestGetQuote:
    """Tests for single-symbol lookup."""

    def test_get_quote_returns_price_and_name(self, quote_service: QuoteService):
        """
        GIVEN a provider quoting XYZ at 100
        WHEN I call get_quote("XYZ")
        THEN the quote carries price, name and as_of
        """
        quote = quote_service.get_quote("XYZ")

        assert quote.symbol == "XYZ"
        assert quote.price == Decimal("100")
        assert quote.name == "XYZ Industries"
        assert quote.as_of is not None

    def test_get_quote_normalizes_symbol(
        self,
        quote_service: QuoteService,
        quote_provider: DeterministicQuoteProvider,
    ):
        """
        GIVEN a lowercase symbol with surrounding whitespace
        WHEN I call get_quote
        THEN the provider is asked for the uppercase symbol
        """
        quote = quote_service.get_quote("  xyz ")

        assert quote.symbol == "XYZ"
        assert quote_provider.calls == [["XYZ"]]

    def test_unknown_symbol_raises_symbol_not_found(self, quote_service: QuoteService):
        """
        GIVEN a provider without NOPE
        WHEN I call get_quote("NOPE")
        THEN SymbolNotFoundError is raised
        """
        with pytest.raises(SymbolNotFoundError) as exc_info:
            quote_service.get_quote("nope")

        assert exc_info.value.code == "SYMBOL_NOT_FOUND"
        assert "NOPE" in exc_info.value.message

    @pytest.mark.parametrize("symbol", ["", "   ", None])
    def test_empty_symbol_is_rejected(self, quote_service: QuoteService, symbol):
        """
        GIVEN an empty symbol
        WHEN I call get_quote
        THEN ValidationError is raised before the provider is called
        """
        with pytest.raises(ValidationError):
            quote_service.get_quote(symbol)

    def test_non_positive_price_is_unusable(
        self,
        quote_service: QuoteService,
        quote_provider: DeterministicQuoteProvider,
    ):
        """
        GIVEN a provider returning a zero price for XYZ
        WHEN I call get_quote("XYZ")
        THEN QuoteUnavailableError is raised
        """
        quote_provider.set_price("XYZ", Decimal("0"))

        with pytest.raises(QuoteUnavailableError):
            quote_service.get_quote("XYZ")

    def test_provider_failure_without_cache_raises_unavailable(
        self,
        failing_provider: FailingQuoteProvider,
    ):
        """
        GIVEN a provider that always fails and an empty cache
        WHEN I call get_quote
        THEN QuoteUnavailableError is raised (not SymbolNotFound)
        """
        service = QuoteService(provider=failing_provider, cache_ttl_seconds=60)

        with pytest.raises(QuoteUnavailableError) as exc_info:
            service.get_quote("XYZ")

        assert exc_info.value.status_code == 503


# =============================================================================
# BATCH LOOKUP TESTS
# =============================================================================


class TestGetQuotes:
    """Tests for batch lookup."""

    def test_returns_only_found_symbols(self, quote_service: QuoteService):
        """
        GIVEN XYZ and ABC are quoted but NOPE is not
        WHEN I call get_quotes
        THEN only XYZ and ABC are returned
        """
        quotes = quote_service.get_quotes(["XYZ", "abc", "NOPE"])

        assert set(quotes) == {"XYZ", "ABC"}

    def test_empty_list_returns_empty_dict(self, quote_service: QuoteService):
        assert quote_service.get_quotes([]) == {}

    def test_non_positive_prices_are_omitted(
        self,
        quote_service: QuoteService,
        quote_provider: DeterministicQuoteProvider,
    ):
        quote_provider.set_price("ABC", Decimal("-1"))

        quotes = quote_service.get_quotes(["XYZ", "ABC"])

        assert set(quotes) == {"XYZ"}


# =============================================================================
# CACHING TESTS
# =============================================================================


class TestQuoteCaching:
    """Tests for the per-symbol TTL cache."""

    def test_cached_quote_is_served_within_ttl(self, quote_provider: DeterministicQuoteProvider):
        """
        GIVEN a service with a 60 second TTL
        WHEN I request the same symbol twice
        THEN the provider is called only once
        """
        service = QuoteService(provider=quote_provider, cache_ttl_seconds=60)

        service.get_quote("XYZ")
        service.get_quote("XYZ")

        assert quote_provider.calls == [["XYZ"]]

    def test_only_missing_symbols_are_fetched(self, quote_provider: DeterministicQuoteProvider):
        service = QuoteService(provider=quote_provider, cache_ttl_seconds=60)

        service.get_quotes(["XYZ"])
        service.get_quotes(["XYZ", "ABC"])

        assert quote_provider.calls == [["XYZ"], ["ABC"]]

    def test_zero_ttl_always_refetches(self, quote_provider: DeterministicQuoteProvider):
        """
        GIVEN a service with TTL 0
        WHEN the price changes between two lookups
        THEN the second lookup sees the new price
        """
        service = QuoteService(provider=quote_provider, cache_ttl_seconds=0)

        first = service.get_quote("XYZ")
        quote_provider.set_price("XYZ", Decimal("120"))
        second = service.get_quote("XYZ")

        assert first.price == Decimal("100")
        assert second.price == Decimal("120")

    def test_provider_failure_falls_back_to_stale_cache(
        self,
        quote_provider: DeterministicQuoteProvider,
        caplog,
    ):
        """
        GIVEN a cached XYZ quote whose TTL has expired
        WHEN the provider starts failing
        THEN the stale quote is served and a warning is logged
        """
        service = QuoteService(provider=quote_provider, cache_ttl_seconds=0)
        service.get_quote("XYZ")

        failing = MagicMock()
        failing.get_quotes.side_effect = ConnectionError("Network unavailable")
        service._provider = failing

        with caplog.at_level("WARNING", logger="investsim.services.quote_service"):
            quote = service.get_quote("XYZ")

        assert quote.price == Decimal("100")
        assert "Quote provider failed" in caplog.text

    def test_clear_cache_forces_refetch(self, quote_provider: DeterministicQuoteProvider):
        service = QuoteService(provider=quote_provider, cache_ttl_seconds=60)

        service.get_quote("XYZ")
        service.clear_cache()
        service.get_quote("XYZ")

        assert len(quote_provider.calls) == 2
