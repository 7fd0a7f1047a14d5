"""Quote providers module."""

from investsim.providers.quote_provider import QuoteProvider
from investsim.providers.listing_provider import ListingQuoteProvider
from investsim.providers.stub_provider import StubQuoteProvider
from investsim.providers.yahoo_provider import YahooQuoteProvider

__all__ = [
    "QuoteProvider",
    "ListingQuoteProvider",
    "StubQuoteProvider",
    "YahooQuoteProvider",
]
