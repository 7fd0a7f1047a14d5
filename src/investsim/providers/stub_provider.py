"""Stub quote provider for offline/testing use."""

from decimal import Decimal

from investsim.core.timezone import now_market
from investsim.domain.models import AssetType
from investsim.domain.views import Quote


# Deterministic fake quotes: symbol -> (name, asset type, price, change %)
_STUB_QUOTES: dict[str, tuple[str, AssetType, Decimal, Decimal]] = {
    "RELIANCE": ("Reliance Industries", AssetType.STOCK, Decimal("2450.50"), Decimal("0.85")),
    "TCS": ("Tata Consultancy Services", AssetType.STOCK, Decimal("3520.00"), Decimal("-0.40")),
    "INFY": ("Infosys", AssetType.STOCK, Decimal("1480.25"), Decimal("1.10")),
    "HDFCBANK": ("HDFC Bank", AssetType.STOCK, Decimal("1610.75"), Decimal("0.25")),
    "SBIBLUECHIP": ("SBI Bluechip Fund", AssetType.MUTUAL_FUND, Decimal("72.40"), Decimal("0.30")),
    "AXISMIDCAP": ("Axis Midcap Fund", AssetType.MUTUAL_FUND, Decimal("85.15"), Decimal("0.55")),
    "GOI2033": ("GOI 7.26% 2033", AssetType.BOND, Decimal("1012.50"), Decimal("0.05")),
    "NHAI2031": ("NHAI 7.35% 2031", AssetType.BOND, Decimal("1005.00"), Decimal("-0.02")),
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Unknown symbols are omitted, so they resolve to "symbol not found".
    """

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """Return stub quotes for requested symbols."""
        as_of = now_market()
        result: dict[str, Quote] = {}

        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol not in _STUB_QUOTES:
                continue
            name, asset_type, price, change = _STUB_QUOTES[upper_symbol]
            result[upper_symbol] = Quote(
                symbol=upper_symbol,
                name=name,
                price=price,
                as_of=as_of,
                asset_type=asset_type,
                change_percent=change,
            )

        return result


def stub_listing_rows() -> list[tuple[str, str, AssetType, Decimal, Decimal]]:
    """Rows used to seed an empty listings table: (symbol, name, type, price, change %)."""
    return [
        (symbol, name, asset_type, price, change)
        for symbol, (name, asset_type, price, change) in _STUB_QUOTES.items()
    ]
