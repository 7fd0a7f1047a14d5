"""Quote provider backed by the market listings table."""

from investsim.core.timezone import now_market
from investsim.domain.views import Quote
from investsim.repositories.protocols import ListingRepository


class ListingQuoteProvider:
    """Serves quotes from the locally stored market listings."""

    def __init__(self, listing_repo: ListingRepository):
        self._listings = listing_repo

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        result: dict[str, Quote] = {}
        for listing in self._listings.get_many(symbols):
            result[listing.symbol] = Quote(
                symbol=listing.symbol,
                name=listing.name,
                price=listing.price,
                as_of=listing.updated_at or now_market(),
                asset_type=listing.asset_type,
                change_percent=listing.change_percent,
            )
        return result
