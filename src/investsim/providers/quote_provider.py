"""Quote provider protocol."""

from typing import Protocol

from investsim.domain.views import Quote


class QuoteProvider(Protocol):
    """
    Protocol for quote sources.

    Implementations resolve uppercase symbols to current prices.
    Missing symbols are omitted from the result; transport failures raise.
    """

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for multiple symbols.

        Returns dict mapping symbol -> Quote with price, name and as_of.
        """
        ...
