"""Watchlist service."""

from investsim.core.exceptions import NotFoundError, SymbolNotFoundError, ValidationError
from investsim.core.timezone import now_market
from investsim.domain.models import WatchlistItem
from investsim.domain.views import WatchlistEntryView
from investsim.repositories.protocols import UnitOfWork
from investsim.services.quote_service import normalize_symbol


class WatchlistService:
    """Symbols a user follows, shown with their listing data."""

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    def add(self, user_id: str, symbol: str) -> WatchlistItem:
        """
        Follow a listed symbol.

        Raises:
            SymbolNotFoundError: the symbol is not listed
            ValidationError: already on the watchlist
        """
        self._require_account(user_id)
        normalized = normalize_symbol(symbol)
        if self._uow.listings.get(normalized) is None:
            raise SymbolNotFoundError(normalized)
        if self._uow.watchlist.get(user_id, normalized) is not None:
            raise ValidationError(
                f"{normalized} is already on the watchlist",
                code="ALREADY_WATCHED",
            )

        with self._uow:
            item = self._uow.watchlist.add(
                WatchlistItem(user_id=user_id, symbol=normalized, added_at=now_market())
            )
            self._uow.commit()
        return item

    def remove(self, user_id: str, symbol: str) -> None:
        """Stop following a symbol; removing an absent symbol is a no-op."""
        self._require_account(user_id)
        normalized = normalize_symbol(symbol)
        with self._uow:
            self._uow.watchlist.remove(user_id, normalized)
            self._uow.commit()

    def list(self, user_id: str) -> list[WatchlistEntryView]:
        self._require_account(user_id)
        items = self._uow.watchlist.list_by_user(user_id)
        listings = {
            listing.symbol: listing
            for listing in self._uow.listings.get_many([i.symbol for i in items])
        }

        entries = []
        for item in items:
            listing = listings.get(item.symbol)
            entries.append(
                WatchlistEntryView(
                    symbol=item.symbol,
                    name=listing.name if listing else item.symbol,
                    price=listing.price if listing else None,
                    change_percent=listing.change_percent if listing else None,
                    added_at=item.added_at,
                )
            )
        return entries

    def _require_account(self, user_id: str) -> None:
        if self._uow.accounts.get_by_id(user_id) is None:
            raise NotFoundError("Account", user_id)
