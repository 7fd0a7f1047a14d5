"""Holding repository protocol."""

from typing import Protocol, Optional

from investsim.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def get(self, user_id: str, symbol: str) -> Optional[Holding]:
        """Get the holding for one symbol."""
        ...

    def list_by_user(self, user_id: str) -> list[Holding]:
        """List all holdings of a user, ordered by symbol."""
        ...

    def create(self, holding: Holding) -> Holding:
        """Insert a new holding."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update quantity and average cost of an existing holding."""
        ...

    def delete(self, user_id: str, symbol: str) -> None:
        """Delete a holding (position closed)."""
        ...
