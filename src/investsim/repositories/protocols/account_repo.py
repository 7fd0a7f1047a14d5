"""Account repository protocol."""

from typing import Protocol, Optional

from investsim.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, user_id: str, for_update: bool = False) -> Optional[Account]:
        """Retrieve account by user ID; ``for_update`` re-reads and locks the row."""
        ...

    def get_by_email(self, email: str) -> Optional[Account]:
        """Retrieve account by email."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts."""
        ...

    def update_balance(self, account: Account) -> Account:
        """Write ``account.cash_balance``; fails if ``account.version`` is stale."""
        ...
