"""Account service: sign-up and lookup."""

import logging
import uuid
from typing import Optional

from investsim.core.exceptions import NotFoundError, ValidationError
from investsim.core.timezone import now_market
from investsim.domain.models import Account
from investsim.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)


class AccountService:
    """
    Service for user accounts.

    Each user owns exactly one portfolio, so signing up creates the cash
    account with a zero balance. Accounts are never deleted.
    """

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    def sign_up(self, email: str, full_name: Optional[str] = None) -> Account:
        """
        Create a new account.

        Args:
            email: Unique contact address (case-insensitive)
            full_name: Optional display name

        Returns:
            Created Account with zero cash balance
        """
        normalized = (email or "").strip().lower()
        if not normalized or "@" not in normalized:
            raise ValidationError(f"Invalid email address: '{email}'")

        if self._uow.accounts.get_by_email(normalized):
            raise ValidationError(f"Account with email '{normalized}' already exists")

        account = Account(
            user_id=str(uuid.uuid4()),
            email=normalized,
            full_name=(full_name or "").strip() or None,
            created_at=now_market(),
        )
        with self._uow:
            created = self._uow.accounts.create(account)
            self._uow.commit()

        logger.info("Signed up account %s", created.user_id)
        return created

    def get_account(self, user_id: str) -> Account:
        """Get account by ID."""
        account = self._uow.accounts.get_by_id(user_id)
        if not account:
            raise NotFoundError("Account", user_id)
        return account

    def list_accounts(self) -> list[Account]:
        """List all accounts, oldest first."""
        return self._uow.accounts.list_all()
