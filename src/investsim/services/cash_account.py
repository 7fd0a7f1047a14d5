"""Cash account: per-user available balance."""

from decimal import Decimal

from investsim.core.exceptions import (
    InsufficientFundsError,
    InvalidQuantityError,
    NotFoundError,
)
from investsim.domain.models import Account
from investsim.repositories.protocols import AccountRepository

# Largest amount or balance kept exact to 4 decimal places when SQLite
# stores the Numeric column as a double (15 significant digits)
MAX_CASH_AMOUNT = Decimal("100000000000")


class CashAccount:
    """
    Debits and credits the cash balance of an account.

    The balance check and the write happen on the same freshly read row,
    so the balance is never written negative. Every write bumps the
    account version; a stale version raises ConcurrentModificationError.
    """

    def __init__(self, account_repo: AccountRepository):
        self._account_repo = account_repo

    def balance(self, user_id: str) -> Decimal:
        return self._load(user_id).cash_balance

    def debit(self, user_id: str, amount: Decimal) -> Account:
        """Take ``amount`` out of the balance; fails if it exceeds what is available."""
        self._check_amount(amount)
        account = self._load(user_id, for_update=True)
        if amount > account.cash_balance:
            raise InsufficientFundsError(str(amount), str(account.cash_balance))

        account.cash_balance = account.cash_balance - amount
        return self._account_repo.update_balance(account)

    def credit(self, user_id: str, amount: Decimal) -> Account:
        """Add ``amount`` to the balance."""
        self._check_amount(amount)
        account = self._load(user_id, for_update=True)

        if account.cash_balance + amount > MAX_CASH_AMOUNT:
            raise InvalidQuantityError(
                f"Balance would exceed the maximum of {MAX_CASH_AMOUNT}"
            )

        account.cash_balance = account.cash_balance + amount
        return self._account_repo.update_balance(account)

    def _load(self, user_id: str, for_update: bool = False) -> Account:
        account = self._account_repo.get_by_id(user_id, for_update=for_update)
        if account is None:
            raise NotFoundError("Account", user_id)
        return account

    @staticmethod
    def _check_amount(amount: Decimal) -> None:
        if amount <= 0:
            raise InvalidQuantityError(f"Amount must be positive, got {amount}")
        if amount > MAX_CASH_AMOUNT:
            raise InvalidQuantityError(f"Amount exceeds the maximum of {MAX_CASH_AMOUNT}")
