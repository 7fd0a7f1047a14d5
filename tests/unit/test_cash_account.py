"""
Unit tests for CashAccount.

Tests cover:
- Debit and credit
- InsufficientFunds leaves the balance unchanged
- Version bump on every write
- Stale version detection
"""

from decimal import Decimal

import pytest

from investsim.core.exceptions import (
    ConcurrentModificationError,
    InsufficientFundsError,
    InvalidQuantityError,
    NotFoundError,
)
from investsim.services import CashAccount


@pytest.fixture
def cash(account_repo) -> CashAccount:
    return CashAccount(account_repo)


class TestDebitCredit:
    """Tests for balance changes."""

    def test_credit_increases_balance(self, cash: CashAccount, account_factory, uow):
        account = account_factory()

        updated = cash.credit(account.user_id, Decimal("250.50"))
        uow.commit()

        assert updated.cash_balance == Decimal("250.50")
        assert cash.balance(account.user_id) == Decimal("250.50")

    def test_debit_decreases_balance(self, cash: CashAccount, account_factory, uow):
        account = account_factory(cash=Decimal("1000"))

        updated = cash.debit(account.user_id, Decimal("400"))
        uow.commit()

        assert updated.cash_balance == Decimal("600")

    def test_debit_of_entire_balance_reaches_zero(self, cash: CashAccount, account_factory):
        account = account_factory(cash=Decimal("100"))

        updated = cash.debit(account.user_id, Decimal("100"))

        assert updated.cash_balance == Decimal("0")

    def test_debit_above_balance_fails(self, cash: CashAccount, account_factory):
        """
        GIVEN a balance of 100
        WHEN I debit 100.01
        THEN InsufficientFundsError is raised and the balance is unchanged
        """
        account = account_factory(cash=Decimal("100"))

        with pytest.raises(InsufficientFundsError) as exc_info:
            cash.debit(account.user_id, Decimal("100.01"))

        assert exc_info.value.code == "INSUFFICIENT_FUNDS"
        assert cash.balance(account.user_id) == Decimal("100")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_non_positive_amounts_rejected(self, cash: CashAccount, account_factory, amount):
        account = account_factory(cash=Decimal("100"))

        with pytest.raises(InvalidQuantityError):
            cash.credit(account.user_id, amount)
        with pytest.raises(InvalidQuantityError):
            cash.debit(account.user_id, amount)

    def test_unknown_account(self, cash: CashAccount):
        with pytest.raises(NotFoundError):
            cash.credit("missing", Decimal("1"))


class TestVersioning:
    """Tests for the optimistic version counter."""

    def test_every_write_bumps_version(self, cash: CashAccount, account_factory, account_repo):
        account = account_factory()
        before = account_repo.get_by_id(account.user_id).version

        cash.credit(account.user_id, Decimal("10"))
        cash.debit(account.user_id, Decimal("5"))

        assert account_repo.get_by_id(account.user_id).version == before + 2

    def test_stale_version_is_rejected(self, account_factory, account_repo):
        """
        GIVEN an account read at version N
        WHEN another write bumps it to N+1 before mine is applied
        THEN my write fails with ConcurrentModificationError
        """
        account = account_factory(cash=Decimal("100"))
        stale = account_repo.get_by_id(account.user_id)

        fresh = account_repo.get_by_id(account.user_id)
        fresh.cash_balance = Decimal("50")
        account_repo.update_balance(fresh)

        stale.cash_balance = Decimal("0")
        with pytest.raises(ConcurrentModificationError):
            account_repo.update_balance(stale)
