"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from investsim.core.exceptions import ConcurrentModificationError
from investsim.core.timezone import to_storage, from_storage
from investsim.domain.models import Account
from investsim.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            user_id=account.user_id,
            email=account.email,
            full_name=account.full_name,
            cash_balance=account.cash_balance,
            created_at=to_storage(account.created_at),
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, user_id: str, for_update: bool = False) -> Optional[Account]:
        """Retrieve account by user ID."""
        query = self._db.query(AccountORM).filter(AccountORM.user_id == user_id)
        if for_update:
            # Refresh from the database even if the row is already in the identity map
            query = query.with_for_update().populate_existing()
        orm_account = query.first()
        return self._to_domain(orm_account) if orm_account else None

    def get_by_email(self, email: str) -> Optional[Account]:
        """Retrieve account by email."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.email == email
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.created_at).all()
        return [self._to_domain(a) for a in orm_accounts]

    def update_balance(self, account: Account) -> Account:
        """
        Write the cash balance of an account.

        The version the caller read must still be current; the flush itself
        carries the version in its WHERE clause, so a writer from another
        session surfaces as StaleDataError.
        """
        orm_account = self._db.get(AccountORM, account.user_id)
        if orm_account is None:
            raise ValueError(f"Account not found: {account.user_id}")
        if orm_account.version != account.version:
            raise ConcurrentModificationError(account.user_id)

        orm_account.cash_balance = account.cash_balance
        self._db.flush()
        return self._to_domain(orm_account)

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            user_id=orm.user_id,
            email=orm.email,
            full_name=orm.full_name,
            cash_balance=Decimal(str(orm.cash_balance)) if orm.cash_balance else Decimal("0"),
            version=orm.version,
            created_at=from_storage(orm.created_at),
        )
