"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from bankledger.domain import entities as domain
from bankledger.domain.account import Account as DomainAccount
from bankledger.domain.errors import PersistenceLoadError
from bankledger.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)


def _to_naive_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(UTC).replace(tzinfo=None)


def _to_aware_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(UTC)


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    try:
        kind = domain.TransactionKind(orm_transaction.kind)
    except ValueError:
        raise PersistenceLoadError(
            f"Unknown transaction kind '{orm_transaction.kind}' "
            f"for account {orm_transaction.account_number}"
        )
    return domain.Transaction(
        kind=kind,
        amount=_decimal(orm_transaction.amount),
        balance_after=_decimal(orm_transaction.balance_after),
        timestamp=_to_aware_utc(orm_transaction.timestamp),
    )


def terms_to_domain(orm_account: ORMAccount) -> domain.AccountTerms:
    """Rebuild the variant terms stored on an account row."""
    if orm_account.kind == domain.AccountKind.SAVINGS.value:
        rate = orm_account.interest_rate_percent
        return domain.SavingsTerms(
            interest_rate_percent=_decimal(rate) if rate is not None else Decimal(0)
        )
    if orm_account.kind == domain.AccountKind.CURRENT.value:
        limit = orm_account.overdraft_limit
        return domain.CurrentTerms(
            overdraft_limit=_decimal(limit) if limit is not None else Decimal(0)
        )
    raise PersistenceLoadError(
        f"Unknown account kind '{orm_account.kind}' for account {orm_account.account_number}"
    )


def account_to_domain(orm_account: ORMAccount) -> DomainAccount:
    """Convert SQLAlchemy Account model to domain Account.

    Raises:
        PersistenceLoadError: If the stored balance disagrees with the log
    """
    account = DomainAccount.restore(
        account_number=orm_account.account_number,
        holder_name=orm_account.holder_name,
        terms=terms_to_domain(orm_account),
        transactions=[transaction_to_domain(t) for t in orm_account.transactions],
    )
    if account.balance != _decimal(orm_account.balance):
        raise PersistenceLoadError(
            f"Account {account.account_number} balance {orm_account.balance} "
            f"does not match its last transaction ({account.balance})"
        )
    return account


def account_to_orm(account: DomainAccount, position: int) -> ORMAccount:
    """Convert domain Account to a new SQLAlchemy Account row with its log."""
    interest_rate: Optional[Decimal] = None
    overdraft_limit: Optional[Decimal] = None
    if isinstance(account.terms, domain.SavingsTerms):
        interest_rate = account.terms.interest_rate_percent
    else:
        overdraft_limit = account.terms.overdraft_limit

    return ORMAccount(
        account_number=account.account_number,
        kind=account.kind.value,
        holder_name=account.holder_name,
        balance=account.balance,
        interest_rate_percent=interest_rate,
        overdraft_limit=overdraft_limit,
        position=position,
        transactions=[
            ORMTransaction(
                sequence=sequence,
                kind=txn.kind.value,
                amount=txn.amount,
                balance_after=txn.balance_after,
                timestamp=_to_naive_utc(txn.timestamp),
            )
            for sequence, txn in enumerate(account.transactions)
        ],
    )
