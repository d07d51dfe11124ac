"""Account entity and the per-variant withdrawal and interest policies.

An account's variant is a value (``SavingsTerms`` or ``CurrentTerms``) rather
than a subclass. The two policy functions below are the only places that
branch on it, so adding a variant means extending them and nothing else.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from bankledger.domain.entities import (
    AccountKind,
    AccountTerms,
    CurrentTerms,
    SavingsTerms,
    Transaction,
    TransactionKind,
)
from bankledger.domain.errors import (
    DomainError,
    InsufficientFundsError,
    InvalidAmountError,
    OverdraftExceededError,
    PersistenceLoadError,
    amount_too_large,
    balance_limit_exceeded,
    insufficient_funds,
    non_positive_amount,
    overdraft_exceeded,
    too_precise_amount,
)
from bankledger.domain.result import Result
from bankledger.utils.money import MAX_AMOUNT, as_decimal, has_cent_precision, to_cents


def validate_amount(operation: str, amount: Decimal) -> Optional[DomainError]:
    """Check that an amount is a positive cent value no larger than MAX_AMOUNT."""
    if not amount.is_finite() or amount <= 0:
        return InvalidAmountError(non_positive_amount(operation, amount))
    if amount > MAX_AMOUNT:
        return InvalidAmountError(amount_too_large(amount, MAX_AMOUNT))
    if not has_cent_precision(amount):
        return InvalidAmountError(too_precise_amount(amount))
    return None


def check_withdrawal(
    terms: AccountTerms, balance: Decimal, amount: Decimal
) -> Optional[DomainError]:
    """Return the error preventing a withdrawal, or None if it is allowed."""
    if isinstance(terms, SavingsTerms):
        if amount > balance:
            return InsufficientFundsError(insufficient_funds(amount, balance))
        return None
    if isinstance(terms, CurrentTerms):
        available = balance + terms.overdraft_limit
        if amount > available:
            return OverdraftExceededError(overdraft_exceeded(amount, available))
        return None
    raise TypeError(f"Unsupported account terms: {terms!r}")


def monthly_interest(terms: AccountTerms, balance: Decimal) -> Optional[Decimal]:
    """Return the interest due for one month, or None if the variant earns none.

    Savings interest is credited even when it rounds to zero.
    """
    if isinstance(terms, SavingsTerms):
        return to_cents(balance * terms.interest_rate_percent / Decimal(100))
    if isinstance(terms, CurrentTerms):
        return None
    raise TypeError(f"Unsupported account terms: {terms!r}")


class Account:
    """A holder's balance and append-only transaction log."""

    def __init__(
        self,
        account_number: str,
        holder_name: str,
        terms: AccountTerms,
        initial_balance: Decimal,
    ):
        """Open an account, recording the opening balance as the first entry.

        Args:
            account_number: Unique identifier assigned by the ledger
            holder_name: Name of the account holder
            terms: Variant parameters (savings rate or current overdraft)
            initial_balance: Opening balance
        """
        self._account_number = account_number
        self._holder_name = holder_name
        self._terms = terms
        self._transactions: list[Transaction] = [
            Transaction(TransactionKind.ACCOUNT_OPEN, initial_balance, initial_balance)
        ]

    @classmethod
    def restore(
        cls,
        account_number: str,
        holder_name: str,
        terms: AccountTerms,
        transactions: Iterable[Transaction],
    ) -> "Account":
        """Rebuild an account from a stored transaction log.

        Raises:
            PersistenceLoadError: If the log is empty, does not start with
                the account opening entry, or records a balance that differs
                from replaying the entries before it
        """
        log = list(transactions)
        if not log:
            raise PersistenceLoadError(f"Account {account_number} has no transactions")
        if log[0].kind is not TransactionKind.ACCOUNT_OPEN:
            raise PersistenceLoadError(
                f"Account {account_number} log does not start with an opening entry"
            )

        running = Decimal(0)
        for position, txn in enumerate(log):
            if position and txn.kind is TransactionKind.ACCOUNT_OPEN:
                raise PersistenceLoadError(
                    f"Account {account_number} has a second opening entry at position {position}"
                )
            if txn.kind is TransactionKind.WITHDRAW:
                running -= txn.amount
            else:
                running += txn.amount
            if txn.balance_after != running:
                raise PersistenceLoadError(
                    f"Account {account_number} entry {position} records balance "
                    f"{txn.balance_after} but the log replays to {running}"
                )

        account = cls.__new__(cls)
        account._account_number = account_number
        account._holder_name = holder_name
        account._terms = terms
        account._transactions = log
        return account

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def holder_name(self) -> str:
        return self._holder_name

    @property
    def terms(self) -> AccountTerms:
        return self._terms

    @property
    def kind(self) -> AccountKind:
        return self._terms.kind

    @property
    def balance(self) -> Decimal:
        return self._transactions[-1].balance_after

    @property
    def opening_balance(self) -> Decimal:
        return self._transactions[0].balance_after

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    def _append(self, kind: TransactionKind, amount: Decimal, balance_after: Decimal) -> Transaction:
        txn = Transaction(kind, amount, balance_after)
        self._transactions.append(txn)
        return txn

    def deposit(self, amount: Decimal) -> Result[Transaction]:
        """Credit the account.

        Fails with INVALID_AMOUNT when the amount is not positive or would
        take the balance above MAX_AMOUNT.
        """
        amount = as_decimal(amount)
        error = validate_amount("Deposit", amount)
        if error is None and self.balance + amount > MAX_AMOUNT:
            error = InvalidAmountError(balance_limit_exceeded(amount, self.balance, MAX_AMOUNT))
        if error is not None:
            return Result.failure(error)
        return Result.success(
            self._append(TransactionKind.DEPOSIT, amount, self.balance + amount)
        )

    def withdraw(self, amount: Decimal) -> Result[Transaction]:
        """Debit the account, subject to the variant's withdrawal limit."""
        amount = as_decimal(amount)
        error = validate_amount("Withdraw", amount) or check_withdrawal(
            self._terms, self.balance, amount
        )
        if error is not None:
            return Result.failure(error)
        return Result.success(
            self._append(TransactionKind.WITHDRAW, amount, self.balance - amount)
        )

    def apply_monthly_interest(self) -> Optional[Transaction]:
        """Credit one month of interest; returns the entry, or None if none accrues."""
        interest = monthly_interest(self._terms, self.balance)
        if interest is None:
            return None
        return self._append(TransactionKind.INTEREST, interest, self.balance + interest)

    def history(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Transaction]:
        """Return the log in chronological order, optionally limited to a date range.

        Both bounds are inclusive and compared against the entry's UTC date.
        """
        return [
            txn
            for txn in self._transactions
            if (start_date is None or txn.timestamp.date() >= start_date)
            and (end_date is None or txn.timestamp.date() <= end_date)
        ]

    def replay_balance(self) -> Decimal:
        """Recompute the balance from the log alone."""
        balance = Decimal(0)
        for txn in self._transactions:
            if txn.kind is TransactionKind.WITHDRAW:
                balance -= txn.amount
            else:
                balance += txn.amount
        return balance

    def __repr__(self) -> str:
        return (
            f"Account({self._account_number!r}, {self._holder_name!r}, "
            f"{self._terms!r}, balance={self.balance})"
        )
