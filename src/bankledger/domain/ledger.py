"""Ledger domain service: the bank-wide account registry."""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterator, Optional, Union

from bankledger.domain.account import Account
from bankledger.domain.entities import (
    AccountKind,
    AccountSpec,
    AccountTerms,
    CurrentTerms,
    LedgerSnapshot,
    SavingsTerms,
    Transaction,
)
from bankledger.domain.errors import (
    DomainError,
    InvalidAmountError,
    InvalidHolderNameError,
    NotFoundError,
    PersistenceError,
    PersistenceLoadError,
    PersistenceSaveError,
    account_not_found,
    negative_parameter,
    parameter_too_large,
    too_precise_amount,
    too_precise_rate,
)
from bankledger.domain.result import Result
from bankledger.utils.money import MAX_AMOUNT, as_decimal, has_cent_precision

if TYPE_CHECKING:
    from bankledger.database.base import SnapshotStore

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_PREFIX = "ACC"
INITIAL_ACCOUNT_COUNTER = 1000

# Monthly savings rate in percent: at most 100, up to four decimal places
MAX_INTEREST_RATE = Decimal("100")
INTEREST_RATE_STEP = Decimal("0.0001")


@dataclass
class BatchFailure:
    """A batch item that could not be created."""

    index: int
    spec: AccountSpec
    error: DomainError


@dataclass
class BatchResult:
    """Outcome of a batch creation: the accounts opened and the items skipped."""

    created: list[Account] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)


class Ledger:
    """Registry owning every account, identifier generation and persistence.

    Identifiers are ``ACC`` followed by a counter that only ever increases,
    so numbers of deleted accounts are never handed out again.
    """

    def __init__(self, store: Optional["SnapshotStore"] = None):
        """Initialize an empty ledger.

        Args:
            store: Persistence provider used by load_snapshot/save_snapshot
        """
        self.store = store
        self._accounts: dict[str, Account] = {}
        self._account_counter = INITIAL_ACCOUNT_COUNTER

    @property
    def account_counter(self) -> int:
        return self._account_counter

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_number: str) -> bool:
        return account_number in self._accounts

    def _next_account_number(self) -> str:
        self._account_counter += 1
        return f"{ACCOUNT_NUMBER_PREFIX}{self._account_counter}"

    def create_account(
        self,
        kind: Union[str, AccountKind],
        holder_name: str,
        initial_balance: Decimal,
        variant_param: Optional[Decimal] = None,
    ) -> Result[Account]:
        """Open a new account.

        Args:
            kind: Account variant, or a type tag such as "S" or "C"
            holder_name: Name of the account holder
            initial_balance: Opening balance, must not be negative; ints and
                floats are converted to Decimal
            variant_param: Interest rate percent for savings, overdraft limit
                for current accounts; defaults to zero

        Returns:
            Result holding the new account, or the validation error
        """
        try:
            account_kind = AccountKind.parse(kind)
        except DomainError as e:
            return Result.failure(e)

        name = holder_name.strip() if holder_name else ""
        if not name:
            return Result.failure(InvalidHolderNameError("Holder name cannot be empty"))

        initial_balance = as_decimal(initial_balance)
        param = Decimal(0) if variant_param is None else as_decimal(variant_param)
        error = self._validate_opening(account_kind, initial_balance, param)
        if error is not None:
            return Result.failure(error)

        terms: AccountTerms
        if account_kind is AccountKind.SAVINGS:
            terms = SavingsTerms(interest_rate_percent=param)
        else:
            terms = CurrentTerms(overdraft_limit=param)

        account = Account(self._next_account_number(), name, terms, initial_balance)
        self._accounts[account.account_number] = account
        logger.info(
            "Created %s account %s for %s",
            account_kind.value,
            account.account_number,
            name,
            extra={"account_number": account.account_number},
        )
        return Result.success(account)

    @staticmethod
    def _validate_opening(
        kind: AccountKind, initial_balance: Decimal, param: Decimal
    ) -> Optional[DomainError]:
        if kind is AccountKind.SAVINGS:
            param_name, param_limit = "Interest rate", MAX_INTEREST_RATE
        else:
            param_name, param_limit = "Overdraft limit", MAX_AMOUNT

        checks = (
            ("Initial balance", initial_balance, MAX_AMOUNT),
            (param_name, param, param_limit),
        )
        for name, value, limit in checks:
            if not value.is_finite() or value < 0:
                return InvalidAmountError(negative_parameter(name, value))
            if value > limit:
                return InvalidAmountError(parameter_too_large(name, value, limit))

        if not has_cent_precision(initial_balance):
            return InvalidAmountError(too_precise_amount(initial_balance))
        if kind is AccountKind.CURRENT and not has_cent_precision(param):
            return InvalidAmountError(too_precise_amount(param))
        if kind is AccountKind.SAVINGS and param != param.quantize(INTEREST_RATE_STEP):
            return InvalidAmountError(too_precise_rate(param))
        return None

    def create_accounts_batch(self, specs: list[AccountSpec]) -> BatchResult:
        """Create accounts in order, skipping and reporting the ones that fail."""
        batch = BatchResult()
        for index, spec in enumerate(specs):
            result = self.create_account(
                kind=spec.kind,
                holder_name=spec.holder_name,
                initial_balance=spec.initial_balance,
                variant_param=spec.variant_param,
            )
            if result.ok:
                batch.created.append(result.value)
            else:
                logger.warning("Batch item %d skipped: %s", index, result.error)
                batch.failures.append(BatchFailure(index=index, spec=spec, error=result.error))
        return batch

    def find_account(self, account_number: str) -> Optional[Account]:
        """Get account by number, or None if it does not exist."""
        return self._accounts.get(account_number)

    def require_account(self, account_number: str) -> Result[Account]:
        """Get account by number as a Result, failing with NOT_FOUND."""
        account = self._accounts.get(account_number)
        if account is None:
            return Result.failure(NotFoundError(account_not_found(account_number)))
        return Result.success(account)

    def deposit(self, account_number: str, amount: Decimal) -> Result[Transaction]:
        found = self.require_account(account_number)
        if not found.ok:
            return Result.failure(found.error)
        return found.value.deposit(amount)

    def withdraw(self, account_number: str, amount: Decimal) -> Result[Transaction]:
        found = self.require_account(account_number)
        if not found.ok:
            return Result.failure(found.error)
        return found.value.withdraw(amount)

    def balance(self, account_number: str) -> Result[Decimal]:
        found = self.require_account(account_number)
        if not found.ok:
            return Result.failure(found.error)
        return Result.success(found.value.balance)

    def history(
        self,
        account_number: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Result[list[Transaction]]:
        """Get an account's transaction log, optionally limited to a date range."""
        found = self.require_account(account_number)
        if not found.ok:
            return Result.failure(found.error)
        return Result.success(found.value.history(start_date=start_date, end_date=end_date))

    def apply_interest_to_all(self) -> list[Transaction]:
        """Apply monthly interest to every account.

        Returns:
            The interest entries appended; current accounts contribute none
        """
        applied = []
        for account in self._accounts.values():
            txn = account.apply_monthly_interest()
            if txn is not None:
                applied.append(txn)
        logger.info(
            "Applied interest to %d of %d accounts", len(applied), len(self._accounts)
        )
        return applied

    def delete_account(self, account_number: str) -> bool:
        """Remove an account and its history.

        Returns:
            True if the account existed and was removed
        """
        removed = self._accounts.pop(account_number, None)
        if removed is None:
            return False
        logger.info(
            "Deleted account %s (%s)",
            account_number,
            removed.holder_name,
            extra={"account_number": account_number},
        )
        return True

    def list_accounts(self) -> Iterator[Account]:
        """Iterate over all accounts in creation order."""
        yield from self._accounts.values()

    def snapshot(self) -> LedgerSnapshot:
        """Capture the accounts and identifier counter."""
        return LedgerSnapshot(
            account_counter=self._account_counter,
            accounts=tuple(self._accounts.values()),
        )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        """Replace the ledger's state with a snapshot's.

        Raises:
            PersistenceLoadError: If account numbers repeat or the counter is
                behind an existing account number
        """
        accounts: dict[str, Account] = {}
        for account in snapshot.accounts:
            if account.account_number in accounts:
                raise PersistenceLoadError(
                    f"Duplicate account number {account.account_number} in snapshot"
                )
            accounts[account.account_number] = account

        counter = snapshot.account_counter
        for number in accounts:
            suffix = number[len(ACCOUNT_NUMBER_PREFIX):]
            if number.startswith(ACCOUNT_NUMBER_PREFIX) and suffix.isdigit():
                if int(suffix) > counter:
                    raise PersistenceLoadError(
                        f"Account counter {counter} is behind account {number}"
                    )

        self._accounts = accounts
        self._account_counter = counter

    def load_snapshot(self) -> Result[None]:
        """Restore state from the store.

        Missing data starts an empty ledger. Unreadable data also starts an
        empty ledger, and the failure is logged and returned.
        """
        if self.store is None:
            return Result.success()
        try:
            snapshot = self.store.load()
            if snapshot is None:
                logger.info("No previous ledger data found, starting fresh")
                return Result.success()
            self.restore(snapshot)
        except PersistenceError as e:
            logger.warning("Could not load ledger data, starting fresh: %s", e)
            self._accounts = {}
            self._account_counter = INITIAL_ACCOUNT_COUNTER
            if not isinstance(e, PersistenceLoadError):
                e = PersistenceLoadError(str(e))
            return Result.failure(e)
        logger.info("Loaded %d accounts", len(self._accounts))
        return Result.success()

    def save_snapshot(self) -> Result[None]:
        """Write the full state to the store; failures are logged and returned."""
        if self.store is None:
            return Result.success()
        try:
            self.store.save(self.snapshot())
        except PersistenceError as e:
            logger.error("Could not save ledger data: %s", e)
            if not isinstance(e, PersistenceSaveError):
                e = PersistenceSaveError(str(e))
            return Result.failure(e)
        logger.info("Saved %d accounts", len(self._accounts))
        return Result.success()
