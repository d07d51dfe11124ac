"""Domain model entities for bankledger.

These are plain data classes for the ledger's business concepts, independent
of the storage schema. Accounts themselves live in ``domain.account`` since
they carry behaviour; everything here is an immutable value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from bankledger.domain.errors import UnrecognizedVariantError, unrecognized_variant
from bankledger.utils.money import DEFAULT_CURRENCY_SYMBOL, format_money

if TYPE_CHECKING:
    from bankledger.domain.account import Account


SNAPSHOT_SCHEMA_VERSION = 1


class TransactionKind(Enum):
    """Kinds of entries in an account's transaction log."""

    ACCOUNT_OPEN = "account_open"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    INTEREST = "interest"

    @property
    def label(self) -> str:
        return _TRANSACTION_LABELS[self]


_TRANSACTION_LABELS = {
    TransactionKind.ACCOUNT_OPEN: "Account Open",
    TransactionKind.DEPOSIT: "Deposit",
    TransactionKind.WITHDRAW: "Withdraw",
    TransactionKind.INTEREST: "Interest",
}


@dataclass(frozen=True)
class Transaction:
    """Immutable log entry recording one balance change."""

    kind: TransactionKind
    amount: Decimal
    balance_after: Decimal
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def render(self, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
        """Return a one-line, human-readable description of the entry."""
        return (
            f"[{self.timestamp:%Y-%m-%d %H:%M:%S}] {self.kind.label:<12s} "
            f"{format_money(self.amount, symbol):>10s} | "
            f"Balance: {format_money(self.balance_after, symbol)}"
        )


class AccountKind(Enum):
    """Account variants offered by the bank."""

    SAVINGS = "savings"
    CURRENT = "current"

    @classmethod
    def parse(cls, tag: Union[str, "AccountKind"]) -> "AccountKind":
        """Resolve a type tag such as ``"S"``, ``"c"`` or ``"savings"``.

        Raises:
            UnrecognizedVariantError: If the tag names no known variant
        """
        if isinstance(tag, AccountKind):
            return tag
        normalized = str(tag).strip().lower()
        for kind in cls:
            if normalized in (kind.value, kind.value[0]):
                return kind
        raise UnrecognizedVariantError(unrecognized_variant(str(tag)))


@dataclass(frozen=True)
class SavingsTerms:
    """Savings variant: pays a flat monthly interest rate, no overdraft."""

    interest_rate_percent: Decimal

    @property
    def kind(self) -> AccountKind:
        return AccountKind.SAVINGS


@dataclass(frozen=True)
class CurrentTerms:
    """Current variant: may go below zero down to the overdraft limit."""

    overdraft_limit: Decimal

    @property
    def kind(self) -> AccountKind:
        return AccountKind.CURRENT


AccountTerms = Union[SavingsTerms, CurrentTerms]


@dataclass(frozen=True)
class AccountSpec:
    """Request to open one account, as used by batch creation.

    ``kind`` is left as the raw tag so that an unknown type surfaces as a
    per-item failure rather than at construction.
    """

    kind: Union[str, AccountKind]
    holder_name: str
    initial_balance: Decimal
    variant_param: Optional[Decimal] = None


@dataclass(frozen=True)
class LedgerSnapshot:
    """Full persisted state of a ledger at a point in time."""

    account_counter: int
    accounts: tuple["Account", ...] = ()
    schema_version: int = SNAPSHOT_SCHEMA_VERSION
