"""Shared domain error messages and error types."""

from decimal import Decimal
from enum import Enum


class ErrorKind(Enum):
    """Categories of failure reported by ledger operations."""

    INVALID_AMOUNT = "invalid_amount"
    INVALID_HOLDER_NAME = "invalid_holder_name"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    OVERDRAFT_EXCEEDED = "overdraft_exceeded"
    NOT_FOUND = "not_found"
    UNRECOGNIZED_VARIANT = "unrecognized_variant"
    PERSISTENCE_LOAD_FAILURE = "persistence_load_failure"
    PERSISTENCE_SAVE_FAILURE = "persistence_save_failure"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. Each subclass names its
    ``kind`` so callers can branch on the category without isinstance checks.
    """

    kind: ErrorKind


class InvalidAmountError(DomainError):
    """Amount is not a positive monetary value, or a parameter is negative."""

    kind = ErrorKind.INVALID_AMOUNT


class InvalidHolderNameError(DomainError):
    """Holder name is empty."""

    kind = ErrorKind.INVALID_HOLDER_NAME


class InsufficientFundsError(DomainError):
    """Savings withdrawal exceeds the balance."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class OverdraftExceededError(DomainError):
    """Current account withdrawal exceeds balance plus overdraft limit."""

    kind = ErrorKind.OVERDRAFT_EXCEEDED


class NotFoundError(DomainError):
    """Requested account does not exist."""

    kind = ErrorKind.NOT_FOUND


class UnrecognizedVariantError(DomainError):
    """Unknown account type tag."""

    kind = ErrorKind.UNRECOGNIZED_VARIANT


class PersistenceError(DomainError):
    """Stored ledger data could not be read or written."""

    kind = ErrorKind.PERSISTENCE_LOAD_FAILURE


class PersistenceLoadError(PersistenceError):
    """Stored ledger data is missing pieces, corrupt or unreadable."""

    kind = ErrorKind.PERSISTENCE_LOAD_FAILURE


class PersistenceSaveError(PersistenceError):
    """Ledger data could not be written."""

    kind = ErrorKind.PERSISTENCE_SAVE_FAILURE


def account_not_found(account_number: str) -> str:
    """Return message for missing account."""
    return f"Account {account_number} not found"


def non_positive_amount(operation: str, amount: Decimal) -> str:
    """Return message for a deposit or withdrawal that is not positive."""
    return f"{operation} amount must be positive (got {amount})"


def too_precise_amount(amount: Decimal) -> str:
    """Return message for an amount with sub-cent digits."""
    return f"Amount {amount} has more than two decimal places"


def negative_parameter(name: str, value: Decimal) -> str:
    """Return message for an opening balance, rate or limit below zero."""
    return f"{name} cannot be negative (got {value})"


def insufficient_funds(amount: Decimal, balance: Decimal) -> str:
    """Return message when a savings withdrawal exceeds the balance."""
    return f"Insufficient balance: cannot withdraw {amount} from balance {balance}"


def overdraft_exceeded(amount: Decimal, available: Decimal) -> str:
    """Return message when a current account withdrawal exceeds the overdraft."""
    return f"Overdraft limit exceeded: cannot withdraw {amount}, available {available}"


def unrecognized_variant(tag: str) -> str:
    """Return message for an unknown account type tag."""
    return f"Unrecognized account type '{tag}' (expected S for Savings or C for Current)"


def amount_too_large(amount: Decimal, limit: Decimal) -> str:
    """Return message for an amount above the supported maximum."""
    return f"Amount {amount} exceeds the maximum of {limit}"


def parameter_too_large(name: str, value: Decimal, limit: Decimal) -> str:
    """Return message for an opening balance, rate or limit above its maximum."""
    return f"{name} {value} exceeds the maximum of {limit}"


def balance_limit_exceeded(amount: Decimal, balance: Decimal, limit: Decimal) -> str:
    """Return message when a deposit would push the balance past the maximum."""
    return f"Deposit of {amount} would take balance {balance} above the maximum of {limit}"


def too_precise_rate(rate: Decimal) -> str:
    """Return message for an interest rate with more than four decimal places."""
    return f"Interest rate {rate} has more than four decimal places"
