"""Domain layer for bankledger application."""

from bankledger.domain.account import Account
from bankledger.domain.ledger import Ledger, BatchResult, BatchFailure
from bankledger.domain.result import Result

__all__ = [
    "Account",
    "Ledger",
    "BatchResult",
    "BatchFailure",
    "Result",
]
