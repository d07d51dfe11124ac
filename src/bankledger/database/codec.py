"""JSON encoding of ledger snapshots.

Document layout (schema version 1)::

    {
      "schema_version": 1,
      "account_counter": 1003,
      "accounts": [
        {
          "account_number": "ACC1001",
          "holder_name": "Asha",
          "terms": {"kind": "savings", "interest_rate_percent": "5"},
          "transactions": [
            {"kind": "account_open", "amount": "10000.00",
             "balance_after": "10000.00", "timestamp": "2024-01-15T09:30:00+00:00"}
          ]
        }
      ]
    }

Current accounts carry ``{"kind": "current", "overdraft_limit": "500"}``.
Monetary values are decimal strings so no precision is lost; accounts appear
in creation order and transactions in log order.
"""

import json
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any

from bankledger.domain.account import Account
from bankledger.domain.entities import (
    AccountKind,
    AccountTerms,
    CurrentTerms,
    LedgerSnapshot,
    SavingsTerms,
    SNAPSHOT_SCHEMA_VERSION,
    Transaction,
    TransactionKind,
)
from bankledger.domain.errors import PersistenceLoadError


def _terms_to_dict(terms: AccountTerms) -> dict[str, str]:
    if isinstance(terms, SavingsTerms):
        return {
            "kind": AccountKind.SAVINGS.value,
            "interest_rate_percent": str(terms.interest_rate_percent),
        }
    return {
        "kind": AccountKind.CURRENT.value,
        "overdraft_limit": str(terms.overdraft_limit),
    }


def _transaction_to_dict(txn: Transaction) -> dict[str, str]:
    return {
        "kind": txn.kind.value,
        "amount": str(txn.amount),
        "balance_after": str(txn.balance_after),
        "timestamp": txn.timestamp.isoformat(),
    }


def snapshot_to_dict(snapshot: LedgerSnapshot) -> dict[str, Any]:
    """Convert a snapshot to a JSON-compatible dictionary."""
    return {
        "schema_version": snapshot.schema_version,
        "account_counter": snapshot.account_counter,
        "accounts": [
            {
                "account_number": account.account_number,
                "holder_name": account.holder_name,
                "terms": _terms_to_dict(account.terms),
                "transactions": [_transaction_to_dict(t) for t in account.transactions],
            }
            for account in snapshot.accounts
        ],
    }


def _parse_decimal(value: Any, field: str) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise PersistenceLoadError(f"Invalid decimal for '{field}': {value!r}")


def _parse_timestamp(value: Any) -> datetime:
    try:
        timestamp = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise PersistenceLoadError(f"Invalid timestamp: {value!r}")
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp


def _terms_from_dict(data: Any) -> AccountTerms:
    if not isinstance(data, dict):
        raise PersistenceLoadError(f"Malformed account terms: {data!r}")
    kind = data.get("kind")
    if kind == AccountKind.SAVINGS.value:
        return SavingsTerms(
            interest_rate_percent=_parse_decimal(
                data.get("interest_rate_percent", "0"), "interest_rate_percent"
            )
        )
    if kind == AccountKind.CURRENT.value:
        return CurrentTerms(
            overdraft_limit=_parse_decimal(data.get("overdraft_limit", "0"), "overdraft_limit")
        )
    raise PersistenceLoadError(f"Unknown account kind: {kind!r}")


def _transaction_from_dict(data: Any) -> Transaction:
    if not isinstance(data, dict):
        raise PersistenceLoadError(f"Malformed transaction entry: {data!r}")
    try:
        kind = TransactionKind(data["kind"])
    except (KeyError, ValueError):
        raise PersistenceLoadError(f"Unknown transaction kind: {data.get('kind')!r}")
    return Transaction(
        kind=kind,
        amount=_parse_decimal(data.get("amount"), "amount"),
        balance_after=_parse_decimal(data.get("balance_after"), "balance_after"),
        timestamp=_parse_timestamp(data.get("timestamp")),
    )


def snapshot_from_dict(data: Any) -> LedgerSnapshot:
    """Build a snapshot from a decoded JSON document.

    Raises:
        PersistenceLoadError: If the document is malformed or uses an
            unsupported schema version
    """
    if not isinstance(data, dict):
        raise PersistenceLoadError("Snapshot document must be a JSON object")

    version = data.get("schema_version")
    if version != SNAPSHOT_SCHEMA_VERSION:
        raise PersistenceLoadError(
            f"Unsupported snapshot schema version {version!r} "
            f"(expected {SNAPSHOT_SCHEMA_VERSION})"
        )

    counter = data.get("account_counter")
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise PersistenceLoadError(f"Invalid account counter: {counter!r}")

    accounts = []
    for entry in data.get("accounts", []):
        try:
            account_number = entry["account_number"]
            holder_name = entry["holder_name"]
            terms = entry["terms"]
            transactions = entry["transactions"]
        except (KeyError, TypeError) as e:
            raise PersistenceLoadError(f"Malformed account entry: missing {e}")
        accounts.append(
            Account.restore(
                account_number=account_number,
                holder_name=holder_name,
                terms=_terms_from_dict(terms),
                transactions=[_transaction_from_dict(t) for t in transactions],
            )
        )

    return LedgerSnapshot(
        account_counter=counter,
        accounts=tuple(accounts),
        schema_version=version,
    )


def dumps(snapshot: LedgerSnapshot) -> str:
    """Encode a snapshot as an indented JSON string."""
    return json.dumps(snapshot_to_dict(snapshot), indent=2, ensure_ascii=False)


def loads(text: str) -> LedgerSnapshot:
    """Decode a snapshot from a JSON string.

    Raises:
        PersistenceLoadError: If the text is not valid JSON or not a snapshot
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PersistenceLoadError(f"Invalid JSON: {e}")
    return snapshot_from_dict(data)
