"""Tests for the Account entity and its withdrawal and interest policies."""

import pytest
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal

from bankledger.domain.account import Account, check_withdrawal, monthly_interest
from bankledger.domain.entities import (
    AccountKind,
    CurrentTerms,
    SavingsTerms,
    Transaction,
    TransactionKind,
)
from bankledger.domain.errors import ErrorKind, PersistenceLoadError
from bankledger.utils.money import MAX_AMOUNT


def _savings(balance="10000", rate="5") -> Account:
    return Account("ACC1001", "Asha Rao", SavingsTerms(Decimal(rate)), Decimal(balance))


def _current(balance="0", limit="500") -> Account:
    return Account("ACC1002", "Ravi Traders", CurrentTerms(Decimal(limit)), Decimal(balance))


class TestOpening:
    """Tests for account construction."""

    def test_opening_balance_is_first_entry(self):
        account = _savings()

        assert len(account.transactions) == 1
        opening = account.transactions[0]
        assert opening.kind is TransactionKind.ACCOUNT_OPEN
        assert opening.amount == Decimal("10000")
        assert opening.balance_after == Decimal("10000")
        assert account.balance == Decimal("10000")
        assert account.opening_balance == Decimal("10000")

    def test_kind_follows_terms(self):
        assert _savings().kind is AccountKind.SAVINGS
        assert _current().kind is AccountKind.CURRENT

    def test_identity_is_read_only(self):
        account = _savings()
        with pytest.raises(AttributeError):
            account.holder_name = "Someone Else"
        with pytest.raises(AttributeError):
            account.account_number = "ACC9999"

    def test_transactions_cannot_be_mutated_from_outside(self):
        account = _savings()
        log = account.transactions
        assert isinstance(log, tuple)
        with pytest.raises(AttributeError):
            log.append(Transaction(TransactionKind.DEPOSIT, Decimal(1), Decimal(1)))


class TestDeposit:
    """Tests for deposits."""

    def test_deposit_increases_balance_and_appends(self):
        account = _savings()

        result = account.deposit(Decimal("5000"))

        assert result.ok
        assert result.value.kind is TransactionKind.DEPOSIT
        assert result.value.amount == Decimal("5000")
        assert account.balance == Decimal("15000")
        assert len(account.transactions) == 2

    @pytest.mark.parametrize("amount", ["0", "-1", "-0.01", "NaN", "Infinity"])
    def test_non_positive_deposit_is_rejected_without_change(self, amount):
        account = _savings()

        result = account.deposit(Decimal(amount))

        assert not result.ok
        assert result.error_kind is ErrorKind.INVALID_AMOUNT
        assert account.balance == Decimal("10000")
        assert len(account.transactions) == 1

    def test_sub_cent_deposit_is_rejected(self):
        account = _savings()

        result = account.deposit(Decimal("10.005"))

        assert result.error_kind is ErrorKind.INVALID_AMOUNT
        assert "two decimal places" in str(result.error)
        assert len(account.transactions) == 1

    @pytest.mark.parametrize("amount", ["1e30", "1000000000000"])
    def test_huge_deposit_is_rejected(self, amount):
        account = _savings()

        result = account.deposit(Decimal(amount))

        assert result.error_kind is ErrorKind.INVALID_AMOUNT
        assert "exceeds the maximum" in str(result.error)
        assert account.balance == Decimal("10000")

    def test_deposit_cannot_push_balance_past_maximum(self):
        account = _savings(balance=str(MAX_AMOUNT - 1))

        assert account.deposit(Decimal("1")).ok
        result = account.deposit(Decimal("0.01"))

        assert result.error_kind is ErrorKind.INVALID_AMOUNT
        assert account.balance == MAX_AMOUNT

    def test_int_and_float_amounts_are_accepted(self):
        account = _savings()

        assert account.deposit(5000).ok
        assert account.withdraw(12.5).ok
        assert account.balance == Decimal("14987.5")
        assert account.transactions[-1].amount == Decimal("12.5")

    def test_non_numeric_amount_is_a_type_error(self):
        with pytest.raises(TypeError):
            _savings().deposit("100")


class TestSavingsWithdraw:
    """Tests for savings withdrawal policy."""

    def test_withdraw_within_balance(self):
        account = _savings()

        result = account.withdraw(Decimal("2500.50"))

        assert result.ok
        assert account.balance == Decimal("7499.50")
        assert account.transactions[-1].kind is TransactionKind.WITHDRAW

    def test_withdraw_entire_balance(self):
        account = _savings()

        assert account.withdraw(Decimal("10000")).ok
        assert account.balance == Decimal("0")

    def test_withdraw_more_than_balance_fails(self):
        account = _savings()

        result = account.withdraw(Decimal("10000.01"))

        assert result.error_kind is ErrorKind.INSUFFICIENT_FUNDS
        assert account.balance == Decimal("10000")
        assert len(account.transactions) == 1

    def test_withdraw_non_positive_fails_with_invalid_amount(self):
        account = _savings()

        result = account.withdraw(Decimal("0"))

        assert result.error_kind is ErrorKind.INVALID_AMOUNT

    def test_huge_withdrawal_is_rejected_not_raised(self):
        account = _savings()

        result = account.withdraw(Decimal("1e30"))

        assert result.error_kind is ErrorKind.INVALID_AMOUNT
        assert account.balance == Decimal("10000")


class TestCurrentWithdraw:
    """Tests for current account overdraft policy."""

    def test_withdraw_into_overdraft(self):
        account = _current()

        result = account.withdraw(Decimal("300"))

        assert result.ok
        assert account.balance == Decimal("-300")

    def test_withdraw_beyond_overdraft_fails(self):
        account = _current()
        account.withdraw(Decimal("300"))

        result = account.withdraw(Decimal("300"))

        assert result.error_kind is ErrorKind.OVERDRAFT_EXCEEDED
        assert account.balance == Decimal("-300")
        assert len(account.transactions) == 2

    def test_withdraw_exactly_to_limit(self):
        account = _current(balance="100", limit="500")

        assert account.withdraw(Decimal("600")).ok
        assert account.balance == Decimal("-500")

    def test_zero_limit_behaves_like_no_overdraft(self):
        account = _current(balance="50", limit="0")

        assert account.withdraw(Decimal("50.01")).error_kind is ErrorKind.OVERDRAFT_EXCEEDED


class TestInterest:
    """Tests for monthly interest."""

    def test_savings_interest_credits_rate_of_balance(self):
        account = _savings(balance="10000", rate="5")

        txn = account.apply_monthly_interest()

        assert txn.kind is TransactionKind.INTEREST
        assert txn.amount == Decimal("500.00")
        assert account.balance == Decimal("10500.00")
        assert len(account.transactions) == 2

    def test_savings_interest_rounds_to_cents(self):
        account = _savings(balance="333.33", rate="1.5")

        txn = account.apply_monthly_interest()

        # 333.33 * 1.5% = 4.99995
        assert txn.amount == Decimal("5.00")
        assert account.balance == Decimal("338.33")

    def test_zero_rate_still_appends_entry(self):
        account = _savings(rate="0")

        txn = account.apply_monthly_interest()

        assert txn is not None
        assert txn.amount == Decimal("0.00")
        assert account.balance == Decimal("10000")
        assert len(account.transactions) == 2

    def test_current_account_earns_nothing(self):
        account = _current(balance="1000")

        assert account.apply_monthly_interest() is None
        assert account.balance == Decimal("1000")
        assert len(account.transactions) == 1

    def test_policy_functions_dispatch_on_terms(self):
        assert monthly_interest(CurrentTerms(Decimal("500")), Decimal("100")) is None
        assert monthly_interest(SavingsTerms(Decimal("10")), Decimal("100")) == Decimal("10.00")
        assert check_withdrawal(SavingsTerms(Decimal("1")), Decimal("10"), Decimal("10")) is None
        assert check_withdrawal(CurrentTerms(Decimal("5")), Decimal("10"), Decimal("15")) is None

    def test_policy_functions_reject_unknown_terms(self):
        with pytest.raises(TypeError):
            monthly_interest(object(), Decimal("1"))


class TestLogInvariants:
    """Tests that the log always explains the balance."""

    def test_replay_matches_balance_after_mixed_operations(self):
        account = _savings(balance="1200", rate="2")
        account.deposit(Decimal("300.25"))
        account.withdraw(Decimal("99.99"))
        account.apply_monthly_interest()
        account.withdraw(Decimal("5000"))  # rejected
        account.deposit(Decimal("-3"))  # rejected
        account.apply_monthly_interest()

        assert account.replay_balance() == account.balance
        assert account.balance == account.transactions[-1].balance_after
        assert account.transactions[0].balance_after == Decimal("1200")

    def test_replay_with_overdraft(self):
        account = _current(balance="10", limit="100")
        account.withdraw(Decimal("60"))
        account.deposit(Decimal("20"))

        assert account.balance == Decimal("-30")
        assert account.replay_balance() == Decimal("-30")


class TestHistory:
    """Tests for history retrieval."""

    def test_history_returns_all_entries_in_order(self):
        account = _savings()
        account.deposit(Decimal("1"))
        account.withdraw(Decimal("2"))

        kinds = [t.kind for t in account.history()]

        assert kinds == [
            TransactionKind.ACCOUNT_OPEN,
            TransactionKind.DEPOSIT,
            TransactionKind.WITHDRAW,
        ]

    def test_history_filters_by_date(self):
        day = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
        log = [
            Transaction(TransactionKind.ACCOUNT_OPEN, Decimal("100"), Decimal("100"), day),
            Transaction(TransactionKind.DEPOSIT, Decimal("5"), Decimal("105"), day + timedelta(days=5)),
            Transaction(TransactionKind.DEPOSIT, Decimal("5"), Decimal("110"), day + timedelta(days=20)),
        ]
        account = Account.restore("ACC1001", "Asha Rao", SavingsTerms(Decimal("1")), log)

        in_range = account.history(start_date=date(2024, 3, 11), end_date=date(2024, 3, 15))
        from_start = account.history(end_date=date(2024, 3, 10))

        assert [t.balance_after for t in in_range] == [Decimal("105")]
        assert [t.kind for t in from_start] == [TransactionKind.ACCOUNT_OPEN]


class TestRestore:
    """Tests for rebuilding accounts from stored logs."""

    def test_restore_uses_last_entry_as_balance(self):
        log = [
            Transaction(TransactionKind.ACCOUNT_OPEN, Decimal("100"), Decimal("100")),
            Transaction(TransactionKind.WITHDRAW, Decimal("40"), Decimal("60")),
        ]

        account = Account.restore("ACC1005", "Meena", CurrentTerms(Decimal("0")), log)

        assert account.balance == Decimal("60")
        assert account.transactions == tuple(log)

    def test_restore_rejects_empty_log(self):
        with pytest.raises(PersistenceLoadError):
            Account.restore("ACC1005", "Meena", CurrentTerms(Decimal("0")), [])

    def test_restore_rejects_log_without_opening_entry(self):
        log = [Transaction(TransactionKind.DEPOSIT, Decimal("5"), Decimal("5"))]
        with pytest.raises(PersistenceLoadError):
            Account.restore("ACC1005", "Meena", CurrentTerms(Decimal("0")), log)

    def test_restore_rejects_balance_that_does_not_replay(self):
        log = [
            Transaction(TransactionKind.ACCOUNT_OPEN, Decimal("100"), Decimal("100")),
            Transaction(TransactionKind.DEPOSIT, Decimal("50"), Decimal("999999")),
        ]
        with pytest.raises(PersistenceLoadError, match="replays to 150"):
            Account.restore("ACC1005", "Meena", CurrentTerms(Decimal("0")), log)

    def test_restore_rejects_opening_entry_with_wrong_balance(self):
        log = [Transaction(TransactionKind.ACCOUNT_OPEN, Decimal("100"), Decimal("90"))]
        with pytest.raises(PersistenceLoadError, match="entry 0"):
            Account.restore("ACC1005", "Meena", CurrentTerms(Decimal("0")), log)

    def test_restore_rejects_second_opening_entry(self):
        log = [
            Transaction(TransactionKind.ACCOUNT_OPEN, Decimal("100"), Decimal("100")),
            Transaction(TransactionKind.ACCOUNT_OPEN, Decimal("5"), Decimal("105")),
        ]
        with pytest.raises(PersistenceLoadError, match="second opening entry"):
            Account.restore("ACC1005", "Meena", CurrentTerms(Decimal("0")), log)

    def test_restore_accepts_overdrawn_log(self):
        log = [
            Transaction(TransactionKind.ACCOUNT_OPEN, Decimal("0"), Decimal("0")),
            Transaction(TransactionKind.WITHDRAW, Decimal("300"), Decimal("-300")),
            Transaction(TransactionKind.DEPOSIT, Decimal("100.50"), Decimal("-199.50")),
        ]

        account = Account.restore("ACC1002", "Ravi", CurrentTerms(Decimal("500")), log)

        assert account.balance == Decimal("-199.50")
