"""Tests for deposit, withdraw, history and interest CLI commands."""

from decimal import Decimal

from bankledger.cli.main import cli
from bankledger.domain.entities import TransactionKind
from bankledger.domain.ledger import Ledger


def _reload(store) -> Ledger:
    ledger = Ledger(store)
    ledger.load_snapshot().unwrap()
    return ledger


class TestDeposit:
    def test_deposit(self, cli_runner, db_args, saved_ledger, temp_store):
        result = cli_runner.invoke(cli, db_args + ["deposit", "ACC1001", "5000"])

        assert result.exit_code == 0, result.output
        assert "Deposit successful. New Balance: ₹15,000.00" in result.output
        assert _reload(temp_store).balance("ACC1001").value == Decimal("15000")

    def test_deposit_formatted_amount(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(cli, db_args + ["deposit", "ACC1002", "₹1,250.50"])

        assert result.exit_code == 0
        assert "New Balance: ₹1,250.50" in result.output

    def test_deposit_zero(self, cli_runner, db_args, saved_ledger, temp_store):
        result = cli_runner.invoke(cli, db_args + ["deposit", "ACC1001", "0"])

        assert result.exit_code == 1
        assert "Deposit amount must be positive" in result.output
        assert len(_reload(temp_store).find_account("ACC1001").transactions) == 1

    def test_deposit_sub_cent(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(cli, db_args + ["deposit", "ACC1001", "1.005"])

        assert result.exit_code == 1
        assert "more than two decimal places" in result.output

    def test_deposit_huge_amount(self, cli_runner, db_args, saved_ledger, temp_store):
        result = cli_runner.invoke(cli, db_args + ["deposit", "ACC1001", "1e30"])

        assert result.exit_code == 1
        assert "exceeds the maximum" in result.output
        assert _reload(temp_store).balance("ACC1001").value == Decimal("10000")

    def test_deposit_unparseable(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(cli, db_args + ["deposit", "ACC1001", "abc"])

        assert result.exit_code == 1
        assert "Invalid amount" in result.output

    def test_deposit_unknown_account(self, cli_runner, db_args):
        result = cli_runner.invoke(cli, db_args + ["deposit", "ACC9", "10"])

        assert result.exit_code == 1
        assert "Error: Account ACC9 not found" in result.output


class TestWithdraw:
    def test_withdraw_savings(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(cli, db_args + ["withdraw", "ACC1001", "2500"])

        assert result.exit_code == 0
        assert "Withdrawal successful. New Balance: ₹7,500.00" in result.output

    def test_withdraw_savings_insufficient(self, cli_runner, db_args, saved_ledger, temp_store):
        result = cli_runner.invoke(cli, db_args + ["withdraw", "ACC1001", "10000.01"])

        assert result.exit_code == 1
        assert "Insufficient balance" in result.output
        assert _reload(temp_store).balance("ACC1001").value == Decimal("10000")

    def test_withdraw_into_overdraft(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(cli, db_args + ["withdraw", "ACC1002", "300"])

        assert result.exit_code == 0
        assert "New Balance: -₹300.00" in result.output

    def test_withdraw_past_overdraft(self, cli_runner, db_args, saved_ledger):
        cli_runner.invoke(cli, db_args + ["withdraw", "ACC1002", "300"])

        result = cli_runner.invoke(cli, db_args + ["withdraw", "ACC1002", "200.01"])

        assert result.exit_code == 1
        assert "Overdraft limit exceeded" in result.output


class TestHistory:
    def test_history(self, cli_runner, db_args, saved_ledger):
        cli_runner.invoke(cli, db_args + ["deposit", "ACC1001", "5000"])
        cli_runner.invoke(cli, db_args + ["withdraw", "ACC1001", "1000"])

        result = cli_runner.invoke(cli, db_args + ["history", "ACC1001"])

        assert result.exit_code == 0
        assert "Transaction History - Asha Rao (ACC1001)" in result.output
        entries = [line for line in result.output.splitlines() if line.startswith("[")]
        assert len(entries) == 3
        assert "Account Open" in entries[0]
        assert "Balance: ₹10,000.00" in entries[0]
        assert "Deposit" in entries[1]
        assert "Withdraw" in entries[2]
        assert entries[2].endswith("Balance: ₹14,000.00")

    def test_history_this_month(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(cli, db_args + ["history", "ACC1001", "--period", "this-month"])

        assert result.exit_code == 0
        assert "Account Open" in result.output

    def test_history_empty_range(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(
            cli,
            db_args + ["history", "ACC1001", "--start-date", "2000-01-01", "--end-date", "2000-12-31"],
        )

        assert result.exit_code == 0
        assert "No transactions in this period." in result.output

    def test_history_period_and_dates(self, cli_runner, db_args, saved_ledger):
        result = cli_runner.invoke(
            cli,
            db_args + ["history", "ACC1001", "--period", "last-year", "--start-date", "2000-01-01"],
        )

        assert result.exit_code == 1
        assert "cannot be combined" in result.output

    def test_history_unknown_account(self, cli_runner, db_args):
        result = cli_runner.invoke(cli, db_args + ["history", "ACC1"])

        assert result.exit_code == 1
        assert "Account ACC1 not found" in result.output


class TestApplyInterest:
    def test_apply_interest(self, cli_runner, db_args, saved_ledger, temp_store):
        result = cli_runner.invoke(cli, db_args + ["apply-interest"])

        assert result.exit_code == 0, result.output
        assert "Interest applied to 1 savings account(s), total credited ₹500.00" in result.output

        ledger = _reload(temp_store)
        savings = ledger.find_account("ACC1001")
        assert savings.balance == Decimal("10500.00")
        assert savings.transactions[-1].kind is TransactionKind.INTEREST
        assert len(ledger.find_account("ACC1002").transactions) == 1

    def test_apply_interest_compounds(self, cli_runner, db_args, saved_ledger, temp_store):
        cli_runner.invoke(cli, db_args + ["apply-interest"])
        cli_runner.invoke(cli, db_args + ["apply-interest"])

        assert _reload(temp_store).balance("ACC1001").value == Decimal("11025.00")

    def test_apply_interest_without_savings(self, cli_runner, db_args):
        cli_runner.invoke(cli, db_args + ["create", "--type", "C", "--name", "Ravi"])

        result = cli_runner.invoke(cli, db_args + ["apply-interest"])

        assert result.exit_code == 0
        assert "No savings accounts to credit." in result.output
