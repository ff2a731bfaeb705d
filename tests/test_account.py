"""Tests for imported account service and account resolution."""

from datetime import datetime
from decimal import Decimal

import pytest

from bankroll.domain.account import latest_balance
from bankroll.domain.entities import Transaction
from bankroll.domain.errors import NotFoundError, ValidationError
from bankroll.utils.account_resolver import resolve_account


def _txn(txn_id, txn_type, amount, balance, when=datetime(2025, 6, 13, 16, 58)):
    return Transaction(
        id=txn_id,
        account_id=1,
        transaction_date=when,
        type=txn_type,
        amount=Decimal(amount),
        balance=Decimal(balance),
        description=None,
        is_external=False,
        imported_at=datetime(2025, 6, 14),
    )


@pytest.fixture
def imported_account(import_service, account_service, fixtures_dir):
    """Account holding the sample platform history."""
    import_service.import_csv(fixtures_dir / "platform_transactions.csv", "Main")
    [account] = account_service.list_accounts()
    return account


def test_account_summary(account_service, imported_account):
    """Summaries report counts, range, real-money net and latest balance."""
    [summary] = account_service.list_account_summaries()

    assert summary.id == imported_account.id
    assert summary.name == "Main"
    assert summary.platform == "Global Poker"
    assert summary.transaction_count == 5
    assert summary.first_transaction.isoformat() == "2025-06-01T20:00:00"
    assert summary.last_transaction.isoformat() == "2025-06-13T16:58:00"
    assert summary.real_money_net == Decimal("30")
    # The 4:58 registration was paid from the 45.25 left after the purchase
    assert summary.current_balance == Decimal("12.25")


def test_empty_accounts_in_summaries(account_service, sample_account):
    [summary] = account_service.list_account_summaries()
    assert summary.transaction_count == 0
    assert summary.first_transaction is None
    assert summary.current_balance is None
    assert summary.real_money_net == Decimal("0")

    assert account_service.list_account_summaries(include_empty=False) == []


def test_list_transactions_newest_first(account_service, imported_account):
    transactions = account_service.list_transactions(imported_account.id)

    assert len(transactions) == 5
    dates = [t.transaction_date for t in transactions]
    assert dates == sorted(dates, reverse=True)


def test_list_transactions_limit(account_service, imported_account):
    assert len(account_service.list_transactions(imported_account.id, limit=2)) == 2


def test_list_transactions_missing_account(account_service):
    with pytest.raises(NotFoundError, match="Account 999 not found"):
        account_service.list_transactions(999)


def test_clear_transactions_keeps_account(account_service, imported_account, progress_service):
    deleted = account_service.clear_transactions(imported_account.id)

    assert deleted == 5
    assert account_service.get_account(imported_account.id) is not None
    assert account_service.list_transactions(imported_account.id) == []
    assert progress_service.totals().online == Decimal("0")


def test_clear_then_reimport(account_service, import_service, imported_account, fixtures_dir):
    """Cleared data can be imported again."""
    account_service.clear_transactions(imported_account.id)

    result = import_service.import_csv(fixtures_dir / "platform_transactions.csv", "Main")

    assert result.imported == 5


def test_delete_account(account_service, imported_account, temp_db):
    deleted = account_service.delete_account(imported_account.id)

    assert deleted == 5
    assert account_service.get_account(imported_account.id) is None
    assert temp_db.list_transactions() == []


def test_delete_missing_account(account_service):
    with pytest.raises(NotFoundError):
        account_service.delete_account(999)


class TestResolveAccount:
    """Tests for resolving account names and IDs."""

    def test_by_id(self, account_service, sample_account):
        assert resolve_account(account_service, sample_account.id) == sample_account.id
        assert resolve_account(account_service, str(sample_account.id)) == sample_account.id

    def test_by_name(self, account_service, sample_account):
        assert resolve_account(account_service, "Main") == sample_account.id

    def test_unknown_name(self, account_service):
        with pytest.raises(NotFoundError, match="Account 'Nope' not found"):
            resolve_account(account_service, "Nope")

    def test_unknown_id(self, account_service):
        with pytest.raises(NotFoundError):
            resolve_account(account_service, 999)

    def test_name_on_two_platforms_is_ambiguous(self, account_service, temp_db, sample_account):
        temp_db.create_account(name="Main", platform="Other Site")

        with pytest.raises(ValidationError, match="several platforms"):
            resolve_account(account_service, "Main")


class TestLatestBalance:
    """Tests for picking the balance after the most recent transaction."""

    def test_no_transactions(self):
        assert latest_balance([]) is None

    @pytest.mark.parametrize("reverse", [False, True])
    def test_same_minute_follows_balance_chain(self, reverse):
        """The result does not depend on how same-minute rows are ordered."""
        transactions = [
            _txn(2, "Tournament Registration", "-33", "12.25"),
            _txn(1, "Purchase - Credit Card", "20", "45.25"),
            _txn(0, "Daily Bonus", "0.25", "25.25", when=datetime(2025, 6, 13, 16, 57)),
        ]
        if reverse:
            transactions[:2] = transactions[1::-1]

        assert latest_balance(transactions) == Decimal("12.25")

    def test_single_newest_row(self):
        transactions = [
            _txn(2, "Redemption", "-100", "25.00", when=datetime(2025, 6, 10, 9, 15)),
            _txn(1, "Purchase - Credit Card", "50", "125.00", when=datetime(2025, 6, 1, 20, 0)),
        ]
        assert latest_balance(transactions) == Decimal("25.00")

    def test_circular_chain_uses_first_row(self):
        transactions = [
            _txn(2, "Redemption", "-10", "10.00"),
            _txn(1, "Purchase - Credit Card", "10", "20.00"),
        ]
        assert latest_balance(transactions) == Decimal("10.00")
