"""Imported account domain service."""

import logging
from decimal import Decimal
from typing import Optional

from bankroll.database.base import Database
from bankroll.domain.classifier import real_money_delta
from bankroll.domain.entities import Account as AccountEntity
from bankroll.domain.entities import AccountSummary, Transaction
from bankroll.domain.errors import NotFoundError, account_not_found

logger = logging.getLogger(__name__)

DEFAULT_TRANSACTION_LIMIT = 100


def latest_balance(transactions: list[Transaction]) -> Optional[Decimal]:
    """Return the balance after the most recent transaction.

    Rows sharing the latest timestamp are ordered by the balance chain: the
    last one is the row whose balance no other row started from
    (`balance - amount`). Falls back to the first row when the chain is
    ambiguous.

    Args:
        transactions: Transactions ordered newest first
    """
    if not transactions:
        return None

    newest = transactions[0].transaction_date
    tied = [t for t in transactions if t.transaction_date == newest]
    starting_balances = [t.balance - t.amount for t in tied]
    for txn in tied:
        others = [b for other, b in zip(tied, starting_balances) if other is not txn]
        if txn.balance not in others:
            return txn.balance
    return tied[0].balance


class AccountService:
    """Service for browsing and cleaning up imported accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def list_account_summaries(self, include_empty: bool = True) -> list[AccountSummary]:
        """Summarize each account's imported history.

        Args:
            include_empty: If False, accounts without transactions are left out

        Returns:
            One summary per account, ordered by account name
        """
        summaries = []
        for account in self.db.list_accounts():
            transactions = self.db.list_transactions(account_id=account.id)
            if not transactions and not include_empty:
                continue

            real_money_net = sum(
                (real_money_delta(t.type, t.amount) for t in transactions if t.is_external),
                Decimal("0"),
            )
            summaries.append(
                AccountSummary(
                    id=account.id,
                    name=account.name,
                    platform=account.platform,
                    transaction_count=len(transactions),
                    first_transaction=transactions[-1].transaction_date if transactions else None,
                    last_transaction=transactions[0].transaction_date if transactions else None,
                    real_money_net=real_money_net,
                    current_balance=latest_balance(transactions),
                )
            )
        return summaries

    def list_transactions(
        self, account_id: int, limit: Optional[int] = DEFAULT_TRANSACTION_LIMIT
    ) -> list[Transaction]:
        """List an account's transactions, newest first.

        Raises:
            NotFoundError: If account doesn't exist
        """
        self.require_account(account_id)
        return self.db.list_transactions(account_id=account_id, limit=limit)

    def clear_transactions(self, account_id: int) -> int:
        """Delete an account's transactions but keep the account.

        Returns:
            Number of transactions deleted

        Raises:
            NotFoundError: If account doesn't exist
        """
        self.require_account(account_id)
        return self.db.delete_account_transactions(account_id)

    def delete_account(self, account_id: int) -> int:
        """Delete an account and all of its transactions.

        Returns:
            Number of transactions deleted with the account

        Raises:
            NotFoundError: If account doesn't exist
        """
        self.require_account(account_id)
        transaction_count = self.db.get_account_transaction_count(account_id)
        self.db.delete_account(account_id)
        logger.info("Deleted account %d with %d transactions", account_id, transaction_count)
        return transaction_count
