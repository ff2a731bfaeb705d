"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bankroll.domain.entities import (
    Account,
    HandNote,
    PokerSession,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for bankroll."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Session operations
    @abstractmethod
    def create_session(
        self,
        start_time: datetime,
        game_type: str,
        buy_in: Decimal,
        end_time: Optional[datetime] = None,
        cash_out: Optional[Decimal] = None,
        profit: Optional[Decimal] = None,
        duration: Optional[int] = None,
        location: Optional[str] = None,
        game: Optional[str] = None,
        blinds: Optional[str] = None,
        notes: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a session. Returns session ID."""
        pass

    @abstractmethod
    def get_session(self, session_id: int) -> Optional[PokerSession]:
        """Get session by ID."""
        pass

    @abstractmethod
    def list_sessions(
        self,
        is_active: Optional[bool] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[PokerSession]:
        """List sessions newest first, optionally filtered by state and start time."""
        pass

    @abstractmethod
    def update_session(
        self,
        session_id: int,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        game_type: Optional[str] = None,
        buy_in: Optional[Decimal] = None,
        cash_out: Optional[Decimal] = None,
        profit: Optional[Decimal] = None,
        duration: Optional[int] = None,
        location: Optional[str] = None,
        game: Optional[str] = None,
        blinds: Optional[str] = None,
        notes: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update session fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_session(self, session_id: int) -> None:
        """Delete a session and its hand notes."""
        pass

    # Hand note operations
    @abstractmethod
    def create_hand_note(
        self,
        session_id: int,
        note_text: str,
        hand_cards: Optional[str] = None,
        position: Optional[str] = None,
        result: Optional[str] = None,
    ) -> int:
        """Create a hand note. Returns note ID."""
        pass

    @abstractmethod
    def get_hand_note(self, note_id: int) -> Optional[HandNote]:
        """Get hand note by ID."""
        pass

    @abstractmethod
    def list_hand_notes(self, session_id: int) -> list[HandNote]:
        """List hand notes for a session in creation order."""
        pass

    @abstractmethod
    def delete_hand_note(self, note_id: int) -> None:
        """Delete a hand note."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, platform: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str, platform: str) -> Optional[Account]:
        """Get account by name within a platform."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account together with its transactions."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        transaction_date: datetime,
        type: str,
        amount: Decimal,
        balance: Decimal,
        is_external: bool,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def transaction_exists(
        self,
        account_id: int,
        transaction_date: datetime,
        type: str,
        amount: Decimal,
        balance: Decimal,
    ) -> bool:
        """Check whether a transaction with this identity is already stored."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[int] = None,
        external_only: bool = False,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions newest first with optional filters."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Get count of transactions associated with an account."""
        pass

    @abstractmethod
    def delete_account_transactions(self, account_id: int) -> int:
        """Delete all transactions of an account. Returns number deleted."""
        pass
