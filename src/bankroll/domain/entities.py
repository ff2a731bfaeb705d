"""Domain model entities for bankroll.

These are pure data classes representing business concepts, independent of
database schema. Storage rows are converted into these right after each read,
so services never see ORM objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class GameType(str, Enum):
    """Kind of live poker session."""

    CASH = "cash"
    TOURNAMENT = "tournament"


class Granularity(str, Enum):
    """Bucket size for progress series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class ProgressFilter(str, Enum):
    """Which ledger feeds a progress view."""

    ALL = "all"
    LIVE = "live"
    ONLINE = "online"


class WeeklyRange(str, Enum):
    """Relative look-back window for the weekly view."""

    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    TWELVE_MONTHS = "12m"
    ALL = "all"


@dataclass(frozen=True)
class PokerSession:
    """Live poker session domain entity."""

    id: int
    start_time: datetime
    end_time: Optional[datetime]
    game_type: str
    buy_in: Decimal
    cash_out: Optional[Decimal]
    profit: Optional[Decimal]
    duration: Optional[int]
    location: Optional[str]
    game: Optional[str]
    blinds: Optional[str]
    notes: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class HandNote:
    """Hand note attached to a session."""

    id: int
    session_id: int
    note_text: str
    hand_cards: Optional[str]
    position: Optional[str]
    result: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Online platform account domain entity."""

    id: int
    name: str
    platform: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Imported platform transaction domain entity."""

    id: int
    account_id: int
    transaction_date: datetime
    type: str
    amount: Decimal
    balance: Decimal
    description: Optional[str]
    is_external: bool
    imported_at: datetime


@dataclass(frozen=True)
class ParsedTransaction:
    """Normalized record produced by the platform CSV parser."""

    date: datetime
    type: str
    amount: Decimal
    balance: Decimal
    description: Optional[str] = None


@dataclass
class ImportResult:
    """Outcome of an import batch.

    Individual record failures are collected in ``errors`` and flip
    ``success``; rows the parser could not read are listed in ``rejected``.
    """

    success: bool = True
    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Totals:
    """Overall profit split by ledger."""

    all: Decimal
    live: Decimal
    online: Decimal


@dataclass(frozen=True)
class ProgressPoint:
    """One bucket of a progress series."""

    bucket: str
    period_profit: Decimal
    cumulative_profit: Decimal


@dataclass(frozen=True)
class SessionStats:
    """Aggregate statistics over live sessions."""

    total_sessions: int
    active_sessions: int
    total_buy_ins: Decimal
    total_cash_outs: Decimal
    total_profit: Decimal
    win_rate: float
    avg_buy_in: Decimal
    avg_cash_out: Decimal
    avg_profit: Decimal
    biggest_win: Decimal
    biggest_loss: Decimal
    total_hours: float
    hourly_rate: float


@dataclass(frozen=True)
class AccountSummary:
    """Imported account with transaction statistics."""

    id: int
    name: str
    platform: str
    transaction_count: int
    first_transaction: Optional[datetime]
    last_transaction: Optional[datetime]
    real_money_net: Decimal
    current_balance: Optional[Decimal]


@dataclass(frozen=True)
class LedgerEntry:
    """Row of the unified ledger mixing live sessions and imports."""

    source: str
    source_id: int
    timestamp: datetime
    kind: str
    amount: Decimal
    profit: Optional[Decimal]
    label: Optional[str]
    is_active: bool = False
