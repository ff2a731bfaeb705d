"""Live session domain service."""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from bankroll.database.base import Database
from bankroll.domain.entities import GameType, HandNote, PokerSession, SessionStats
from bankroll.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    hand_note_not_found,
    invalid_choice,
    session_not_found,
)
from bankroll.utils.date_parser import to_local_naive

logger = logging.getLogger(__name__)

MAX_NOTE_LENGTH = 500
CENT = Decimal("0.01")


def to_money(value, field: str) -> Decimal:
    """Coerce a numeric input to Decimal, rejecting non-numbers."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return amount


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, rounded."""
    return round((end - start).total_seconds() / 60)


class SessionService:
    """Service for managing live sessions and their hand notes.

    A session is created active (buy-in only) and becomes completed once a
    cash-out is recorded. Completed sessions never return to active.
    """

    def __init__(self, db: Database, clock: Callable[[], datetime] = datetime.now):
        """Initialize session service.

        Args:
            db: Database instance
            clock: Returns the current local time
        """
        self.db = db
        self.clock = clock

    def _validate_game_type(self, game_type: str) -> str:
        try:
            return GameType(game_type).value
        except ValueError:
            raise ValidationError(
                invalid_choice("game type", game_type, [g.value for g in GameType])
            )

    def _validate_buy_in(self, buy_in) -> Decimal:
        buy_in = to_money(buy_in, "buy-in")
        if buy_in <= 0:
            raise ValidationError("buy-in must be greater than 0")
        return buy_in

    def _validate_cash_out(self, cash_out) -> Decimal:
        cash_out = to_money(cash_out, "cash-out")
        if cash_out < 0:
            raise ValidationError("cash-out cannot be negative")
        return cash_out

    def _validate_duration(self, duration: Optional[int]) -> Optional[int]:
        if duration is None:
            return None
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
            raise ValidationError("duration must be a non-negative number of minutes")
        return duration

    def get_session(self, session_id: int) -> Optional[PokerSession]:
        """Get session by ID.

        Returns:
            Session entity or None if not found
        """
        return self.db.get_session(session_id)

    def require_session(self, session_id: int) -> PokerSession:
        """Get session by ID or raise NotFoundError."""
        session = self.db.get_session(session_id)
        if session is None:
            raise NotFoundError(session_not_found(session_id))
        return session

    def list_sessions(self, is_active: Optional[bool] = None) -> list[PokerSession]:
        """List sessions, newest first."""
        return self.db.list_sessions(is_active=is_active)

    def start_session(
        self,
        game_type: str,
        buy_in,
        location: Optional[str] = None,
        game: Optional[str] = None,
        blinds: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> PokerSession:
        """Start an active session now.

        Raises:
            ValidationError: If game type is unknown or buy-in is not positive
        """
        game_type = self._validate_game_type(game_type)
        buy_in = self._validate_buy_in(buy_in)

        session_id = self.db.create_session(
            start_time=self.clock(),
            game_type=game_type,
            buy_in=buy_in,
            location=location,
            game=game,
            blinds=blinds,
            notes=notes,
            is_active=True,
        )
        logger.info("Started %s session %d with buy-in %s", game_type, session_id, buy_in)
        return self.require_session(session_id)

    def create_completed_session(
        self,
        game_type: str,
        buy_in,
        cash_out,
        start_time: datetime,
        end_time: datetime,
        location: Optional[str] = None,
        game: Optional[str] = None,
        blinds: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> PokerSession:
        """Record a finished session after the fact.

        Duration is derived from the start and end times.

        Raises:
            ValidationError: If amounts are out of range or end is not after start
        """
        game_type = self._validate_game_type(game_type)
        buy_in = self._validate_buy_in(buy_in)
        cash_out = self._validate_cash_out(cash_out)
        start_time = to_local_naive(start_time)
        end_time = to_local_naive(end_time)
        if end_time <= start_time:
            raise ValidationError("End time must be after start time")

        session_id = self.db.create_session(
            start_time=start_time,
            end_time=end_time,
            game_type=game_type,
            buy_in=buy_in,
            cash_out=cash_out,
            profit=cash_out - buy_in,
            duration=minutes_between(start_time, end_time),
            location=location,
            game=game,
            blinds=blinds,
            notes=notes,
            is_active=False,
        )
        return self.require_session(session_id)

    def cash_out(
        self,
        session_id: int,
        cash_out,
        duration: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> PokerSession:
        """Complete an active session.

        Args:
            session_id: Session to complete
            cash_out: Amount taken off the table
            duration: Minutes played; defaults to elapsed time since start
            notes: Replaces the session notes when given

        Raises:
            ValidationError: If cash-out is negative
            NotFoundError: If session doesn't exist
            ConflictError: If session was already cashed out
        """
        cash_out = self._validate_cash_out(cash_out)
        duration = self._validate_duration(duration)
        current = self.require_session(session_id)
        if not current.is_active:
            raise ConflictError(f"Session {session_id} is already cashed out")

        end_time = current.end_time or self.clock()
        if duration is None:
            duration = max(minutes_between(current.start_time, end_time), 0)

        profit = cash_out - current.buy_in
        self.db.update_session(
            session_id,
            end_time=end_time,
            cash_out=cash_out,
            profit=profit,
            duration=duration,
            notes=notes or None,
            is_active=False,
        )
        logger.info("Cashed out session %d for %s (profit %s)", session_id, cash_out, profit)
        return self.require_session(session_id)

    def update_session(
        self,
        session_id: int,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        game_type: Optional[str] = None,
        buy_in=None,
        cash_out=None,
        duration: Optional[int] = None,
        location: Optional[str] = None,
        game: Optional[str] = None,
        blinds: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> PokerSession:
        """Partially update a session.

        A cash-out completes the session and recomputes profit. When the edit
        touches the start or end time and end is after start, duration is
        recomputed; an end at or before start leaves duration as it was.

        Raises:
            ValidationError: If a supplied value is invalid
            NotFoundError: If session doesn't exist
        """
        current = self.require_session(session_id)

        if game_type is not None:
            game_type = self._validate_game_type(game_type)
        if buy_in is not None:
            buy_in = self._validate_buy_in(buy_in)
        if cash_out is not None:
            cash_out = self._validate_cash_out(cash_out)
        duration = self._validate_duration(duration)
        if start_time is not None:
            start_time = to_local_naive(start_time)
        if end_time is not None:
            end_time = to_local_naive(end_time)

        completes = cash_out is not None
        if end_time is not None and current.is_active and not completes:
            raise ValidationError("Cannot set an end time on an active session without a cash-out")

        new_start = start_time or current.start_time
        new_end = end_time or current.end_time
        times_changed = start_time is not None or end_time is not None
        if completes and new_end is None:
            new_end = self.clock()
            end_time = new_end
            times_changed = True

        profit = None
        is_active = None
        if completes:
            profit = cash_out - (buy_in or current.buy_in)
            is_active = False
        elif buy_in is not None and not current.is_active:
            profit = current.cash_out - buy_in

        if times_changed and new_end is not None and new_end > new_start:
            duration = minutes_between(new_start, new_end)

        self.db.update_session(
            session_id,
            start_time=start_time,
            end_time=end_time,
            game_type=game_type,
            buy_in=buy_in,
            cash_out=cash_out,
            profit=profit,
            duration=duration,
            location=location,
            game=game,
            blinds=blinds,
            notes=notes,
            is_active=is_active,
        )
        return self.require_session(session_id)

    def delete_session(self, session_id: int) -> None:
        """Delete a session and its hand notes.

        Raises:
            NotFoundError: If session doesn't exist
        """
        self.require_session(session_id)
        self.db.delete_session(session_id)
        logger.info("Deleted session %d", session_id)

    def add_hand_note(
        self,
        session_id: int,
        note_text: str,
        hand_cards: Optional[str] = None,
        position: Optional[str] = None,
        result: Optional[str] = None,
    ) -> HandNote:
        """Attach a hand note to a session.

        Raises:
            ValidationError: If note text is empty or longer than 500 characters
            NotFoundError: If session doesn't exist
        """
        note_text = (note_text or "").strip()
        if not note_text:
            raise ValidationError("Note text is required")
        if len(note_text) > MAX_NOTE_LENGTH:
            raise ValidationError(
                f"Note text is {len(note_text)} characters; the limit is {MAX_NOTE_LENGTH}"
            )
        self.require_session(session_id)

        note_id = self.db.create_hand_note(
            session_id=session_id,
            note_text=note_text,
            hand_cards=hand_cards,
            position=position,
            result=result,
        )
        return self.db.get_hand_note(note_id)

    def list_hand_notes(self, session_id: int) -> list[HandNote]:
        """List a session's hand notes, oldest first."""
        self.require_session(session_id)
        return self.db.list_hand_notes(session_id)

    def delete_hand_note(self, note_id: int) -> None:
        """Delete a hand note.

        Raises:
            NotFoundError: If note doesn't exist
        """
        if self.db.get_hand_note(note_id) is None:
            raise NotFoundError(hand_note_not_found(note_id))
        self.db.delete_hand_note(note_id)

    def get_stats(self) -> SessionStats:
        """Compute statistics across all live sessions."""
        sessions = self.db.list_sessions()
        profits = [s.profit for s in sessions if s.profit is not None]
        cash_outs = [s.cash_out for s in sessions if s.cash_out is not None]

        total_buy_ins = sum((s.buy_in for s in sessions), Decimal("0"))
        total_cash_outs = sum(cash_outs, Decimal("0"))
        total_profit = sum(profits, Decimal("0"))
        total_minutes = sum(s.duration for s in sessions if s.duration is not None)
        total_hours = total_minutes / 60

        def average(total: Decimal, count: int) -> Decimal:
            return (total / count).quantize(CENT) if count else Decimal("0")

        wins = sum(1 for p in profits if p > 0)
        return SessionStats(
            total_sessions=len(sessions),
            active_sessions=sum(1 for s in sessions if s.is_active),
            total_buy_ins=total_buy_ins,
            total_cash_outs=total_cash_outs,
            total_profit=total_profit,
            win_rate=wins * 100.0 / len(profits) if profits else 0.0,
            avg_buy_in=average(total_buy_ins, len(sessions)),
            avg_cash_out=average(total_cash_outs, len(cash_outs)),
            avg_profit=average(total_profit, len(profits)),
            biggest_win=max(profits) if profits else Decimal("0"),
            biggest_loss=min(profits) if profits else Decimal("0"),
            total_hours=total_hours,
            hourly_rate=float(total_profit) / total_hours if total_hours > 0 else 0.0,
        )
