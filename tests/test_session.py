"""Tests for live session service."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bankroll.domain.errors import ConflictError, NotFoundError, ValidationError


class TestSessionLifecycle:
    """Tests for starting and cashing out sessions."""

    def test_start_session(self, session_service, clock):
        """A started session is active with no result yet."""
        session = session_service.start_session("cash", Decimal("100"), location="Rivers")

        assert session.is_active is True
        assert session.profit is None
        assert session.cash_out is None
        assert session.end_time is None
        assert session.start_time == clock.now
        assert session.buy_in == Decimal("100")
        assert session.location == "Rivers"

    def test_cash_out(self, session_service, clock):
        """Cashing out completes the session and records profit."""
        session = session_service.start_session("cash", Decimal("100"))
        clock.now += timedelta(hours=2, minutes=30)

        completed = session_service.cash_out(session.id, Decimal("250"))

        assert completed.is_active is False
        assert completed.profit == Decimal("150")
        assert completed.cash_out == Decimal("250")
        assert completed.end_time == clock.now
        assert completed.duration == 150

    def test_cash_out_with_explicit_duration_and_notes(self, session_service):
        session = session_service.start_session("tournament", Decimal("150"), notes="Sunday major")

        completed = session_service.cash_out(session.id, Decimal("0"), duration=95, notes="Bubbled")

        assert completed.duration == 95
        assert completed.profit == Decimal("-150")
        assert completed.notes == "Bubbled"

    def test_cash_out_keeps_notes_when_none_given(self, session_service):
        session = session_service.start_session("cash", Decimal("100"), notes="Table 4")

        completed = session_service.cash_out(session.id, Decimal("100"))

        assert completed.notes == "Table 4"

    def test_cash_out_twice_conflicts(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))
        session_service.cash_out(session.id, Decimal("250"))

        with pytest.raises(ConflictError, match="already cashed out"):
            session_service.cash_out(session.id, Decimal("300"))

    def test_cash_out_missing_session(self, session_service):
        with pytest.raises(NotFoundError, match="Session 42 not found"):
            session_service.cash_out(42, Decimal("10"))

    def test_cash_out_negative(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))

        with pytest.raises(ValidationError, match="cash-out cannot be negative"):
            session_service.cash_out(session.id, Decimal("-1"))

    @pytest.mark.parametrize("buy_in", [Decimal("0"), Decimal("-5")])
    def test_buy_in_must_be_positive(self, session_service, buy_in):
        with pytest.raises(ValidationError, match="buy-in must be greater than 0"):
            session_service.start_session("cash", buy_in)

    @pytest.mark.parametrize("buy_in", ["abc", "NaN", True])
    def test_buy_in_must_be_a_number(self, session_service, buy_in):
        with pytest.raises(ValidationError):
            session_service.start_session("cash", buy_in)

    def test_unknown_game_type(self, session_service):
        with pytest.raises(ValidationError, match="Invalid game type 'sng'"):
            session_service.start_session("sng", Decimal("100"))


class TestCompletedSession:
    """Tests for recording finished sessions."""

    def test_create_completed_session(self, session_service):
        """Duration and profit are derived from the inputs."""
        session = session_service.create_completed_session(
            "cash",
            Decimal("50"),
            Decimal("0"),
            start_time=datetime(2025, 1, 1, 19, 0, tzinfo=timezone.utc),
            end_time=datetime(2025, 1, 1, 23, 0, tzinfo=timezone.utc),
        )

        assert session.duration == 240
        assert session.profit == Decimal("-50")
        assert session.is_active is False
        assert session.start_time.tzinfo is None

    def test_end_must_follow_start(self, session_service):
        start = datetime(2025, 1, 1, 19, 0)
        with pytest.raises(ValidationError, match="End time must be after start time"):
            session_service.create_completed_session("cash", Decimal("50"), Decimal("60"), start, start)

    def test_duration_rounds_to_minutes(self, session_service):
        session = session_service.create_completed_session(
            "cash",
            Decimal("50"),
            Decimal("60"),
            datetime(2025, 1, 1, 19, 0, 0),
            datetime(2025, 1, 1, 19, 10, 40),
        )
        assert session.duration == 11


class TestUpdateSession:
    """Tests for partial session updates."""

    def _completed(self, session_service):
        return session_service.create_completed_session(
            "cash",
            Decimal("100"),
            Decimal("300"),
            datetime(2025, 1, 1, 19, 0),
            datetime(2025, 1, 1, 21, 0),
            location="Rivers",
        )

    def test_update_descriptive_fields(self, session_service):
        session = self._completed(session_service)

        updated = session_service.update_session(session.id, location="GVC", game="PLO", blinds="$2/$5")

        assert updated.location == "GVC"
        assert updated.game == "PLO"
        assert updated.blinds == "$2/$5"
        assert updated.profit == Decimal("200")
        assert updated.duration == 120

    def test_buy_in_change_recomputes_profit(self, session_service):
        session = self._completed(session_service)

        updated = session_service.update_session(session.id, buy_in=Decimal("150"))

        assert updated.profit == Decimal("150")

    def test_cash_out_change_recomputes_profit(self, session_service):
        session = self._completed(session_service)

        updated = session_service.update_session(session.id, cash_out=Decimal("80"))

        assert updated.profit == Decimal("-20")
        assert updated.is_active is False

    def test_time_change_recomputes_duration(self, session_service):
        session = self._completed(session_service)

        updated = session_service.update_session(session.id, end_time=datetime(2025, 1, 1, 22, 30))

        assert updated.duration == 210

    def test_end_before_start_keeps_duration(self, session_service):
        session = self._completed(session_service)

        updated = session_service.update_session(session.id, end_time=datetime(2025, 1, 1, 18, 0))

        assert updated.duration == 120

    def test_explicit_duration(self, session_service):
        session = self._completed(session_service)

        updated = session_service.update_session(session.id, duration=100)

        assert updated.duration == 100

    def test_cash_out_completes_active_session(self, session_service, clock):
        session = session_service.start_session("cash", Decimal("100"))
        clock.now += timedelta(hours=1)

        updated = session_service.update_session(session.id, cash_out=Decimal("40"))

        assert updated.is_active is False
        assert updated.profit == Decimal("-60")
        assert updated.end_time == clock.now
        assert updated.duration == 60

    def test_end_time_on_active_session_needs_cash_out(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))

        with pytest.raises(ValidationError, match="without a cash-out"):
            session_service.update_session(session.id, end_time=datetime(2025, 6, 13, 23, 0))

    def test_update_missing_session(self, session_service):
        with pytest.raises(NotFoundError):
            session_service.update_session(42, location="GVC")

    def test_active_session_keeps_no_profit(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))

        updated = session_service.update_session(session.id, buy_in=Decimal("200"))

        assert updated.buy_in == Decimal("200")
        assert updated.profit is None
        assert updated.is_active is True


class TestDeleteAndList:
    """Tests for deleting and listing sessions."""

    def test_delete_session_removes_notes(self, session_service, temp_db):
        session = session_service.start_session("cash", Decimal("100"))
        note = session_service.add_hand_note(session.id, "Flopped a set")

        session_service.delete_session(session.id)

        assert session_service.get_session(session.id) is None
        assert temp_db.get_hand_note(note.id) is None

    def test_delete_missing_session(self, session_service):
        with pytest.raises(NotFoundError):
            session_service.delete_session(42)

    def test_list_sessions_filters_by_state(self, session_service, clock):
        completed = session_service.create_completed_session(
            "cash", Decimal("100"), Decimal("200"), datetime(2025, 1, 1, 19, 0), datetime(2025, 1, 1, 21, 0)
        )
        active = session_service.start_session("cash", Decimal("100"))

        assert [s.id for s in session_service.list_sessions()] == [active.id, completed.id]
        assert [s.id for s in session_service.list_sessions(is_active=True)] == [active.id]
        assert [s.id for s in session_service.list_sessions(is_active=False)] == [completed.id]


class TestHandNotes:
    """Tests for hand notes."""

    def test_add_and_list_notes(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))

        first = session_service.add_hand_note(
            session.id, "  Hero call  ", hand_cards="AhKd", position="BTN", result="won"
        )
        session_service.add_hand_note(session.id, "Folded the nuts")

        assert first.note_text == "Hero call"
        assert first.hand_cards == "AhKd"
        notes = session_service.list_hand_notes(session.id)
        assert [n.note_text for n in notes] == ["Hero call", "Folded the nuts"]

    def test_note_text_required(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))

        with pytest.raises(ValidationError, match="Note text is required"):
            session_service.add_hand_note(session.id, "   ")

    def test_note_length_limit(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))

        session_service.add_hand_note(session.id, "x" * 500)
        with pytest.raises(ValidationError, match="limit is 500"):
            session_service.add_hand_note(session.id, "x" * 501)

    def test_note_for_missing_session(self, session_service):
        with pytest.raises(NotFoundError):
            session_service.add_hand_note(42, "Hero call")

    def test_list_notes_for_missing_session(self, session_service):
        with pytest.raises(NotFoundError):
            session_service.list_hand_notes(42)

    def test_delete_note(self, session_service):
        session = session_service.start_session("cash", Decimal("100"))
        note = session_service.add_hand_note(session.id, "Hero call")

        session_service.delete_hand_note(note.id)

        assert session_service.list_hand_notes(session.id) == []
        with pytest.raises(NotFoundError, match=f"Hand note {note.id} not found"):
            session_service.delete_hand_note(note.id)


class TestStats:
    """Tests for session statistics."""

    def test_empty_stats(self, session_service):
        stats = session_service.get_stats()

        assert stats.total_sessions == 0
        assert stats.win_rate == 0.0
        assert stats.hourly_rate == 0.0
        assert stats.avg_profit == Decimal("0")

    def test_stats(self, session_service):
        session_service.create_completed_session(
            "cash", Decimal("100"), Decimal("300"), datetime(2025, 1, 1, 19, 0), datetime(2025, 1, 1, 21, 0)
        )
        session_service.create_completed_session(
            "cash", Decimal("200"), Decimal("50"), datetime(2025, 1, 2, 19, 0), datetime(2025, 1, 2, 21, 0)
        )
        session_service.start_session("cash", Decimal("300"))

        stats = session_service.get_stats()

        assert stats.total_sessions == 3
        assert stats.active_sessions == 1
        assert stats.total_buy_ins == Decimal("600")
        assert stats.total_cash_outs == Decimal("350")
        assert stats.total_profit == Decimal("50")
        assert stats.win_rate == 50.0
        assert stats.avg_buy_in == Decimal("200.00")
        assert stats.avg_profit == Decimal("25.00")
        assert stats.biggest_win == Decimal("200")
        assert stats.biggest_loss == Decimal("-150")
        assert stats.total_hours == 4.0
        assert stats.hourly_rate == pytest.approx(12.5)
