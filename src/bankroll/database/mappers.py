"""Mapper functions to convert SQLAlchemy models into domain entities.

Every storage read goes through one of these, so the rest of the
application only ever handles typed domain records.
"""

from bankroll.domain import entities as domain
from bankroll.database.models import (
    Account as ORMAccount,
    HandNote as ORMHandNote,
    PokerSession as ORMPokerSession,
    Transaction as ORMTransaction,
)


def session_to_domain(orm_session: ORMPokerSession) -> domain.PokerSession:
    """Convert SQLAlchemy PokerSession model to domain PokerSession entity."""
    return domain.PokerSession(
        id=orm_session.id,
        start_time=orm_session.start_time,
        end_time=orm_session.end_time,
        game_type=orm_session.game_type,
        buy_in=orm_session.buy_in,
        cash_out=orm_session.cash_out,
        profit=orm_session.profit,
        duration=orm_session.duration,
        location=orm_session.location,
        game=orm_session.game,
        blinds=orm_session.blinds,
        notes=orm_session.notes,
        is_active=bool(orm_session.is_active),
        created_at=orm_session.created_at,
        updated_at=orm_session.updated_at,
    )


def hand_note_to_domain(orm_note: ORMHandNote) -> domain.HandNote:
    """Convert SQLAlchemy HandNote model to domain HandNote entity."""
    return domain.HandNote(
        id=orm_note.id,
        session_id=orm_note.session_id,
        note_text=orm_note.note_text,
        hand_cards=orm_note.hand_cards,
        position=orm_note.position,
        result=orm_note.result,
        created_at=orm_note.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        platform=orm_account.platform,
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        transaction_date=orm_transaction.transaction_date,
        type=orm_transaction.type,
        amount=orm_transaction.amount,
        balance=orm_transaction.balance,
        description=orm_transaction.description,
        is_external=bool(orm_transaction.is_external),
        imported_at=orm_transaction.imported_at,
    )
