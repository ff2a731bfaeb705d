"""SQLAlchemy models for bankroll database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    CheckConstraint,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class PokerSession(Base):
    """Live poker session model."""

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    game_type = Column(String, nullable=False)
    buy_in = Column(Numeric(10, 2), nullable=False)
    cash_out = Column(Numeric(10, 2), nullable=True)
    profit = Column(Numeric(10, 2), nullable=True)
    duration = Column(Integer, nullable=True)
    location = Column(String, nullable=True)
    game = Column(String, nullable=True)
    blinds = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("game_type IN ('cash', 'tournament')", name="ck_session_game_type"),
    )

    # Relationships
    hand_notes = relationship(
        "HandNote",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="HandNote.created_at",
    )


class HandNote(Base):
    """Hand note model."""

    __tablename__ = "hand_notes"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    hand_cards = Column(String, nullable=True)
    position = Column(String, nullable=True)
    result = Column(String, nullable=True)
    note_text = Column(String(500), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    session = relationship("PokerSession", back_populates="hand_notes")


class Account(Base):
    """Imported platform account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    platform = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Account names are unique per platform, not globally
    __table_args__ = (UniqueConstraint("name", "platform", name="uq_account_name_platform"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="account", cascade="all, delete-orphan")


class Transaction(Base):
    """Imported transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    transaction_date = Column(DateTime, nullable=False)
    type = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    balance = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=True)
    is_external = Column(Boolean, default=False, nullable=False)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Backstop for the importer's duplicate check
    __table_args__ = (
        UniqueConstraint(
            "account_id",
            "transaction_date",
            "type",
            "amount",
            "balance",
            name="uq_transaction_identity",
        ),
    )

    # Relationships
    account = relationship("Account", back_populates="transactions")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
