"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Operation conflicts with the current state of an entity."""


def session_not_found(session_id: int) -> str:
    """Return message for missing session."""
    return f"Session {session_id} not found"


def hand_note_not_found(note_id: int) -> str:
    """Return message for missing hand note."""
    return f"Hand note {note_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def invalid_choice(field: str, value: object, choices) -> str:
    """Return message for a value outside an allowed set."""
    allowed = ", ".join(str(choice) for choice in choices)
    return f"Invalid {field} '{value}'. Must be one of: {allowed}"
