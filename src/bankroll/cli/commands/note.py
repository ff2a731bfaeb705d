"""Hand note commands."""

import click
from bankroll.cli.error_handling import handle_domain_error
from bankroll.cli.formatting import format_timestamp
from bankroll.domain.errors import DomainError
from bankroll.domain.session import SessionService


@click.group()
def note_group():
    """Manage hand notes attached to sessions."""
    pass


@note_group.command("add")
@click.argument("session_id", type=int)
@click.argument("note_text")
@click.option("--cards", "hand_cards", help="Hole cards (e.g., AhKd)")
@click.option("--position", help="Table position (e.g., BTN)")
@click.option("--result", help="Hand result (e.g., won, lost)")
@click.pass_context
def add_note(ctx, session_id: int, note_text: str, hand_cards, position, result):
    """Add a hand note to a session.

    Examples:
        bankroll note add 3 "Hero call on the river" --cards AhKd --position BTN --result won
    """
    service = SessionService(ctx.obj["db"])

    try:
        note = service.add_hand_note(
            session_id,
            note_text,
            hand_cards=hand_cards,
            position=position,
            result=result,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added hand note {note.id} to session {session_id}")


@note_group.command("list")
@click.argument("session_id", type=int)
@click.pass_context
def list_notes(ctx, session_id: int):
    """List a session's hand notes."""
    service = SessionService(ctx.obj["db"])

    try:
        notes = service.list_hand_notes(session_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not notes:
        click.echo("No hand notes found.")
        return

    for note in notes:
        click.echo(f"ID: {note.id:3d} | {format_timestamp(note.created_at)} | {note.note_text}")
        details = [
            f"{label}: {value}"
            for label, value in (
                ("Cards", note.hand_cards),
                ("Position", note.position),
                ("Result", note.result),
            )
            if value
        ]
        if details:
            click.echo(f"       {', '.join(details)}")


@note_group.command("delete")
@click.argument("note_id", type=int)
@click.pass_context
def delete_note(ctx, note_id: int):
    """Delete a hand note."""
    service = SessionService(ctx.obj["db"])

    try:
        service.delete_hand_note(note_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted hand note {note_id}")


def register_commands(cli):
    """Register hand note commands with main CLI."""
    cli.add_command(note_group, name="note")
