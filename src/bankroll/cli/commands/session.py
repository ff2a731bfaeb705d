"""Live session commands."""

import click
from bankroll.cli.error_handling import handle_domain_error
from bankroll.cli.formatting import format_duration, format_money, format_timestamp
from bankroll.domain.entities import GameType
from bankroll.domain.errors import DomainError
from bankroll.domain.progress import ProgressService
from bankroll.domain.session import SessionService
from bankroll.utils.amount_parser import parse_amount
from bankroll.utils.date_parser import parse_datetime

GAME_TYPES = [g.value for g in GameType]


def _parse_amount_or_exit(ctx, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_datetime_or_exit(ctx, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _session_line(session) -> str:
    status = "ACTIVE" if session.is_active else format_duration(session.duration)
    return (
        f"ID: {session.id:3d} | {format_timestamp(session.start_time)} | "
        f"{session.game_type:10s} | Buy-in: {format_money(session.buy_in):>10s} | "
        f"Profit: {format_money(session.profit):>10s} | {status:8s} | {session.location or ''}"
    )


@click.group()
def session_group():
    """Track live poker sessions."""
    pass


@session_group.command("start")
@click.option("--type", "game_type", type=click.Choice(GAME_TYPES), default="cash", show_default=True)
@click.option("--buy-in", required=True, help="Buy-in amount (e.g., 300 or $1,000)")
@click.option("--location", help="Where the session is played")
@click.option("--game", help="Game played (e.g., NLHE)")
@click.option("--blinds", help="Stakes (e.g., $1/$3)")
@click.option("--notes", help="Session notes")
@click.pass_context
def start_session(ctx, game_type, buy_in, location, game, blinds, notes):
    """Start a live session now.

    Examples:
        bankroll session start --buy-in 300 --location Rivers --game NLHE --blinds '$1/$3'
        bankroll session start --type tournament --buy-in 150
    """
    service = SessionService(ctx.obj["db"])
    amount = _parse_amount_or_exit(ctx, buy_in, "buy-in")

    try:
        session = service.start_session(
            game_type=game_type,
            buy_in=amount,
            location=location,
            game=game,
            blinds=blinds,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Started {session.game_type} session {session.id} with buy-in {format_money(session.buy_in)}")


@session_group.command("add")
@click.option("--type", "game_type", type=click.Choice(GAME_TYPES), default="cash", show_default=True)
@click.option("--buy-in", required=True, help="Buy-in amount")
@click.option("--cash-out", required=True, help="Cash-out amount")
@click.option("--start", "start_time", required=True, help="Start time (e.g., '2025-06-13 19:00')")
@click.option("--end", "end_time", required=True, help="End time (e.g., '2025-06-13 23:30')")
@click.option("--location", help="Where the session was played")
@click.option("--game", help="Game played")
@click.option("--blinds", help="Stakes")
@click.option("--notes", help="Session notes")
@click.pass_context
def add_session(ctx, game_type, buy_in, cash_out, start_time, end_time, location, game, blinds, notes):
    """Record a finished session after the fact.

    Examples:
        bankroll session add --buy-in 300 --cash-out 450 --start '2025-06-13 19:00' --end '2025-06-13 23:00'
    """
    service = SessionService(ctx.obj["db"])
    buy_in_amount = _parse_amount_or_exit(ctx, buy_in, "buy-in")
    cash_out_amount = _parse_amount_or_exit(ctx, cash_out, "cash-out")
    start = _parse_datetime_or_exit(ctx, start_time, "start time")
    end = _parse_datetime_or_exit(ctx, end_time, "end time")

    try:
        session = service.create_completed_session(
            game_type=game_type,
            buy_in=buy_in_amount,
            cash_out=cash_out_amount,
            start_time=start,
            end_time=end,
            location=location,
            game=game,
            blinds=blinds,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Recorded session {session.id}: profit {format_money(session.profit)} "
        f"over {format_duration(session.duration)}"
    )


@session_group.command("cashout")
@click.argument("session_id", type=int)
@click.option("--amount", required=True, help="Cash-out amount")
@click.option("--duration", type=int, help="Minutes played (defaults to elapsed time)")
@click.option("--notes", help="Replace session notes")
@click.pass_context
def cash_out_session(ctx, session_id: int, amount: str, duration: int | None, notes: str | None):
    """Cash out an active session."""
    service = SessionService(ctx.obj["db"])
    cash_out = _parse_amount_or_exit(ctx, amount, "cash-out")

    try:
        session = service.cash_out(session_id, cash_out, duration=duration, notes=notes)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Cashed out session {session.id} for {format_money(session.cash_out)}: "
        f"profit {format_money(session.profit)}"
    )


@session_group.command("update")
@click.argument("session_id", type=int)
@click.option("--type", "game_type", type=click.Choice(GAME_TYPES), help="New game type")
@click.option("--buy-in", help="New buy-in amount")
@click.option("--cash-out", help="Cash-out amount (completes an active session)")
@click.option("--start", "start_time", help="New start time")
@click.option("--end", "end_time", help="New end time")
@click.option("--duration", type=int, help="Minutes played")
@click.option("--location", help="New location")
@click.option("--game", help="New game")
@click.option("--blinds", help="New stakes")
@click.option("--notes", help="New notes")
@click.pass_context
def update_session(
    ctx, session_id, game_type, buy_in, cash_out, start_time, end_time, duration, location, game, blinds, notes
):
    """Update fields of a session.

    Only the options given are changed.
    """
    service = SessionService(ctx.obj["db"])
    buy_in_amount = _parse_amount_or_exit(ctx, buy_in, "buy-in")
    cash_out_amount = _parse_amount_or_exit(ctx, cash_out, "cash-out")
    start = _parse_datetime_or_exit(ctx, start_time, "start time")
    end = _parse_datetime_or_exit(ctx, end_time, "end time")

    try:
        session = service.update_session(
            session_id,
            start_time=start,
            end_time=end,
            game_type=game_type,
            buy_in=buy_in_amount,
            cash_out=cash_out_amount,
            duration=duration,
            location=location,
            game=game,
            blinds=blinds,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated session {session.id}")
    click.echo(_session_line(session))


@session_group.command("delete")
@click.argument("session_id", type=int)
@click.pass_context
def delete_session(ctx, session_id: int):
    """Delete a session and its hand notes."""
    service = SessionService(ctx.obj["db"])

    try:
        service.require_session(session_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not click.confirm(f"Are you sure you want to delete session {session_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_session(session_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted session {session_id}")


@session_group.command("list")
@click.option("--active", "status", flag_value="active", help="Only active sessions")
@click.option("--completed", "status", flag_value="completed", help="Only completed sessions")
@click.option("--include-imports", is_flag=True, help="Merge imported deposits and withdrawals")
@click.pass_context
def list_sessions(ctx, status: str | None, include_imports: bool):
    """List sessions, newest first."""
    db = ctx.obj["db"]

    if include_imports:
        entries = ProgressService(db).ledger_entries(include_imports=True)
        if status is not None:
            want_active = status == "active"
            entries = [
                e for e in entries if e.source == "online" or e.is_active == want_active
            ]
        if not entries:
            click.echo("No sessions found.")
            return
        click.echo("\nLedger:")
        click.echo("-" * 100)
        for entry in entries:
            marker = " ACTIVE" if entry.is_active else ""
            click.echo(
                f"{entry.source:6s} | {entry.source_id:4d} | {format_timestamp(entry.timestamp)} | "
                f"{entry.kind:10s} | {format_money(entry.amount):>10s} | "
                f"Profit: {format_money(entry.profit):>10s} | {entry.label or ''}{marker}"
            )
        return

    is_active = None if status is None else status == "active"
    sessions = SessionService(db).list_sessions(is_active=is_active)
    if not sessions:
        click.echo("No sessions found.")
        return

    click.echo("\nSessions:")
    click.echo("-" * 100)
    for session in sessions:
        click.echo(_session_line(session))


@session_group.command("show")
@click.argument("session_id", type=int)
@click.pass_context
def show_session(ctx, session_id: int):
    """Show a session with its hand notes."""
    service = SessionService(ctx.obj["db"])

    try:
        session = service.require_session(session_id)
        notes = service.list_hand_notes(session_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nSession ID: {session.id}")
    click.echo(f"  Status: {'Active' if session.is_active else 'Completed'}")
    click.echo(f"  Type: {session.game_type}")
    click.echo(f"  Start: {format_timestamp(session.start_time)}")
    click.echo(f"  End: {format_timestamp(session.end_time)}")
    click.echo(f"  Duration: {format_duration(session.duration)}")
    click.echo(f"  Buy-in: {format_money(session.buy_in)}")
    click.echo(f"  Cash-out: {format_money(session.cash_out)}")
    click.echo(f"  Profit: {format_money(session.profit)}")
    for label, value in (
        ("Location", session.location),
        ("Game", session.game),
        ("Blinds", session.blinds),
        ("Notes", session.notes),
    ):
        if value:
            click.echo(f"  {label}: {value}")

    if notes:
        click.echo(f"\n  Hand notes ({len(notes)}):")
        for note in notes:
            details = " ".join(
                part for part in (note.hand_cards, note.position, note.result) if part
            )
            suffix = f" [{details}]" if details else ""
            click.echo(f"    #{note.id}: {note.note_text}{suffix}")


@session_group.command("stats")
@click.pass_context
def session_stats(ctx):
    """Show statistics across all live sessions."""
    stats = SessionService(ctx.obj["db"]).get_stats()

    click.echo("\nSession statistics:")
    click.echo("-" * 40)
    click.echo(f"  Sessions: {stats.total_sessions} ({stats.active_sessions} active)")
    click.echo(f"  Total buy-ins: {format_money(stats.total_buy_ins)}")
    click.echo(f"  Total cash-outs: {format_money(stats.total_cash_outs)}")
    click.echo(f"  Total profit: {format_money(stats.total_profit)}")
    click.echo(f"  Win rate: {stats.win_rate:.1f}%")
    click.echo(f"  Average buy-in: {format_money(stats.avg_buy_in)}")
    click.echo(f"  Average cash-out: {format_money(stats.avg_cash_out)}")
    click.echo(f"  Average profit: {format_money(stats.avg_profit)}")
    click.echo(f"  Biggest win: {format_money(stats.biggest_win)}")
    click.echo(f"  Biggest loss: {format_money(stats.biggest_loss)}")
    click.echo(f"  Hours played: {stats.total_hours:.1f}")
    click.echo(f"  Hourly rate: {format_money(stats.hourly_rate)}/h")


def register_commands(cli):
    """Register session commands with main CLI."""
    cli.add_command(session_group, name="session")
