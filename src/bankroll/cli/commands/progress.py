"""Profit progress commands."""

import click
from bankroll.cli.date_filters import period_options, resolve_cli_date_range
from bankroll.cli.error_handling import handle_domain_error
from bankroll.cli.formatting import format_money
from bankroll.domain.entities import Granularity, ProgressFilter, WeeklyRange
from bankroll.domain.errors import DomainError
from bankroll.domain.progress import ProgressService

FILTERS = [f.value for f in ProgressFilter]

filter_option = click.option(
    "--filter",
    "progress_filter",
    type=click.Choice(FILTERS),
    default="all",
    show_default=True,
    help="Live sessions, online transactions, or both",
)


def _echo_series(series) -> None:
    if not series:
        click.echo("No data for this range.")
        return

    click.echo(f"\n{'Period':12s} {'Profit':>14s} {'Cumulative':>14s}")
    click.echo("-" * 42)
    for point in series:
        click.echo(
            f"{point.bucket:12s} {format_money(point.period_profit):>14s} "
            f"{format_money(point.cumulative_profit):>14s}"
        )


@click.group()
def progress_group():
    """Show profit totals and progress over time."""
    pass


@progress_group.command("totals")
@click.pass_context
def show_totals(ctx):
    """Show total profit for live, online and combined."""
    totals = ProgressService(ctx.obj["db"]).totals()
    click.echo(f"Live:   {format_money(totals.live):>14s}")
    click.echo(f"Online: {format_money(totals.online):>14s}")
    click.echo(f"Total:  {format_money(totals.all):>14s}")


@progress_group.command("series")
@click.option(
    "--granularity",
    type=click.Choice([g.value for g in Granularity]),
    default="daily",
    show_default=True,
)
@filter_option
@click.option("--start-date", help="Start date (YYYY-MM-DD or 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or 'today')")
@period_options
@click.pass_context
def show_series(
    ctx, granularity, progress_filter, start_date, end_date, this_month, this_year, last_month, last_year
):
    """Show profit per period with a running total.

    Examples:
        bankroll progress series --granularity weekly --filter online
        bankroll progress series --this-year
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "last-year": last_year,
        },
    )

    try:
        series = ProgressService(ctx.obj["db"]).time_series(granularity, progress_filter, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_series(series)


@progress_group.command("year")
@click.argument("year", type=int)
@filter_option
@click.pass_context
def show_year(ctx, year: int, progress_filter: str):
    """Show daily progress for one calendar year."""
    try:
        series = ProgressService(ctx.obj["db"]).year_progress(year, progress_filter)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_series(series)


@progress_group.command("weekly")
@click.option(
    "--range",
    "weekly_range",
    type=click.Choice([r.value for r in WeeklyRange]),
    default="1m",
    show_default=True,
    help="Look-back window ending today",
)
@filter_option
@click.pass_context
def show_weekly(ctx, weekly_range: str, progress_filter: str):
    """Show weekly progress over a recent window."""
    try:
        series = ProgressService(ctx.obj["db"]).weekly_progress(weekly_range, progress_filter)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_series(series)


@progress_group.command("period")
@click.argument("period", type=click.Choice([Granularity.QUARTERLY.value, Granularity.YEARLY.value]))
@filter_option
@click.pass_context
def show_period(ctx, period: str, progress_filter: str):
    """Show quarterly or yearly progress over all history."""
    try:
        series = ProgressService(ctx.obj["db"]).progress(period, progress_filter)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_series(series)


@progress_group.command("years")
@click.pass_context
def list_years(ctx):
    """List years that have activity, newest first."""
    for year in ProgressService(ctx.obj["db"]).available_years():
        click.echo(str(year))


def register_commands(cli):
    """Register progress commands with main CLI."""
    cli.add_command(progress_group, name="progress")
