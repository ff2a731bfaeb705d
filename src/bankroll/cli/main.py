"""Main CLI entry point."""

import logging

import click
from bankroll.config import DB_PATH_ENV_VAR, load_config
from bankroll.database.factories import create_sqlite_database

# Import and register all commands at module level
from bankroll.cli.commands import (
    account,
    config_cmd,
    import_cmd,
    note,
    platform,
    progress,
    session,
)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug)")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: int):
    """Bankroll - Poker bankroll tracker.

    Track live sessions, import online platform transaction histories, and
    follow combined profit over time.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=LOG_LEVELS.get(verbose, logging.DEBUG),
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        config = load_config(database_path=db_path)
        db = create_sqlite_database(database_path=config.database_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["config"] = config
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
session.register_commands(cli)
note.register_commands(cli)
import_cmd.register_commands(cli)
platform.register_commands(cli)
account.register_commands(cli)
progress.register_commands(cli)
config_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
