"""Platform reference commands."""

import click
from bankroll.domain.classifier import EXTERNAL_TYPES, INTERNAL_TYPES
from bankroll.domain.csv_parser import CSV_COLUMNS, SAMPLE_CSV


@click.group()
def platform_group():
    """Show what the importer expects from platform exports."""
    pass


@platform_group.command("types")
def list_types():
    """List known transaction types and how they are counted."""
    click.echo("\nReal-money transaction types (count toward profit):")
    for name in EXTERNAL_TYPES:
        click.echo(f"  {name}")
    click.echo("\nIn-platform transaction types (ignored for profit):")
    for name in INTERNAL_TYPES:
        click.echo(f"  {name}")
    click.echo("\nAny other type is stored and ignored for profit.")


@platform_group.command("sample")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), help="Write to a file instead of stdout")
def sample_csv(output: str | None):
    """Print a sample CSV in the expected layout."""
    if output:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(SAMPLE_CSV)
        click.echo(f"Wrote sample CSV ({', '.join(CSV_COLUMNS)}) to {output}")
        return
    click.echo(SAMPLE_CSV, nl=False)


def register_commands(cli):
    """Register platform commands with main CLI."""
    cli.add_command(platform_group, name="platform")
