"""CSV import command."""

import click
from bankroll.domain.csv_import import CSVImportService
from bankroll.domain.errors import DomainError


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", required=True, help="Account name (created on first import)")
@click.pass_context
def import_csv(ctx, csv_file: str, account: str):
    """Import a platform transaction history CSV.

    Re-importing the same file is safe: transactions already stored are
    skipped.

    Examples:
        bankroll import history.csv --account "Main"
    """
    config = ctx.obj["config"]
    service = CSVImportService(
        ctx.obj["db"], platform=config.platform, max_upload_bytes=config.max_upload_bytes
    )

    try:
        result = service.import_csv(csv_file_path=csv_file, account_name=account)
    except (DomainError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")
    click.echo(f"  Skipped: {result.skipped} duplicates")
    if result.rejected:
        click.echo(f"  Rejected rows: {len(result.rejected)}")
        for message in result.rejected:
            click.echo(f"    {message}", err=True)
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
