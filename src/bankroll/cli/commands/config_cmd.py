"""Configuration command."""

import click


@click.command("config")
@click.pass_context
def show_config(ctx):
    """Show the active configuration and form dropdown options."""
    config = ctx.obj["config"]

    click.echo(f"Database: {config.database_path}")
    click.echo(f"Platform: {config.platform}")
    click.echo(f"Upload limit: {config.max_upload_bytes} bytes")
    for name, values in config.dropdown_options().items():
        click.echo(f"\n{name.capitalize()}:")
        for value in values:
            click.echo(f"  {value}")


def register_commands(cli):
    """Register config command with main CLI."""
    cli.add_command(show_config)
