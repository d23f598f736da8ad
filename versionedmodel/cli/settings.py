"""CLI commands for the user configuration file."""

import click

import versionedmodel.config as user_config
from versionedmodel.cli.debug import debug_option
from versionedmodel.cli.utils.logging import logger


@click.group("config")
def config_group():
    """Show or change the defaults used by the CLI."""


@config_group.command("show")
@debug_option
def show():
    """Print the configured options and where they are stored."""
    accessor = user_config.config
    click.echo(f"Config file: {accessor.config_path}")

    sections = accessor.sections()
    if not sections:
        click.echo("No options set, using defaults.")
        return

    for section in sections:
        for option in accessor.options(section):
            click.echo(f"{section}.{option} = {accessor.get(section, option)}")


@config_group.command("set")
@debug_option
@click.argument("key", type=click.Choice(sorted(user_config.CODEC_OPTIONS)))
@click.argument("value")
@click.pass_context
def set_option(ctx, key, value):
    """Set codec option KEY to VALUE (format: json or yaml; indent: 0 for compact)."""
    try:
        user_config.set_codec_option(key, value)
    except ValueError as e:
        logger.error(f"Error: {e}")
        ctx.exit(1)

    click.echo(f"codec.{key} = {value.strip()}")
