"""versionedmodel CLI"""

import click

from versionedmodel import __version__
from versionedmodel.cli.debug import debug_option
from versionedmodel.cli.documents import convert, inspect
from versionedmodel.cli.settings import config_group


@click.group()
@click.version_option(__version__, prog_name="versionedmodel")
@debug_option
@click.pass_context
def cli(ctx):
    """
    Convert versioned model documents between schema versions.
    """
    ctx.ensure_object(dict)


cli.add_command(debug_option(convert))
cli.add_command(debug_option(inspect))
cli.add_command(config_group)

if __name__ == "__main__":
    cli(obj={})
