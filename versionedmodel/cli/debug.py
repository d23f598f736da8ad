import click

from .utils.logging import configure_logging


def _set_debug(ctx, param, value: bool):
    """Turn debug logging on from any level of the command line.

    ``--debug`` on the group stays on for the subcommand; a subcommand's
    default ``--no-debug`` does not turn it off again.
    """
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)

    if value or "DEBUG" not in root_ctx.obj:
        root_ctx.obj["DEBUG"] = value

    configure_logging(root_ctx.obj["DEBUG"])
    return root_ctx.obj["DEBUG"]


def debug_option(cmd):
    """Add ``--debug/--no-debug`` to a command or group."""
    return click.option(
        "--debug/--no-debug",
        default=False,
        is_eager=True,
        expose_value=False,
        callback=_set_debug,
        help="Enable debug mode",
    )(cmd)
