"""CLI commands operating on versioned documents."""

from pathlib import Path
from typing import Optional

import click

from versionedmodel.codec import FORMATS, VersionedCodec
from versionedmodel.config import get_default_format, get_json_indent
from versionedmodel.cli.utils.args import load_model_class
from versionedmodel.cli.utils.logging import logger
from versionedmodel.versioning import VersioningError, default_registry, tag


def _guess_format(path: Path, fmt: Optional[str]) -> str:
    if fmt:
        return fmt
    if path.suffix in (".yaml", ".yml"):
        return "yaml"
    if path.suffix == ".json":
        return "json"
    return get_default_format()


model_option = click.option(
    "--model",
    "-m",
    "model_ref",
    required=True,
    help="Versioned model class as module:ClassName.",
    envvar="VERSIONEDMODEL_MODEL",
)
format_option = click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS, case_sensitive=False),
    default=None,
    help="Document format (default: from the file extension).",
)


@click.command("convert")
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@model_option
@format_option
@click.option(
    "--to",
    "target_version",
    default=None,
    help="Version to write (default: the model's configured output version).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: stdout).",
)
@click.pass_context
def convert(ctx, document, model_ref, fmt, target_version, output):
    """Migrate DOCUMENT through the model and write it at another version."""
    path = Path(document)
    model_cls = load_model_class(model_ref)
    codec = VersionedCodec(
        registry=default_registry,
        format=_guess_format(path, fmt),
        indent=get_json_indent(),
    )

    try:
        obj = codec.loads(path.read_bytes(), model_cls)
        data = codec.dumps(obj, model_cls, target_version=target_version)
    except VersioningError as e:
        logger.error(f"Error: {e}")
        ctx.exit(1)
    except ValueError as e:
        # pydantic validation errors of the migrated document
        logger.error(f"Error: document does not match {model_cls.__name__}: {e}")
        ctx.exit(1)

    if output:
        Path(output).write_bytes(data)
        logger.info(f"Wrote {output}")
    else:
        click.echo(data.decode("utf-8").rstrip("\n"))


@click.command("inspect")
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@model_option
@format_option
@click.pass_context
def inspect(ctx, document, model_ref, fmt):
    """Show which version DOCUMENT is in and what reading it would do."""
    path = Path(document)
    model_cls = load_model_class(model_ref)
    codec = VersionedCodec(registry=default_registry, format=_guess_format(path, fmt))

    try:
        config = default_registry.get(model_cls)
        tree = codec.decode_tree(path.read_bytes())
    except VersioningError as e:
        logger.error(f"Error: {e}")
        ctx.exit(1)

    if not isinstance(tree, dict):
        logger.error("Error: value must be a JSON object")
        ctx.exit(1)

    found, _ = tag.extract(dict(tree), config.property_name)
    source = config.resolve_source_version(found)

    click.echo(f"Model:            {model_cls.__name__}")
    click.echo(f"Property:         {config.property_name}")
    if not source:
        click.echo("Document version: <missing>")
    elif found is None:
        click.echo(f"Document version: {source} (default)")
    else:
        click.echo(f"Document version: {source}")
    click.echo(f"Current version:  {config.current_version}")
    click.echo(f"Output version:   {config.resolve_target_version()}")

    if not source:
        click.echo("Upgrade:          impossible, no version and no default")
        ctx.exit(1)
    upgrade = "yes" if config.needs_to_current(source) else "no"
    click.echo(f"Upgrade:          {upgrade}")
