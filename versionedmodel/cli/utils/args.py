import importlib
import os
import sys

import click


def load_model_class(reference: str, search_path: str = "."):
    """
    Import a model class from a ``package.module:ClassName`` reference.

    Importing the module runs its ``@versioned_model`` decorators, which
    registers the class. ``search_path`` is put on sys.path first so models
    next to the documents can be found.

    Raises:
        click.BadParameter: if the reference is malformed or cannot be imported
    """
    module_name, sep, class_name = reference.partition(":")
    if not sep or not module_name or not class_name:
        raise click.BadParameter(
            f"'{reference}' is not of the form module:ClassName", param_hint="--model"
        )

    search_path = os.path.abspath(search_path)
    if search_path not in sys.path:
        sys.path.insert(0, search_path)

    importlib.invalidate_caches()
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(
            f"cannot import module '{module_name}': {e}", param_hint="--model"
        ) from e

    target = module
    for part in class_name.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise click.BadParameter(
                f"module '{module_name}' has no attribute '{class_name}'",
                param_hint="--model",
            ) from None

    if not isinstance(target, type):
        raise click.BadParameter(f"'{reference}' is not a class", param_hint="--model")
    return target
