"""
Deserialization and serialization pipelines.

Both pipelines work on generic trees only. Callers decode bytes into a tree
and hand the result of DeserializationPipeline to their typed decoder; on the
way out they encode the typed object into a tree and run
SerializationPipeline on it before writing bytes. See VersionedCodec for the
default wiring.
"""

import logging
from typing import Any, Callable, Dict, Optional

from . import tag
from .config import ModelVersioningConfig
from .exceptions import ConverterError, InvalidShapeError, MissingVersionError

logger = logging.getLogger(__name__)

Tree = Dict[str, Any]


def _run_converter(
    convert: Callable[[Tree, str, str], Tree],
    tree: Tree,
    from_version: str,
    to_version: str,
) -> Tree:
    """Invoke one converter direction; all-or-nothing per document."""
    try:
        result = convert(tree, from_version, to_version)
    except ConverterError:
        raise
    except Exception as e:
        raise ConverterError(
            str(e) or type(e).__name__, from_version, to_version, tree
        ) from e

    if not isinstance(result, dict):
        raise ConverterError(
            f"converter returned {type(result).__name__}, expected a JSON object",
            from_version,
            to_version,
            tree,
        )
    return result


class DeserializationPipeline:
    """Turns an inbound tree of any known version into a current-version tree."""

    def __init__(self, config: ModelVersioningConfig):
        self.config = config

    def run(self, tree: Any) -> Tree:
        """
        Prepare ``tree`` for typed decoding.

        Raises:
            InvalidShapeError: if the document is not a JSON object
            MissingVersionError: if the tag is absent and no default is configured
            ConverterError: if the to-current converter fails
        """
        config = self.config

        if tree is None:
            tree = {}
        if not isinstance(tree, dict):
            raise InvalidShapeError()

        found, tree = tag.extract(tree, config.property_name)
        source_version = config.resolve_source_version(found)
        if not source_version:
            raise MissingVersionError(config.property_name)
        if found is None:
            logger.debug(
                f"No '{config.property_name}' in document, "
                f"using default version {source_version}"
            )

        if config.needs_to_current(source_version):
            logger.debug(
                f"Converting document from version {source_version} "
                f"to {config.current_version}"
            )
            tree = _run_converter(
                config.to_current_converter.to_current,  # type: ignore[union-attr]
                tree,
                source_version,
                config.current_version,
            )

        override = config.override_property
        if override is not None and override.default_to_source:
            tree[override.tree_key] = source_version

        return tree


class SerializationPipeline:
    """Turns a current-version tree into a tree tagged with the target version."""

    def __init__(self, config: ModelVersioningConfig):
        self.config = config

    def resolve_target_version(self, tree: Tree, instance: Any = None) -> str:
        """Pick the output version and drop the override property from ``tree``."""
        config = self.config
        override_value = None

        override = config.override_property
        if override is not None:
            in_tree = tree.pop(override.tree_key, None)
            if instance is not None:
                override_value = override.get_value(instance)
            elif in_tree is not None:
                override_value = str(in_tree)

        return config.resolve_target_version(override_value)

    def run(
        self,
        tree: Tree,
        instance: Any = None,
        target_version: Optional[str] = None,
    ) -> Tree:
        """
        Convert a tree produced by the typed encoder to its output version.

        Args:
            tree: current-version tree of ``instance``
            instance: the typed object, used to read the override property
            target_version: explicit version requested by the caller; wins over
                every configured rule

        Raises:
            InvalidShapeError: if the encoder did not produce a JSON object
            ConverterError: if the to-target converter fails
        """
        config = self.config

        if not isinstance(tree, dict):
            raise InvalidShapeError()

        resolved = self.resolve_target_version(tree, instance)
        target = target_version or resolved

        if config.needs_to_target(target):
            logger.debug(
                f"Converting document from version {config.current_version} "
                f"to {target}"
            )
            tree = _run_converter(
                config.to_target_converter.to_target,  # type: ignore[union-attr]
                tree,
                config.current_version,
                target,
            )

        if config.suppresses(target):
            logger.debug(f"Suppressing '{config.property_name}' for version {target}")
            tree.pop(config.property_name, None)
        else:
            tag.inject(tree, config.property_name, target)

        return tree


def deserialize_tree(tree: Any, config: ModelVersioningConfig) -> Tree:
    """Run the deserialization pipeline once."""
    return DeserializationPipeline(config).run(tree)


def serialize_tree(
    tree: Tree,
    config: ModelVersioningConfig,
    instance: Any = None,
    target_version: Optional[str] = None,
) -> Tree:
    """Run the serialization pipeline once."""
    return SerializationPipeline(config).run(tree, instance, target_version)
