"""Default codec: bytes <-> tree with json or YAML, tree <-> object with pydantic."""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional, Type, TypeVar, Union

import yaml
from pydantic import TypeAdapter

from versionedmodel.versioning import (
    DeserializationPipeline,
    InvalidShapeError,
    SerializationPipeline,
    VersioningRegistry,
    default_registry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
Tree = Dict[str, Any]

FORMATS = ("json", "yaml")


@lru_cache(maxsize=None)
def _adapter(model_cls: type) -> TypeAdapter:
    return TypeAdapter(model_cls)


class VersionedCodec:
    """
    Reads and writes versioned models.

    Handles pydantic models, pydantic/stdlib dataclasses and anything else a
    pydantic TypeAdapter can validate and dump.

    Usage:
        codec = VersionedCodec()
        person = codec.loads(b'{"modelVersion": "1.0", "name": "x"}', Person)
        data = codec.dumps(person)
    """

    def __init__(
        self,
        registry: Optional[VersioningRegistry] = None,
        format: str = "json",
        indent: Optional[int] = None,
    ):
        if format not in FORMATS:
            raise ValueError(f"Unknown format '{format}', expected one of {FORMATS}")
        self.registry = registry or default_registry
        self.format = format
        self.indent = indent

    # bytes <-> tree

    def decode_tree(self, data: Union[bytes, str, None]) -> Any:
        """Parse raw bytes into a generic tree (None for an empty document)."""
        if data is None:
            return None
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            if not data.strip():
                return None
            if self.format == "yaml":
                return yaml.safe_load(data)
            return json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise InvalidShapeError(
                f"unable to parse {self.format} document: {e}"
            ) from e

    def encode_tree(self, tree: Tree) -> bytes:
        if self.format == "yaml":
            text = yaml.safe_dump(tree, sort_keys=False, allow_unicode=True)
        else:
            text = json.dumps(tree, indent=self.indent, ensure_ascii=False)
        return text.encode("utf-8")

    # tree <-> object

    def decode_object(self, tree: Tree, model_cls: Type[T]) -> T:
        return _adapter(model_cls).validate_python(tree)

    def encode_object(self, obj: Any, model_cls: Optional[type] = None) -> Tree:
        return _adapter(model_cls or type(obj)).dump_python(
            obj, mode="json", by_alias=True
        )

    # full pipelines

    def load_tree(self, tree: Any, model_cls: Type[T]) -> T:
        """Migrate ``tree`` to the current version and decode it."""
        config = self.registry.get(model_cls)
        current = DeserializationPipeline(config).run(tree)

        override = config.override_property
        source_version = None
        if override is not None and override.accessor and override.default_to_source:
            source_version = current.pop(override.tree_key, None)

        obj = self.decode_object(current, model_cls)
        if source_version is not None:
            override.set_value(obj, source_version)
        return obj

    def loads(self, data: Union[bytes, str, None], model_cls: Type[T]) -> T:
        return self.load_tree(self.decode_tree(data), model_cls)

    def dump_tree(
        self,
        obj: Any,
        model_cls: Optional[type] = None,
        target_version: Optional[str] = None,
    ) -> Tree:
        """Encode ``obj`` and convert it to its output version."""
        model_cls = model_cls or type(obj)
        config = self.registry.get(model_cls)
        tree = self.encode_object(obj, model_cls)
        return SerializationPipeline(config).run(tree, obj, target_version)

    def dumps(
        self,
        obj: Any,
        model_cls: Optional[type] = None,
        target_version: Optional[str] = None,
    ) -> bytes:
        return self.encode_tree(self.dump_tree(obj, model_cls, target_version))
