"""Discovery and validation of the per-instance override property.

A model marks at most one string attribute as the version it wants to be
serialized to, either on an annotated field::

    class Person(BaseModel):
        full_name: str
        write_as: Annotated[Optional[str], SerializeToVersion()] = None

or on a property::

    class Person:
        @property
        @serialize_to_version
        def write_as(self) -> Optional[str]: ...

The scan runs once, when the model is registered.
"""

import dataclasses
import sys
import types
import typing
from typing import Any, Callable, Dict, List, Optional, Union

from .config import OverrideProperty
from .exceptions import ConfigurationError

_MARKER_ATTR = "__serialize_to_version__"

MULTIPLE_OVERRIDES_MESSAGE = (
    "override property must be present on at most one field or accessor"
)


@dataclasses.dataclass(frozen=True)
class SerializeToVersion:
    """``Annotated`` marker for the override property."""

    default_to_source: bool = False


def serialize_to_version(
    func: Optional[Callable] = None, *, default_to_source: bool = False
):
    """Mark a property getter as the override property.

    Usable bare (``@serialize_to_version``) or with arguments.
    """

    def mark(f: Callable) -> Callable:
        setattr(f, _MARKER_ATTR, SerializeToVersion(default_to_source))
        return f

    if func is None:
        return mark
    return mark(func)


def _is_string_type(annotation: Any) -> bool:
    """True for ``str`` and ``Optional[str]``."""
    if annotation is str:
        return True
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _is_string_type(typing.get_args(annotation)[0])
    union_types: tuple = (Union,)
    if sys.version_info >= (3, 10):
        union_types += (types.UnionType,)
    if origin in union_types:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        return len(args) == 1 and args[0] is str
    return False


def _marker_in(metadata) -> Optional[SerializeToVersion]:
    for item in metadata:
        if isinstance(item, SerializeToVersion):
            return item
        if item is SerializeToVersion:
            return SerializeToVersion()
    return None


def _scan_pydantic_fields(model_cls: type) -> List[OverrideProperty]:
    found = []
    for name, field in model_cls.model_fields.items():
        marker = _marker_in(field.metadata)
        if marker is None:
            continue
        if not _is_string_type(field.annotation):
            raise ConfigurationError(
                f"override property '{name}' on {model_cls.__qualname__} "
                "must be a str field"
            )
        key = field.serialization_alias or field.alias or name
        found.append(OverrideProperty(name, key, marker.default_to_source))
    return found


def _scan_annotations(model_cls: type) -> List[OverrideProperty]:
    try:
        hints = typing.get_type_hints(model_cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise ConfigurationError(
            f"unable to resolve type hints of {model_cls.__qualname__}: {e}"
        ) from e

    found = []
    for name, hint in hints.items():
        if typing.get_origin(hint) is not typing.Annotated:
            continue
        marker = _marker_in(hint.__metadata__)
        if marker is None:
            continue
        if not _is_string_type(hint):
            raise ConfigurationError(
                f"override property '{name}' on {model_cls.__qualname__} "
                "must be a str field"
            )
        found.append(OverrideProperty(name, name, marker.default_to_source))
    return found


def _scan_properties(model_cls: type) -> List[OverrideProperty]:
    found = []
    seen: Dict[str, bool] = {}
    for klass in model_cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen[name] = True
            if not isinstance(attr, property):
                continue
            marker = getattr(attr.fget, _MARKER_ATTR, None) or getattr(
                attr.fset, _MARKER_ATTR, None
            )
            if marker is None:
                continue
            if attr.fget is None:
                raise ConfigurationError(
                    f"override property '{name}' on {model_cls.__qualname__} "
                    "has no accessible getter"
                )
            try:
                returns = typing.get_type_hints(attr.fget).get("return", str)
            except NameError as e:
                raise ConfigurationError(
                    f"unable to resolve return type of '{name}': {e}"
                ) from e
            if not _is_string_type(returns):
                raise ConfigurationError(
                    f"override property '{name}' on {model_cls.__qualname__} "
                    "must return a str"
                )
            if marker.default_to_source and attr.fset is None:
                raise ConfigurationError(
                    f"override property '{name}' on {model_cls.__qualname__} "
                    "needs a setter to default to the source version"
                )
            found.append(
                OverrideProperty(
                    name, name, marker.default_to_source, accessor=True
                )
            )
    return found


def find_override_property(model_cls: type) -> Optional[OverrideProperty]:
    """Return the override property of ``model_cls``, or None.

    Raises:
        ConfigurationError: if more than one attribute is marked, or the marked
            attribute is not a readable string
    """
    if hasattr(model_cls, "model_fields"):
        candidates = _scan_pydantic_fields(model_cls)
    else:
        candidates = _scan_annotations(model_cls)
    candidates.extend(_scan_properties(model_cls))

    if len(candidates) > 1:
        raise ConfigurationError(MULTIPLE_OVERRIDES_MESSAGE)
    return candidates[0] if candidates else None


def resolve_override_property(
    model_cls: type, explicit: Optional[OverrideProperty] = None
) -> Optional[OverrideProperty]:
    """Combine an explicitly configured override property with discovery."""
    discovered = find_override_property(model_cls)
    if explicit is not None and discovered is not None:
        raise ConfigurationError(MULTIPLE_OVERRIDES_MESSAGE)
    return explicit or discovered
