"""Per-model versioning configuration."""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .converter import Converter
from .exceptions import ConfigurationError
from .tag import should_suppress

DEFAULT_PROPERTY_NAME = "modelVersion"


def validate_non_empty_string(v: str) -> str:
    """Validate that a string is not empty."""
    if not v or not v.strip():
        raise ValueError("must be a non-empty string")
    return v


@dataclass(frozen=True)
class OverrideProperty:
    """Per-instance property holding the version an object wants to be written as.

    Attributes:
        name: attribute read on the typed object
        key: property name in the encoded tree (differs from ``name`` with aliases)
        default_to_source: write the version a document was read from into
            ``key`` while deserializing, so it re-serializes to that version
        accessor: ``name`` is a property rather than a field; typed decoders
            never fill it, so the source version goes through its setter
    """

    name: str
    key: Optional[str] = None
    default_to_source: bool = False
    accessor: bool = False

    @property
    def tree_key(self) -> str:
        return self.key or self.name

    def get_value(self, instance: Any) -> Optional[str]:
        value = getattr(instance, self.name, None)
        return None if value is None else str(value)

    def set_value(self, instance: Any, value: str) -> None:
        """Store ``value`` through the property setter."""
        getattr(type(instance), self.name).fset(instance, value)


class ModelVersioningConfig(BaseModel):
    """Immutable versioning settings of one model type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    current_version: str = Field(..., description="Version the model represents")
    property_name: str = Field(
        DEFAULT_PROPERTY_NAME, description="JSON property carrying the version tag"
    )
    default_deserialize_version: Optional[str] = Field(
        None, description="Version assumed for documents without a tag"
    )
    default_serialize_version: Optional[str] = Field(
        None, description="Version written when no override applies"
    )
    suppress_tag_for_version: Optional[str] = Field(
        None, description="Version for which the tag is left out of the output"
    )
    always_convert: bool = Field(
        False, description="Run converters even when versions already match"
    )
    to_current_converter: Optional[Converter] = None
    to_target_converter: Optional[Converter] = None
    override_property: Optional[OverrideProperty] = None

    @field_validator("current_version", "property_name")
    @classmethod
    def validate_required(cls, v: str) -> str:
        return validate_non_empty_string(v)

    @field_validator(
        "default_deserialize_version",
        "default_serialize_version",
        "suppress_tag_for_version",
        mode="before",
    )
    @classmethod
    def empty_as_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("to_current_converter", "to_target_converter", mode="before")
    @classmethod
    def instantiate_converter(cls, v: Any) -> Any:
        """Build converter classes eagerly so failures surface at registration."""
        if v is None:
            return v
        if isinstance(v, type):
            try:
                v = v()
            except Exception as e:
                raise ConfigurationError(
                    f"unable to create instance of converter '{v.__qualname__}': {e}"
                ) from e
        if not isinstance(v, Converter):
            raise ConfigurationError(
                f"converter must be a Converter instance or class, got {type(v).__name__}"
            )
        return v

    def resolve_source_version(self, tag: Optional[str]) -> Optional[str]:
        """Version of an inbound document given its tag (None if unresolvable)."""
        # An empty tag counts as absent, matching resolve_target_version
        return tag if tag else self.default_deserialize_version

    def resolve_target_version(self, override: Optional[str] = None) -> str:
        """Output version: override, then default serialize version, then current.

        An empty override is unset; writing it would produce a tag that reads
        back as missing.
        """
        if override:
            return override
        return self.default_serialize_version or self.current_version

    def needs_to_current(self, source_version: str) -> bool:
        return self.to_current_converter is not None and (
            self.always_convert or source_version != self.current_version
        )

    def needs_to_target(self, target_version: str) -> bool:
        return self.to_target_converter is not None and (
            self.always_convert or target_version != self.current_version
        )

    def suppresses(self, target_version: str) -> bool:
        return should_suppress(target_version, self.suppress_tag_for_version)
