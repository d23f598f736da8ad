"""
Tests for VersioningRegistry and the versioned_model decorator.

All tests in this file are marked as 'short' since they don't require
external dependencies, containers, or network I/O.
"""

from typing import Annotated, Optional

import pytest
from pydantic import BaseModel

from versionedmodel.versioning import (
    ConfigurationError,
    Converter,
    OverrideProperty,
    SerializeToVersion,
    VersioningRegistry,
    versioned_model,
)


class Noop(Converter):
    def to_current(self, tree, from_version, to_version):
        return tree


class Unbuildable(Converter):
    def __init__(self, required):
        self.required = required


@pytest.mark.short
class TestVersioningRegistry:
    """Test registering model types."""

    def test_register_and_get(self, registry):
        class Person(BaseModel):
            name: str

        config = registry.register(Person, "2.0", to_current_converter=Noop)

        assert registry.get(Person) is config
        assert Person in registry
        assert len(registry) == 1
        assert config.current_version == "2.0"
        assert isinstance(config.to_current_converter, Noop)

    def test_register_defaults(self, registry):
        class Person(BaseModel):
            name: str

        config = registry.register(Person, "2.0")

        assert config.property_name == "modelVersion"
        assert config.default_deserialize_version is None
        assert config.default_serialize_version is None

    def test_get_unregistered(self, registry):
        class Person(BaseModel):
            name: str

        assert Person not in registry
        with pytest.raises(ConfigurationError, match="not a registered"):
            registry.get(Person)

    def test_discovers_override_property(self, registry):
        class Person(BaseModel):
            write_as: Annotated[Optional[str], SerializeToVersion()] = None

        config = registry.register(Person, "2.0")
        assert config.override_property == OverrideProperty("write_as", "write_as")

    def test_explicit_override_property(self, registry):
        class Person(BaseModel):
            target: Optional[str] = None

        config = registry.register(
            Person, "2.0", override_property=OverrideProperty("target")
        )
        assert config.override_property.name == "target"

    def test_multiple_overrides_fail_eagerly(self, registry):
        class Person(BaseModel):
            a: Annotated[Optional[str], SerializeToVersion()] = None
            b: Annotated[Optional[str], SerializeToVersion()] = None

        with pytest.raises(ConfigurationError, match="at most one"):
            registry.register(Person, "2.0")
        assert Person not in registry

    def test_converter_failure_fails_eagerly(self, registry):
        class Person(BaseModel):
            name: str

        with pytest.raises(ConfigurationError, match="Unbuildable"):
            registry.register(Person, "2.0", to_target_converter=Unbuildable)

    def test_invalid_config_is_configuration_error(self, registry):
        class Person(BaseModel):
            name: str

        with pytest.raises(ConfigurationError, match="Person"):
            registry.register(Person, "")

    def test_reregistration_replaces(self, registry, capture_logs):
        class Person(BaseModel):
            name: str

        registry.register(Person, "1.0")
        registry.register(Person, "2.0")

        assert registry.get(Person).current_version == "2.0"
        assert "already registered" in capture_logs.getvalue()


@pytest.mark.short
class TestVersionedModelDecorator:
    """Test the class decorator."""

    def test_decorator_registers(self, registry):
        @versioned_model("3.0", registry=registry, default_serialize_version="2.0")
        class Person(BaseModel):
            name: str

        config = registry.get(Person)
        assert config.current_version == "3.0"
        assert config.default_serialize_version == "2.0"

    def test_decorator_returns_class(self, registry):
        class Person(BaseModel):
            name: str

        assert versioned_model("1.0", registry=registry)(Person) is Person

    def test_decorator_validates(self, registry):
        with pytest.raises(ConfigurationError):

            @versioned_model("1.0", registry=registry, to_current_converter=object())
            class Person(BaseModel):
                name: str
