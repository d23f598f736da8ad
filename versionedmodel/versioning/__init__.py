"""
Versioning Module for versionedmodel.

All version-tag handling lives here so that model classes only describe their
current shape and never contain version-specific code paths.

ARCHITECTURAL LAYERS:
====================

1. **Version tag** (tag.py):
   - Extracts, injects and suppresses the version property of a generic tree

2. **Converters** (converter.py):
   - Converter: base class with the to_current / to_target directions
   - FunctionConverter: converter built from two callables
   - StepwiseConverter: chain of adjacent-version migration steps, ordered
     by the Version class of version.py

3. **Configuration** (config.py, override.py, registry.py):
   - ModelVersioningConfig: immutable per-model settings
   - OverrideProperty / SerializeToVersion: per-instance output version
   - VersioningRegistry: registration and eager validation of model types

4. **Pipelines** (pipeline.py):
   - DeserializationPipeline: inbound tree -> current-version tree
   - SerializationPipeline: current-version tree -> target-version tree

5. **Exception Hierarchy** (exceptions.py):
   - VersioningError and its subclasses, shared by every layer

DESIGN PRINCIPLES:
=================

- Configuration is complete and validated before the first document is
  converted; nothing is discovered lazily.
- Configs are frozen and converters stateless, so the pipelines can run from
  any number of threads without locking.
- The pipelines never touch bytes or typed objects; those belong to the codec.
"""

from .config import DEFAULT_PROPERTY_NAME, ModelVersioningConfig, OverrideProperty
from .converter import Converter, FunctionConverter, StepwiseConverter, rename
from .exceptions import (
    VersioningError,
    ConfigurationError,
    ConverterError,
    InvalidShapeError,
    MissingVersionError,
    VersionFormatError,
)
from .override import SerializeToVersion, find_override_property, serialize_to_version
from .pipeline import (
    DeserializationPipeline,
    SerializationPipeline,
    deserialize_tree,
    serialize_tree,
)
from .registry import VersioningRegistry, default_registry, versioned_model

__all__ = [
    # Configuration
    "DEFAULT_PROPERTY_NAME",
    "ModelVersioningConfig",
    "OverrideProperty",
    "SerializeToVersion",
    "serialize_to_version",
    "find_override_property",
    "VersioningRegistry",
    "default_registry",
    "versioned_model",
    # Converters
    "Converter",
    "FunctionConverter",
    "StepwiseConverter",
    "rename",
    # Pipelines
    "DeserializationPipeline",
    "SerializationPipeline",
    "deserialize_tree",
    "serialize_tree",
    # Exceptions
    "VersioningError",
    "ConfigurationError",
    "ConverterError",
    "InvalidShapeError",
    "MissingVersionError",
    "VersionFormatError",
]
