"""Schema-versioned JSON/YAML documents for Python models."""

__version__ = "0.1.0"

from versionedmodel.versioning import (  # noqa: E402
    ConfigurationError,
    Converter,
    ConverterError,
    FunctionConverter,
    InvalidShapeError,
    MissingVersionError,
    ModelVersioningConfig,
    OverrideProperty,
    SerializeToVersion,
    StepwiseConverter,
    VersioningError,
    VersioningRegistry,
    default_registry,
    serialize_to_version,
    versioned_model,
)
from versionedmodel.codec import VersionedCodec  # noqa: E402

__all__ = [
    "__version__",
    "ConfigurationError",
    "Converter",
    "ConverterError",
    "FunctionConverter",
    "InvalidShapeError",
    "MissingVersionError",
    "ModelVersioningConfig",
    "OverrideProperty",
    "SerializeToVersion",
    "StepwiseConverter",
    "VersionedCodec",
    "VersioningError",
    "VersioningRegistry",
    "default_registry",
    "serialize_to_version",
    "versioned_model",
]
