"""
Exception classes for the versioning module.
"""

from typing import Any, Dict, Optional


class VersioningError(Exception):
    """Base exception for all versioning-related errors."""

    pass


class ConfigurationError(VersioningError):
    """Raised when a versioned model is set up incorrectly.

    Always raised at registration time, never while converting a document.
    """

    pass


class InvalidShapeError(VersioningError):
    """Raised when an inbound document is not a JSON object."""

    def __init__(self, message: str = "value must be a JSON object"):
        super().__init__(message)


class MissingVersionError(VersioningError):
    """Raised when a document carries no version tag and no default applies."""

    def __init__(self, property_name: str):
        self.property_name = property_name
        super().__init__(
            f"'{property_name}' property was not present and no default "
            "deserialize version is configured"
        )


class ConverterError(VersioningError):
    """Raised when a converter fails or returns something that is not a tree."""

    def __init__(
        self,
        message: str,
        from_version: str,
        to_version: str,
        tree: Optional[Dict[str, Any]] = None,
    ):
        self.from_version = from_version
        self.to_version = to_version
        self.tree = tree
        super().__init__(
            f"Conversion from version {from_version} to {to_version} failed: {message}"
        )


class VersionFormatError(VersioningError):
    """Raised when a version string has an invalid format."""

    def __init__(self, version_string: str, expected_format: str = "x.y.z or x.y"):
        self.version_string = version_string
        self.expected_format = expected_format
        super().__init__(
            f"Invalid version format: '{version_string}'. "
            f"Expected format: {expected_format}"
        )
