"""
Ordering of model versions.

Model versions are opaque strings as far as the pipelines are concerned: they
are only compared for equality. StepwiseConverter needs to place its steps on
a line between two versions, so it parses them into ``Version`` objects that
order through packaging.version.
"""

import re

from packaging.version import InvalidVersion, Version as PackagingVersion

from .exceptions import VersionFormatError


_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")


class Version:
    """A model version in ``x.y`` or ``x.y.z`` form that supports ``<`` and ``<=``."""

    def __init__(self, version_string: str):
        """
        Raises:
            VersionFormatError: If the string is not ``x.y`` or ``x.y.z``
        """
        self._original_string = str(version_string).strip()

        if not _VERSION_PATTERN.match(self._original_string):
            raise VersionFormatError(self._original_string)

        try:
            self._version = PackagingVersion(self._original_string)
        except InvalidVersion as e:
            raise VersionFormatError(self._original_string) from e

    def __str__(self) -> str:
        return self._original_string

    def __repr__(self) -> str:
        return f"Version('{self}')"

    def __lt__(self, other: "Version") -> bool:
        return self._version < other._version

    def __le__(self, other: "Version") -> bool:
        return self._version <= other._version
