"""
Converters move a generic tree between two named versions of a model.

A converter has two independent directions:

- ``to_current`` upgrades inbound data to the model's current version;
- ``to_target`` downgrades the current version to an older one on output.

Converters are shared by every document of a model type, possibly from several
threads at once, so they must not keep per-call state.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .exceptions import ConverterError
from .version import Version

logger = logging.getLogger(__name__)

Tree = Dict[str, Any]
ConvertFn = Callable[[Tree, str, str], Tree]
StepFn = Callable[[Tree], Tree]


class Converter:
    """Base class for model converters.

    Subclasses override the direction(s) they support. Calling a direction
    that was not overridden raises NotImplementedError, which the pipelines
    report as a ConverterError.
    """

    def to_current(self, tree: Tree, from_version: str, to_version: str) -> Tree:
        """Return ``tree`` (at ``from_version``) converted to ``to_version``."""
        raise NotImplementedError(
            f"{type(self).__name__} does not convert to the current version"
        )

    def to_target(self, tree: Tree, from_version: str, to_version: str) -> Tree:
        """Return ``tree`` (at ``from_version``) converted to ``to_version``."""
        raise NotImplementedError(
            f"{type(self).__name__} does not convert to past versions"
        )


class FunctionConverter(Converter):
    """Converter built from plain callables."""

    def __init__(
        self,
        to_current: Optional[ConvertFn] = None,
        to_target: Optional[ConvertFn] = None,
    ):
        self._to_current = to_current
        self._to_target = to_target

    def to_current(self, tree: Tree, from_version: str, to_version: str) -> Tree:
        if self._to_current is None:
            return super().to_current(tree, from_version, to_version)
        return self._to_current(tree, from_version, to_version)

    def to_target(self, tree: Tree, from_version: str, to_version: str) -> Tree:
        if self._to_target is None:
            return super().to_target(tree, from_version, to_version)
        return self._to_target(tree, from_version, to_version)


class StepwiseConverter(Converter):
    """
    Converter assembled from adjacent-version migration steps.

    ``upgrades`` maps a version to a step turning a tree of the previous
    version into that version. ``downgrades`` maps a version to a step turning
    a tree of that version into the previous one. Steps are plain
    ``tree -> tree`` callables.

    Example:
        StepwiseConverter(
            upgrades={"2.0": rename("name", "fullName")},
            downgrades={"2.0": rename("fullName", "name")},
        )

    Versions must be "x.y" or "x.y.z" so they can be ordered.
    """

    def __init__(
        self,
        upgrades: Optional[Mapping[str, StepFn]] = None,
        downgrades: Optional[Mapping[str, StepFn]] = None,
    ):
        # Parsing up front surfaces bad versions at registration time
        self._upgrades = sorted(
            ((Version(v), step) for v, step in (upgrades or {}).items()),
            key=lambda item: item[0],
        )
        self._downgrades = sorted(
            ((Version(v), step) for v, step in (downgrades or {}).items()),
            key=lambda item: item[0],
            reverse=True,
        )

    def to_current(self, tree: Tree, from_version: str, to_version: str) -> Tree:
        start, end = Version(from_version), Version(to_version)
        for version, step in self._upgrades:
            if start < version <= end:
                tree = self._apply(step, tree, from_version, to_version, version)
        return tree

    def to_target(self, tree: Tree, from_version: str, to_version: str) -> Tree:
        start, end = Version(from_version), Version(to_version)
        for version, step in self._downgrades:
            if end < version <= start:
                tree = self._apply(step, tree, from_version, to_version, version)
        return tree

    @staticmethod
    def _apply(
        step: StepFn, tree: Tree, from_version: str, to_version: str, step_version
    ) -> Tree:
        logger.debug(f"Applying migration step {step_version}")
        result = step(tree)
        if not isinstance(result, dict):
            raise ConverterError(
                f"step {step_version} returned {type(result).__name__}, "
                "expected a JSON object",
                from_version,
                to_version,
                tree,
            )
        return result


def rename(old: str, new: str) -> StepFn:
    """Build a step that renames a top-level property, keeping key order."""

    def step(tree: Tree) -> Tree:
        if old not in tree:
            return tree
        return {(new if key == old else key): value for key, value in tree.items()}

    return step
