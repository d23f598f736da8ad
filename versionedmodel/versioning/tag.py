"""Reading, writing and suppressing the version tag of a generic tree."""

from typing import Any, Dict, Optional, Tuple

Tree = Dict[str, Any]


def extract(tree: Tree, property_name: str) -> Tuple[Optional[str], Tree]:
    """Remove the version tag from ``tree``.

    Returns the textual value of the tag, or None when the property is absent
    or null, together with the tree (which no longer holds the property).
    """
    value = tree.pop(property_name, None)
    if value is None:
        return None, tree
    if isinstance(value, bool):
        # JSON true/false would otherwise render as Python's True/False
        return ("true" if value else "false"), tree
    return str(value), tree


def inject(tree: Tree, property_name: str, version: str) -> Tree:
    """Set the version tag, replacing any existing value.

    The tag always ends up as the last key of the tree.
    """
    tree.pop(property_name, None)
    tree[property_name] = str(version)
    return tree


def should_suppress(version: str, suppression_version: Optional[str]) -> bool:
    """True iff a suppression version is configured and equals ``version``."""
    return bool(suppression_version) and version == suppression_version
