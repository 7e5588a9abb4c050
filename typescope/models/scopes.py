"""Scope tree declaration and the grammar shared by every scope operation.

A tree maps segment keys to either a description template (leaf) or another
mapping (sub-tree)::

    tree = ScopeTree(
        individual_scopes={
            "user": {"read": "Read user data", "write": "Write user data"},
            "domain": {"*": {"read": "Read access to $1"}},
        },
        all_scopes_message="Full access to everything",
    )

The tree is deep-frozen on construction so it can be shared process-wide.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple, Union

__all__ = [
    "WILDCARD",
    "SEPARATOR",
    "ScopeError",
    "ScopeNode",
    "ScopeTree",
    "ScopeTreeError",
    "is_valid_segment",
    "iter_leaves",
    "lookup_child",
]

WILDCARD = "*"
SEPARATOR = ":"

ScopeNode = Union[str, Mapping[str, "ScopeNode"]]


class ScopeError(Exception):
    """Base class for every error raised by the scope engine."""


class ScopeTreeError(ScopeError, ValueError):
    """Raised when a scope tree declaration is not well formed."""


def is_valid_segment(segment: str) -> bool:
    """Return True if *segment* is a legal scope segment (or the wildcard)."""
    return bool(segment) and " " not in segment and SEPARATOR not in segment


def _freeze(node: Mapping[str, Any], path: str) -> Mapping[str, ScopeNode]:
    frozen: dict[str, ScopeNode] = {}
    for key, value in node.items():
        if not isinstance(key, str) or not is_valid_segment(key):
            raise ScopeTreeError(f"Invalid scope key {key!r} under {path or '<root>'}")
        child_path = f"{path}{SEPARATOR}{key}" if path else key
        if isinstance(value, str):
            frozen[key] = value
        elif isinstance(value, Mapping):
            frozen[key] = _freeze(value, child_path)
        else:
            raise ScopeTreeError(
                f"Scope {child_path} must map to a description or a sub-tree, got {type(value).__name__}"
            )
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class ScopeTree:
    """Declared scope hierarchy plus the message for the fully-open scope ``*``."""

    individual_scopes: Mapping[str, ScopeNode]
    all_scopes_message: str

    def __post_init__(self) -> None:
        if not isinstance(self.individual_scopes, Mapping):
            raise ScopeTreeError("individual_scopes must be a mapping")
        if not isinstance(self.all_scopes_message, str):
            raise ScopeTreeError("all_scopes_message must be a string")
        object.__setattr__(self, "individual_scopes", _freeze(self.individual_scopes, ""))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScopeTree":
        """Build a tree from its declaration form.

        Accepts both ``individualScopes``/``allScopesMessage`` and the
        snake_case spelling of those keys.
        """
        scopes = data.get("individual_scopes", data.get("individualScopes"))
        message = data.get("all_scopes_message", data.get("allScopesMessage"))
        if scopes is None or message is None:
            raise ScopeTreeError("Scope tree declaration needs individual scopes and an all-scopes message")
        return cls(individual_scopes=scopes, all_scopes_message=message)


def lookup_child(node: Mapping[str, ScopeNode], segment: str) -> Tuple[Optional[ScopeNode], bool]:
    """Find *segment* under *node*, falling back to the wildcard key.

    Returns ``(child, via_wildcard)``; ``child`` is None when neither key exists.
    """
    child = node.get(segment)
    if child is not None:
        return child, False
    child = node.get(WILDCARD)
    return child, child is not None


def iter_leaves(
    node: Mapping[str, ScopeNode], prefix: Tuple[str, ...] = ()
) -> Iterator[Tuple[Tuple[str, ...], str]]:
    """Yield ``(key_path, template)`` for every leaf, depth-first in declaration order."""
    for key, value in node.items():
        path = prefix + (key,)
        if isinstance(value, str):
            yield path, value
        else:
            yield from iter_leaves(value, path)
