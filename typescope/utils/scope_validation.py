"""Scope list validation and wildcard collapsing."""

from __future__ import annotations

import logging
from typing import Any, List

from typescope.models.scopes import (
    SEPARATOR,
    WILDCARD,
    ScopeError,
    ScopeTree,
    is_valid_segment,
    lookup_child,
)

logger = logging.getLogger(__name__)

__all__ = [
    "InvalidScopeArgumentError",
    "UnknownScopeError",
    "MalformedScopeError",
    "ensure_scope_list",
    "validate_scopes",
]


class InvalidScopeArgumentError(ScopeError, TypeError):
    """Raised when a caller passes a non-list or non-string where scopes are expected."""


class UnknownScopeError(ScopeError, ValueError):
    """Raised when a scope fragment has no entry in the scope tree."""

    def __init__(self, scope: str, fragment: str):
        super().__init__(
            f"Scope {scope} is not valid because the scope fragment {fragment} does not exist."
        )
        self.scope = scope
        self.fragment = fragment


class MalformedScopeError(ScopeError, ValueError):
    """Raised when a scope does not line up with the shape of the tree."""

    def __init__(self, scope: str, reason: str):
        super().__init__(f"Scope {scope} is not valid because {reason}.")
        self.scope = scope
        self.reason = reason


def ensure_scope_list(value: Any, name: str) -> List[str]:
    """Raise InvalidScopeArgumentError unless *value* is a list/tuple of strings."""
    if not isinstance(value, (list, tuple)):
        raise InvalidScopeArgumentError(f"{name} must be a list")
    if not all(isinstance(item, str) for item in value):
        raise InvalidScopeArgumentError(f"{name} must be a list of strings")
    return list(value)


def validate_scopes(tree: ScopeTree, scopes: Any) -> List[str]:
    """
    Validate untrusted scopes against *tree* and collapse them under wildcards.

    Scopes are processed shortest first (stable sort on length, wildcard
    scopes first among equal lengths) so a wildcard such as ``domain:*`` is
    accepted before any ``domain:...`` scope it subsumes; those later scopes
    are dropped.

    Args:
        tree: The declared scope tree.
        scopes: Candidate scope strings.

    Returns:
        Accepted scopes in acceptance order.

    Raises:
        InvalidScopeArgumentError: If *scopes* is not a list of strings.
        UnknownScopeError: If a fragment does not exist in the tree.
        MalformedScopeError: If a scope breaks the grammar, runs past a leaf,
            or stops on a sub-tree without a trailing wildcard.
    """
    candidates = ensure_scope_list(scopes, "scopes")

    accepted: List[str] = []
    # Equal length ties put wildcard scopes first so `admin:*` is accepted
    # before `admin:x`.
    ordered = sorted(candidates, key=lambda s: (len(s), not s.endswith(WILDCARD)))
    for scope in ordered:
        fragments = scope.split(SEPARATOR)
        if not all(is_valid_segment(fragment) for fragment in fragments):
            raise MalformedScopeError(scope, "it contains an empty fragment or whitespace")

        # The fully-open scope covers everything accepted after it.
        if WILDCARD in accepted:
            logger.debug("scope.collapsed", extra={"scope": scope, "into": WILDCARD})
            continue

        node = tree.individual_scopes
        prefix = ""
        for index, fragment in enumerate(fragments):
            if fragment == WILDCARD:
                accepted.append(scope)
                break

            prefix = f"{prefix}{SEPARATOR}{fragment}" if prefix else fragment
            if f"{prefix}{SEPARATOR}{WILDCARD}" in accepted:
                logger.debug(
                    "scope.collapsed",
                    extra={"scope": scope, "into": f"{prefix}{SEPARATOR}{WILDCARD}"},
                )
                break

            child, _ = lookup_child(node, fragment)
            if child is None:
                raise UnknownScopeError(scope, fragment)

            if isinstance(child, str):
                if index < len(fragments) - 1:
                    raise MalformedScopeError(
                        scope, "it hit a leaf and there are more scope fragments"
                    )
                accepted.append(scope)
                break

            node = child
        else:
            raise MalformedScopeError(scope, "it ends on a branch; use a trailing wildcard")

    return accepted
