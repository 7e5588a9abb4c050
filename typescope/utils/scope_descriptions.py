"""Human-readable scope descriptions.

Leaf templates may reference the values that matched wildcard keys on the way
down with ``$1``, ``$2``, ...::

    "domain": {"*": {"read": "Read access to $1"}}

    get_scope_descriptions(tree, "domain:prod:read", "ALL")
    # -> ["Read access to prod"]
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Sequence, Union

from typescope.models.scopes import (
    SEPARATOR,
    WILDCARD,
    ScopeNode,
    ScopeTree,
    iter_leaves,
    lookup_child,
)
from typescope.utils.scope_validation import InvalidScopeArgumentError, UnknownScopeError

__all__ = ["render_description", "get_scope_descriptions", "build_scope_catalogue"]

_PLACEHOLDER = re.compile(r"\$(\d+)")


def render_description(template: str, wildcard_resolves: Sequence[str]) -> str:
    """Substitute ``$N`` with ``wildcard_resolves[N-1]``; unknown indexes are left as-is."""
    if not wildcard_resolves:
        return template

    def _replace(match: "re.Match[str]") -> str:
        index = int(match.group(1)) - 1
        if 0 <= index < len(wildcard_resolves):
            return wildcard_resolves[index]
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


def _describe_subtree(
    node: Mapping[str, ScopeNode], wildcard_resolves: List[str], all_resolve_label: str
) -> List[str]:
    descriptions = []
    for key_path, template in iter_leaves(node):
        # Only wildcard branches on the way down add a resolve; the leaf key never does.
        extra = [all_resolve_label for key in key_path[:-1] if key == WILDCARD]
        descriptions.append(render_description(template, wildcard_resolves + extra))
    return descriptions


def get_scope_descriptions(
    tree: ScopeTree, scope: Any, all_resolve_label: str
) -> Union[str, List[str]]:
    """
    Describe *scope* using the templates declared in *tree*.

    Returns the tree's all-scopes message (a bare string) for ``"*"``, and a
    list otherwise: one entry for a concrete scope, every leaf beneath the
    branch for a wildcard scope, and an empty list for a scope that stops on
    a branch.

    Raises:
        InvalidScopeArgumentError: If *scope* is not a string.
        UnknownScopeError: If a fragment does not exist in the tree.
    """
    if not isinstance(scope, str):
        raise InvalidScopeArgumentError("scope must be a string")

    if scope == WILDCARD:
        return tree.all_scopes_message

    node: Mapping[str, ScopeNode] = tree.individual_scopes
    wildcard_resolves: List[str] = []
    for fragment in scope.split(SEPARATOR):
        if fragment == WILDCARD:
            wildcard_resolves.append(all_resolve_label)
            return _describe_subtree(node, wildcard_resolves, all_resolve_label)

        child, via_wildcard = lookup_child(node, fragment)
        if child is None:
            raise UnknownScopeError(scope, fragment)
        if via_wildcard:
            wildcard_resolves.append(fragment)

        if isinstance(child, str):
            return [render_description(child, wildcard_resolves)]
        node = child

    return []


def build_scope_catalogue(tree: ScopeTree, all_resolve_label: str) -> Dict[str, str]:
    """Map every grantable scope pattern in *tree* to a description.

    Includes ``*``, a ``<branch>:*`` entry for each non-wildcard branch, and
    every leaf path (wildcard keys kept as ``*``).
    """
    catalogue: Dict[str, str] = {WILDCARD: tree.all_scopes_message}

    def _walk(node: Mapping[str, ScopeNode], path: List[str]) -> None:
        for key, value in node.items():
            child_path = path + [key]
            scope = SEPARATOR.join(child_path)
            if isinstance(value, str):
                resolves = [all_resolve_label for part in child_path if part == WILDCARD]
                catalogue.setdefault(scope, render_description(value, resolves))
                continue
            if WILDCARD not in child_path:
                wildcard_scope = f"{scope}{SEPARATOR}{WILDCARD}"
                catalogue[wildcard_scope] = "; ".join(
                    get_scope_descriptions(tree, wildcard_scope, all_resolve_label)
                )
            _walk(value, child_path)

    _walk(tree.individual_scopes, [])
    return catalogue
