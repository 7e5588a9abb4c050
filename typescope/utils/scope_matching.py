"""Wildcard-aware scope matching."""

from __future__ import annotations

from typing import Any

from typescope.models.scopes import SEPARATOR, WILDCARD
from typescope.utils.scope_validation import InvalidScopeArgumentError, ensure_scope_list

__all__ = ["has_scope"]


def has_scope(requested: Any, granted: Any) -> bool:
    """Return True if *requested* is covered by at least one scope in *granted*.

    Segments are compared position by position up to the length of
    *requested*. A ``*`` in the requested scope accepts anything at that
    position; a ``*`` in a granted scope covers everything beneath it.

    >>> has_scope("user:read", ["user:*"])
    True
    >>> has_scope("domain:*", ["domain:test:read"])
    True
    >>> has_scope("user:write", ["user:read"])
    False
    """
    candidates = ensure_scope_list(granted, "granted")
    if not isinstance(requested, str):
        raise InvalidScopeArgumentError("scope must be a string")

    wanted = requested.split(SEPARATOR)
    for candidate in candidates:
        fragments = candidate.split(SEPARATOR)
        for position, wanted_fragment in enumerate(wanted):
            if wanted_fragment == WILDCARD:
                continue
            fragment = fragments[position] if position < len(fragments) else None
            if fragment == WILDCARD:
                return True
            if fragment != wanted_fragment:
                break
        else:
            return True

    return False
