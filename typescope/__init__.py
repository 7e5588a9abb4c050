"""Hierarchical, colon-delimited permission scopes.

Core operations::

    from typescope import ScopeTree, validate_scopes, has_scope, get_scope_descriptions
"""

__all__ = [
    "ScopeTree",
    "ScopeError",
    "ScopeTreeError",
    "InvalidScopeArgumentError",
    "UnknownScopeError",
    "MalformedScopeError",
    "validate_scopes",
    "has_scope",
    "get_scope_descriptions",
    "build_scope_catalogue",
    "create_scopes_standard_schema",
    "ScopesStandardSchema",
]

from typescope.models.scopes import ScopeError, ScopeTree, ScopeTreeError
from typescope.schemas.standard import ScopesStandardSchema, create_scopes_standard_schema
from typescope.utils.scope_descriptions import build_scope_catalogue, get_scope_descriptions
from typescope.utils.scope_matching import has_scope
from typescope.utils.scope_validation import (
    InvalidScopeArgumentError,
    MalformedScopeError,
    UnknownScopeError,
    validate_scopes,
)
