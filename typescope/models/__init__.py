"""Unified models namespace – scope tree, auth context and API models.

Call-sites can simply::

    from typescope.models import ScopeTree, AuthContext, ScopesRequest
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from typescope.models.scopes import (
    SEPARATOR,
    WILDCARD,
    ScopeError,
    ScopeNode,
    ScopeTree,
    ScopeTreeError,
    is_valid_segment,
    iter_leaves,
    lookup_child,
)
from typescope.utils.scope_matching import has_scope

# ---------------------------------------------------------------------------
# Authorization context
# ---------------------------------------------------------------------------

@dataclass
class AuthContext:
    """Scopes granted to the caller of a request.

    ``scopes`` is whatever the upstream authentication layer attached; checks
    go through the hierarchical matcher so ``domain:*`` covers
    ``domain:prod:read``.
    """
    subject: Optional[str] = None
    scopes: List[str] = field(default_factory=list)

    def has_scope(self, scope: str) -> bool:
        """Check if the granted scopes cover *scope*."""
        return has_scope(scope, self.scopes)

    def has_any_scope(self, *scopes: str) -> bool:
        """Check if the granted scopes cover any of the given scopes."""
        return any(self.has_scope(scope) for scope in scopes)

# ---------------------------------------------------------------------------
# API Pydantic models
# ---------------------------------------------------------------------------

class ScopesRequest(BaseModel):
    scopes: List[str] = Field(..., description="Candidate scope strings", examples=[["user:read", "domain:*"]])


class ScopesResponse(BaseModel):
    scopes: List[str] = Field(..., description="Validated scopes, collapsed under wildcards")


class ScopeCheckRequest(BaseModel):
    scope: str = Field(..., description="Requested scope", examples=["domain:prod:read"])
    granted: List[str] = Field(default_factory=list, description="Scopes held by the caller")


class ScopeCheckResponse(BaseModel):
    allowed: bool


class ScopeDescriptionResponse(BaseModel):
    scope: str
    descriptions: Union[str, List[str]] = Field(
        ..., description="All-scopes message for '*', otherwise one entry per resolved leaf"
    )


class ScopeCatalogueResponse(BaseModel):
    scopes: Dict[str, str] = Field(..., description="Grantable scope → description")


class StandardSchemaRequest(BaseModel):
    scopes: Any = Field(None, description="Untrusted value handed to the Standard Schema validator")


__all__ = [
    # Scope tree
    "SEPARATOR",
    "WILDCARD",
    "ScopeError",
    "ScopeNode",
    "ScopeTree",
    "ScopeTreeError",
    "is_valid_segment",
    "iter_leaves",
    "lookup_child",
    # Auth
    "AuthContext",
    # API
    "ScopesRequest",
    "ScopesResponse",
    "ScopeCheckRequest",
    "ScopeCheckResponse",
    "ScopeDescriptionResponse",
    "ScopeCatalogueResponse",
    "StandardSchemaRequest",
]
