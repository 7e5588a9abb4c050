"""Scope endpoints: catalogue, validation, matching and descriptions.

The scope tree lives on ``app.state.scope_tree`` (see ``create_app``); every
route reads it through :func:`get_scope_tree`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from typescope.models import (
    ScopeCatalogueResponse,
    ScopeCheckRequest,
    ScopeCheckResponse,
    ScopeDescriptionResponse,
    ScopesRequest,
    ScopesResponse,
    ScopeTree,
    StandardSchemaRequest,
)
from typescope.models.scopes import ScopeError
from typescope.schemas import create_scopes_standard_schema
from typescope.utils.logger import logger
from typescope.utils.scope_descriptions import build_scope_catalogue, get_scope_descriptions
from typescope.utils.scope_matching import has_scope
from typescope.utils.scope_validation import (
    InvalidScopeArgumentError,
    MalformedScopeError,
    UnknownScopeError,
    validate_scopes,
)

router = APIRouter(prefix="/v1/scopes", tags=["scopes"])


def get_scope_tree(request: Request) -> ScopeTree:
    return request.app.state.scope_tree


def _all_label(request: Request, override: Optional[str]) -> str:
    return override if override is not None else request.app.state.all_resolve_label


def _error_detail(exc: ScopeError) -> str:
    if isinstance(exc, UnknownScopeError):
        return "unknown_scope"
    if isinstance(exc, MalformedScopeError):
        return "malformed_scope"
    if isinstance(exc, InvalidScopeArgumentError):
        return "invalid_scopes"
    return "scope_error"


@router.get("", response_model=ScopeCatalogueResponse)
async def list_scopes(
    request: Request,
    all_label: Optional[str] = Query(None, description="Label substituted for wildcard placeholders"),
    tree: ScopeTree = Depends(get_scope_tree),
):
    """Return every grantable scope pattern with its description."""
    return ScopeCatalogueResponse(scopes=build_scope_catalogue(tree, _all_label(request, all_label)))


@router.post("/validate", response_model=ScopesResponse)
async def validate(payload: ScopesRequest, tree: ScopeTree = Depends(get_scope_tree)):
    """Validate a scope list and collapse it under wildcards."""
    try:
        scopes = validate_scopes(tree, payload.scopes)
    except ScopeError as exc:
        logger.info("scopes.invalid", extra={"error": str(exc)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=_error_detail(exc))
    return ScopesResponse(scopes=scopes)


@router.post("/check", response_model=ScopeCheckResponse)
async def check(payload: ScopeCheckRequest):
    """Report whether ``granted`` covers ``scope``."""
    return ScopeCheckResponse(allowed=has_scope(payload.scope, payload.granted))


@router.get("/describe", response_model=ScopeDescriptionResponse)
async def describe(
    request: Request,
    scope: str = Query(..., description="Scope to describe", examples=["domain:prod:read"]),
    all_label: Optional[str] = Query(None, description="Label substituted for wildcard placeholders"),
    tree: ScopeTree = Depends(get_scope_tree),
):
    """Resolve the human-readable descriptions of a scope."""
    try:
        descriptions = get_scope_descriptions(tree, scope, _all_label(request, all_label))
    except ScopeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=_error_detail(exc))
    return ScopeDescriptionResponse(scope=scope, descriptions=descriptions)


@router.post("/schema")
async def standard_schema(
    request: Request,
    payload: StandardSchemaRequest,
    tree: ScopeTree = Depends(get_scope_tree),
) -> Dict[str, Any]:
    """Run the Standard Schema validator; failures are reported as issues, never as 4xx."""
    schema = create_scopes_standard_schema(tree, request.app.state.invalid_scopes_message)
    return schema.validate(payload.scopes)
