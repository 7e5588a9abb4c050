"""FastAPI dependency factory that asserts the caller holds *all* expected scopes.

Usage:

    from typescope.utils.require_scope import require_scope

    @router.get("/v1/domains/{name}", dependencies=[Depends(require_scope("domain:*:read"))])
    async def read_domain(...):
        ...

Granted scopes are read from ``request.state.scopes``, which an upstream
authentication layer is expected to populate. Matching is hierarchical, so a
caller holding ``domain:*`` satisfies ``domain:prod:read``.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from typescope import settings
from typescope.models import AuthContext
from typescope.models.scopes import WILDCARD
from typescope.utils.logger import logger
from typescope.utils.scope_matching import has_scope


def get_auth_context(request: Request) -> AuthContext:
    """Build an AuthContext from what the authentication layer attached to the request."""
    scopes = list(getattr(request.state, "scopes", None) or [])
    subject = getattr(request.state, "subject", None)

    # Development bypass: nothing attached ⇒ unrestricted
    if not scopes and settings.APP_ENV == "development":
        scopes = [WILDCARD]

    return AuthContext(subject=subject, scopes=scopes)


def require_scope(*expected_scopes: str):  # noqa: D401 – factory function
    """Return a FastAPI dependency that validates the caller's granted scopes."""

    expected = list(expected_scopes)

    async def _checker(request: Request) -> AuthContext:
        """Ensure the caller covers every expected scope and return AuthContext."""

        auth = get_auth_context(request)
        missing = [scope for scope in expected if not has_scope(scope, auth.scopes)]
        if missing:
            logger.warning(
                "scope.denied",
                extra={
                    "subject": auth.subject,
                    "required_scopes": expected,
                    "missing_scopes": missing,
                    "path": request.url.path,
                },
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="insufficient_scope",
            )

        request.state.auth = auth  # type: ignore[attr-defined]
        return auth

    return _checker
