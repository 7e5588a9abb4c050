"""Application factory for the scopes service.

``create_app`` wires global middleware, the scope routes and the OpenAPI
export around a caller-supplied scope tree::

    from typescope.main import create_app
    app = create_app(ScopeTree(individual_scopes={...}, all_scopes_message="..."))
"""

from __future__ import annotations

from time import perf_counter
from typing import Awaitable, Callable, Dict, Optional
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from typescope import settings
from typescope.models import ScopeTree
from typescope.openapi import install_openapi_route
from typescope.routers import scopes_routes
from typescope.utils.logger import configure_logging, logger

# Rate limiter (IP-based by default)
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.RATE_LIMIT])


class ScopeRequestLogMiddleware(BaseHTTPMiddleware):
    """Log one ``request.complete`` line per request with the caller's scope context.

    The request id comes from ``X-Request-Id`` when the caller sends one and is
    echoed back; it is also left on ``request.state.request_id`` for handlers.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # type: ignore[override]
        started = perf_counter()
        request.state.request_id = request.headers.get("X-Request-Id") or uuid4().hex[:8]
        response = await call_next(request)

        granted = getattr(request.state, "scopes", None) or []
        logger.info(
            "request.complete",
            extra={
                "request_id": request.state.request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "subject": getattr(request.state, "subject", None),
                "granted_scopes": len(granted),
                "duration_ms": round((perf_counter() - started) * 1000, 2),
            },
        )
        response.headers["X-Request-Id"] = request.state.request_id
        return response


def create_app(
    tree: ScopeTree,
    *,
    all_resolve_label: Optional[str] = None,
    invalid_message: Optional[str] = None,
) -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Scopes API",
        version="0.1.0",
        docs_url="/docs" if settings.APP_ENV != "production" else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.APP_ENV != "production" else None,
    )

    app.state.scope_tree = tree
    app.state.all_resolve_label = all_resolve_label or settings.ALL_RESOLVE_LABEL
    app.state.invalid_scopes_message = invalid_message or settings.INVALID_SCOPES_MESSAGE

    # Global middleware
    app.add_middleware(ScopeRequestLogMiddleware)
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    if settings.ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Authorization", "Content-Type"],
            max_age=600,
        )

    # Health check
    @app.get("/")
    async def root() -> Dict[str, str]:  # pylint: disable=unused-variable
        return {"status": "ok"}

    app.include_router(scopes_routes.router)
    install_openapi_route(app, tree, app.state.all_resolve_label)

    return app
