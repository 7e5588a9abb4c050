"""OpenAPI exposure helper – publishes /openapi.yaml with the scope catalogue.

The generated document declares an OAuth2 security scheme whose ``scopes``
map is built from the scope tree, so SDK generators and docs hosting see the
same scope names and descriptions the service validates against.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import yaml
from fastapi import FastAPI, Request, Response

from typescope.models import ScopeTree
from typescope.utils.scope_descriptions import build_scope_catalogue

__all__ = ["install_openapi_route", "scopes_security_scheme"]

SECURITY_SCHEME_NAME = "scopes"


def scopes_security_scheme(tree: ScopeTree, all_resolve_label: str, token_url: str = "/oauth/token") -> Dict[str, Any]:
    """OAuth2 client-credentials scheme listing every scope in *tree*."""
    return {
        "type": "oauth2",
        "flows": {
            "clientCredentials": {
                "tokenUrl": token_url,
                "scopes": build_scope_catalogue(tree, all_resolve_label),
            }
        },
    }


def install_openapi_route(app: FastAPI, tree: ScopeTree, all_resolve_label: str) -> None:  # noqa: D401
    """Attach a YAML OpenAPI exporter at /openapi.yaml.

    The route is *not* part of the schema itself (``include_in_schema=False``)
    and is public-cacheable for 5 minutes.
    """

    @app.get("/openapi.yaml", include_in_schema=False)
    async def _openapi_yaml(_: Request) -> Response:  # noqa: D401, WPS430
        spec = dict(app.openapi())
        components = dict(spec.get("components") or {})
        schemes = dict(components.get("securitySchemes") or {})
        schemes[SECURITY_SCHEME_NAME] = scopes_security_scheme(tree, all_resolve_label)
        components["securitySchemes"] = schemes
        spec["components"] = components

        yaml_str = yaml.safe_dump(spec, sort_keys=False)
        date_comment = f"# generated: {datetime.now(timezone.utc).date().isoformat()}\n"
        return Response(
            content=date_comment + yaml_str,
            media_type="application/x-yaml",
            headers={"Cache-Control": "public, max-age=300"},
        )
