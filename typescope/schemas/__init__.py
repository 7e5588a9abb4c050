"""Validation adapters that plug the scope engine into other conventions.

``create_scopes_standard_schema`` follows the Standard Schema result shape;
``scopes_type`` builds a pydantic field type::

    class TokenCreateRequest(BaseModel):
        scopes: scopes_type(TREE)
"""

from __future__ import annotations

from typing import Annotated, Any, List

from pydantic import PlainValidator

from typescope.models.scopes import ScopeTree
from typescope.schemas.standard import ScopesStandardSchema, create_scopes_standard_schema


def scopes_type(tree: ScopeTree, message: str = "Invalid scopes") -> Any:
    """Return ``Annotated[list[str], ...]`` that validates and collapses scopes.

    Any scope error surfaces as a pydantic ``ValidationError`` carrying only
    *message*, mirroring the Standard Schema adapter.
    """
    schema = create_scopes_standard_schema(tree, message)

    def _validate(value: Any) -> List[str]:
        result = schema.validate(value)
        if "issues" in result:
            raise ValueError(message)
        return result["value"]

    return Annotated[List[str], PlainValidator(_validate)]


__all__ = [
    "ScopesStandardSchema",
    "create_scopes_standard_schema",
    "scopes_type",
]
