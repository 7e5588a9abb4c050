"""Standard Schema adapter around :func:`validate_scopes`.

The validator follows the Standard Schema v1 result shape: ``{"value": ...}``
on success, ``{"issues": [{"message": ...}]}`` on failure. Failures always
carry the configured message only; the specific scope error is not exposed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from typescope.models.scopes import ScopeTree
from typescope.utils.scope_validation import validate_scopes

logger = logging.getLogger(__name__)

__all__ = ["ScopesStandardSchema", "create_scopes_standard_schema"]

VENDOR = "typescope"
STANDARD_VERSION = 1


@dataclass(frozen=True)
class ScopesStandardSchema:
    tree: ScopeTree
    message: str = "Invalid scopes"
    type: str = "scopes"

    @property
    def vendor(self) -> str:
        return VENDOR

    @property
    def version(self) -> int:
        return STANDARD_VERSION

    @property
    def standard(self) -> Dict[str, Any]:
        """The ``~standard`` property of the Standard Schema interface."""
        return {"version": STANDARD_VERSION, "vendor": VENDOR, "validate": self.validate}

    def validate(self, value: Any) -> Dict[str, List[Any]]:
        try:
            scopes = validate_scopes(self.tree, value)
        except Exception as exc:  # every failure collapses into the configured message
            logger.debug("scopes.rejected", extra={"reason": str(exc), "error": type(exc).__name__})
            return {"issues": [{"message": self.message}]}
        return {"value": scopes}


def create_scopes_standard_schema(tree: ScopeTree, message: str = "Invalid scopes") -> ScopesStandardSchema:
    """Return a Standard Schema validator that validates and collapses scopes."""
    return ScopesStandardSchema(tree=tree, message=message)
