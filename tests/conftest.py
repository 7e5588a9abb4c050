"""Pytest fixtures shared by the scope engine and HTTP tests.

The reference tree mirrors a typical account: fixed user scopes, per-domain
scopes behind a wildcard key, and an admin wildcard leaf.
"""

import os
import sys
from pathlib import Path

import pytest
from starlette.testclient import TestClient

# ---------------------------------------------------------------------------
# Runtime env for the application
# ---------------------------------------------------------------------------

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Ensure project root on PYTHONPATH so `import typescope` works without install
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from typescope.main import create_app, limiter  # noqa: E402
from typescope.models import ScopeTree  # noqa: E402

TREE_DECLARATION = {
    "individualScopes": {
        "user": {
            "read": "Read user data",
            "write": "Write user data",
            "delete": "Delete user data",
        },
        "domain": {
            "*": {
                "read": "Read access to $1",
                "write": "Write access to $1",
            },
        },
        "admin": {
            "*": "Full admin access to $1",
        },
    },
    "allScopesMessage": "Full access to everything",
}

TREE = ScopeTree.from_mapping(TREE_DECLARATION)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def api_client() -> TestClient:  # noqa: D401 – simple alias
    return TestClient(create_app(TREE))
