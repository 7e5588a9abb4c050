"""Service-level configuration helpers (env → constants).

Only the HTTP layer reads these; the scope engine itself takes every input
as an argument.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

__all__ = [
    "APP_ENV",
    "LOG_LEVEL",
    "ALLOWED_ORIGINS",
    "ALL_RESOLVE_LABEL",
    "INVALID_SCOPES_MESSAGE",
    "RATE_LIMIT",
]


def _collect_origins() -> list[str]:
    """Collect allowed CORS origins from ``SCOPES_ALLOWED_ORIGINS`` (comma-separated)."""
    raw = os.getenv("SCOPES_ALLOWED_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


APP_ENV: str = os.getenv("APP_ENV", "production")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
ALLOWED_ORIGINS: list[str] = _collect_origins()

# Label substituted for ``$N`` when a description is resolved through a wildcard.
ALL_RESOLVE_LABEL: str = os.getenv("SCOPES_ALL_RESOLVE_LABEL", "ALL")
INVALID_SCOPES_MESSAGE: str = os.getenv("SCOPES_INVALID_MESSAGE", "Invalid scopes")
RATE_LIMIT: str = os.getenv("SCOPES_RATE_LIMIT", "60/minute")
