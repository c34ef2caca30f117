"""FastAPI integration for pundit-authz."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install pundit-authz[fastapi]"
    ) from exc

from pundit_authz.integrations.fastapi._dependencies import (
    Authorize,
    Authorizer,
    get_actor,
    get_authorizer,
    get_authz_config,
    get_policy_registry,
)
from pundit_authz.integrations.fastapi._errors import install_error_handlers

__all__ = [
    "Authorize",
    "Authorizer",
    "get_actor",
    "get_authorizer",
    "get_authz_config",
    "get_policy_registry",
    "install_error_handlers",
]
