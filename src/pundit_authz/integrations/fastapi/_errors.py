"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from pundit_authz.exceptions import NotAuthorizedError, PolicyNotFoundError

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI, *, denied_status: int = 403) -> None:
    """Install exception handlers for pundit-authz errors on a FastAPI app.

    - ``NotAuthorizedError`` -> 403 Forbidden (or *denied_status*)
    - ``PolicyNotFoundError`` -> 500 Internal Server Error

    Example::

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(NotAuthorizedError)
    async def not_authorized_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: NotAuthorizedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=denied_status,
            content={"detail": str(exc)},
        )

    @app.exception_handler(PolicyNotFoundError)
    async def policy_not_found_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: PolicyNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc)},
        )
