"""Flask extension for pundit-authz authorization."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from flask import Flask, current_app, jsonify, request
from sqlalchemy import Select

from pundit_authz._dispatch import PolicyRef, authorize, permitted, policy_scope
from pundit_authz.config._config import AuthzConfig
from pundit_authz.exceptions import NotAuthorizedError, PolicyNotFoundError
from pundit_authz.policy._registry import PolicyRegistry

__all__ = ["AuthzExtension"]

T = TypeVar("T")


class AuthzExtension:
    """Flask extension that authorizes view functions by endpoint name.

    The handler identity is ``request.endpoint``: a view ``index`` in a
    blueprint ``books`` authorizes against ``BookPolicy.index``. Error
    handlers turn ``NotAuthorizedError`` into a 403 JSON response.

    Supports the Flask app-factory pattern via ``init_app()``.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        actor_provider: A callable ``() -> actor`` returning the current
            user. Called within request context.
        registry: Optional policy registry. Defaults to the global registry.
        config: Optional config. Defaults to the global config.
        denied_status: HTTP status for ``NotAuthorizedError``.

    Example::

        app = Flask(__name__)
        authz = AuthzExtension(app, actor_provider=lambda: g.user)

        books = Blueprint("books", __name__)

        @books.post("/books/<int:book_id>")
        def update(book_id):
            book = authz.authorize(load_book(book_id))
            ...
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        actor_provider: Callable[[], Any],
        registry: PolicyRegistry | None = None,
        config: AuthzConfig | None = None,
        denied_status: int = 403,
    ) -> None:
        self._actor_provider = actor_provider
        self._registry = registry
        self._config = config
        self._denied_status = denied_status

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores configuration on ``app.extensions["pundit_authz"]`` and
        registers error handlers for authorization exceptions.
        """
        app.extensions["pundit_authz"] = {
            "actor_provider": self._actor_provider,
            "registry": self._registry,
            "config": self._config,
        }
        denied_status = self._denied_status

        @app.errorhandler(NotAuthorizedError)
        def handle_not_authorized(exc: NotAuthorizedError):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), denied_status

        @app.errorhandler(PolicyNotFoundError)
        def handle_policy_not_found(exc: PolicyNotFoundError):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 500

    def _state(self) -> dict[str, Any]:
        return current_app.extensions["pundit_authz"]

    def authorize(
        self,
        record: T | None = None,
        *,
        policy: PolicyRef | None = None,
        query: str | None = None,
    ) -> T | None:
        """Authorize the current user for the current endpoint.

        Must be called within a Flask request context.

        Raises:
            NotAuthorizedError: If the policy query answers ``False``.
        """
        state = self._state()
        return authorize(
            request.endpoint,
            state["actor_provider"](),
            record,
            policy=policy,
            query=query,
            registry=state["registry"],
            config=state["config"],
        )

    def permitted(
        self,
        record: Any = None,
        *,
        policy: PolicyRef | None = None,
        query: str | None = None,
    ) -> bool:
        """Return whether the current user passes the endpoint's policy query."""
        state = self._state()
        return permitted(
            request.endpoint,
            state["actor_provider"](),
            record,
            policy=policy,
            query=query,
            registry=state["registry"],
            config=state["config"],
        )

    def policy_scope(
        self,
        stmt: Select[Any],
        *,
        policy: PolicyRef | None = None,
    ) -> Select[Any]:
        """Narrow *stmt* with the current user's policy scope."""
        state = self._state()
        return policy_scope(
            state["actor_provider"](),
            stmt,
            policy=policy,
            registry=state["registry"],
            config=state["config"],
        )
