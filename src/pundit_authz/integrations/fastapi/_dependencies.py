"""FastAPI dependencies for pundit-authz authorization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from fastapi import Depends, Request

from pundit_authz._dispatch import PolicyRef, authorize, permitted
from pundit_authz.config._config import AuthzConfig, get_global_config
from pundit_authz.policy._registry import PolicyRegistry, get_default_registry

__all__ = [
    "Authorize",
    "Authorizer",
    "get_actor",
    "get_authorizer",
    "get_authz_config",
    "get_policy_registry",
]

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Sentinel dependency functions for DI-based configuration
# ---------------------------------------------------------------------------


def get_actor(request: Request) -> Any:
    """Sentinel dependency — override via ``app.dependency_overrides[get_actor]``.

    Raises ``NotImplementedError`` if not overridden, ensuring users
    configure their actor provider before using ``Authorize``.

    Example::

        from pundit_authz.integrations.fastapi import get_actor

        app.dependency_overrides[get_actor] = my_get_current_user
    """
    raise NotImplementedError(
        "Override get_actor via app.dependency_overrides[get_actor]. "
        "See pundit-authz docs for configuration guide."
    )


def get_policy_registry() -> PolicyRegistry:
    """Registry used by the dependencies. Override to supply a custom one."""
    return get_default_registry()


def get_authz_config() -> AuthzConfig:
    """Config used by the dependencies. Override to supply a per-app config.

    Example::

        app.dependency_overrides[get_authz_config] = lambda: AuthzConfig(
            on_missing_policy="deny"
        )
    """
    return get_global_config()


def _route_name(request: Request) -> str | None:
    route = request.scope.get("route")
    return getattr(route, "name", None)


# ---------------------------------------------------------------------------
# Authorizer bound to the current route
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Authorizer:
    """``authorize``/``permitted`` bound to one request's route and actor.

    Attributes:
        handler: The route name used as handler identity.
        actor: The current user.
        registry: The policy registry to resolve against.
        config: Config for the checks; ``None`` uses the global config.
    """

    handler: str | None
    actor: Any
    registry: PolicyRegistry
    config: AuthzConfig | None = None

    def __call__(
        self,
        record: T | None = None,
        *,
        policy: PolicyRef | None = None,
        query: str | None = None,
    ) -> T | None:
        return authorize(
            self.handler,
            self.actor,
            record,
            policy=policy,
            query=query,
            registry=self.registry,
            config=self.config,
        )

    def permitted(
        self,
        record: Any = None,
        *,
        policy: PolicyRef | None = None,
        query: str | None = None,
    ) -> bool:
        return permitted(
            self.handler,
            self.actor,
            record,
            policy=policy,
            query=query,
            registry=self.registry,
            config=self.config,
        )


def get_authorizer(
    request: Request,
    actor: Any = Depends(get_actor),
    registry: PolicyRegistry = Depends(get_policy_registry),
    config: AuthzConfig = Depends(get_authz_config),
) -> Authorizer:
    """Dependency returning an ``Authorizer`` for record-level checks.

    Example::

        @app.put("/books/{book_id}", name="books.update")
        def update_book(book_id: int, authz: Authorizer = Depends(get_authorizer)):
            book = authz(load_book(book_id))
            ...
    """
    return Authorizer(
        handler=_route_name(request), actor=actor, registry=registry, config=config
    )


def Authorize(
    *,
    handler: str | None = None,
    policy: PolicyRef | None = None,
    query: str | None = None,
) -> Any:
    """FastAPI dependency that authorizes a route before it runs.

    The handler identity is the route ``name`` unless *handler* is given,
    so name routes after their namespace (``name="books.index"``).
    Record-less: use ``get_authorizer`` for checks against a record.

    Args:
        handler: Explicit handler identity.
        policy: Explicit policy class or registered name.
        query: Explicit query.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        @app.get("/books", name="books.index", dependencies=[Authorize()])
        def list_books(): ...

        @app.get("/reports", dependencies=[Authorize(policy="ReportPolicy", query="show?")])
        def reports(): ...
    """

    def _authorize(authz: Authorizer = Depends(get_authorizer)) -> None:
        authorize(
            handler if handler is not None else authz.handler,
            authz.actor,
            policy=policy,
            query=query,
            registry=authz.registry,
            config=authz.config,
        )

    return Depends(_authorize)
