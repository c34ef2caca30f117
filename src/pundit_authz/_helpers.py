"""ActionHelpers — ``authorize`` entry point for class-based handlers."""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from sqlalchemy import Select

from pundit_authz._dispatch import PolicyRef, authorize, permitted, policy_scope
from pundit_authz.config._config import AuthzConfig
from pundit_authz.policy._registry import PolicyRegistry

__all__ = ["ActionHelpers"]

T = TypeVar("T")


class ActionHelpers:
    """Mixin giving handler classes an inferred ``authorize`` call.

    Subclasses provide ``current_user``. The handler identity defaults
    to the class ``__qualname__``, so a handler declared as ``Index``
    inside a ``Books`` namespace class authorizes against
    ``BookPolicy.index``. Set ``handler_name`` to name it explicitly.

    Example::

        class Books:
            class Index(BaseHandler, ActionHelpers):
                def get(self):
                    self.authorize()
                    return render("books/index.html")

            class Update(BaseHandler, ActionHelpers):
                handler_name = "Books::Update"

                def post(self, book_id):
                    book = self.authorize(load_book(book_id))
                    ...
    """

    handler_name: ClassVar[str | None] = None
    policy_registry: ClassVar[PolicyRegistry | None] = None
    authz_config: ClassVar[AuthzConfig | None] = None

    @property
    def current_user(self) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} must define current_user to use authorize()"
        )

    def _handler_identity(self) -> str:
        if self.handler_name is not None:
            return self.handler_name
        return type(self).__qualname__

    def authorize(
        self,
        record: T | None = None,
        *,
        policy: PolicyRef | None = None,
        query: str | None = None,
    ) -> T | None:
        """Authorize the current user for this handler; raise on denial."""
        return authorize(
            self._handler_identity(),
            self.current_user,
            record,
            policy=policy,
            query=query,
            registry=self.policy_registry,
            config=self.authz_config,
        )

    def permitted(
        self,
        record: Any = None,
        *,
        policy: PolicyRef | None = None,
        query: str | None = None,
    ) -> bool:
        return permitted(
            self._handler_identity(),
            self.current_user,
            record,
            policy=policy,
            query=query,
            registry=self.policy_registry,
            config=self.authz_config,
        )

    def policy_scope(self, stmt: Select[Any], *, policy: PolicyRef | None = None) -> Select[Any]:
        return policy_scope(
            self.current_user,
            stmt,
            policy=policy,
            registry=self.policy_registry,
            config=self.authz_config,
        )
