"""ApplicationPolicy — base class for per-model authorization policies."""

from __future__ import annotations

from typing import Any, Generic

from sqlalchemy import Select, false

from pundit_authz._naming import bare_query, normalize_query
from pundit_authz._types import RecordT
from pundit_authz.config._config import AuthzConfig
from pundit_authz.exceptions import UnknownQueryError

__all__ = ["ApplicationPolicy"]

_RESERVED_QUERIES: frozenset[str] = frozenset({"query", "user", "record", "Scope"})


class ApplicationPolicy(Generic[RecordT]):
    """Default-deny policy answering the standard CRUD questions.

    Subclasses override individual query methods using ``self.user``
    (the actor, possibly ``None``) and ``self.record`` (the subject
    record, possibly ``None``).

    ============  ==================
    Query         Default
    ============  ==================
    ``index``     ``False``
    ``show``      ``False``
    ``create``    ``False``
    ``new``       ``create()``
    ``update``    ``False``
    ``edit``      ``update()``
    ``delete``    ``False``
    ============  ==================

    ``query``, ``user``, ``record``, ``Scope`` and names starting with
    ``_`` are reserved and never answer a query, so a handler such as
    ``Reports::Query`` cannot rely on the naming convention. Map it to
    another query instead::

        registry.map_handler("Reports::Query", query="search?")

    Example::

        @policy(model=Book)
        class BookPolicy(ApplicationPolicy[Book]):
            def index(self) -> bool:
                return True

            def update(self) -> bool:
                return self.user is not None and self.record.owner_id == self.user.id
    """

    __slots__ = ("_user", "_record")

    def __init__(self, user: Any, record: RecordT | None = None) -> None:
        self._user = user
        self._record = record

    @property
    def user(self) -> Any:
        """The actor being authorized."""
        return self._user

    @property
    def record(self) -> RecordT | None:
        """The subject record, if any."""
        return self._record

    def index(self) -> bool:
        return False

    def show(self) -> bool:
        return False

    def create(self) -> bool:
        return False

    def new(self) -> bool:
        return self.create()

    def update(self) -> bool:
        return False

    def edit(self) -> bool:
        return self.update()

    def delete(self) -> bool:
        return False

    def query(self, name: str, *, config: AuthzConfig | None = None) -> bool:
        """Answer the query *name* (``"index?"`` or ``"index"``).

        Raises:
            UnknownQueryError: If the policy has no such query method.

        Example::

            BookPolicy(current_user, book).query("update?")
        """
        method_name = bare_query(name, config=config)
        method = None
        if method_name not in _RESERVED_QUERIES and not method_name.startswith("_"):
            method = getattr(self, method_name, None)
        if not callable(method):
            raise UnknownQueryError(
                policy=type(self).__name__,
                query=normalize_query(name, config=config),
            )
        return bool(method())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(user={self._user!r}, record={self._record!r})"

    class Scope:
        """Narrows a SELECT to the rows the actor may see.

        The default ``resolve()`` returns no rows. Override it in a
        policy's own ``Scope``::

            class BookPolicy(ApplicationPolicy[Book]):
                class Scope(ApplicationPolicy.Scope):
                    def resolve(self):
                        return self.scope.where(Book.is_published == True)
        """

        def __init__(self, user: Any, scope: Select[Any]) -> None:
            self.user = user
            self.scope = scope

        def resolve(self) -> Select[Any]:
            return self.scope.where(false())
