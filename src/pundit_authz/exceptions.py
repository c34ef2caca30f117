"""Exception hierarchy for pundit-authz."""

from __future__ import annotations

__all__ = [
    "AuthzError",
    "NotAuthorizedError",
    "PolicyNotFoundError",
    "UnknownQueryError",
]


class AuthzError(Exception):
    """Base exception for all pundit-authz errors."""


class NotAuthorizedError(AuthzError):
    """A policy query answered ``False``.

    Host applications catch this to produce an HTTP response (the Flask
    and FastAPI integrations map it to 403).

    Attributes:
        query: The query that was asked (e.g. ``"update?"``).
        policy: The policy instance that answered, if any.
        record: The subject record being authorized, if any.

    Example::

        try:
            authorize("Books::Update", current_user, book)
        except NotAuthorizedError as exc:
            print(exc.query, exc.record)
    """

    def __init__(
        self,
        *,
        query: str | None = None,
        policy: object | None = None,
        record: object | None = None,
        message: str | None = None,
    ) -> None:
        self.query = query
        self.policy = policy
        self.record = record
        if message is None:
            if query is None:
                message = "not allowed"
            elif record is None:
                message = f"not allowed to {query}"
            else:
                message = f"not allowed to {query} this {type(record).__name__}"
        super().__init__(message)


class PolicyNotFoundError(AuthzError):
    """No policy class could be resolved for a handler or record.

    Attributes:
        name: The policy name that was looked up, if one was derived.
        handler: The handler identity being authorized, if any.
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        handler: str | None = None,
        message: str | None = None,
    ) -> None:
        self.name = name
        self.handler = handler
        if message is None:
            if name is None:
                message = f"Unable to derive a policy for handler {handler!r}"
            elif handler is None:
                message = f"No policy registered as {name!r}"
            else:
                message = f"No policy registered as {name!r} (handler {handler!r})"
        super().__init__(message)


class UnknownQueryError(AuthzError):
    """The resolved policy does not define the requested query.

    Attributes:
        policy: The policy class name.
        query: The query that was asked.
    """

    def __init__(self, *, policy: str, query: str) -> None:
        self.policy = policy
        self.query = query
        super().__init__(f"{policy} does not define the query {query!r}")
