"""Shared protocols and type aliases for pundit-authz."""

from __future__ import annotations

from typing import Any, Literal, Protocol, TypeVar, runtime_checkable

__all__ = [
    "ActorLike",
    "OnMissingPolicy",
    "RecordT",
]

# Valid values for AuthzConfig.on_missing_policy.
OnMissingPolicy = Literal["raise", "deny"]

# The subject record type a policy authorizes.
RecordT = TypeVar("RecordT")


@runtime_checkable
class ActorLike(Protocol):
    """Structural type for authorization actors.

    Any object with an ``id`` attribute satisfies this protocol. Policies
    receive the actor as ``self.user`` and must also cope with ``None``
    for anonymous requests.

    Example::

        @dataclass
        class User:
            id: int
            admin: bool = False

        assert isinstance(User(id=1), ActorLike)
    """

    @property
    def id(self) -> Any: ...
