"""@policy decorator — register policy classes."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from pundit_authz.policy._base import ApplicationPolicy
from pundit_authz.policy._registry import PolicyRegistry, get_default_registry

__all__ = ["policy"]

P = TypeVar("P", bound=type[ApplicationPolicy])


def policy(
    *,
    name: str | None = None,
    model: type | None = None,
    registry: PolicyRegistry | None = None,
) -> Callable[[P], P]:
    """Class decorator that registers a policy.

    Args:
        name: Lookup name. Defaults to the class name.
        model: Optional model class the policy authorizes.
        registry: Optional custom registry. Defaults to the global registry.

    Returns:
        A decorator that registers the class and returns it unchanged.

    Example::

        @policy(model=Book)
        class BookPolicy(ApplicationPolicy[Book]):
            def index(self) -> bool:
                return True

        @policy(name="Store::BookPolicy")
        class StoreBookPolicy(ApplicationPolicy[Book]):
            ...
    """

    def decorator(cls: P) -> P:
        target = registry if registry is not None else get_default_registry()
        target.register(cls, name=name, model=model)
        return cls

    return decorator
