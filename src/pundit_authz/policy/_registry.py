"""PolicyRegistry — explicit table of policy classes and handler mappings."""

from __future__ import annotations

from dataclasses import dataclass

from pundit_authz._naming import NAMESPACE_SEPARATOR
from pundit_authz.policy._base import ApplicationPolicy

__all__ = ["HandlerMapping", "PolicyRegistry", "get_default_registry"]

PolicyClass = type[ApplicationPolicy]


@dataclass(frozen=True, slots=True)
class HandlerMapping:
    """Explicit policy and/or query for one handler identity.

    Either field may be ``None``, in which case that half is still
    derived from the handler's name.

    Attributes:
        handler: The handler identity (e.g. ``"books.index"``).
        policy: A policy class or registered policy name.
        query: The query to ask (e.g. ``"show?"``).
    """

    handler: str
    policy: PolicyClass | str | None = None
    query: str | None = None


class PolicyRegistry:
    """Registry mapping policy names, models and handlers to policies.

    Thread-safe for reads after startup. Append-only during registration.

    Example::

        registry = PolicyRegistry()
        registry.register(BookPolicy, model=Book)
        registry.map_handler("home.index", policy=BookPolicy, query="index?")
        registry.lookup("BookPolicy")  # BookPolicy
    """

    def __init__(self) -> None:
        self._policies: dict[str, PolicyClass] = {}
        self._models: dict[type, PolicyClass] = {}
        self._handlers: dict[str, HandlerMapping] = {}

    def register(
        self,
        policy_cls: PolicyClass,
        *,
        name: str | None = None,
        model: type | None = None,
    ) -> PolicyClass:
        """Register *policy_cls* under *name* and optionally a model type.

        Args:
            policy_cls: An ``ApplicationPolicy`` subclass.
            name: Lookup name. Defaults to the class ``__name__``. Use a
                ``::``-qualified name for namespaced handlers
                (``"Store::BookPolicy"``).
            model: Optional model class whose instances resolve to this
                policy in ``policy_for`` and ``policy_scope``.

        Returns:
            The policy class, unchanged.

        Raises:
            TypeError: If *policy_cls* is not an ``ApplicationPolicy`` subclass.
            ValueError: If *name* is already bound to a different class.
        """
        if not (isinstance(policy_cls, type) and issubclass(policy_cls, ApplicationPolicy)):
            raise TypeError(f"{policy_cls!r} is not an ApplicationPolicy subclass")

        key = name if name is not None else policy_cls.__name__
        existing = self._policies.get(key)
        if existing is not None and existing is not policy_cls:
            raise ValueError(
                f"policy name {key!r} is already registered to {existing.__name__}"
            )
        self._policies[key] = policy_cls
        if model is not None:
            self._models[model] = policy_cls
        return policy_cls

    def map_handler(
        self,
        handler: str,
        *,
        policy: PolicyClass | str | None = None,
        query: str | None = None,
    ) -> None:
        """Bind *handler* to an explicit policy and/or query.

        Mapped values take precedence over names derived from the
        handler identity, but lose to arguments passed to ``authorize``.

        Raises:
            ValueError: If neither *policy* nor *query* is given.

        Example::

            registry.map_handler("dashboard.index", policy="ReportPolicy")
        """
        if policy is None and query is None:
            raise ValueError("map_handler() needs a policy, a query, or both")
        self._handlers[handler] = HandlerMapping(handler=handler, policy=policy, query=query)

    def lookup(self, name: str) -> PolicyClass | None:
        """Find the policy registered as *name*.

        A qualified name (``"Store::BookPolicy"``) that is not registered
        falls back to its last segment (``"BookPolicy"``).
        """
        found = self._policies.get(name)
        if found is None and NAMESPACE_SEPARATOR in name:
            found = self._policies.get(name.rsplit(NAMESPACE_SEPARATOR, 1)[-1])
        return found

    def lookup_model(self, model: type) -> PolicyClass | None:
        """Find the policy registered for *model* or its nearest base class."""
        for klass in model.__mro__:
            found = self._models.get(klass)
            if found is not None:
                return found
        return None

    def handler_mapping(self, handler: str) -> HandlerMapping | None:
        """Return the explicit mapping for *handler*, if any."""
        return self._handlers.get(handler)

    def has_policy(self, name: str) -> bool:
        """Check whether *name* resolves to a registered policy."""
        return self.lookup(name) is not None

    def registered_names(self) -> set[str]:
        """Return every registered policy name."""
        return set(self._policies)

    def clear(self) -> None:
        """Remove all policies, model bindings and handler mappings.

        Primarily useful in test teardown.
        """
        self._policies.clear()
        self._models.clear()
        self._handlers.clear()


# Module-level default registry (singleton).
_default_registry = PolicyRegistry()


def get_default_registry() -> PolicyRegistry:
    """Return the global default (singleton) policy registry.

    This is the registry used by ``@policy``, ``authorize`` and the
    integrations when no explicit registry is provided.
    """
    return _default_registry
