"""Dispatch — resolve a handler to a policy query and enforce it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import Select, false

from pundit_authz._audit import log_decision, log_missing_policy
from pundit_authz._naming import derive_policy_name, derive_query_name, normalize_query
from pundit_authz.config._config import AuthzConfig, get_global_config
from pundit_authz.exceptions import NotAuthorizedError, PolicyNotFoundError
from pundit_authz.policy._base import ApplicationPolicy
from pundit_authz.policy._registry import PolicyRegistry, get_default_registry

__all__ = [
    "Resolution",
    "authorize",
    "permitted",
    "policy_for",
    "policy_scope",
    "resolve",
]

T = TypeVar("T")

PolicyRef = type[ApplicationPolicy] | str


@dataclass(frozen=True, slots=True)
class Resolution:
    """The policy class and query a handler resolves to.

    Attributes:
        handler: The handler identity, or ``None`` for explicit checks.
        policy: The policy class.
        query: The normalized query (e.g. ``"index?"``).
    """

    handler: str | None
    policy: type[ApplicationPolicy]
    query: str


def _resolve_query(
    handler: str | None,
    query: str | None,
    registry: PolicyRegistry,
    cfg: AuthzConfig,
) -> str:
    if query is None and handler is not None:
        mapping = registry.handler_mapping(handler)
        if mapping is not None and mapping.query is not None:
            query = mapping.query
        else:
            query = derive_query_name(handler, config=cfg)
    if query is None:
        raise ValueError("authorize() needs a handler identity or an explicit query")
    return normalize_query(query, config=cfg)


def _resolve_policy(
    handler: str | None,
    policy: PolicyRef | None,
    registry: PolicyRegistry,
    cfg: AuthzConfig,
) -> type[ApplicationPolicy]:
    if policy is None and handler is not None:
        mapping = registry.handler_mapping(handler)
        if mapping is not None and mapping.policy is not None:
            policy = mapping.policy
        else:
            policy = derive_policy_name(handler, config=cfg)
    if policy is None:
        raise ValueError("authorize() needs a handler identity or an explicit policy")
    if isinstance(policy, type):
        return policy

    found = registry.lookup(policy)
    if found is None:
        raise PolicyNotFoundError(name=policy, handler=handler)
    return found


def resolve(
    handler: str | None = None,
    *,
    policy: PolicyRef | None = None,
    query: str | None = None,
    registry: PolicyRegistry | None = None,
    config: AuthzConfig | None = None,
) -> Resolution:
    """Resolve *handler* to a policy class and query without invoking it.

    Precedence for each half: explicit argument, then the registry's
    handler mapping, then the naming convention.

    Raises:
        PolicyNotFoundError: If the policy name is not registered or the
            handler has no namespace to derive one from.
        ValueError: If neither a handler nor the explicit value is given.

    Example::

        resolve("Books::Index")
        # Resolution(handler="Books::Index", policy=BookPolicy, query="index?")
    """
    target_registry = registry if registry is not None else get_default_registry()
    cfg = config if config is not None else get_global_config()
    return Resolution(
        handler=handler,
        policy=_resolve_policy(handler, policy, target_registry, cfg),
        query=_resolve_query(handler, query, target_registry, cfg),
    )


def _check(
    handler: str | None,
    actor: Any,
    record: Any,
    policy: PolicyRef | None,
    query: str | None,
    registry: PolicyRegistry | None,
    config: AuthzConfig | None,
) -> tuple[bool, str, ApplicationPolicy | None]:
    target_registry = registry if registry is not None else get_default_registry()
    cfg = config if config is not None else get_global_config()

    query_name = _resolve_query(handler, query, target_registry, cfg)
    try:
        policy_cls = _resolve_policy(handler, policy, target_registry, cfg)
    except PolicyNotFoundError as exc:
        if cfg.on_missing_policy == "raise":
            raise
        log_missing_policy(name=exc.name, handler=handler)
        return False, query_name, None

    instance = policy_cls(actor, record)
    allowed = instance.query(query_name, config=cfg)
    if cfg.log_decisions:
        log_decision(
            handler=handler,
            policy=policy_cls,
            query=query_name,
            actor=actor,
            record=record,
            allowed=allowed,
        )
    return allowed, query_name, instance


def authorize(
    handler: str | None,
    actor: Any,
    record: T | None = None,
    *,
    policy: PolicyRef | None = None,
    query: str | None = None,
    registry: PolicyRegistry | None = None,
    config: AuthzConfig | None = None,
    message: str | None = None,
) -> T | None:
    """Assert that *actor* passes the policy query *handler* resolves to.

    Builds ``policy(actor, record)``, asks the query, and raises when the
    answer is ``False``. Returns *record* on success so calls can be
    chained inline.

    Args:
        handler: The executing handler's identity (``"Books::Index"``,
            ``"books.index"``). May be ``None`` when both *policy* and
            *query* are given.
        actor: The current user; may be ``None``.
        record: Optional subject record passed to the policy.
        policy: Explicit policy class or registered name.
        query: Explicit query (``"update?"`` or ``"update"``).
        registry: Optional custom registry. Defaults to the global registry.
        config: Optional config. Defaults to the global config.
        message: Optional custom error message.

    Raises:
        NotAuthorizedError: If the query answers ``False``.
        PolicyNotFoundError: If no policy resolves and
            ``on_missing_policy`` is ``"raise"``.
        UnknownQueryError: If the policy has no such query.

    Example::

        book = authorize("Books::Update", current_user, book)
        authorize(None, current_user, policy=BookPolicy, query="create?")
    """
    allowed, query_name, instance = _check(
        handler, actor, record, policy, query, registry, config
    )
    if not allowed:
        raise NotAuthorizedError(
            query=query_name,
            policy=instance,
            record=record,
            message=message,
        )
    return record


def permitted(
    handler: str | None,
    actor: Any,
    record: Any = None,
    *,
    policy: PolicyRef | None = None,
    query: str | None = None,
    registry: PolicyRegistry | None = None,
    config: AuthzConfig | None = None,
) -> bool:
    """Return whether *actor* passes the policy query *handler* resolves to.

    Same resolution as ``authorize`` but returns ``False`` instead of
    raising. Useful for showing or hiding controls in templates.

    Example::

        if permitted(None, current_user, policy=BookPolicy, query="create?"):
            render_button("New book")
    """
    allowed, _query_name, _instance = _check(
        handler, actor, record, policy, query, registry, config
    )
    return allowed


def _policy_for_model(
    model: type,
    registry: PolicyRegistry,
    cfg: AuthzConfig,
) -> type[ApplicationPolicy]:
    found = registry.lookup_model(model)
    if found is None:
        found = registry.lookup(f"{model.__name__}{cfg.policy_suffix}")
    if found is None:
        raise PolicyNotFoundError(
            name=f"{model.__name__}{cfg.policy_suffix}",
            message=f"No policy registered for {model.__name__}",
        )
    return found


def policy_for(
    actor: Any,
    record: Any,
    *,
    registry: PolicyRegistry | None = None,
    config: AuthzConfig | None = None,
) -> ApplicationPolicy:
    """Build the policy instance for *record*.

    The policy is found by the record's model registration, falling back
    to the ``<ClassName>Policy`` name. *record* may be a model class for
    checks that have no instance yet.

    Raises:
        PolicyNotFoundError: If no policy matches the record's type.

    Example::

        if policy_for(current_user, book).update():
            render_edit_link(book)
    """
    target_registry = registry if registry is not None else get_default_registry()
    cfg = config if config is not None else get_global_config()
    model = record if isinstance(record, type) else type(record)
    return _policy_for_model(model, target_registry, cfg)(actor, record)


def policy_scope(
    actor: Any,
    stmt: Select[Any],
    *,
    policy: PolicyRef | None = None,
    registry: PolicyRegistry | None = None,
    config: AuthzConfig | None = None,
) -> Select[Any]:
    """Narrow *stmt* with the policy's ``Scope``.

    When *policy* is not given it is found from the statement's first
    mapped entity.

    Raises:
        PolicyNotFoundError: If no policy matches and
            ``on_missing_policy`` is ``"raise"``.

    Example::

        stmt = policy_scope(current_user, select(Book))
        books = session.execute(stmt).scalars().all()
    """
    target_registry = registry if registry is not None else get_default_registry()
    cfg = config if config is not None else get_global_config()

    try:
        if policy is not None:
            policy_cls = _resolve_policy(None, policy, target_registry, cfg)
        else:
            entity = next(
                (
                    desc["entity"]
                    for desc in stmt.column_descriptions
                    if desc.get("entity") is not None
                ),
                None,
            )
            if entity is None:
                raise PolicyNotFoundError(
                    message="Unable to find a mapped entity in the statement"
                )
            policy_cls = _policy_for_model(entity, target_registry, cfg)
    except PolicyNotFoundError as exc:
        if cfg.on_missing_policy == "raise":
            raise
        log_missing_policy(name=exc.name, handler=None)
        return stmt.where(false())

    return policy_cls.Scope(actor, stmt).resolve()
