"""Handler naming convention — derive policy and query names.

A handler identity names the request handler being executed. Three
spellings are understood:

- ``"Store::Books::Index"`` (namespaced class path)
- ``"Books.Index"`` (Python ``__qualname__``)
- ``"books.index"`` (Flask endpoint / blueprint route name)

The enclosing namespace maps to a policy name and the last segment maps
to a query::

    derive_policy_name("Store::Books::Index")  # "Store::BookPolicy"
    derive_query_name("Store::Books::Index")   # "index?"
"""

from __future__ import annotations

import inflection

from pundit_authz.config._config import AuthzConfig, get_global_config
from pundit_authz.exceptions import PolicyNotFoundError

__all__ = [
    "NAMESPACE_SEPARATOR",
    "bare_query",
    "derive_policy_name",
    "derive_query_name",
    "normalize_query",
    "split_handler",
]

NAMESPACE_SEPARATOR = "::"


def split_handler(handler: str) -> tuple[list[str], str]:
    """Split a handler identity into its namespace segments and action.

    ``::`` takes precedence over ``.`` so dotted module paths inside a
    ``::`` identity are not split twice.

    Raises:
        ValueError: If the identity is empty or has empty segments.

    Example::

        split_handler("Store::Books::Index")  # (["Store", "Books"], "Index")
        split_handler("books.index")          # (["books"], "index")
    """
    if not handler or not handler.strip():
        raise ValueError("handler identity must be a non-empty string")

    separator = NAMESPACE_SEPARATOR if NAMESPACE_SEPARATOR in handler else "."
    segments = [segment.strip() for segment in handler.split(separator)]
    if any(not segment for segment in segments):
        raise ValueError(f"handler identity {handler!r} has an empty segment")

    return segments[:-1], segments[-1]


def derive_policy_name(handler: str, *, config: AuthzConfig | None = None) -> str:
    """Derive the policy name for *handler* from its enclosing namespace.

    The innermost namespace segment is singularized and camelized, then
    the configured suffix is appended. Outer segments are camelized and
    kept as a ``::``-joined prefix; a dotted segment inside a ``::``
    identity (``"v1.Books::Index"``) contributes one prefix per part.

    Raises:
        PolicyNotFoundError: If the handler has no enclosing namespace.

    Example::

        derive_policy_name("Books::Index")        # "BookPolicy"
        derive_policy_name("book_clubs.show")     # "BookClubPolicy"
        derive_policy_name("v1.Books::Index")     # "V1::BookPolicy"
    """
    cfg = config if config is not None else get_global_config()
    namespace, _action = split_handler(handler)
    if not namespace:
        raise PolicyNotFoundError(handler=handler)

    parts = [part for segment in namespace for part in segment.split(".") if part]
    if not parts:
        raise ValueError(f"handler identity {handler!r} has an empty segment")
    *outer, innermost = parts
    singular = inflection.camelize(inflection.singularize(innermost))
    return NAMESPACE_SEPARATOR.join(
        [*(inflection.camelize(part) for part in outer), f"{singular}{cfg.policy_suffix}"]
    )


def derive_query_name(handler: str, *, config: AuthzConfig | None = None) -> str:
    """Derive the query name for *handler* from its action segment.

    Example::

        derive_query_name("Books::Index")       # "index?"
        derive_query_name("Books::BulkDelete")  # "bulk_delete?"
    """
    cfg = config if config is not None else get_global_config()
    _namespace, action = split_handler(handler)
    return f"{inflection.underscore(action)}{cfg.query_suffix}"


def normalize_query(query: str, *, config: AuthzConfig | None = None) -> str:
    """Return *query* with exactly one trailing query suffix."""
    cfg = config if config is not None else get_global_config()
    return f"{bare_query(query, config=cfg)}{cfg.query_suffix}"


def bare_query(query: str, *, config: AuthzConfig | None = None) -> str:
    """Return *query* with every trailing query suffix removed (the method name)."""
    cfg = config if config is not None else get_global_config()
    name = query.strip()
    while name.endswith(cfg.query_suffix):
        name = name[: -len(cfg.query_suffix)]
    if not name:
        raise ValueError(f"query {query!r} is empty")
    return name
