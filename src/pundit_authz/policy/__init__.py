"""Policy classes — the base policy and its registry."""

from pundit_authz.policy._base import ApplicationPolicy
from pundit_authz.policy._decorator import policy
from pundit_authz.policy._registry import HandlerMapping, PolicyRegistry, get_default_registry

__all__ = [
    "ApplicationPolicy",
    "HandlerMapping",
    "PolicyRegistry",
    "get_default_registry",
    "policy",
]
