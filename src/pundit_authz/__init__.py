"""pundit-authz — convention-based authorization policies for web handlers.

Declare one policy class per model and call ``authorize`` inside request
handlers. The policy and query are inferred from the handler's identity.

Example::

    from pundit_authz import ApplicationPolicy, authorize, policy

    @policy(model=Book)
    class BookPolicy(ApplicationPolicy[Book]):
        def index(self) -> bool:
            return True

    authorize("Books::Index", current_user)         # BookPolicy.index
    authorize("books.update", current_user, book)   # BookPolicy.update
"""

from importlib.metadata import PackageNotFoundError, version

from pundit_authz._dispatch import (
    Resolution,
    authorize,
    permitted,
    policy_for,
    policy_scope,
    resolve,
)
from pundit_authz._helpers import ActionHelpers
from pundit_authz._naming import derive_policy_name, derive_query_name
from pundit_authz._types import ActorLike
from pundit_authz.config._config import AuthzConfig, configure
from pundit_authz.exceptions import (
    AuthzError,
    NotAuthorizedError,
    PolicyNotFoundError,
    UnknownQueryError,
)
from pundit_authz.policy._base import ApplicationPolicy
from pundit_authz.policy._decorator import policy
from pundit_authz.policy._registry import PolicyRegistry

try:
    __version__ = version("pundit-authz")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "ActionHelpers",
    "ActorLike",
    "ApplicationPolicy",
    "AuthzConfig",
    "AuthzError",
    "NotAuthorizedError",
    "PolicyNotFoundError",
    "PolicyRegistry",
    "Resolution",
    "UnknownQueryError",
    "authorize",
    "configure",
    "derive_policy_name",
    "derive_query_name",
    "permitted",
    "policy",
    "policy_for",
    "policy_scope",
    "resolve",
]
