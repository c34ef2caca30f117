"""pundit-authz testing utilities — MockActor, assertions, and fixtures.

- **MockActor / factories**: Lightweight actors for tests.
- **Assertion helpers**: ``assert_permitted``, ``assert_forbidden``.
- **Isolation**: ``isolated_authz`` and the ``isolated_authz_state`` fixture.

Example::

    from pundit_authz.testing import assert_forbidden, make_user

    def test_strangers_cannot_edit(book):
        assert_forbidden(BookPolicy(make_user(id=99), book), "update?", "edit?")
"""

from pundit_authz.testing._actors import MockActor, make_admin, make_user
from pundit_authz.testing._assertions import assert_forbidden, assert_permitted
from pundit_authz.testing._fixtures import authz_config, authz_registry, isolated_authz_state
from pundit_authz.testing._isolation import isolated_authz

__all__ = [
    "MockActor",
    "assert_forbidden",
    "assert_permitted",
    "authz_config",
    "authz_registry",
    "isolated_authz",
    "isolated_authz_state",
    "make_admin",
    "make_user",
]
