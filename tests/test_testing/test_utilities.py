"""Tests for pundit_authz.testing — actors, assertions and isolation."""

from __future__ import annotations

import pytest

from pundit_authz.config._config import AuthzConfig, configure, get_global_config
from pundit_authz.policy._registry import PolicyRegistry, get_default_registry
from pundit_authz.testing import (
    MockActor,
    assert_forbidden,
    assert_permitted,
    isolated_authz,
    make_admin,
    make_user,
)
from pundit_authz._types import ActorLike
from tests.support import Book, BookPolicy, ReportPolicy


class TestActors:
    def test_mock_actor_is_actor_like(self) -> None:
        assert isinstance(MockActor(id=1), ActorLike)

    def test_make_admin(self) -> None:
        admin = make_admin()
        assert admin.role == "admin"
        assert admin.is_admin

    def test_make_user(self) -> None:
        user = make_user(id=5, role="editor")
        assert user.id == 5
        assert user.role == "editor"
        assert not user.is_admin


class TestAssertions:
    def test_assert_permitted_passes(self) -> None:
        owner = MockActor(id=1)
        book = Book(id=1, title="t", is_published=False, owner_id=1)
        assert_permitted(BookPolicy(owner, book), "show?", "update?", "edit")

    def test_assert_permitted_fails_with_denied_queries(self) -> None:
        book = Book(id=1, title="t", is_published=False, owner_id=1)
        with pytest.raises(AssertionError, match="update"):
            assert_permitted(BookPolicy(None, book), "index?", "update?")

    def test_assert_forbidden_passes(self) -> None:
        assert_forbidden(ReportPolicy(None), "index?", "show?", "create?", "new?")

    def test_assert_forbidden_fails_with_permitted_queries(self) -> None:
        with pytest.raises(AssertionError, match="index"):
            assert_forbidden(BookPolicy(None), "index?")

    def test_requires_a_query(self) -> None:
        with pytest.raises(ValueError):
            assert_permitted(BookPolicy(None))


class TestIsolation:
    def test_resets_and_restores_config(self) -> None:
        configure(on_missing_policy="deny")
        with isolated_authz() as (cfg, _reg):
            assert cfg.on_missing_policy == "raise"
        assert get_global_config().on_missing_policy == "deny"

    def test_applies_config(self) -> None:
        with isolated_authz(config=AuthzConfig(log_decisions=True)) as (cfg, _reg):
            assert cfg.log_decisions is True
            assert get_global_config() is cfg

    def test_clears_and_restores_registry(self) -> None:
        default = get_default_registry()
        default.register(BookPolicy, model=Book)
        default.map_handler("home.index", policy=BookPolicy)
        try:
            with isolated_authz() as (_cfg, reg):
                assert reg is default
                assert reg.registered_names() == set()
                reg.register(ReportPolicy)
            assert default.lookup("BookPolicy") is BookPolicy
            assert default.lookup_model(Book) is BookPolicy
            assert default.handler_mapping("home.index") is not None
            assert default.lookup("ReportPolicy") is None
        finally:
            default.clear()

    def test_restores_on_exception(self) -> None:
        configure(on_missing_policy="deny")
        with pytest.raises(RuntimeError):
            with isolated_authz():
                raise RuntimeError("boom")
        assert get_global_config().on_missing_policy == "deny"


class TestPluginFixtures:
    def test_authz_registry_is_fresh(self, authz_registry: PolicyRegistry) -> None:
        assert authz_registry is not get_default_registry()
        assert authz_registry.registered_names() == set()

    def test_authz_config_defaults(self, authz_config: AuthzConfig) -> None:
        assert authz_config == AuthzConfig()

    def test_isolated_state(self, isolated_authz_state) -> None:
        cfg, reg = isolated_authz_state
        assert cfg == AuthzConfig()
        assert reg is get_default_registry()
