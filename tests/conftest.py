"""Shared test fixtures for pundit-authz tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from pundit_authz.config._config import _reset_global_config
from pundit_authz.policy._registry import PolicyRegistry
from tests.support import Actor, Base, Book, BookPolicy, ReportPolicy, StoreBookPolicy

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    _reset_global_config()
    yield
    _reset_global_config()


@pytest.fixture()
def registry() -> PolicyRegistry:
    """A registry with the test policies registered."""
    reg = PolicyRegistry()
    reg.register(BookPolicy, model=Book)
    reg.register(StoreBookPolicy, name="Store::BookPolicy")
    reg.register(ReportPolicy)
    return reg


@pytest.fixture()
def owner() -> Actor:
    return Actor(id=1)


@pytest.fixture()
def stranger() -> Actor:
    return Actor(id=2)


@pytest.fixture()
def admin() -> Actor:
    return Actor(id=3, admin=True)


@pytest.fixture()
def draft() -> Book:
    return Book(id=1, title="Draft", is_published=False, owner_id=1)


@pytest.fixture()
def published() -> Book:
    return Book(id=2, title="Published", is_published=True, owner_id=1)


@pytest.fixture()
def session() -> Generator[Session, None, None]:
    """Provide a seeded in-memory SQLite session."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine)
    sess = factory()
    sess.add_all(
        [
            Book(id=1, title="Draft", is_published=False, owner_id=1),
            Book(id=2, title="Published 1", is_published=True, owner_id=1),
            Book(id=3, title="Published 2", is_published=True, owner_id=2),
        ]
    )
    sess.flush()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()
        engine.dispose()
