"""Models, actors and policies shared by the test suite."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from pundit_authz.policy._base import ApplicationPolicy

# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    owner_id: Mapped[int] = mapped_column(Integer)


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))


# ---------------------------------------------------------------------------
# Test actor
# ---------------------------------------------------------------------------


@dataclass
class Actor:
    id: int
    admin: bool = False


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class BookPolicy(ApplicationPolicy[Book]):
    def index(self) -> bool:
        return True

    def show(self) -> bool:
        return self.record is not None and (
            self.record.is_published or self._owns_record()
        )

    def create(self) -> bool:
        return self.user is not None

    def update(self) -> bool:
        return self._owns_record()

    def delete(self) -> bool:
        return self.user is not None and self.user.admin

    def bulk_delete(self) -> bool:
        return self.delete()

    def _owns_record(self) -> bool:
        return (
            self.user is not None
            and self.record is not None
            and self.record.owner_id == self.user.id
        )

    class Scope(ApplicationPolicy.Scope):
        def resolve(self):
            if self.user is not None and self.user.admin:
                return self.scope
            return self.scope.where(Book.is_published == True)  # noqa: E712


class StoreBookPolicy(ApplicationPolicy[Book]):
    """Namespaced policy registered as ``Store::BookPolicy``."""

    def index(self) -> bool:
        return self.user is not None


class ReportPolicy(ApplicationPolicy[None]):
    def show(self) -> bool:
        return self.user is not None and self.user.admin
