"""SQLAlchemy models for the todo store."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

MAX_LENGTH_TITLE = 100
MAX_LENGTH_DESCRIPTION = 500


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""


class Todo(Base):
    """A todo entry. The relational store is the system of record; the
    search index only holds a copy of ``id``, ``title`` and ``description``.
    """

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(MAX_LENGTH_TITLE))
    description: Mapped[str | None] = mapped_column(String(MAX_LENGTH_DESCRIPTION), default=None)

    creation_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    modification_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
    version: Mapped[int] = mapped_column(Integer, default=0)

    def update(self, title: str, description: str | None) -> None:
        """Replace the title and description of this entry."""
        self.title = title
        self.description = description
        self.version = (self.version or 0) + 1

    def __repr__(self) -> str:
        return f"Todo(id={self.id!r}, title={self.title!r})"
