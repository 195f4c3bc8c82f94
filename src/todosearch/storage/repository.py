"""Todo repository — CRUD access to the relational todo store."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from todosearch.storage.database import session_scope
from todosearch.storage.models import Todo


class TodoRepository:
    """Persists :class:`Todo` entries.

    Every call runs in its own transaction. Returned entities are detached
    from the session, so their attributes stay readable after the call.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_all(self) -> list[Todo]:
        with session_scope(self._session_factory) as session:
            return list(session.scalars(select(Todo).order_by(Todo.id)))

    def find_by_id(self, todo_id: int) -> Todo | None:
        with session_scope(self._session_factory) as session:
            return session.get(Todo, todo_id)

    def save(self, todo: Todo) -> Todo:
        """Insert a new entry or write back changes to an existing one."""
        with session_scope(self._session_factory) as session:
            merged = session.merge(todo)
            session.flush()
            session.refresh(merged)
            return merged

    def delete(self, todo: Todo) -> None:
        with session_scope(self._session_factory) as session:
            existing = session.get(Todo, todo.id)
            if existing is not None:
                session.delete(existing)
