"""Todo service — Coordinates the relational todo store and the search index.

Every successful write to the store is followed by the matching index
operation. Searches go to the index only. Store calls are blocking SQLAlchemy
work and run in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from todosearch.storage.models import Todo

if TYPE_CHECKING:
    from todosearch.models.document import TodoDocument
    from todosearch.models.page import PageRequest
    from todosearch.models.todo import TodoDTO
    from todosearch.service.index import TodoIndexService
    from todosearch.storage.repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoNotFoundError(Exception):
    """Raised when no todo entry exists for the requested id."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"No todo entry found with id: {todo_id}")
        self.todo_id = todo_id


class TodoService:
    """Todo CRUD and search operations.

    Attributes:
        repository: Relational todo store.
        index_service: Search index service.
    """

    def __init__(self, repository: TodoRepository, index_service: TodoIndexService) -> None:
        self.repository = repository
        self.index_service = index_service

    async def add(self, added: TodoDTO) -> Todo:
        todo = await asyncio.to_thread(
            self.repository.save, Todo(title=added.title, description=added.description)
        )
        logger.info("Added todo %s", todo.id)
        await self.index_service.add_to_index(todo)
        return todo

    async def delete_by_id(self, todo_id: int) -> Todo:
        deleted = await self.find_by_id(todo_id)
        await asyncio.to_thread(self.repository.delete, deleted)
        logger.info("Deleted todo %s", todo_id)
        await self.index_service.delete_from_index(todo_id)
        return deleted

    async def find_all(self) -> list[Todo]:
        return await asyncio.to_thread(self.repository.find_all)

    async def find_by_id(self, todo_id: int) -> Todo:
        found = await asyncio.to_thread(self.repository.find_by_id, todo_id)
        if found is None:
            raise TodoNotFoundError(todo_id)
        return found

    async def update(self, updated: TodoDTO) -> Todo:
        if updated.id is None:
            raise ValueError("Cannot update a todo entry without an id.")
        model = await self.find_by_id(updated.id)
        model.update(updated.title, updated.description)
        model = await asyncio.to_thread(self.repository.save, model)
        logger.info("Updated todo %s (version %s)", model.id, model.version)
        await self.index_service.update(model)
        return model

    async def search(self, search_term: str, page: PageRequest) -> list[TodoDocument]:
        return await self.index_service.search(search_term, page)

    async def count_search_results(self, search_term: str) -> int:
        return await self.index_service.count_search_results(search_term)
