"""Service layer — Todo store coordination and search index dispatch."""

from todosearch.service.index import RepositoryTodoIndexService, TodoIndexService
from todosearch.service.todo import TodoNotFoundError, TodoService

__all__ = ["RepositoryTodoIndexService", "TodoIndexService", "TodoNotFoundError", "TodoService"]
