"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from todosearch.runtime import TodoSearchRuntime
from todosearch.service.todo import TodoService

# Global runtime instance (set during application lifespan)
_runtime: TodoSearchRuntime | None = None


def set_runtime(runtime: TodoSearchRuntime | None) -> None:
    """Set the global runtime instance (called during app lifespan)."""
    global _runtime
    _runtime = runtime


def get_runtime() -> TodoSearchRuntime:
    """Get the global runtime instance.

    Raises:
        RuntimeError: If the runtime is not initialized.
    """
    if _runtime is None:
        raise RuntimeError("Todo search runtime not initialized. Is the server running?")
    return _runtime


def get_todo_service() -> TodoService:
    return get_runtime().todo_service
