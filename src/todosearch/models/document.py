"""Solr document model for indexed todo entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from todosearch.storage.models import Todo


class TodoDocument(BaseModel):
    """A todo entry as stored in the Solr core.

    Solr ids are strings, so the integer id of the todo is stored in its
    decimal form.
    """

    id: str = Field(description="Document id (the todo id as a string)")
    title: str = Field(default="", description="Todo title")
    description: str | None = Field(default=None, description="Todo description")

    @classmethod
    def from_todo(cls, todo: Todo) -> TodoDocument:
        """Build the document that mirrors ``todo`` in the index."""
        return cls(id=str(todo.id), title=todo.title, description=todo.description)

    @classmethod
    def from_solr(cls, raw: dict[str, Any]) -> TodoDocument:
        """Map a raw Solr document. Single-valued fields may come back as lists."""
        return cls(
            id=str(_first_value(raw.get("id", ""))),
            title=_first_value(raw.get("title", "")) or "",
            description=_first_value(raw.get("description")),
        )

    def to_solr(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def _first_value(val: Any) -> Any:
    if isinstance(val, list):
        return val[0] if val else None
    return val
