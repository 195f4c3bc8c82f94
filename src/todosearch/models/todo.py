"""Todo transfer objects used by the HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from todosearch.storage.models import MAX_LENGTH_DESCRIPTION, MAX_LENGTH_TITLE

if TYPE_CHECKING:
    from todosearch.storage.models import Todo


class TodoDTO(BaseModel):
    """Incoming and outgoing representation of a todo entry."""

    id: int | None = Field(default=None, description="Todo id (ignored on create)")
    title: str = Field(description="Todo title", min_length=1, max_length=MAX_LENGTH_TITLE)
    description: str | None = Field(
        default=None,
        max_length=MAX_LENGTH_DESCRIPTION,
        description="Optional longer description",
    )

    @classmethod
    def from_model(cls, todo: Todo) -> TodoDTO:
        return cls(id=todo.id, title=todo.title, description=todo.description)


class TodoDetail(TodoDTO):
    """Todo representation including bookkeeping fields."""

    creation_time: datetime | None = Field(default=None, description="When the entry was created")
    modification_time: datetime | None = Field(default=None, description="When the entry was last changed")
    version: int = Field(default=0, description="Number of updates applied to the entry")

    @classmethod
    def from_model(cls, todo: Todo) -> TodoDetail:
        return cls(
            id=todo.id,
            title=todo.title,
            description=todo.description,
            creation_time=todo.creation_time,
            modification_time=todo.modification_time,
            version=todo.version or 0,
        )
