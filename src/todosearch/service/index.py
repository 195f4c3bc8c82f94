"""Todo index service — Mirrors todo entries into the search index and runs searches.

The search strategy is chosen by ``query_method_type``:

  - ``methodName`` — criteria built from the ``title`` and ``description`` fields
  - ``namedQuery`` — the query registered as ``TodoDocument.findByNamedQuery``
  - ``queryAnnotation`` — the fixed query template of the repository method

An unknown or missing strategy yields an empty result without querying Solr.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from todosearch.models.document import TodoDocument

if TYPE_CHECKING:
    from todosearch.models.page import PageRequest
    from todosearch.search.repository import TodoDocumentRepository
    from todosearch.storage.models import Todo

logger = logging.getLogger(__name__)

QUERY_METHOD_METHOD_NAME = "methodName"
QUERY_METHOD_NAMED_QUERY = "namedQuery"
QUERY_METHOD_QUERY_ANNOTATION = "queryAnnotation"

QUERY_METHOD_TYPES = (
    QUERY_METHOD_METHOD_NAME,
    QUERY_METHOD_NAMED_QUERY,
    QUERY_METHOD_QUERY_ANNOTATION,
)


class TodoIndexService(ABC):
    """Keeps the search index in step with the todo store."""

    @abstractmethod
    async def add_to_index(self, todo: Todo) -> None:
        """Index a newly created todo entry."""

    @abstractmethod
    async def count_search_results(self, search_term: str) -> int:
        """Return the number of indexed entries matching ``search_term``."""

    @abstractmethod
    async def delete_from_index(self, todo_id: int) -> None:
        """Remove the entry with the given id from the index."""

    @abstractmethod
    async def search(self, search_term: str, page: PageRequest) -> list[TodoDocument]:
        """Return one page of indexed entries matching ``search_term``."""

    @abstractmethod
    async def update(self, todo: Todo) -> None:
        """Refresh the indexed title and description of an existing entry."""


class RepositoryTodoIndexService(TodoIndexService):
    """:class:`TodoIndexService` backed by a :class:`TodoDocumentRepository`.

    Attributes:
        repository: Solr document repository.
        query_method_type: Search strategy name, or None when unset.
    """

    def __init__(self, repository: TodoDocumentRepository, query_method_type: str | None = None) -> None:
        self.repository = repository
        self.query_method_type = query_method_type

    async def add_to_index(self, todo: Todo) -> None:
        logger.debug("Adding todo %s to the index", todo.id)
        await self.repository.save(TodoDocument.from_todo(todo))

    async def count_search_results(self, search_term: str) -> int:
        logger.debug("Counting search results for '%s'", search_term)
        return await self.repository.count(search_term)

    async def delete_from_index(self, todo_id: int) -> None:
        logger.debug("Deleting todo %s from the index", todo_id)
        await self.repository.delete(str(todo_id))

    async def search(self, search_term: str, page: PageRequest) -> list[TodoDocument]:
        logger.debug(
            "Searching '%s' (page %d, size %d) using query method '%s'",
            search_term,
            page.page,
            page.size,
            self.query_method_type,
        )

        if self.query_method_type == QUERY_METHOD_METHOD_NAME:
            return await self.repository.find_by_title_contains_or_description_contains(
                search_term, search_term, page
            )
        if self.query_method_type == QUERY_METHOD_NAMED_QUERY:
            return await self.repository.find_by_named_query(search_term, page)
        if self.query_method_type == QUERY_METHOD_QUERY_ANNOTATION:
            return await self.repository.find_by_query_annotation(search_term, page)

        logger.warning(
            "Unknown query method type '%s', expected one of %s. Returning no results.",
            self.query_method_type,
            list(QUERY_METHOD_TYPES),
        )
        return []

    async def update(self, todo: Todo) -> None:
        logger.debug("Updating todo %s in the index", todo.id)
        await self.repository.update(todo)
