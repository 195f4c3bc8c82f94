"""Runtime — Wires settings, storage, the Solr repository and services together.

The runtime owns the lifecycle of every long-lived resource:
  1. Database engine and session factory
  2. Solr document repository (HTTP client)
  3. Index and todo services built on top of them
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from todosearch.search.exceptions import ConnectionError
from todosearch.search.query import NamedQueries
from todosearch.search.repository import TodoDocumentRepository
from todosearch.service.index import QUERY_METHOD_TYPES, RepositoryTodoIndexService
from todosearch.service.todo import TodoService
from todosearch.storage.database import get_engine, make_session_factory
from todosearch.storage.repository import TodoRepository

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from todosearch.config.settings import Settings

logger = logging.getLogger(__name__)


class TodoSearchRuntime:
    """Container for the services of one running application.

    Attributes:
        settings: Application configuration.
        document_repository: Solr repository for indexed todo documents.
        index_service: Search index service.
        todo_service: Todo CRUD and search service.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

        named_queries = (
            NamedQueries.from_yaml(settings.solr.named_queries_file)
            if settings.solr.named_queries_file
            else NamedQueries()
        )
        self.document_repository = TodoDocumentRepository(
            base_url=settings.solr.base_url,
            core=settings.solr.core,
            username=settings.solr.username,
            password=settings.solr.password,
            timeout=settings.solr.timeout,
            named_queries=named_queries,
        )
        self.index_service = RepositoryTodoIndexService(
            self.document_repository,
            query_method_type=settings.solr.query_method_type,
        )

        self.db_engine: Engine = get_engine(settings.database.url, echo=settings.database.echo)
        self.todo_repository = TodoRepository(make_session_factory(self.db_engine))
        self.todo_service = TodoService(self.todo_repository, self.index_service)

    async def initialize(self) -> None:
        """Connect to Solr. A failed ping is logged; search calls report it later."""
        query_method_type = self.settings.solr.query_method_type
        if query_method_type not in QUERY_METHOD_TYPES:
            logger.warning(
                "Query method type '%s' is not one of %s; searches will return no results.",
                query_method_type,
                list(QUERY_METHOD_TYPES),
            )

        try:
            await self.document_repository.initialize()
        except ConnectionError:
            logger.error(
                "Solr core '%s' at %s is not reachable",
                self.settings.solr.core,
                self.settings.solr.base_url,
                exc_info=True,
            )

        logger.info("Todo search runtime initialized")

    async def shutdown(self) -> None:
        """Close the Solr client and dispose of database connections."""
        await self.document_repository.shutdown()
        self.db_engine.dispose()
        logger.info("Todo search runtime shut down")
