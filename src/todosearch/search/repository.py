"""Todo document repository — Solr access for indexed todo entries.

Talks to a single Solr core over HTTP using ``httpx`` (async): documents are
written through the ``/update`` handler and read through the
`JSON Request API`_ of the ``/select`` handler.

.. _JSON Request API: https://solr.apache.org/guide/solr/latest/query-guide/json-request-api.html

Usage::

    repository = TodoDocumentRepository(
        base_url="http://localhost:8983/solr",
        core="todo",
    )
    await repository.initialize()
    docs = await repository.find_by_query_annotation("milk", PageRequest(page=0, size=10))
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, Field

from todosearch.models.document import TodoDocument
from todosearch.search.exceptions import ConnectionError, IndexingError, QueryError
from todosearch.search.query import (
    FIND_BY_NAMED_QUERY,
    MATCH_ALL,
    NamedQueries,
    QueryTemplate,
    any_of,
    contains,
)

if TYPE_CHECKING:
    from todosearch.models.page import PageRequest
    from todosearch.storage.models import Todo

logger = logging.getLogger(__name__)


class IndexHealth(BaseModel):
    """Health status of the Solr core."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of the ping in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of the check")
    message: str | None = Field(default=None, description="Additional health message")


class TodoDocumentRepository:
    """Reads and writes :class:`TodoDocument` entries in a Solr core.

    Args:
        base_url: Solr base URL, e.g. ``"http://localhost:8983/solr"``.
        core: Solr core/collection name.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        timeout: HTTP request timeout in seconds.
        named_queries: Registry used by :meth:`find_by_named_query`.
    """

    QUERY_ANNOTATION = QueryTemplate("title:*?0* OR description:*?0*")

    def __init__(
        self,
        base_url: str = "http://localhost:8983/solr",
        core: str = "todo",
        username: str | None = None,
        password: str | None = None,
        timeout: float = 10.0,
        named_queries: NamedQueries | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._core = core
        self._username = username
        self._password = password
        self._timeout = timeout
        self._named_queries = named_queries or NamedQueries()
        self._client: httpx.AsyncClient | None = None

    @property
    def core(self) -> str:
        return self._core

    async def initialize(self) -> None:
        """Create an ``httpx.AsyncClient`` and ping the Solr core."""
        auth = None
        if self._username and self._password:
            auth = httpx.BasicAuth(self._username, self._password)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            auth=auth,
        )

        try:
            resp = await self._client.get(f"/{self._core}/admin/ping")
            resp.raise_for_status()
            logger.info("Connected to Solr core '%s' at %s", self._core, self._base_url)
        except httpx.HTTPError as e:
            raise ConnectionError(f"Failed to connect to Solr: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Writes ───────────────────────────────────────────────────────────

    async def save(self, document: TodoDocument) -> TodoDocument:
        """Add the document to the index, replacing any document with the same id."""
        await self._update([document.to_solr()])
        logger.debug("Indexed todo document %s", document.id)
        return document

    async def delete(self, doc_id: str) -> None:
        """Remove the document with the given id from the index."""
        await self._update({"delete": {"id": doc_id}})
        logger.debug("Deleted todo document %s", doc_id)

    async def update(self, todo: Todo) -> None:
        """Partially update the indexed title and description of ``todo``.

        Uses Solr atomic updates, so fields other than ``title`` and
        ``description`` are left untouched.
        """
        partial = {
            "id": str(todo.id),
            "title": {"set": todo.title},
            "description": {"set": todo.description},
        }
        await self._update([partial])
        logger.debug("Updated todo document %s", todo.id)

    # ── Queries ──────────────────────────────────────────────────────────

    async def find_by_title_contains_or_description_contains(
        self, title: str, description: str, page: PageRequest
    ) -> list[TodoDocument]:
        """Find documents whose title contains ``title`` or whose description contains ``description``."""
        query = any_of(contains("title", title), contains("description", description))
        return await self._select(query, page)

    async def find_by_named_query(self, search_term: str, page: PageRequest) -> list[TodoDocument]:
        """Run the query registered as ``TodoDocument.findByNamedQuery``."""
        query = self._named_queries.get(FIND_BY_NAMED_QUERY).render(search_term)
        return await self._select(query, page)

    async def find_by_query_annotation(self, search_term: str, page: PageRequest) -> list[TodoDocument]:
        """Run the fixed ``title:*?0* OR description:*?0*`` query."""
        query = self.QUERY_ANNOTATION.render(search_term)
        return await self._select(query, page)

    async def count(self, search_term: str) -> int:
        """Count documents matching any word of ``search_term`` in title or description."""
        query = self.build_count_query(search_term)
        data = await self._query({"query": query, "limit": 0})
        return int(data.get("response", {}).get("numFound", 0))

    @staticmethod
    def build_count_query(search_term: str) -> str:
        """OR together ``(title:*w* OR description:*w*)`` for every word of the term."""
        words = search_term.split()
        if not words:
            return MATCH_ALL
        return any_of(*(f"({contains('title', w)} OR {contains('description', w)})" for w in words))

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> IndexHealth:
        """Ping the Solr core."""
        if not self._client:
            return IndexHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get(f"/{self._core}/admin/ping")
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                solr_status = resp.json().get("status", "unknown")
                return IndexHealth(
                    status="healthy" if solr_status == "OK" else "degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Core: {self._core}, status: {solr_status}",
                )
            return IndexHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Solr returned HTTP {resp.status_code}",
            )
        except Exception as e:
            return IndexHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise ConnectionError("Solr client not initialized.")
        return self._client

    async def _update(self, body: Any) -> None:
        client = self._require_client()
        try:
            resp = await client.post(
                f"/{self._core}/update",
                params={"commit": "true"},
                json=body,
            )
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise IndexingError(f"Solr update failed: {e}") from e

    async def _select(self, query: str, page: PageRequest) -> list[TodoDocument]:
        params: dict[str, Any] = {
            "query": query,
            "offset": page.offset,
            "limit": page.size,
        }
        if page.sort is not None:
            params["sort"] = page.sort.to_solr()

        data = await self._query(params)
        docs = data.get("response", {}).get("docs", [])
        return [TodoDocument.from_solr(doc) for doc in docs]

    async def _query(self, params: dict[str, Any]) -> dict[str, Any]:
        client = self._require_client()
        try:
            start = time.monotonic()
            resp = await client.post(f"/{self._core}/select", json=params)
            resp.raise_for_status()
            logger.debug(
                "Solr query '%s' took %d ms",
                params["query"],
                int((time.monotonic() - start) * 1000),
            )
            return resp.json()
        except httpx.HTTPError as e:
            raise QueryError(f"Solr query failed: {e}") from e
