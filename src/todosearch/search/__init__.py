"""Search index layer — Solr document repository and query construction."""

from todosearch.search.repository import TodoDocumentRepository

__all__ = ["TodoDocumentRepository"]
