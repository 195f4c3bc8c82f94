"""Tests for the Solr todo document repository."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from todosearch.models.document import TodoDocument
from todosearch.models.page import PageRequest, Sort
from todosearch.search.exceptions import ConnectionError, IndexingError, QueryError
from todosearch.search.query import NamedQueries
from todosearch.search.repository import TodoDocumentRepository
from todosearch.storage.models import Todo

# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def repository() -> TodoDocumentRepository:
    return TodoDocumentRepository(
        base_url="http://localhost:8983/solr/",
        core="todo_test",
    )


@pytest.fixture
def select_response() -> dict[str, Any]:
    """Sample Solr JSON response from /select."""
    return {
        "responseHeader": {"status": 0, "QTime": 2},
        "response": {
            "numFound": 2,
            "start": 0,
            "docs": [
                {"id": "2", "title": "Foo bar", "description": "Second", "_version_": 1},
                {"id": "1", "title": ["Foo"], "_version_": 1},
            ],
        },
    }


def _ok_response(payload: dict[str, Any] | None = None) -> AsyncMock:
    response = AsyncMock(spec=httpx.Response)
    response.status_code = 200
    response.json.return_value = payload or {"responseHeader": {"status": 0}}
    response.raise_for_status = lambda: None
    return response


def _error_response(method: str = "POST") -> AsyncMock:
    response = AsyncMock(spec=httpx.Response)
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "Internal Server Error",
        request=httpx.Request(method, "http://test"),
        response=httpx.Response(500),
    )
    return response


def _attach_client(repository: TodoDocumentRepository, response: AsyncMock) -> AsyncMock:
    client = AsyncMock(spec=httpx.AsyncClient)
    client.post.return_value = response
    client.get.return_value = response
    repository._client = client
    return client


# ── Properties ───────────────────────────────────────────────────────────────


class TestRepositoryProperties:
    def test_trailing_slash_stripped(self, repository: TodoDocumentRepository) -> None:
        assert repository._base_url == "http://localhost:8983/solr"

    def test_core(self, repository: TodoDocumentRepository) -> None:
        assert repository.core == "todo_test"

    def test_defaults(self) -> None:
        r = TodoDocumentRepository()
        assert r._base_url == "http://localhost:8983/solr"
        assert r.core == "todo"


# ── Lifecycle ────────────────────────────────────────────────────────────────


class TestLifecycle:
    async def test_calls_before_initialize_raise(self, repository: TodoDocumentRepository) -> None:
        with pytest.raises(ConnectionError, match="not initialized"):
            await repository.count("Foo")
        with pytest.raises(ConnectionError, match="not initialized"):
            await repository.save(TodoDocument(id="1", title="Foo"))

    async def test_shutdown_closes_client(self, repository: TodoDocumentRepository) -> None:
        client = _attach_client(repository, _ok_response())

        await repository.shutdown()

        client.aclose.assert_awaited_once()
        assert repository._client is None


# ── Writes ───────────────────────────────────────────────────────────────────


class TestWrites:
    async def test_save_posts_document_with_commit(self, repository: TodoDocumentRepository) -> None:
        client = _attach_client(repository, _ok_response())
        document = TodoDocument(id="1", title="Foo", description="Bar")

        saved = await repository.save(document)

        assert saved is document
        client.post.assert_awaited_once_with(
            "/todo_test/update",
            params={"commit": "true"},
            json=[{"id": "1", "title": "Foo", "description": "Bar"}],
        )

    async def test_save_omits_missing_description(self, repository: TodoDocumentRepository) -> None:
        client = _attach_client(repository, _ok_response())

        await repository.save(TodoDocument(id="1", title="Foo"))

        assert client.post.call_args.kwargs["json"] == [{"id": "1", "title": "Foo"}]

    async def test_delete_by_id(self, repository: TodoDocumentRepository) -> None:
        client = _attach_client(repository, _ok_response())

        await repository.delete("1")

        client.post.assert_awaited_once_with(
            "/todo_test/update",
            params={"commit": "true"},
            json={"delete": {"id": "1"}},
        )

    async def test_update_is_atomic_partial_update(self, repository: TodoDocumentRepository) -> None:
        client = _attach_client(repository, _ok_response())
        todo = Todo(id=3, title="New title", description=None)

        await repository.update(todo)

        assert client.post.call_args.kwargs["json"] == [
            {"id": "3", "title": {"set": "New title"}, "description": {"set": None}},
        ]

    async def test_write_http_error(self, repository: TodoDocumentRepository) -> None:
        _attach_client(repository, _error_response())

        with pytest.raises(IndexingError, match="Solr update failed"):
            await repository.delete("1")


# ── Queries ──────────────────────────────────────────────────────────────────


class TestQueries:
    async def test_method_name_query(self, repository: TodoDocumentRepository, select_response: dict) -> None:
        client = _attach_client(repository, _ok_response(select_response))
        page = PageRequest(page=2, size=5, sort=Sort(field="id", direction="desc"))

        docs = await repository.find_by_title_contains_or_description_contains("Foo", "Bar", page)

        client.post.assert_awaited_once_with(
            "/todo_test/select",
            json={
                "query": "title:*Foo* OR description:*Bar*",
                "offset": 10,
                "limit": 5,
                "sort": "id desc",
            },
        )
        assert [d.id for d in docs] == ["2", "1"]
        assert docs[0].description == "Second"
        # list-valued single fields are unwrapped
        assert docs[1].title == "Foo"
        assert docs[1].description is None

    async def test_named_query_uses_registry(self, select_response: dict) -> None:
        named = NamedQueries({"TodoDocument.findByNamedQuery": "description:?0"})
        repository = TodoDocumentRepository(core="todo_test", named_queries=named)
        client = _attach_client(repository, _ok_response(select_response))

        await repository.find_by_named_query("Foo", PageRequest(page=0, size=10))

        body = client.post.call_args.kwargs["json"]
        assert body["query"] == "description:Foo"
        assert body["offset"] == 0
        assert "sort" not in body

    async def test_named_query_default(self, repository: TodoDocumentRepository, select_response: dict) -> None:
        client = _attach_client(repository, _ok_response(select_response))

        await repository.find_by_named_query("Foo", PageRequest())

        assert client.post.call_args.kwargs["json"]["query"] == "title:*Foo* OR description:*Foo*"

    async def test_query_annotation(self, repository: TodoDocumentRepository, select_response: dict) -> None:
        client = _attach_client(repository, _ok_response(select_response))

        docs = await repository.find_by_query_annotation("a b", PageRequest(page=0, size=1))

        assert client.post.call_args.kwargs["json"]["query"] == "title:*a\\ b* OR description:*a\\ b*"
        assert len(docs) == 2

    async def test_empty_response(self, repository: TodoDocumentRepository) -> None:
        _attach_client(repository, _ok_response({"response": {"numFound": 0, "docs": []}}))

        assert await repository.find_by_query_annotation("Foo", PageRequest()) == []

    async def test_query_http_error(self, repository: TodoDocumentRepository) -> None:
        _attach_client(repository, _error_response())

        with pytest.raises(QueryError, match="Solr query failed"):
            await repository.find_by_query_annotation("Foo", PageRequest())


# ── Count ────────────────────────────────────────────────────────────────────


class TestCount:
    async def test_count_returns_num_found(self, repository: TodoDocumentRepository, select_response: dict) -> None:
        client = _attach_client(repository, _ok_response(select_response))

        assert await repository.count("Foo") == 2
        client.post.assert_awaited_once_with(
            "/todo_test/select",
            json={"query": "(title:*Foo* OR description:*Foo*)", "limit": 0},
        )

    def test_count_query_ors_every_word(self) -> None:
        assert TodoDocumentRepository.build_count_query("Foo  Bar") == (
            "(title:*Foo* OR description:*Foo*) OR (title:*Bar* OR description:*Bar*)"
        )

    def test_count_query_blank_term_matches_all(self) -> None:
        assert TodoDocumentRepository.build_count_query("   ") == "*:*"

    async def test_count_http_error(self, repository: TodoDocumentRepository) -> None:
        _attach_client(repository, _error_response())

        with pytest.raises(QueryError):
            await repository.count("Foo")


# ── Health ───────────────────────────────────────────────────────────────────


class TestHealth:
    async def test_health_not_initialized(self, repository: TodoDocumentRepository) -> None:
        health = await repository.health_check()
        assert health.status == "unhealthy"

    async def test_health_ok(self, repository: TodoDocumentRepository) -> None:
        _attach_client(repository, _ok_response({"status": "OK"}))

        health = await repository.health_check()

        assert health.status == "healthy"
        assert "todo_test" in (health.message or "")

    async def test_health_degraded_status(self, repository: TodoDocumentRepository) -> None:
        response = _ok_response()
        response.status_code = 503
        _attach_client(repository, response)

        health = await repository.health_check()

        assert health.status == "degraded"
        assert "503" in (health.message or "")

    async def test_health_exception(self, repository: TodoDocumentRepository) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get.side_effect = RuntimeError("Connection refused")
        repository._client = client

        health = await repository.health_check()

        assert health.status == "unhealthy"
