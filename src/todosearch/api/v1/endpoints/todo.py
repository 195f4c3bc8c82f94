"""Todo endpoints — CRUD over the todo store plus index-backed search."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from todosearch.api.deps import get_runtime, get_todo_service
from todosearch.models.document import TodoDocument
from todosearch.models.page import PageRequest, Sort
from todosearch.models.todo import TodoDetail, TodoDTO
from todosearch.runtime import TodoSearchRuntime
from todosearch.search.exceptions import SearchIndexError
from todosearch.service.todo import TodoNotFoundError, TodoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todo")

_SORT_BY_ID_DESC = Sort(field="id", direction="desc")


def _not_found(e: TodoNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _index_failure(e: SearchIndexError) -> HTTPException:
    logger.error("Search index operation failed: %s", e, exc_info=True)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Search index operation failed: {e!s}",
    )


# ── CRUD ─────────────────────────────────────────────────────────────────


@router.get("", response_model=list[TodoDTO], summary="List Todo Entries")
async def find_all(service: TodoService = Depends(get_todo_service)) -> list[TodoDTO]:
    """Return every todo entry ordered by id."""
    return [TodoDTO.from_model(t) for t in await service.find_all()]


@router.get(
    "/{todo_id}",
    response_model=TodoDetail,
    summary="Get Todo Entry",
    responses={404: {"description": "No todo entry with this id"}},
)
async def find_by_id(todo_id: int, service: TodoService = Depends(get_todo_service)) -> TodoDetail:
    try:
        return TodoDetail.from_model(await service.find_by_id(todo_id))
    except TodoNotFoundError as e:
        raise _not_found(e) from e


@router.post(
    "",
    response_model=TodoDTO,
    summary="Add Todo Entry",
    description="Store a new todo entry and add it to the search index.",
    responses={
        422: {"description": "Validation error — missing title or field too long"},
        502: {"description": "The entry was stored but indexing failed"},
    },
)
async def add(dto: TodoDTO, service: TodoService = Depends(get_todo_service)) -> TodoDTO:
    try:
        added = await service.add(dto)
    except SearchIndexError as e:
        raise _index_failure(e) from e
    return TodoDTO.from_model(added)


@router.put(
    "/{todo_id}",
    response_model=TodoDTO,
    summary="Update Todo Entry",
    description="Update the title and description of a todo entry and of its indexed document.",
    responses={
        404: {"description": "No todo entry with this id"},
        422: {"description": "Validation error — missing title or field too long"},
        502: {"description": "The entry was updated but the index update failed"},
    },
)
async def update(todo_id: int, dto: TodoDTO, service: TodoService = Depends(get_todo_service)) -> TodoDTO:
    try:
        updated = await service.update(dto.model_copy(update={"id": todo_id}))
    except TodoNotFoundError as e:
        raise _not_found(e) from e
    except SearchIndexError as e:
        raise _index_failure(e) from e
    return TodoDTO.from_model(updated)


@router.delete(
    "/{todo_id}",
    response_model=TodoDTO,
    summary="Delete Todo Entry",
    description="Delete a todo entry and remove it from the search index. Returns the deleted entry.",
    responses={
        404: {"description": "No todo entry with this id"},
        502: {"description": "The entry was deleted but removing it from the index failed"},
    },
)
async def delete_by_id(todo_id: int, service: TodoService = Depends(get_todo_service)) -> TodoDTO:
    try:
        deleted = await service.delete_by_id(todo_id)
    except TodoNotFoundError as e:
        raise _not_found(e) from e
    except SearchIndexError as e:
        raise _index_failure(e) from e
    return TodoDTO.from_model(deleted)


# ── Search ───────────────────────────────────────────────────────────────


@router.get(
    "/search/count/{search_term}",
    response_model=int,
    summary="Count Search Results",
    responses={502: {"description": "Solr query failed"}},
)
async def count_search_results(search_term: str, service: TodoService = Depends(get_todo_service)) -> int:
    """Number of indexed entries matching any word of the search term."""
    try:
        return await service.count_search_results(search_term)
    except SearchIndexError as e:
        raise _index_failure(e) from e


@router.get(
    "/search/{search_term}",
    response_model=list[TodoDocument],
    summary="Search Todo Entries",
    description=(
        "Return one page of indexed todo entries matching the search term, newest first. "
        "The query is built according to the configured query method type; an unknown "
        "or unset type yields an empty list."
    ),
    responses={502: {"description": "Solr query failed"}},
)
async def search(
    search_term: str,
    page: int = Query(default=0, ge=0, description="Zero-based page number"),
    size: int | None = Query(default=None, ge=1, description="Page size (server default if omitted)"),
    runtime: TodoSearchRuntime = Depends(get_runtime),
) -> list[TodoDocument]:
    pagination = runtime.settings.pagination
    page_size = min(size or pagination.default_page_size, pagination.max_page_size)
    page_request = PageRequest(page=page, size=page_size, sort=_SORT_BY_ID_DESC)

    try:
        return await runtime.todo_service.search(search_term, page_request)
    except SearchIndexError as e:
        raise _index_failure(e) from e
