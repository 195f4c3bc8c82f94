"""Health check endpoints — Service and Solr core health monitoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from todosearch import __version__
from todosearch.api.deps import get_runtime
from todosearch.runtime import TodoSearchRuntime
from todosearch.search.repository import IndexHealth

router = APIRouter()


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="Server version")
    service: str = Field(description="Service name ('todosearch')")
    solr_core: str = Field(description="Solr core holding the todo documents")
    query_method_type: str | None = Field(description="Configured search query strategy")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service Health Check",
)
async def health_check(runtime: TodoSearchRuntime = Depends(get_runtime)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="todosearch",
        solr_core=runtime.settings.solr.core,
        query_method_type=runtime.settings.solr.query_method_type,
    )


@router.get(
    "/health/solr",
    response_model=IndexHealth,
    summary="Solr Health Check",
    description="Ping the Solr core and report its status and latency.",
)
async def solr_health(runtime: TodoSearchRuntime = Depends(get_runtime)) -> IndexHealth:
    return await runtime.document_repository.health_check()
