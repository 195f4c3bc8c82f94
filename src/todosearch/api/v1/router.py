"""API v1 Router — Todo and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from todosearch.api.v1.endpoints.health import router as health_router
from todosearch.api.v1.endpoints.todo import router as todo_router

router = APIRouter(tags=["v1"])
router.include_router(todo_router)
router.include_router(health_router)
