"""Integration test fixtures — a running Solr core seeded with todo documents.

Expects Solr to be running with a ``todo`` core, e.g.::

    docker run -p 8983:8983 solr:9 solr-precreate todo

Override the location with ``TODOSEARCH_TEST_SOLR_URL``.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import time
from typing import Any

import httpx
import pytest

SOLR_CORE = "todo"

SEED_DOCUMENTS: list[dict[str, Any]] = [
    {"id": "1", "title": "Buy milk", "description": "Two litres of oat milk"},
    {"id": "2", "title": "Write report", "description": "Quarterly milk sales figures"},
    {"id": "3", "title": "Call plumber", "description": "Kitchen sink is leaking"},
    {"id": "4", "title": "Book flights", "description": "Summer holiday"},
]


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


async def _seed_solr(host: str, core: str = SOLR_CORE) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        for field in [
            {"name": "title", "type": "text_general", "stored": True, "multiValued": False},
            {"name": "description", "type": "text_general", "stored": True, "multiValued": False},
        ]:
            with contextlib.suppress(httpx.HTTPError):
                await client.post(f"/{core}/schema", json={"add-field": field})

        await client.post(
            f"/{core}/update",
            json={"delete": {"query": "*:*"}},
            params={"commit": "true"},
        )

        resp = await client.post(
            f"/{core}/update",
            json=SEED_DOCUMENTS,
            params={"commit": "true"},
        )
        resp.raise_for_status()


@pytest.fixture(scope="session")
def solr_ready() -> str:
    """Ensure Solr is running and seeded."""
    host = os.environ.get("TODOSEARCH_TEST_SOLR_URL", "http://localhost:8983/solr")
    if not _wait_for_service(f"{host}/{SOLR_CORE}/admin/ping", timeout=30.0):
        pytest.skip(f"Solr not available at {host}")
    asyncio.run(_seed_solr(host))
    return host
