"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from todosearch.config.settings import Settings
from todosearch.models.page import PageRequest
from todosearch.storage.models import Todo


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance backed by an in-memory database."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        database={"url": "sqlite:///:memory:"},
        solr={"base_url": "http://localhost:8983/solr", "core": "todo_test"},
    )


@pytest.fixture
def todo() -> Todo:
    """A persisted-looking todo entry (id assigned, not attached to a session)."""
    return Todo(id=1, title="title", description="description", version=0)


@pytest.fixture
def page() -> PageRequest:
    return PageRequest(page=1, size=1)
