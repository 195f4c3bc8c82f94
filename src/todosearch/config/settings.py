"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (TODOSEARCH_ prefix)
  3. Default values
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

# Serialized effective settings handed to server worker and reload processes
SETTINGS_SNAPSHOT_ENV = "TODOSEARCH_SETTINGS_SNAPSHOT"


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=1, ge=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class SolrSettings(BaseModel):
    """Solr connection and query strategy configuration.

    ``query_method_type`` selects how search queries are built:
      - ``methodName``: ``title:*term* OR description:*term*`` built from field criteria
      - ``namedQuery``: the query registered as ``TodoDocument.findByNamedQuery``
      - ``queryAnnotation``: the fixed query template of the search method

    Any other value (or no value) makes searches return no results.
    """

    base_url: str = Field(default="http://localhost:8983/solr", description="Solr base URL")
    core: str = Field(default="todo", description="Solr core/collection holding todo documents")
    username: str | None = Field(default=None, description="Basic-auth username")
    password: str | None = Field(default=None, description="Basic-auth password")
    timeout: float = Field(default=10.0, gt=0, description="HTTP request timeout in seconds")
    query_method_type: str | None = Field(default=None, description="Search query strategy")
    named_queries_file: str | None = Field(
        default=None,
        description="YAML file mapping named query names to query templates",
    )

    @field_validator("query_method_type", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DatabaseSettings(BaseModel):
    """Relational store configuration."""

    url: str = Field(default="sqlite:///todosearch.db", description="SQLAlchemy database URL")
    echo: bool = Field(default=False, description="Log emitted SQL statements")


class PaginationSettings(BaseModel):
    """Search result paging defaults."""

    default_page_size: int = Field(default=10, ge=1, description="Page size when none is requested")
    max_page_size: int = Field(default=100, ge=1, description="Largest accepted page size")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the TODOSEARCH_ prefix.
    Nested settings use double underscores: TODOSEARCH_SOLR__CORE=todo

    Example:
        TODOSEARCH_SERVER__PORT=9090
        TODOSEARCH_SOLR__BASE_URL=http://solr:8983/solr
        TODOSEARCH_SOLR__QUERY_METHOD_TYPE=namedQuery
    """

    model_config = {
        "env_prefix": "TODOSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="Todo Search", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    solr: SolrSettings = Field(default_factory=SolrSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file override both defaults and
        environment variables.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def export_snapshot(self) -> None:
        """Publish these settings to child processes through the environment."""
        os.environ[SETTINGS_SNAPSHOT_ENV] = self.model_dump_json()

    @classmethod
    def from_snapshot(cls) -> Settings | None:
        """Return the settings exported by :meth:`export_snapshot`, if any.

        The snapshot is validated as-is; environment variables and ``.env``
        are not consulted again.
        """
        raw = os.environ.get(SETTINGS_SNAPSHOT_ENV)
        if not raw:
            return None
        return cls.model_validate_json(raw)
