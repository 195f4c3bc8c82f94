"""Paging request model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Sort(BaseModel):
    """Sort order on a single document field."""

    field: str = Field(description="Field to sort on")
    direction: Literal["asc", "desc"] = Field(default="asc", description="Sort direction")

    def to_solr(self) -> str:
        return f"{self.field} {self.direction}"


class PageRequest(BaseModel):
    """Zero-based page of search results.

    Example:
        >>> PageRequest(page=2, size=10).offset
        20
    """

    model_config = {"frozen": True}

    page: int = Field(default=0, ge=0, description="Zero-based page number")
    size: int = Field(default=10, ge=1, description="Number of results per page")
    sort: Sort | None = Field(default=None, description="Optional sort order")

    @property
    def offset(self) -> int:
        return self.page * self.size
