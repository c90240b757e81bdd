"""Search analytics models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from casefind.models.search import SearchResult


class SearchLogEntry(BaseModel):
    """One completed search or selection."""

    query: str
    category: str
    result_count: int = 0
    selected_result: SearchResult | None = None
    timestamp: str


class PopularSearch(BaseModel):
    """Aggregate usage of one query string."""

    query: str
    count: int = 1
    last_used: str


class AnalyticsSnapshot(BaseModel):
    """Everything the analytics sink persists."""

    searches: list[SearchLogEntry] = Field(default_factory=list)
    popular_searches: list[PopularSearch] = Field(default_factory=list)


class SearchStats(BaseModel):
    """Summary figures for the analytics report."""

    total_searches: int = 0
    today_searches: int = 0
    most_searched_category: str = "all"
    average_result_count: int = 0
