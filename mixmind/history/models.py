from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SuggestionType(str, Enum):
    history = "history"
    trending = "trending"
    autocomplete = "autocomplete"


class SearchHistoryItem(BaseModel):
    id: str
    query: str
    timestamp: float = Field(..., description="Seconds since the epoch")
    category: str | None = None
    result_count: int | None = None
    clicked: bool = False


class TrendingSearch(BaseModel):
    query: str
    count: int = 1
    category: str | None = None
    last_searched: float


class SearchSuggestion(BaseModel):
    text: str
    type: SuggestionType
    category: str | None = None
    frequency: int | None = None


class HistorySnapshot(BaseModel):
    history: list[SearchHistoryItem] = Field(default_factory=list)
    trending: list[TrendingSearch] = Field(default_factory=list)


class CategoryCount(BaseModel):
    category: str
    count: int


class QueryCount(BaseModel):
    query: str
    count: int


class SearchAnalytics(BaseModel):
    total_searches: int
    unique_queries: int
    average_results_per_search: float
    click_through_rate: float
    top_categories: list[CategoryCount]
    search_frequency: list[QueryCount]
