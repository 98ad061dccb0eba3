from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from mixmind.catalog.models import Difficulty, ItemCategory, SearchableItem, UserItemState
from mixmind.personalization.models import PersonalizationProfile

logger = logging.getLogger(__name__)


class SortKey(str, Enum):
    relevance = "relevance"
    popularity = "popularity"
    recent = "recent"
    difficulty = "difficulty"
    time = "time"
    abv = "abv"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class FilterSpec(BaseModel):
    """Search filters. An empty list or a ``None`` range disables that dimension."""

    categories: list[ItemCategory] = Field(default_factory=list)
    difficulties: list[Difficulty] = Field(default_factory=list)
    abv_range: tuple[float, float] | None = None
    time_range: tuple[float, float] | None = None
    ingredients: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    sort_by: SortKey = SortKey.relevance
    sort_order: SortOrder = SortOrder.desc
    favorites_only: bool = False
    completed_only: bool = False

    @field_validator("categories", "difficulties", mode="before")
    @classmethod
    def _drop_unknown(cls, value: Any, info: ValidationInfo) -> Any:
        """Lower-case known values; unknown ones are dropped with a warning."""
        if value is None:
            return []
        if isinstance(value, (str, Enum)):
            value = [value]
        if not isinstance(value, (list, tuple, set)):
            return value
        enum = ItemCategory if info.field_name == "categories" else Difficulty
        known = {member.value for member in enum}
        kept, dropped = [], []
        for raw in value:
            name = str(getattr(raw, "value", raw)).strip().lower()
            if name in known:
                if name not in kept:
                    kept.append(name)
            else:
                dropped.append(raw)
        if dropped:
            logger.warning("Ignoring unknown %s in filter: %s", info.field_name, dropped)
        return kept

    def is_empty(self) -> bool:
        """True when no dimension is enabled and the default ordering applies."""
        return not (
            self.categories
            or self.difficulties
            or self.abv_range is not None
            or self.time_range is not None
            or self.ingredients
            or self.equipment
            or self.tags
            or self.favorites_only
            or self.completed_only
            or self.sort_by != SortKey.relevance
            or self.sort_order != SortOrder.desc
        )


class FacetCount(BaseModel):
    key: str
    label: str
    count: int


class FilterOptions(BaseModel):
    categories: list[FacetCount]
    difficulties: list[FacetCount]
    abv_range: tuple[float, float]
    time_range: tuple[float, float]


class SearchRequest(BaseModel):
    query: str = ""
    filters: FilterSpec | None = None
    user_state: UserItemState | None = None
    profile: PersonalizationProfile | None = Field(
        default=None, description="When given, results are reordered for this profile"
    )


class SearchResponse(BaseModel):
    query: str
    results: list[SearchableItem]
    total: int
