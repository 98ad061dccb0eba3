"""
Free-text search, filtering and sorting over a :class:`SearchIndex`.

Query terms are OR-matched as substrings against an item's title, subtitle,
description and tags. Filters narrow the matches and are ANDed together.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from mixmind.catalog.models import DIFFICULTY_ORDER, RecipePayload, SearchableItem, UserItemState
from mixmind.personalization.models import PersonalizationProfile
from mixmind.recommendations.generator import score_item

from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .index import SearchIndex
from .models import FacetCount, FilterOptions, FilterSpec, SortKey, SortOrder

if TYPE_CHECKING:
    from mixmind.history.tracker import SearchHistoryTracker

logger = logging.getLogger(__name__)


# ── Relevance ──────────────────────────────────────────────────────────────


def relevance_score(item: SearchableItem, query: str) -> int:
    """Score how well ``query`` describes ``item``; the first matching rule wins."""
    q = query.strip().lower()
    if not q:
        return 0
    title = item.title.lower()
    if title == q:
        return 100
    if title.startswith(q):
        return 80
    if q in title:
        return 60
    if any(q in tag.lower() for tag in item.tags):
        return 40
    if q in (item.description or "").lower():
        return 20
    return 0


def matches_query(item: SearchableItem, terms: list[str]) -> bool:
    text = item.searchable_text()
    return any(term in text for term in terms)


# ── Filters ────────────────────────────────────────────────────────────────


def _in_range(value: float | None, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return value is not None and low <= value <= high


def _any_substring(wanted: list[str], values: list[str]) -> bool:
    lowered = [v.lower() for v in values]
    return any(w.lower() in v for w in wanted for v in lowered)


def _inverted(bounds: tuple[float, float] | None) -> bool:
    return bounds is not None and bounds[0] > bounds[1]


def apply_filters(
    items: list[SearchableItem],
    filters: FilterSpec,
    user_state: UserItemState | None = None,
) -> list[SearchableItem]:
    if _inverted(filters.abv_range) or _inverted(filters.time_range):
        logger.warning(
            "Inverted range filter (abv=%s, time=%s), returning no results",
            filters.abv_range,
            filters.time_range,
        )
        return []

    state = user_state or UserItemState()
    categories = set(filters.categories)
    difficulties = set(filters.difficulties)
    result = []
    for item in items:
        if categories and item.category not in categories:
            continue
        if difficulties and item.difficulty not in difficulties:
            continue
        if filters.abv_range is not None and not _in_range(item.abv, filters.abv_range):
            continue
        if filters.time_range is not None and not _in_range(item.time, filters.time_range):
            continue
        if filters.ingredients or filters.equipment:
            if not isinstance(item.payload, RecipePayload):
                continue
            if filters.ingredients and not _any_substring(filters.ingredients, item.payload.ingredients):
                continue
            if filters.equipment and not _any_substring(filters.equipment, item.payload.equipment):
                continue
        if filters.tags and not _any_substring(filters.tags, item.tags):
            continue
        if filters.favorites_only and item.id not in state.favorite_ids:
            continue
        if filters.completed_only and item.id not in state.completed_ids:
            continue
        result.append(item)
    return result


# ── Sorting ────────────────────────────────────────────────────────────────


def _popularity(item: SearchableItem) -> float:
    return item.popularity or 0


def sort_items(
    items: list[SearchableItem],
    sort_by: SortKey = SortKey.relevance,
    sort_order: SortOrder = SortOrder.desc,
    query: str = "",
) -> list[SearchableItem]:
    """Order items by ``sort_by``. Descending puts the largest value first."""
    if sort_by == SortKey.relevance:
        def key(i):
            return (relevance_score(i, query), _popularity(i))
    elif sort_by == SortKey.popularity:
        key = _popularity
    elif sort_by == SortKey.recent:
        def key(i):
            stamp = i.updated_at.timestamp() if i.updated_at else 0.0
            return (stamp, _popularity(i))
    elif sort_by == SortKey.difficulty:
        def key(i):
            return DIFFICULTY_ORDER[i.difficulty.value if i.difficulty else "easy"]
    elif sort_by == SortKey.time:
        def key(i):
            return i.time or 0
    else:
        def key(i):
            return i.abv or 0
    return sorted(items, key=key, reverse=sort_order == SortOrder.desc)


# ── Engine ─────────────────────────────────────────────────────────────────


class SearchEngine:
    def __init__(
        self,
        index: SearchIndex,
        history: SearchHistoryTracker | None = None,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ) -> None:
        self.index = index
        self.history = history
        self.config = config

    def top_by_popularity(self, limit: int | None = None) -> list[SearchableItem]:
        items = sorted(self.index.items(), key=_popularity, reverse=True)
        return items[: limit or self.config.default_results]

    def search(
        self,
        query: str = "",
        filters: FilterSpec | None = None,
        user_state: UserItemState | None = None,
        record: bool = True,
    ) -> list[SearchableItem]:
        """Run a query against the index.

        An empty query without filters returns the most popular items. A
        non-empty query is recorded in the search history with its result
        count unless ``record`` is false.
        """
        query = query or ""
        terms = query.lower().split()
        if not terms and (filters is None or filters.is_empty()):
            return self.top_by_popularity()

        spec = filters or FilterSpec()
        results = self.index.items()
        if terms:
            results = [item for item in results if matches_query(item, terms)]
        results = apply_filters(results, spec, user_state)
        results = sort_items(results, spec.sort_by, spec.sort_order, query)
        results = results[: self.config.max_results]

        if terms and record and self.history is not None:
            category = spec.categories[0].value if len(spec.categories) == 1 else None
            self.history.add_search(query, category=category, result_count=len(results))
        logger.debug("Search %r returned %d items", query, len(results))
        return results

    def get_filter_options(self, query: str | None = None) -> FilterOptions:
        """Facet counts and value ranges for the items a query would return."""
        items = self.search(query, record=False) if query and query.strip() else self.index.items()

        categories = Counter(item.category.value for item in items)
        difficulties = Counter(item.difficulty.value for item in items if item.difficulty)
        abv_values = [item.abv for item in items if item.abv is not None]
        time_values = [item.time for item in items if item.time is not None]

        return FilterOptions(
            categories=[
                FacetCount(key=k, label=k.capitalize(), count=c) for k, c in categories.items()
            ],
            difficulties=[
                FacetCount(key=k, label=k.capitalize(), count=c) for k, c in difficulties.items()
            ],
            abv_range=(min(abv_values), max(abv_values)) if abv_values else self.config.abv_fallback_range,
            time_range=(min(time_values), max(time_values)) if time_values else self.config.time_fallback_range,
        )

    @staticmethod
    def personalize(
        items: list[SearchableItem], profile: PersonalizationProfile
    ) -> list[SearchableItem]:
        """Stable reorder of ``items`` by how well each suits ``profile``."""
        scores = {item.id: score_item(item, profile)[0] for item in items}
        return sorted(items, key=lambda i: scores[i.id], reverse=True)
