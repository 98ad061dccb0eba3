"""
Per-engine search history.

The tracker is a plain object: callers own its lifetime and persist it with
``snapshot()`` / ``from_snapshot()``. All timestamps come from the injected
clock so tests can move time forward.
"""
from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable

from .config import DEFAULT_HISTORY_CONFIG, HistoryConfig
from .models import (
    HistorySnapshot,
    SearchHistoryItem,
    SearchSuggestion,
    SuggestionType,
    TrendingSearch,
)

logger = logging.getLogger(__name__)

COCKTAIL_SUGGESTIONS: list[str] = [
    # Classics
    "Old Fashioned", "Manhattan", "Whiskey Sour", "Negroni", "Martini",
    "Daiquiri", "Mai Tai", "Mint Julep", "Sazerac", "Boulevardier",
    # Modern
    "Espresso Martini", "Paper Plane", "Bee's Knees", "Gold Rush",
    "Amaretto Sour", "Penicillin", "Last Word", "Aviation",
    # By spirit
    "Whiskey cocktails", "Gin cocktails", "Vodka cocktails", "Rum cocktails",
    "Tequila cocktails", "Mezcal cocktails", "Bourbon cocktails",
    # By difficulty
    "Easy cocktails", "Simple cocktails", "Advanced cocktails",
    "Beginner cocktails", "Professional cocktails",
    # By occasion
    "Summer cocktails", "Winter cocktails", "Party cocktails",
    "Brunch cocktails", "After dinner cocktails", "Aperitif cocktails",
    # By style
    "Shaken cocktails", "Stirred cocktails", "Built cocktails",
    "Layered cocktails", "Frozen cocktails", "Hot cocktails",
    # By flavor
    "Sweet cocktails", "Sour cocktails", "Bitter cocktails",
    "Smoky cocktails", "Spicy cocktails", "Fruity cocktails",
]

POPULAR_SEARCHES: list[str] = ["Old Fashioned", "Whiskey Sour", "Gin & Tonic", "Margarita"]

_TYPE_ORDER = {
    SuggestionType.history: 0,
    SuggestionType.trending: 1,
    SuggestionType.autocomplete: 2,
}


class SearchHistoryTracker:
    def __init__(
        self,
        config: HistoryConfig = DEFAULT_HISTORY_CONFIG,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self._clock = clock
        self._history: list[SearchHistoryItem] = []
        self._trending: list[TrendingSearch] = []
        self._lock = threading.Lock()

    # ── Recording ──────────────────────────────────────────────────────────

    def _new_id(self, now: float) -> str:
        return f"search_{int(now * 1000)}_{uuid.uuid4().hex[:9]}"

    def add_search(
        self,
        query: str,
        category: str | None = None,
        result_count: int | None = None,
    ) -> SearchHistoryItem | None:
        """Record a query. Blank queries are ignored and return ``None``."""
        text = (query or "").strip()
        if not text:
            return None
        now = self._clock()
        item = SearchHistoryItem(
            id=self._new_id(now),
            query=text,
            timestamp=now,
            category=category,
            result_count=result_count,
        )
        lowered = text.lower()
        with self._lock:
            history = [h for h in self._history if h.query.lower() != lowered]
            history.insert(0, item)
            self._history = history[: self.config.max_history_items]
            self._update_trending(text, category, now)
        logger.debug("Recorded search %r (%s results)", text, result_count)
        return item

    def _update_trending(self, query: str, category: str | None, now: float) -> None:
        lowered = query.lower()
        for trend in self._trending:
            if trend.query.lower() == lowered:
                trend.count += 1
                trend.last_searched = now
                break
        else:
            self._trending.append(
                TrendingSearch(query=query, count=1, category=category, last_searched=now)
            )

        cutoff = now - self.config.trending_window_seconds
        self._trending = [t for t in self._trending if t.last_searched > cutoff]
        if len(self._trending) > self.config.max_trending_items:
            self._trending.sort(key=lambda t: t.count, reverse=True)
            self._trending = self._trending[: self.config.max_trending_items]

    def mark_clicked(self, search_id: str) -> bool:
        with self._lock:
            for item in self._history:
                if item.id == search_id:
                    item.clicked = True
                    return True
        logger.warning("Cannot mark unknown search %s as clicked", search_id)
        return False

    def remove_search(self, search_id: str) -> bool:
        with self._lock:
            before = len(self._history)
            self._history = [h for h in self._history if h.id != search_id]
            return len(self._history) < before

    def clear_history(self) -> None:
        """Forget past queries. Trending counts are kept."""
        with self._lock:
            self._history = []
        logger.info("Search history cleared")

    # ── Queries ────────────────────────────────────────────────────────────

    def get_history(self, limit: int | None = None) -> list[SearchHistoryItem]:
        history = self._history[:limit] if limit is not None else list(self._history)
        return sorted(history, key=lambda h: h.timestamp, reverse=True)

    def get_recent_searches(self) -> list[str]:
        return [h.query for h in self._history[: self.config.recent_limit]]

    def get_trending_searches(self) -> list[TrendingSearch]:
        trending = sorted(self._trending, key=lambda t: t.count, reverse=True)
        return trending[: self.config.max_trending_items]

    def get_suggestions(self, query: str | None) -> list[SearchSuggestion]:
        """Suggestions for a partial query, history first, then trending, then vocabulary."""
        q = (query or "").strip().lower()
        if not q:
            return self.get_default_suggestions()

        def partial(text: str) -> bool:
            lowered = text.lower()
            return q in lowered and lowered != q

        suggestions = [
            SearchSuggestion(text=h.query, type=SuggestionType.history, category=h.category, frequency=1)
            for h in self._history
            if partial(h.query)
        ][: self.config.history_suggestions]
        suggestions += [
            SearchSuggestion(text=t.query, type=SuggestionType.trending, category=t.category, frequency=t.count)
            for t in self._trending
            if partial(t.query)
        ][: self.config.trending_suggestions]
        suggestions += [
            SearchSuggestion(text=s, type=SuggestionType.autocomplete)
            for s in COCKTAIL_SUGGESTIONS
            if partial(s)
        ][: self.config.autocomplete_suggestions]

        seen: set[str] = set()
        unique = []
        for s in suggestions:
            key = s.text.lower()
            if key not in seen:
                seen.add(key)
                unique.append(s)

        unique.sort(key=lambda s: (_TYPE_ORDER[s.type], -(s.frequency or 0)))
        return unique[: self.config.max_suggestions]

    def get_default_suggestions(self) -> list[SearchSuggestion]:
        recent = [
            SearchSuggestion(text=q, type=SuggestionType.history)
            for q in self.get_recent_searches()[:3]
        ]
        trending = [
            SearchSuggestion(text=t.query, type=SuggestionType.trending, frequency=t.count)
            for t in self.get_trending_searches()[:3]
        ]
        popular = [SearchSuggestion(text=q, type=SuggestionType.autocomplete) for q in POPULAR_SEARCHES]
        return (recent + trending + popular)[: self.config.max_suggestions]

    # ── Persistence ────────────────────────────────────────────────────────

    def snapshot(self) -> HistorySnapshot:
        with self._lock:
            return HistorySnapshot(
                history=[h.model_copy() for h in self._history],
                trending=[t.model_copy() for t in self._trending],
            )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: HistorySnapshot,
        config: HistoryConfig = DEFAULT_HISTORY_CONFIG,
        clock: Callable[[], float] = time.time,
    ) -> SearchHistoryTracker:
        tracker = cls(config=config, clock=clock)
        tracker._history = [h.model_copy() for h in snapshot.history][: config.max_history_items]
        tracker._trending = [t.model_copy() for t in snapshot.trending]
        logger.info(
            "Restored %d history items and %d trending searches",
            len(tracker._history),
            len(tracker._trending),
        )
        return tracker
