"""
Engine context.

One ``MixMindEngine`` owns the search index, the search history and the
recommendation cache. Callers create it explicitly and pass it around; no
state lives at module level.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from .catalog.config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .catalog.data_store import load_catalog
from .catalog.models import SearchableItem, UserItemState
from .history.config import DEFAULT_HISTORY_CONFIG, HistoryConfig
from .history.tracker import SearchHistoryTracker
from .personalization.models import PersonalizationProfile, ProfileUpdate, UserSignal
from .personalization.profile import apply_signals, build_profile, update_profile
from .recommendations.cache import RecommendationCache
from .recommendations.config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .recommendations.generator import generate_recommendations
from .recommendations.models import RecommendationSet
from .search.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .search.engine import SearchEngine
from .search.index import SearchIndex
from .search.models import FilterSpec
from .survey.models import PlacementResult
from .survey.placement import place_user

logger = logging.getLogger(__name__)


class MixMindEngine:
    def __init__(
        self,
        items: Iterable[SearchableItem] = (),
        history: SearchHistoryTracker | None = None,
        search_config: SearchConfig = DEFAULT_SEARCH_CONFIG,
        history_config: HistoryConfig = DEFAULT_HISTORY_CONFIG,
        recommendation_config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
    ) -> None:
        self.index = SearchIndex(items)
        self.history = history or SearchHistoryTracker(config=history_config)
        self.search_engine = SearchEngine(self.index, self.history, search_config)
        self.recommendation_config = recommendation_config
        self.cache = RecommendationCache(
            ttl=recommendation_config.cache_ttl_seconds,
            max_entries=recommendation_config.cache_max_entries,
        )

    @classmethod
    def from_catalog(cls, config: CatalogConfig = DEFAULT_CATALOG_CONFIG, **kwargs: Any) -> MixMindEngine:
        items = load_catalog(config)
        engine = cls(items, **kwargs)
        logger.info("Engine ready with %d catalog items", len(engine.index))
        return engine

    # ── Onboarding / profile ───────────────────────────────────────────────

    def place(self, answers: dict[str, Any] | None) -> PlacementResult:
        return place_user(answers)

    def build_profile(self, answers: dict[str, Any] | None) -> PersonalizationProfile:
        return build_profile(answers)

    def update_profile(
        self,
        profile: PersonalizationProfile,
        update: ProfileUpdate | None = None,
        signals: list[UserSignal] | None = None,
    ) -> PersonalizationProfile:
        if update is not None:
            profile = update_profile(profile, update)
        if signals:
            profile = apply_signals(profile, signals)
        return profile

    # ── Recommendations ────────────────────────────────────────────────────

    def recommend(
        self, profile: PersonalizationProfile, use_cache: bool = True
    ) -> tuple[RecommendationSet, bool]:
        """Return ``(recommendations, served_from_cache)``."""
        use_cache = use_cache and self.recommendation_config.cache_enabled
        version = self.index.version
        if use_cache:
            cached = self.cache.get(profile, version)
            if cached is not None:
                return cached, True
        result = generate_recommendations(profile, self.index.items(), self.recommendation_config)
        if use_cache:
            self.cache.set(profile, version, result)
        return result, False

    # ── Search / index ─────────────────────────────────────────────────────

    def search(
        self,
        query: str = "",
        filters: FilterSpec | None = None,
        user_state: UserItemState | None = None,
        profile: PersonalizationProfile | None = None,
    ) -> list[SearchableItem]:
        results = self.search_engine.search(query, filters, user_state)
        if profile is not None:
            results = self.search_engine.personalize(results, profile)
        return results

    def add_item(self, item: SearchableItem) -> bool:
        return self.index.add_item(item)

    def update_item(self, item_id: str, /, **changes: Any) -> bool:
        return self.index.update_item(item_id, **changes)

    def remove_item(self, item_id: str) -> bool:
        return self.index.remove_item(item_id)
