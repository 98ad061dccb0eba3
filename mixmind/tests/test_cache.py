from __future__ import annotations

from unittest.mock import patch

from mixmind.catalog.data_store import load_catalog
from mixmind.engine import MixMindEngine
from mixmind.personalization.profile import build_profile
from mixmind.recommendations.cache import RecommendationCache, make_key

CATALOG = load_catalog()


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_cache_miss_then_hit():
    cache = RecommendationCache()
    profile = build_profile({"q8": ["gin"]})
    assert cache.get(profile, 1) is None
    cache.set(profile, 1, "value")
    assert cache.get(profile, 1) == "value"
    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 50.0


def test_catalog_version_changes_key():
    profile = build_profile({})
    assert make_key(profile, 1) != make_key(profile, 2)
    assert make_key(profile, 1) == make_key(build_profile({}), 1)


def test_lookup_version_changes_key():
    profile = build_profile({})
    before = make_key(profile, 1)
    with patch("mixmind.recommendations.cache.LOOKUP_VERSION", "test"):
        assert make_key(profile, 1) != before


def test_entries_expire():
    clock = FakeClock()
    cache = RecommendationCache(ttl=10, clock=clock)
    profile = build_profile({})
    cache.set(profile, 0, "value")
    clock.now = 11
    assert cache.get(profile, 0) is None
    assert cache.stats()["size"] == 0


def test_clear_resets_stats():
    cache = RecommendationCache()
    cache.get(build_profile({}), 0)
    cache.clear()
    assert cache.stats() == {"size": 0, "hits": 0, "misses": 0, "hit_rate": 0.0, "ttl_seconds": cache.ttl}


def test_engine_serves_cached_until_index_changes():
    engine = MixMindEngine(CATALOG)
    profile = build_profile({"q8": ["rum"]})
    first, cached = engine.recommend(profile)
    assert not cached
    second, cached = engine.recommend(profile)
    assert cached
    assert second is first

    engine.remove_item("mojito")
    third, cached = engine.recommend(profile)
    assert not cached
    assert "mojito" not in [c.item.id for c in third.featured_cocktails]


def test_engine_bypasses_cache_on_request():
    engine = MixMindEngine(CATALOG)
    profile = build_profile({})
    engine.recommend(profile, use_cache=False)
    assert engine.cache.stats()["misses"] == 0


def test_newer_catalog_version_drops_older_entries():
    cache = RecommendationCache()
    first, second = build_profile({}), build_profile({"q8": ["gin"]})
    cache.set(first, 1, "a")
    cache.set(second, 1, "b")
    assert cache.stats()["size"] == 2
    cache.set(first, 2, "c")
    assert cache.stats()["size"] == 1
    assert cache.get(second, 1) is None
    assert cache.get(first, 2) == "c"


def test_expired_entries_pruned_on_set():
    clock = FakeClock()
    cache = RecommendationCache(ttl=10, clock=clock)
    cache.set(build_profile({}), 0, "old")
    clock.now = 11
    cache.set(build_profile({"q8": ["rum"]}), 0, "new")
    assert cache.stats()["size"] == 1


def test_oldest_entry_evicted_past_capacity():
    cache = RecommendationCache(max_entries=2)
    profiles = [build_profile({"q8": [spirit]}) for spirit in ("gin", "rum", "tequila")]
    for profile in profiles:
        cache.set(profile, 0, profile.favorite_spirits[0])
    assert cache.stats()["size"] == 2
    assert cache.get(profiles[0], 0) is None
    assert cache.get(profiles[2], 0) == "tequila"


def test_engine_cache_stays_bounded_across_index_changes():
    engine = MixMindEngine(CATALOG)
    profile = build_profile({"q8": ["rum"]})
    for i in range(50):
        engine.recommend(profile)
        assert engine.update_item("mojito", popularity=i)
    engine.recommend(profile)
    assert engine.cache.stats()["size"] == 1
