from __future__ import annotations

from mixmind.history.aggregator import compute_search_analytics
from mixmind.history.config import HistoryConfig
from mixmind.history.models import SuggestionType
from mixmind.history.tracker import POPULAR_SEARCHES, SearchHistoryTracker

DAY = 24 * 60 * 60


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _tracker(**config) -> tuple[SearchHistoryTracker, FakeClock]:
    clock = FakeClock()
    return SearchHistoryTracker(config=HistoryConfig(**config), clock=clock), clock


def test_blank_queries_ignored():
    tracker, _ = _tracker()
    assert tracker.add_search("   ") is None
    assert tracker.get_history() == []


def test_history_is_newest_first_and_deduplicated():
    tracker, clock = _tracker()
    tracker.add_search("Negroni")
    clock.advance(1)
    tracker.add_search("Margarita")
    clock.advance(1)
    tracker.add_search("  negroni ")
    assert tracker.get_recent_searches() == ["negroni", "Margarita"]


def test_ids_embed_timestamp():
    tracker, clock = _tracker()
    item = tracker.add_search("gin")
    assert item.id.startswith(f"search_{int(clock.now * 1000)}_")


def test_history_capped():
    tracker, clock = _tracker(max_history_items=5)
    for i in range(8):
        clock.advance(1)
        tracker.add_search(f"query {i}")
    history = tracker.get_history()
    assert len(history) == 5
    assert history[0].query == "query 7"


def test_trending_counts_case_insensitively():
    tracker, _ = _tracker()
    for q in ("Gin", "gin", "GIN", "rum"):
        tracker.add_search(q)
    trending = tracker.get_trending_searches()
    assert trending[0].query == "Gin"
    assert trending[0].count == 3
    assert trending[1].count == 1


def test_trending_prunes_old_entries():
    tracker, clock = _tracker()
    tracker.add_search("old news")
    clock.advance(31 * DAY)
    tracker.add_search("fresh")
    assert [t.query for t in tracker.get_trending_searches()] == ["fresh"]


def test_trending_capped_by_count():
    tracker, _ = _tracker(max_trending_items=2)
    tracker.add_search("a")
    tracker.add_search("b")
    tracker.add_search("b")
    tracker.add_search("c")
    assert [t.query for t in tracker.get_trending_searches()] == ["b", "a"]


def test_mark_clicked_and_remove():
    tracker, _ = _tracker()
    item = tracker.add_search("sour")
    assert tracker.mark_clicked(item.id)
    assert tracker.get_history()[0].clicked
    assert not tracker.mark_clicked("missing")
    assert tracker.remove_search(item.id)
    assert not tracker.remove_search(item.id)
    assert tracker.get_history() == []


def test_clear_history_keeps_trending():
    tracker, _ = _tracker()
    tracker.add_search("daiquiri")
    tracker.clear_history()
    assert tracker.get_history() == []
    assert tracker.get_trending_searches()[0].query == "daiquiri"


class TestSuggestions:
    def test_default_suggestions(self):
        tracker, _ = _tracker()
        suggestions = tracker.get_suggestions("")
        assert [s.text for s in suggestions] == POPULAR_SEARCHES
        assert all(s.type == SuggestionType.autocomplete for s in suggestions)

    def test_default_suggestions_with_history(self):
        tracker, clock = _tracker()
        for q in ("a1", "a2", "a3", "a4"):
            clock.advance(1)
            tracker.add_search(q)
        suggestions = tracker.get_default_suggestions()
        assert len(suggestions) == 8
        assert [s.text for s in suggestions[:3]] == ["a4", "a3", "a2"]
        assert suggestions[3].type == SuggestionType.trending

    def test_history_then_trending_then_autocomplete(self):
        tracker, _ = _tracker()
        tracker.add_search("whiskey highball")
        suggestions = tracker.get_suggestions("whisk")
        assert suggestions[0].text == "whiskey highball"
        assert suggestions[0].type == SuggestionType.history
        types = [s.type for s in suggestions]
        assert SuggestionType.trending not in types  # de-duplicated against history
        assert "Whiskey Sour" in [s.text for s in suggestions]
        assert len(suggestions) <= 8

    def test_exact_match_excluded(self):
        tracker, _ = _tracker()
        tracker.add_search("Martini")
        texts = [s.text for s in tracker.get_suggestions("martini")]
        assert "Martini" not in texts
        assert "Espresso Martini" in texts

    def test_autocomplete_capped(self):
        tracker, _ = _tracker()
        suggestions = tracker.get_suggestions("cocktails")
        assert len(suggestions) == 5
        assert all(s.type == SuggestionType.autocomplete for s in suggestions)


def test_snapshot_round_trip():
    tracker, clock = _tracker()
    tracker.add_search("negroni", category="recipe", result_count=1)
    tracker.add_search("gin")
    restored = SearchHistoryTracker.from_snapshot(tracker.snapshot(), clock=clock)
    assert restored.get_history() == tracker.get_history()
    assert restored.get_trending_searches() == tracker.get_trending_searches()
    restored.add_search("rum")
    assert len(tracker.get_history()) == 2


def test_analytics():
    tracker, clock = _tracker()
    tracker.add_search("gin", category="spirit", result_count=4)
    clock.advance(1)
    tracker.add_search("negroni", category="recipe", result_count=1)
    clock.advance(1)
    item = tracker.add_search("GIN", category="spirit", result_count=2)
    tracker.mark_clicked(item.id)

    analytics = compute_search_analytics(tracker)
    assert analytics.total_searches == 2
    assert analytics.unique_queries == 2
    assert analytics.average_results_per_search == 1.5
    assert analytics.click_through_rate == 50.0
    assert analytics.top_categories[0].category == "spirit"
    assert analytics.search_frequency[0].query == "gin"
    assert analytics.search_frequency[0].count == 2


def test_analytics_empty():
    tracker, _ = _tracker()
    analytics = compute_search_analytics(tracker)
    assert analytics.total_searches == 0
    assert analytics.average_results_per_search == 0.0
    assert analytics.search_frequency == []
