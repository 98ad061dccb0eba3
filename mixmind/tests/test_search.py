from __future__ import annotations

from datetime import datetime

from mixmind.catalog.data_store import load_catalog
from mixmind.catalog.models import Difficulty, ItemCategory, SearchableItem, UserItemState
from mixmind.history.tracker import SearchHistoryTracker
from mixmind.personalization.profile import build_profile
from mixmind.search.engine import SearchEngine, relevance_score
from mixmind.search.index import SearchIndex
from mixmind.search.models import FilterSpec, SortKey, SortOrder

CATALOG = load_catalog()


def _engine(items=None) -> SearchEngine:
    return SearchEngine(SearchIndex(CATALOG if items is None else items), SearchHistoryTracker())


def _item(item_id: str, **fields) -> SearchableItem:
    data = {"id": item_id, "title": item_id.title(), "category": "recipe"}
    data.update(fields)
    return SearchableItem.model_validate(data)


def test_empty_query_returns_top_twenty_by_popularity():
    results = _engine().search("")
    expected = sorted(CATALOG, key=lambda i: i.popularity or 0, reverse=True)[:20]
    assert [i.id for i in results] == [i.id for i in expected]
    assert results[0].id == "old-fashioned"


def test_exact_title_ranks_first():
    results = _engine().search("Old Fashioned")
    assert results[0].id == "old-fashioned"
    assert "oaxaca-old-fashioned" in [i.id for i in results]


def test_tokens_are_or_matched():
    ids = {i.id for i in _engine().search("mezcal scotch")}
    assert {"oaxaca-old-fashioned", "penicillin", "macallan-18"} <= ids


def test_relevance_rules():
    item = _item("x", title="Gin Fizz", description="bubbly and sour", tags=["classic"])
    assert relevance_score(item, "gin fizz") == 100
    assert relevance_score(item, "gin") == 80
    assert relevance_score(item, "fizz") == 60
    assert relevance_score(item, "class") == 40
    assert relevance_score(item, "bubbly") == 20
    assert relevance_score(item, "tonic") == 0


def test_category_filter_only_spirits():
    engine = _engine()
    for query in ("", "gin", "tequila", "premium"):
        results = engine.search(query, FilterSpec(categories=[ItemCategory.spirit]))
        assert results
        assert all(i.category == ItemCategory.spirit for i in results)


def test_tequila_sorted_by_abv_ascending():
    spec = FilterSpec(sort_by=SortKey.abv, sort_order=SortOrder.asc)
    results = _engine().search("tequila", spec)
    assert [i.id for i in results] == [
        "paloma",
        "tequila-sunrise",
        "margarita",
        "oaxaca-old-fashioned",
        "patron-silver",
    ]


def test_descending_puts_most_popular_first():
    spec = FilterSpec(sort_by=SortKey.popularity)
    results = _engine().search("tequila", spec)
    assert results[0].id == "margarita"
    asc = _engine().search("tequila", FilterSpec(sort_by=SortKey.popularity, sort_order=SortOrder.asc))
    assert asc[0].id == "oaxaca-old-fashioned"


def test_recent_sorts_by_updated_at():
    items = [
        _item("old", popularity=99, updated_at=datetime(2020, 1, 1)),
        _item("new", popularity=1, updated_at=datetime(2024, 1, 1)),
        _item("unknown", popularity=50),
    ]
    results = _engine(items).search("", FilterSpec(sort_by=SortKey.recent))
    assert [i.id for i in results] == ["new", "old", "unknown"]


def test_difficulty_sort_treats_missing_as_easy():
    items = [
        _item("h", difficulty="hard"),
        _item("n"),
        _item("m", difficulty="medium"),
    ]
    results = _engine(items).search("", FilterSpec(sort_by=SortKey.difficulty, sort_order=SortOrder.asc))
    assert [i.id for i in results] == ["n", "m", "h"]


def test_inverted_range_is_empty():
    engine = _engine()
    assert engine.search("gin", FilterSpec(abv_range=(40, 10))) == []
    assert engine.search("", FilterSpec(time_range=(10, 1))) == []


def test_ranges_are_inclusive_and_skip_missing():
    results = _engine().search("", FilterSpec(abv_range=(0, 0)))
    assert {i.id for i in results} == {"virgin-mojito", "shirley-temple", "garden-cooler", "seedlip-garden"}
    timed = _engine().search("", FilterSpec(time_range=(90, 180)))
    assert {i.id for i in timed} == {"mixology-masterclass", "agave-tasting-night", "summer-spritz-social"}


def test_ingredient_and_equipment_filters():
    results = _engine().search("", FilterSpec(ingredients=["mint"], equipment=["muddler"]))
    ids = {i.id for i in results}
    assert "virgin-mojito" in ids
    assert all(i.category == ItemCategory.recipe for i in results)


def test_tag_filter_substring():
    results = _engine().search("", FilterSpec(tags=["zero"]))
    assert {i.id for i in results} == {"virgin-mojito", "shirley-temple", "garden-cooler", "seedlip-garden"}


def test_favorites_and_completed_toggles():
    engine = _engine()
    state = UserItemState(favorite_ids={"negroni", "margarita"}, completed_ids={"negroni"})
    favorites = engine.search("", FilterSpec(favorites_only=True), state)
    assert {i.id for i in favorites} == {"negroni", "margarita"}
    both = engine.search("", FilterSpec(favorites_only=True, completed_only=True), state)
    assert [i.id for i in both] == ["negroni"]
    assert engine.search("", FilterSpec(favorites_only=True)) == []


def test_results_truncated_to_fifty():
    items = [_item(f"gin-{i}", title=f"Gin {i}", popularity=i % 100) for i in range(80)]
    assert len(_engine(items).search("gin")) == 50


def test_search_records_history():
    engine = _engine()
    engine.search("negroni")
    engine.search("   ")
    history = engine.history.get_history()
    assert [h.query for h in history] == ["negroni"]
    assert history[0].result_count == 1


def test_single_category_recorded_on_history():
    engine = _engine()
    engine.search("gin", FilterSpec(categories=[ItemCategory.spirit]))
    assert engine.history.get_history()[0].category == "spirit"


def test_filter_options_facets():
    options = _engine().get_filter_options()
    counts = {f.key: f.count for f in options.categories}
    assert counts["recipe"] == 28
    assert counts["spirit"] == 5
    assert {f.label for f in options.categories} >= {"Recipe", "Spirit"}
    assert options.abv_range == (0, 45)
    assert options.time_range == (2, 180)


def test_filter_options_fallback_ranges():
    options = _engine([_item("plain", category="user")]).get_filter_options()
    assert options.abv_range == (0, 50)
    assert options.time_range == (0, 60)
    assert options.difficulties == []


def test_filter_options_for_query_do_not_touch_history():
    engine = _engine()
    options = engine.get_filter_options("tequila")
    assert sum(f.count for f in options.categories) == 5
    assert engine.history.get_history() == []


def test_personalize_prefers_profile_matches():
    profile = build_profile({"q10": "yes"})
    engine = _engine()
    results = engine.personalize(engine.search("mojito"), profile)
    assert results[0].id == "virgin-mojito"


class TestFilterNormalisation:
    def test_unknown_category_is_ignored(self):
        results = _engine().search("gin", FilterSpec(categories=["spirit", "cocktail"]))
        assert results
        assert all(i.category == ItemCategory.spirit for i in results)
        assert "hendricks-gin" in [i.id for i in results]

    def test_only_unknown_values_disable_the_dimension(self):
        filters = FilterSpec(categories=["cocktail"], difficulties=["extreme"])
        assert filters.categories == []
        assert filters.difficulties == []
        assert filters.is_empty()

    def test_profile_difficulties_usable_as_filter(self):
        profile = build_profile({"q1": "occasionally"})
        filters = FilterSpec(difficulties=profile.preferred_difficulty)
        assert filters.difficulties == [Difficulty.easy, Difficulty.medium]
        results = _engine().search("old fashioned", filters)
        ids = [i.id for i in results]
        assert "old-fashioned" in ids
        assert "oaxaca-old-fashioned" not in ids
        assert all(i.difficulty in (Difficulty.easy, Difficulty.medium) for i in results)


def test_filter_options_blank_query_covers_whole_index():
    options = _engine().get_filter_options("   ")
    assert sum(f.count for f in options.categories) == len(CATALOG)
