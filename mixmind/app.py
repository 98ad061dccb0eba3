from __future__ import annotations

import threading
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from pydantic import ValidationError

from .catalog.models import SearchableItem
from .engine import MixMindEngine
from .history.aggregator import compute_search_analytics
from .history.models import SearchAnalytics, SearchHistoryItem, SearchSuggestion, TrendingSearch
from .personalization.models import PersonalizationProfile, ProfileUpdateRequest
from .recommendations.models import RecommendationRequest, RecommendationResponse
from .search.models import FilterOptions, SearchRequest, SearchResponse
from .survey.catalog import get_survey_questions
from .survey.models import PlacementResult, SurveyQuestion, SurveySubmission

app = FastAPI(title="MixMind Personalization & Search API", version="1.0.0")
_engine_lock = threading.Lock()


def get_engine(request: Request) -> MixMindEngine:
    """Return the app's engine, loading the catalog once on first use."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        with _engine_lock:
            engine = getattr(request.app.state, "engine", None)
            if engine is None:
                engine = MixMindEngine.from_catalog()
                request.app.state.engine = engine
    return engine


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/survey/questions", response_model=list[SurveyQuestion])
def survey_questions() -> list[SurveyQuestion]:
    return get_survey_questions()


# ── Onboarding / profile ─────────────────────────────────────────────────


@app.post("/placement", response_model=PlacementResult)
def placement(
    body: SurveySubmission, engine: MixMindEngine = Depends(get_engine)
) -> PlacementResult:
    return engine.place(body.answers)


@app.post("/profile", response_model=PersonalizationProfile)
def profile(
    body: SurveySubmission, engine: MixMindEngine = Depends(get_engine)
) -> PersonalizationProfile:
    return engine.build_profile(body.answers)


@app.post("/profile/update", response_model=PersonalizationProfile)
def profile_update(
    body: ProfileUpdateRequest, engine: MixMindEngine = Depends(get_engine)
) -> PersonalizationProfile:
    return engine.update_profile(body.profile, body.update, body.signals)


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(
    body: RecommendationRequest, engine: MixMindEngine = Depends(get_engine)
) -> RecommendationResponse:
    result, cached = engine.recommend(body.profile, use_cache=body.use_cache)
    return RecommendationResponse(
        recommendations=result,
        total_candidates=len(engine.index),
        cached=cached,
    )


# ── Search ───────────────────────────────────────────────────────────────


@app.post("/search", response_model=SearchResponse)
def search(body: SearchRequest, engine: MixMindEngine = Depends(get_engine)) -> SearchResponse:
    results = engine.search(body.query, body.filters, body.user_state, body.profile)
    return SearchResponse(query=body.query, results=results, total=len(results))


@app.get("/search/suggestions", response_model=list[SearchSuggestion])
def search_suggestions(
    q: str = "", engine: MixMindEngine = Depends(get_engine)
) -> list[SearchSuggestion]:
    return engine.history.get_suggestions(q)


@app.get("/search/trending", response_model=list[TrendingSearch])
def search_trending(engine: MixMindEngine = Depends(get_engine)) -> list[TrendingSearch]:
    return engine.history.get_trending_searches()


@app.get("/search/history", response_model=list[SearchHistoryItem])
def search_history(
    limit: int | None = Query(default=None, ge=1),
    engine: MixMindEngine = Depends(get_engine),
) -> list[SearchHistoryItem]:
    return engine.history.get_history(limit)


@app.delete("/search/history")
def clear_search_history(engine: MixMindEngine = Depends(get_engine)) -> dict:
    engine.history.clear_history()
    return {"status": "cleared"}


@app.post("/search/history/{search_id}/click")
def click_search(search_id: str, engine: MixMindEngine = Depends(get_engine)) -> dict:
    if not engine.history.mark_clicked(search_id):
        raise HTTPException(status_code=404, detail=f"Unknown search {search_id}")
    return {"status": "recorded"}


@app.delete("/search/history/{search_id}")
def delete_search(search_id: str, engine: MixMindEngine = Depends(get_engine)) -> dict:
    if not engine.history.remove_search(search_id):
        raise HTTPException(status_code=404, detail=f"Unknown search {search_id}")
    return {"status": "removed"}


@app.get("/search/filters", response_model=FilterOptions)
def search_filters(
    q: str | None = None, engine: MixMindEngine = Depends(get_engine)
) -> FilterOptions:
    return engine.search_engine.get_filter_options(q)


@app.get("/search/analytics", response_model=SearchAnalytics)
def search_analytics(engine: MixMindEngine = Depends(get_engine)) -> SearchAnalytics:
    return compute_search_analytics(engine.history)


# ── Index mutation ───────────────────────────────────────────────────────


@app.post("/items", response_model=SearchableItem, status_code=201)
def add_item(item: SearchableItem, engine: MixMindEngine = Depends(get_engine)) -> SearchableItem:
    engine.add_item(item)
    return item


@app.patch("/items/{item_id}", response_model=SearchableItem)
def update_item(
    item_id: str,
    changes: dict[str, Any] = Body(...),
    engine: MixMindEngine = Depends(get_engine),
) -> SearchableItem:
    try:
        updated = engine.update_item(item_id, **changes)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise HTTPException(status_code=422, detail=errors) from exc
    if not updated:
        raise HTTPException(status_code=404, detail=f"Unknown item {item_id}")
    return engine.index.get(item_id)


@app.delete("/items/{item_id}")
def remove_item(item_id: str, engine: MixMindEngine = Depends(get_engine)) -> dict:
    if not engine.remove_item(item_id):
        raise HTTPException(status_code=404, detail=f"Unknown item {item_id}")
    return {"status": "removed", "id": item_id}


@app.get("/cache/stats")
def cache_stats(engine: MixMindEngine = Depends(get_engine)) -> dict:
    return engine.cache.stats()
