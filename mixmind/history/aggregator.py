from __future__ import annotations

from collections import Counter

from .models import CategoryCount, QueryCount, SearchAnalytics
from .tracker import SearchHistoryTracker


def compute_search_analytics(tracker: SearchHistoryTracker) -> SearchAnalytics:
    history = tracker.get_history()
    total = len(history)

    unique_queries = len({h.query.lower() for h in history})

    # Average result count
    counted = [h.result_count for h in history if h.result_count is not None]
    avg_results = round(sum(counted) / len(counted), 1) if counted else 0.0

    clicked = sum(1 for h in history if h.clicked)

    # Top categories
    category_counter: Counter[str] = Counter()
    for h in history:
        if h.category:
            category_counter[h.category] += 1
    top_categories = [
        CategoryCount(category=c, count=n) for c, n in category_counter.most_common(5)
    ]

    # Query frequency comes from trending counts; history keeps one row per query
    frequency_counter: Counter[str] = Counter()
    for t in tracker.get_trending_searches():
        frequency_counter[t.query.lower()] += t.count
    search_frequency = [
        QueryCount(query=q, count=n) for q, n in frequency_counter.most_common(10)
    ]

    return SearchAnalytics(
        total_searches=total,
        unique_queries=unique_queries,
        average_results_per_search=avg_results,
        click_through_rate=round(clicked / total * 100, 1) if total else 0.0,
        top_categories=top_categories,
        search_frequency=search_frequency,
    )
