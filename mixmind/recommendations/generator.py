"""
Profile-driven recommendation generator.

Every function here is pure: the same profile and catalog always produce
the same recommendation set. Cocktail scores are additive and clamped to
100; ties keep catalog order.
"""
from __future__ import annotations

import logging
from typing import Iterable

from mixmind.catalog.lookups import (
    FLAVOR_MOOD_BOOSTS,
    LESSON_TRACKS,
    MOOD_CATEGORIES,
    NEUTRAL_FLAVOR_SCORE,
    SPIRIT_BRANDS,
    SPIRIT_MOOD_BOOSTS,
    moods_for_spirit,
)
from mixmind.catalog.models import ItemCategory, RecipePayload, SearchableItem
from mixmind.personalization.models import LessonTrack, PersonalizationProfile
from mixmind.survey.models import Track

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import (
    BrandRecommendation,
    LearningPath,
    MoodCategoryRanking,
    RecommendationSet,
    ScoredCocktail,
)

logger = logging.getLogger(__name__)

BASE_MOOD_AFFINITY = 50
DEFAULT_DIFFICULTY = "medium"
_LOW_ALCOHOL_TAGS = {"low-abv", "low-alcohol"}


# ── Item helpers ───────────────────────────────────────────────────────────


def base_spirit(item: SearchableItem) -> str | None:
    if isinstance(item.payload, RecipePayload) and item.payload.base_spirit:
        return item.payload.base_spirit.lower()
    return None


def is_mocktail(item: SearchableItem) -> bool:
    if isinstance(item.payload, RecipePayload) and item.payload.mocktail:
        return True
    return "mocktail" in (t.lower() for t in item.tags)


def is_low_alcohol(item: SearchableItem) -> bool:
    if isinstance(item.payload, RecipePayload) and item.payload.low_alcohol:
        return True
    return any(t.lower() in _LOW_ALCOHOL_TAGS for t in item.tags)


def _mentions(item: SearchableItem, flavor: str) -> bool:
    if flavor in (item.description or "").lower():
        return True
    if isinstance(item.payload, RecipePayload):
        return any(flavor in ing.lower() for ing in item.payload.ingredients)
    return False


def recipes(catalog: Iterable[SearchableItem]) -> list[SearchableItem]:
    return [item for item in catalog if item.category == ItemCategory.recipe]


# ── Scoring ────────────────────────────────────────────────────────────────


def score_item(
    item: SearchableItem,
    profile: PersonalizationProfile,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> tuple[float, list[str]]:
    """Return ``(score, reasons)`` for one item against a profile."""
    score = 0.0
    reasons: list[str] = []

    spirit = base_spirit(item)
    spirit_score = profile.spirit_scores.get(spirit, 0) if spirit else 0
    if spirit_score:
        score += spirit_score * config.spirit_weight
        if spirit_score >= config.favorite_reason_threshold:
            reasons.append(f"Features your favorite spirit: {spirit}")

    difficulty = item.difficulty.value if item.difficulty else DEFAULT_DIFFICULTY
    if difficulty in (d.lower() for d in profile.preferred_difficulty):
        score += config.difficulty_bonus
        reasons.append(f"Perfect for your {profile.skill_level.value} level")

    mocktail = is_mocktail(item)
    low = is_low_alcohol(item)
    if profile.preferred_abv == Track.zero_proof and mocktail:
        score += config.abv_bonus
        reasons.append("Alcohol-free as you prefer")
    elif profile.preferred_abv == Track.low_abv and low:
        score += config.abv_bonus
        reasons.append("Lower alcohol content")
    elif profile.preferred_abv == Track.alcoholic and not mocktail and not low:
        score += config.abv_bonus

    for flavor in profile.flavor_preferences:
        if _mentions(item, flavor):
            weight = profile.flavor_scores.get(flavor, NEUTRAL_FLAVOR_SCORE)
            score += weight / 100 * config.flavor_weight
            reasons.append(f"Matches your {flavor} preference")

    return round(min(100.0, score), 2), reasons


def recommend_cocktails(
    profile: PersonalizationProfile,
    catalog: Iterable[SearchableItem],
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredCocktail]:
    scored = []
    for item in recipes(catalog):
        score, reasons = score_item(item, profile, config)
        scored.append(ScoredCocktail(item=item, score=score, reasons=reasons))
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[: config.max_featured]


def recommend_brands(profile: PersonalizationProfile) -> list[BrandRecommendation]:
    return [
        BrandRecommendation(
            spirit=spirit,
            brands=list(SPIRIT_BRANDS.get(spirit.lower(), [])),
            priority=100 - index * 20,
        )
        for index, spirit in enumerate(profile.favorite_spirits)
    ]


def build_learning_path(profile: PersonalizationProfile) -> LearningPath:
    track = profile.lesson_track.value if profile.lesson_track else LessonTrack.fundamentals.value
    lessons = LESSON_TRACKS.get(track, LESSON_TRACKS[LessonTrack.fundamentals.value])
    return LearningPath(
        current_level=profile.skill_level.value,
        next_lessons=lessons[:3],
        suggested_modules=list(lessons),
    )


def mood_examples(
    mood: str,
    catalog: Iterable[SearchableItem],
    limit: int = DEFAULT_RECOMMENDATION_CONFIG.max_mood_examples,
) -> list[str]:
    """Ids of the most popular recipes whose base spirit maps to ``mood``."""
    matches = [
        item for item in recipes(catalog)
        if base_spirit(item) and mood in moods_for_spirit(base_spirit(item))
    ]
    matches.sort(key=lambda i: i.popularity or 0, reverse=True)
    return [item.id for item in matches[:limit]]


def rank_mood_categories(
    profile: PersonalizationProfile,
    catalog: Iterable[SearchableItem],
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[MoodCategoryRanking]:
    catalog = list(catalog)
    rankings = []
    for category in MOOD_CATEGORIES:
        affinity = BASE_MOOD_AFFINITY
        for spirit in profile.favorite_spirits:
            affinity += SPIRIT_MOOD_BOOSTS.get(spirit.lower(), {}).get(category, 0)
        for flavor in profile.flavor_preferences:
            affinity += FLAVOR_MOOD_BOOSTS.get(flavor.lower(), {}).get(category, 0)
        rankings.append(
            MoodCategoryRanking(
                category=category,
                affinity=min(100, affinity),
                cocktails=mood_examples(category, catalog, config.max_mood_examples),
            )
        )
    rankings.sort(key=lambda r: r.affinity, reverse=True)
    return rankings


# ── Entry point ────────────────────────────────────────────────────────────


def generate_recommendations(
    profile: PersonalizationProfile,
    catalog: Iterable[SearchableItem] | None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RecommendationSet:
    """Build the full recommendation set for a profile.

    Raises ``ValueError`` when no catalog is supplied; an empty catalog is
    valid and yields no featured cocktails.
    """
    if catalog is None:
        raise ValueError("catalog is required to generate recommendations")
    catalog = list(catalog)

    result = RecommendationSet(
        featured_cocktails=recommend_cocktails(profile, catalog, config),
        spirit_brands=recommend_brands(profile),
        learning_path=build_learning_path(profile),
        mood_categories=rank_mood_categories(profile, catalog, config),
    )
    logger.debug(
        "Generated %d featured cocktails from %d catalog items",
        len(result.featured_cocktails),
        len(catalog),
    )
    return result
