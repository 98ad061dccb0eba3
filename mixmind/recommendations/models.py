from __future__ import annotations

from pydantic import BaseModel, Field

from mixmind.catalog.models import SearchableItem
from mixmind.personalization.models import PersonalizationProfile


class ScoredCocktail(BaseModel):
    item: SearchableItem
    score: float
    reasons: list[str] = Field(default_factory=list)


class BrandRecommendation(BaseModel):
    spirit: str
    brands: list[str]
    priority: int


class LearningPath(BaseModel):
    current_level: str
    next_lessons: list[str]
    suggested_modules: list[str]


class MoodCategoryRanking(BaseModel):
    category: str
    affinity: int
    cocktails: list[str] = Field(default_factory=list, description="Example recipe ids")


class RecommendationSet(BaseModel):
    featured_cocktails: list[ScoredCocktail]
    spirit_brands: list[BrandRecommendation]
    learning_path: LearningPath
    mood_categories: list[MoodCategoryRanking]


class RecommendationRequest(BaseModel):
    profile: PersonalizationProfile
    use_cache: bool = True


class RecommendationResponse(BaseModel):
    recommendations: RecommendationSet
    total_candidates: int
    cached: bool = False
