from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RecommendationConfig:
    max_featured: int = 20
    max_mood_examples: int = 10
    spirit_weight: float = 0.40
    difficulty_bonus: float = 25.0
    abv_bonus: float = 20.0
    flavor_weight: float = 3.0
    favorite_reason_threshold: int = 80
    cache_ttl_seconds: float = float(os.getenv("MIXMIND_RECOMMENDATION_CACHE_TTL", "300"))
    cache_enabled: bool = os.getenv("MIXMIND_RECOMMENDATION_CACHE", "1") != "0"
    cache_max_entries: int = int(os.getenv("MIXMIND_RECOMMENDATION_CACHE_SIZE", "256"))


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
