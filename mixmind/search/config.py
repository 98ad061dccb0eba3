from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class SearchConfig:
    max_results: int = int(os.getenv("MIXMIND_SEARCH_MAX_RESULTS", "50"))
    default_results: int = 20
    abv_fallback_range: tuple[float, float] = (0.0, 50.0)
    time_fallback_range: tuple[float, float] = (0.0, 60.0)


DEFAULT_SEARCH_CONFIG = SearchConfig()
