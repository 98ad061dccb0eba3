from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class HistoryConfig:
    max_history_items: int = int(os.getenv("MIXMIND_MAX_HISTORY", "100"))
    max_trending_items: int = 20
    trending_window_days: int = 30
    recent_limit: int = 10
    max_suggestions: int = 8
    history_suggestions: int = 3
    trending_suggestions: int = 2
    autocomplete_suggestions: int = 5

    @property
    def trending_window_seconds(self) -> float:
        return self.trending_window_days * 24 * 60 * 60


DEFAULT_HISTORY_CONFIG = HistoryConfig()
