from __future__ import annotations

import hashlib
import json
import threading
import time
from collections import OrderedDict
from typing import Any, Callable

from mixmind.catalog.lookups import LOOKUP_VERSION
from mixmind.personalization.models import PersonalizationProfile

_DEFAULT_TTL = 300  # 5 minutes
_DEFAULT_MAX_ENTRIES = 256


def make_key(profile: PersonalizationProfile, catalog_version: int) -> str:
    payload = {
        "profile": profile.model_dump(mode="json"),
        "catalog_version": catalog_version,
        "lookup_version": LOOKUP_VERSION,
    }
    normalized = json.dumps(payload, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


class RecommendationCache:
    """TTL cache of recommendation sets keyed by profile and catalog version.

    Storing an entry for a newer catalog version drops every entry built
    against an older one, along with anything past its TTL. Beyond
    ``max_entries`` the oldest entry is evicted.
    """

    def __init__(
        self,
        ttl: float = _DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
        max_entries: int = _DEFAULT_MAX_ENTRIES,
    ) -> None:
        self.ttl = ttl
        self.max_entries = max(1, max_entries)
        self._clock = clock
        self._entries: OrderedDict[str, dict[str, Any]] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    def get(self, profile: PersonalizationProfile, catalog_version: int) -> Any | None:
        key = make_key(profile, catalog_version)
        with self._lock:
            entry = self._entries.get(key)
            if entry and self._clock() - entry["created_at"] < self.ttl:
                self._hits += 1
                return entry["value"]
            if entry:
                del self._entries[key]
            self._misses += 1
            return None

    def set(self, profile: PersonalizationProfile, catalog_version: int, value: Any) -> None:
        key = make_key(profile, catalog_version)
        with self._lock:
            now = self._clock()
            stale = [
                k for k, entry in self._entries.items()
                if entry["catalog_version"] != catalog_version or now - entry["created_at"] >= self.ttl
            ]
            for k in stale:
                del self._entries[k]
            self._entries[key] = {"value": value, "created_at": now, "catalog_version": catalog_version}
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
                "ttl_seconds": self.ttl,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
