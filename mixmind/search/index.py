"""
In-memory search index.

Mutations build a new mapping and swap it in under a lock, so a reader
holding ``items()`` keeps a consistent snapshot while writers proceed.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Iterable

from mixmind.catalog.models import SearchableItem

logger = logging.getLogger(__name__)


class SearchIndex:
    def __init__(self, items: Iterable[SearchableItem] = ()) -> None:
        self._items: dict[str, SearchableItem] = {}
        self._lock = threading.Lock()
        self._version = 0
        for item in items:
            self._items[item.id] = item

    @property
    def version(self) -> int:
        """Incremented on every successful mutation."""
        return self._version

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def items(self) -> list[SearchableItem]:
        """Snapshot of the indexed items in insertion order."""
        return list(self._items.values())

    def get(self, item_id: str) -> SearchableItem | None:
        return self._items.get(item_id)

    def _swap(self, items: dict[str, SearchableItem]) -> None:
        self._items = items
        self._version += 1

    def add_item(self, item: SearchableItem) -> bool:
        """Insert or replace ``item``. A replaced item keeps its position."""
        with self._lock:
            items = dict(self._items)
            items[item.id] = item
            self._swap(items)
        logger.debug("Indexed item %s (version %d)", item.id, self._version)
        return True

    def update_item(self, item_id: str, /, **changes: Any) -> bool:
        """Apply field changes to an existing item.

        Returns ``False`` for an unknown id. Changing ``category`` without a
        new ``payload`` resets the payload to the new category's empty one.
        Invalid changes raise pydantic's ``ValidationError``.
        """
        changes.pop("id", None)
        with self._lock:
            current = self._items.get(item_id)
            if current is None:
                logger.warning("Cannot update unknown item %s", item_id)
                return False
            data = current.model_dump()
            if "category" in changes and "payload" not in changes:
                data["payload"] = None
            data.update(changes)
            updated = SearchableItem.model_validate(data)
            items = dict(self._items)
            items[item_id] = updated
            self._swap(items)
        logger.debug("Updated item %s fields %s", item_id, sorted(changes))
        return True

    def remove_item(self, item_id: str) -> bool:
        with self._lock:
            if item_id not in self._items:
                logger.warning("Cannot remove unknown item %s", item_id)
                return False
            items = dict(self._items)
            del items[item_id]
            self._swap(items)
        logger.debug("Removed item %s", item_id)
        return True

    def replace_all(self, items: Iterable[SearchableItem]) -> None:
        with self._lock:
            self._swap({item.id: item for item in items})
        logger.info("Search index reloaded with %d items", len(self._items))
