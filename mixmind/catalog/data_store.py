from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, List

import pandas as pd
from pydantic import ValidationError

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import SearchableItem

logger = logging.getLogger(__name__)


CANONICAL_COLUMNS: List[str] = [
    "id",
    "title",
    "subtitle",
    "description",
    "category",
    "tags",
    "difficulty",
    "abv",
    "time",
    "popularity",
    "image",
    "updated_at",
]

_LIST_COLUMNS = ["tags", "ingredients", "equipment"]
_NUMERIC_COLUMNS = ["abv", "time", "popularity", "age_years", "duration_minutes"]


def _clean(value: Any) -> Any:
    """Map pandas missing markers to ``None``."""
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if value is pd.NA:
        return None
    return value


def _to_int(value: Any) -> int | None:
    value = _clean(value)
    if value is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _to_bool(value: Any) -> bool:
    value = _clean(value)
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


def _recipe_payload(row: pd.Series) -> dict:
    return {
        "kind": "recipe",
        "base_spirit": _clean(row.get("base_spirit")),
        "ingredients": row.get("ingredients_list", []),
        "equipment": row.get("equipment_list", []),
        "method": _clean(row.get("method")),
        "mocktail": _to_bool(row.get("mocktail")),
        "low_alcohol": _to_bool(row.get("low_alcohol")),
    }


def _spirit_payload(row: pd.Series) -> dict:
    return {
        "kind": "spirit",
        "spirit_type": _clean(row.get("spirit_type")),
        "origin": _clean(row.get("origin")),
        "age_years": _to_int(row.get("age_years")),
    }


def _event_payload(row: pd.Series) -> dict:
    return {
        "kind": "event",
        "date": _clean(row.get("event_date")),
        "duration_minutes": _to_int(row.get("duration_minutes")),
        "location": _clean(row.get("location")),
    }


def _user_payload(row: pd.Series) -> dict:
    return {
        "kind": "user",
        "username": _clean(row.get("username")),
        "verified": _to_bool(row.get("verified")),
        "location": _clean(row.get("location")),
    }


def _bar_payload(row: pd.Series) -> dict:
    return {
        "kind": "bar",
        "location": _clean(row.get("location")),
        "tier": _clean(row.get("tier")),
    }


def _game_payload(row: pd.Series) -> dict:
    return {"kind": "game", "players": _clean(row.get("players"))}


_PAYLOAD_BUILDERS: dict[str, Callable[[pd.Series], dict]] = {
    "recipe": _recipe_payload,
    "spirit": _spirit_payload,
    "event": _event_payload,
    "user": _user_payload,
    "bar": _bar_payload,
    "game": _game_payload,
}


def _row_to_item(row: pd.Series) -> SearchableItem:
    category = str(row["category"]).strip().lower()
    builder = _PAYLOAD_BUILDERS.get(category)
    data = {col: _clean(row.get(col)) for col in CANONICAL_COLUMNS}
    data["category"] = category
    data["tags"] = row.get("tags_list", [])
    data["time"] = _to_int(row.get("time"))
    data["payload"] = builder(row) if builder else None
    return SearchableItem.model_validate(data)


def _read_frame(config: CatalogConfig) -> pd.DataFrame:
    df = pd.read_csv(config.catalog_path, dtype={"id": str})

    # Pre-parse separator-joined columns into lists
    for col in _LIST_COLUMNS:
        if col not in df.columns:
            df[col] = ""
        df[f"{col}_list"] = (
            df[col]
            .fillna("")
            .astype(str)
            .apply(lambda s: [v.strip() for v in s.split(config.list_separator) if v.strip()])
        )

    for col in _NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")

    if "difficulty" in df.columns:
        df["difficulty"] = df["difficulty"].astype("string").str.strip().str.lower()

    return df


def load_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[SearchableItem]:
    """
    Load the catalog CSV into validated ``SearchableItem`` records.

    Rows that fail validation are skipped with a warning so that one bad row
    does not take the whole catalog down.
    """
    path = Path(config.catalog_path)
    df = _read_frame(config)

    items: list[SearchableItem] = []
    for _, row in df.iterrows():
        try:
            items.append(_row_to_item(row))
        except (ValidationError, KeyError) as exc:
            logger.warning("Skipping catalog row %s: %s", row.get("id"), exc)

    logger.info("Loaded %d catalog items from %s", len(items), path)
    return items
