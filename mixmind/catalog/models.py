from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ItemCategory(str, Enum):
    recipe = "recipe"
    spirit = "spirit"
    event = "event"
    user = "user"
    bar = "bar"
    game = "game"


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


DIFFICULTY_ORDER: dict[str, int] = {"easy": 1, "medium": 2, "hard": 3}


# ── Per-category payloads ────────────────────────────────────────────────


class RecipePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["recipe"] = "recipe"
    base_spirit: str | None = None
    ingredients: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    method: str | None = None
    mocktail: bool = False
    low_alcohol: bool = False


class SpiritPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["spirit"] = "spirit"
    spirit_type: str | None = None
    origin: str | None = None
    age_years: int | None = None


class EventPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["event"] = "event"
    date: str | None = None
    duration_minutes: int | None = None
    location: str | None = None


class UserPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    username: str | None = None
    verified: bool = False
    location: str | None = None


class BarPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["bar"] = "bar"
    location: str | None = None
    tier: str | None = None


class GamePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["game"] = "game"
    players: str | None = None


ItemPayload = Annotated[
    Union[RecipePayload, SpiritPayload, EventPayload, UserPayload, BarPayload, GamePayload],
    Field(discriminator="kind"),
]


# ── Searchable item ──────────────────────────────────────────────────────


class SearchableItem(BaseModel):
    """A single entry of the search index.

    ``payload`` carries the category-specific fields; its ``kind`` always
    equals ``category``. A missing payload is filled with the empty payload
    for the item's category.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    subtitle: str | None = None
    description: str | None = None
    category: ItemCategory
    tags: list[str] = Field(default_factory=list)
    difficulty: Difficulty | None = None
    abv: float | None = Field(default=None, ge=0.0, le=100.0)
    time: int | None = Field(default=None, ge=0, description="Preparation or run time in minutes")
    popularity: float | None = Field(default=None, ge=0.0, le=100.0)
    image: str | None = None
    updated_at: datetime | None = None
    payload: ItemPayload

    @model_validator(mode="before")
    @classmethod
    def _default_payload(cls, data):
        if isinstance(data, dict) and data.get("payload") is None and data.get("category"):
            category = data["category"]
            kind = category.value if isinstance(category, ItemCategory) else str(category)
            data = {**data, "payload": {"kind": kind}}
        return data

    @model_validator(mode="after")
    def _payload_matches_category(self) -> SearchableItem:
        if self.payload.kind != self.category.value:
            raise ValueError(
                f"payload kind {self.payload.kind!r} does not match category {self.category.value!r}"
            )
        return self

    def searchable_text(self) -> str:
        """Lower-cased concatenation of the fields free-text search looks at."""
        parts = [self.title, self.subtitle or "", self.description or "", *self.tags]
        return " ".join(parts).lower()


class UserItemState(BaseModel):
    """Per-user item sets consulted by the favorites/completed filter toggles."""

    favorite_ids: set[str] = Field(default_factory=set)
    completed_ids: set[str] = Field(default_factory=set)
