from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from mixmind.survey.models import SkillLevel, Track


class LessonTrack(str, Enum):
    fundamentals = "fundamentals"
    enthusiast = "enthusiast"
    professional = "professional"
    mocktails = "mocktails"


class PersonalizationProfile(BaseModel):
    favorite_spirits: list[str] = Field(default_factory=list, max_length=3)
    flavor_preferences: list[str] = Field(default_factory=list)
    skill_level: SkillLevel = SkillLevel.beginner
    preferred_abv: Track = Track.alcoholic
    avoids_alcohol: bool = False
    learning_goals: list[str] = Field(default_factory=list)
    available_tools: list[str] = Field(default_factory=list)
    session_length: int = 5

    preferred_difficulty: list[str] = Field(default_factory=list)
    mood_affinities: list[str] = Field(default_factory=list, max_length=5)
    lesson_track: LessonTrack = LessonTrack.fundamentals

    spirit_scores: dict[str, int] = Field(default_factory=dict)
    flavor_scores: dict[str, int] = Field(default_factory=dict)
    # Raw accumulations; read through the clamped properties below.
    complexity_score: int = 0
    experience_score: int = 0

    @property
    def experience(self) -> int:
        return max(0, min(100, self.experience_score))

    @property
    def complexity(self) -> int:
        return max(0, min(100, self.complexity_score))


class ProfileUpdate(BaseModel):
    """Explicit edits to an existing profile. ``None`` leaves a field as is."""

    favorite_spirits: list[str] | None = None
    flavor_preferences: list[str] | None = None
    preferred_abv: Track | None = None
    avoids_alcohol: bool | None = None
    learning_goals: list[str] | None = None
    available_tools: list[str] | None = None
    session_length: int | None = Field(default=None, ge=1, le=60)
    experience_delta: int = 0


class SignalType(str, Enum):
    engagement = "engagement"
    completion = "completion"
    skip = "skip"
    save = "save"
    share = "share"


class UserSignal(BaseModel):
    type: SignalType
    item_id: str
    category: str
    timestamp: float | None = None
    duration_seconds: float | None = None


class ProfileUpdateRequest(BaseModel):
    profile: PersonalizationProfile
    update: ProfileUpdate | None = None
    signals: list[UserSignal] = Field(default_factory=list)
