from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

SurveyAnswers = dict[str, Union[str, list[str]]]


class AnswerType(str, Enum):
    single_choice = "single-choice"
    multi_choice = "multi-choice"
    image_choice = "image-choice"
    ordering = "ordering"


class SkillLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class Track(str, Enum):
    alcoholic = "alcoholic"
    low_abv = "low-abv"
    zero_proof = "zero-proof"


class SurveyOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    image: str | None = None


class SurveyQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    section: str
    type: AnswerType
    question: str
    options: list[SurveyOption]

    @property
    def multi_valued(self) -> bool:
        return self.type in (AnswerType.multi_choice, AnswerType.ordering)

    def option_values(self) -> list[str]:
        return [o.value for o in self.options]


class SurveySubmission(BaseModel):
    answers: SurveyAnswers = Field(default_factory=dict)


class PlacementResult(BaseModel):
    level: SkillLevel
    track: Track
    spirits: list[str] = Field(default_factory=list, max_length=2)
    start_module_id: str
    session_minutes: int
    rationale: str
    level_score: int = Field(default=0, ge=0, le=10)
