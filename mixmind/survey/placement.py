"""
Placement analyzer.

Classifies a new user from their onboarding answers: skill level, content
track, the two spirits to start with, the first module and the session
length. The level computed here is a survey-time snapshot and is kept
separate from the experience-based skill level of the personalization
profile; the two may disagree for the same answers.
"""
from __future__ import annotations

import logging
from typing import Any

from .catalog import NONE_SENTINEL, answer_value, answer_values
from .models import PlacementResult, SkillLevel, Track

logger = logging.getLogger(__name__)

SOUR_BUILD_ORDER: list[str] = ["spirit", "citrus", "syrup", "ice", "shake", "double-strain"]

BEGINNER_MAX_SCORE = 3
INTERMEDIATE_MAX_SCORE = 7

TECHNIQUE_POINTS: dict[str, int] = {"very-confident": 2, "somewhat": 1}

DEFAULT_SPIRITS: list[str] = ["gin", "rum"]
ZERO_PROOF_SPIRITS: list[str] = ["gin-alternative", "rum-alternative"]

INTRO_MODULE = "ch1-intro"
TOOLS_MODULE = "ch2-tools-terms"

SESSION_MINUTES: dict[str, int] = {"3m": 3, "5m": 5, "8m": 8}
DEFAULT_SESSION_MINUTES = 5

LEVEL_MESSAGES: dict[SkillLevel, str] = {
    SkillLevel.beginner: "Perfect! We'll start with the fundamentals and build your confidence step by step.",
    SkillLevel.intermediate: "Great foundation! We'll focus on refining your technique and expanding your knowledge.",
    SkillLevel.advanced: "Impressive skills! We'll challenge you with advanced techniques and complex flavor profiles.",
}

TRACK_PHRASES: dict[Track, str] = {
    Track.alcoholic: "focusing on classic cocktails and traditional spirits",
    Track.low_abv: "exploring lower-alcohol options and aperitif-style drinks",
    Track.zero_proof: "mastering alcohol-free cocktails and mocktails",
}


# ── Scoring ────────────────────────────────────────────────────────────────


def _tool_points(tools: list[str]) -> int:
    count = len([t for t in tools if t != NONE_SENTINEL])
    if count > 2:
        return 2
    if count >= 1:
        return 1
    return 0


def level_score(answers: dict[str, Any] | None) -> int:
    """Sum the five placement signals into a 0-10 score."""
    score = TECHNIQUE_POINTS.get(answer_value(answers, "q2") or "", 0)
    if answer_value(answers, "q3") == "margarita":
        score += 2
    if answer_value(answers, "q4") == "coupe":
        score += 2
    score += _tool_points(answer_values(answers, "q13"))
    if answer_values(answers, "q14") == SOUR_BUILD_ORDER:
        score += 2
    return score


def level_for_score(score: int) -> SkillLevel:
    if score <= BEGINNER_MAX_SCORE:
        return SkillLevel.beginner
    if score <= INTERMEDIATE_MAX_SCORE:
        return SkillLevel.intermediate
    return SkillLevel.advanced


# ── Track / spirits / module ───────────────────────────────────────────────


def resolve_track(answers: dict[str, Any] | None) -> Track:
    if answer_value(answers, "q10") == "yes":
        return Track.zero_proof
    preferred = answer_value(answers, "q9")
    try:
        return Track(preferred) if preferred else Track.alcoholic
    except ValueError:
        logger.warning("Unknown ABV preference %r, defaulting to alcoholic", preferred)
        return Track.alcoholic


def select_spirits(answers: dict[str, Any] | None, track: Track) -> list[str]:
    chosen = [s for s in answer_values(answers, "q8") if s != NONE_SENTINEL][:2]
    if chosen:
        return chosen
    if track == Track.zero_proof:
        return list(ZERO_PROOF_SPIRITS)
    return list(DEFAULT_SPIRITS)


def start_module(level: SkillLevel, technique: str | None) -> str:
    if level == SkillLevel.advanced:
        return TOOLS_MODULE
    if level == SkillLevel.intermediate and technique == "very-confident":
        return TOOLS_MODULE
    return INTRO_MODULE


def build_rationale(level: SkillLevel, track: Track, spirits: list[str]) -> str:
    parts = [
        LEVEL_MESSAGES[level],
        f"Your learning path will be {TRACK_PHRASES[track]}.",
    ]
    if spirits:
        parts.append(f"We'll start with {' and '.join(spirits)} to match your preferences.")
    return " ".join(parts)


# ── Entry point ────────────────────────────────────────────────────────────


def place_user(answers: dict[str, Any] | None) -> PlacementResult:
    """Classify a user from survey answers. Never raises for bad data."""
    score = level_score(answers)
    level = level_for_score(score)
    track = resolve_track(answers)
    spirits = select_spirits(answers, track)
    technique = answer_value(answers, "q2")
    minutes = SESSION_MINUTES.get(answer_value(answers, "q15") or "", DEFAULT_SESSION_MINUTES)

    result = PlacementResult(
        level=level,
        track=track,
        spirits=spirits,
        start_module_id=start_module(level, technique),
        session_minutes=minutes,
        rationale=build_rationale(level, track, spirits),
        level_score=score,
    )
    logger.debug("Placed user at %s (score %d) on %s track", level.value, score, track.value)
    return result
