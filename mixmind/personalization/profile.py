"""
Personalization profile builder.

``build_profile`` folds survey answers into a weighted profile, one rule per
question, then derives skill level, difficulty ladder, mood affinities and
lesson track. ``update_profile`` and ``apply_signals`` return a new profile
and rerun the same derivation so every known spirit and flavour keeps a
score in [0, 100].
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable

from mixmind.catalog.lookups import (
    DIFFICULTY_LADDER,
    KNOWN_FLAVORS,
    KNOWN_SPIRITS,
    NEUTRAL_FLAVOR_SCORE,
    NEUTRAL_SPIRIT_SCORE,
    SIGNAL_SPIRITS,
    moods_for_spirit,
)
from mixmind.survey.catalog import NONE_SENTINEL, QUESTION_IDS, answer_value, answer_values
from mixmind.survey.models import SkillLevel, Track

from .models import LessonTrack, PersonalizationProfile, ProfileUpdate, SignalType, UserSignal

logger = logging.getLogger(__name__)

EXPERIENCE_BASE: dict[str, int] = {"never": 10, "occasionally": 40, "regularly": 70}
TECHNIQUE_BONUS: dict[str, int] = {"not-at-all": 0, "somewhat": 20, "very-confident": 40}
KNOWLEDGE_BONUS = 15
GLASSWARE_BONUS = 15

GOAL_COMPLEXITY_BONUS: dict[str, int] = {"professional": 20, "originals": 15, "classics": 10}

SESSION_LENGTHS: dict[str, int] = {"3m": 3, "5m": 5, "8m": 8}

BEGINNER_MAX_EXPERIENCE = 30
INTERMEDIATE_MAX_EXPERIENCE = 70

MAX_FAVORITE_SPIRITS = 3
MAX_MOOD_AFFINITIES = 5

SPIRIT_PROMOTION_THRESHOLD = 3
TRACK_SIGNAL_MINIMUM = 5
ZERO_PROOF_RATIO = 0.6
LOW_ABV_RATIO = 0.4
_TRACK_MARKERS = ("zero-proof", "low-abv", "high-proof")


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def spirit_rank_scores(spirits: list[str]) -> dict[str, int]:
    """90, 80, 70, ... in the order given."""
    return {s: _clamp(90 - i * 10) for i, s in enumerate(spirits)}


def flavor_rank_scores(flavors: list[str]) -> dict[str, int]:
    """85, 80, 75, ... in the order given."""
    return {f: _clamp(85 - i * 5) for i, f in enumerate(flavors)}


# ── Per-question rules ─────────────────────────────────────────────────────

_Rule = Callable[[dict[str, Any], dict[str, Any]], None]


def _q1(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    value = answer_value(answers, "q1")
    if value in EXPERIENCE_BASE:
        draft["experience_score"] += EXPERIENCE_BASE[value]


def _q2(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    draft["experience_score"] += TECHNIQUE_BONUS.get(answer_value(answers, "q2") or "", 0)


def _q3(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    if answer_value(answers, "q3") == "margarita":
        draft["experience_score"] += KNOWLEDGE_BONUS


def _q4(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    if answer_value(answers, "q4") == "coupe":
        draft["experience_score"] += GLASSWARE_BONUS


def _q8(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    spirits = [s.lower() for s in answer_values(answers, "q8") if s != NONE_SENTINEL]
    draft["favorite_spirits"] = spirits[:MAX_FAVORITE_SPIRITS]
    draft["spirit_scores"].update(spirit_rank_scores(spirits))


def _q9(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    value = answer_value(answers, "q9")
    try:
        if value:
            draft["preferred_abv"] = Track(value)
    except ValueError:
        logger.warning("Ignoring unknown ABV preference %r", value)


def _q10(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    if answer_value(answers, "q10") == "yes":
        draft["avoids_alcohol"] = True


def _q11(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    flavors = [f.lower() for f in answer_values(answers, "q11")]
    draft["flavor_preferences"] = flavors
    draft["flavor_scores"].update(flavor_rank_scores(flavors))


def _q12(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    draft["learning_goals"] = answer_values(answers, "q12")


def _q13(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    draft["available_tools"] = [t for t in answer_values(answers, "q13") if t != NONE_SENTINEL]


def _q15(draft: dict[str, Any], answers: dict[str, Any]) -> None:
    value = answer_value(answers, "q15")
    if value in SESSION_LENGTHS:
        draft["session_length"] = SESSION_LENGTHS[value]


PROFILE_RULES: dict[str, _Rule] = {
    "q1": _q1,
    "q2": _q2,
    "q3": _q3,
    "q4": _q4,
    "q8": _q8,
    "q9": _q9,
    "q10": _q10,
    "q11": _q11,
    "q12": _q12,
    "q13": _q13,
    "q15": _q15,
}


# ── Derivation ─────────────────────────────────────────────────────────────


def skill_for_experience(experience_score: int) -> SkillLevel:
    if experience_score <= BEGINNER_MAX_EXPERIENCE:
        return SkillLevel.beginner
    if experience_score <= INTERMEDIATE_MAX_EXPERIENCE:
        return SkillLevel.intermediate
    return SkillLevel.advanced


def rank_moods(spirits: list[str]) -> list[str]:
    """Moods by how many favourite spirits name them; ties keep first appearance."""
    counts: Counter[str] = Counter()
    for spirit in spirits:
        counts.update(moods_for_spirit(spirit))
    return [mood for mood, _ in counts.most_common(MAX_MOOD_AFFINITIES)]


def select_lesson_track(preferred_abv: Track, skill: SkillLevel, goals: list[str]) -> LessonTrack:
    if preferred_abv == Track.zero_proof:
        return LessonTrack.mocktails
    if skill == SkillLevel.beginner:
        return LessonTrack.fundamentals
    if "professional" in goals:
        return LessonTrack.professional
    return LessonTrack.enthusiast


def _derive(draft: dict[str, Any]) -> PersonalizationProfile:
    if draft["avoids_alcohol"]:
        draft["preferred_abv"] = Track.zero_proof

    skill = skill_for_experience(draft["experience_score"])
    goals = draft["learning_goals"]
    draft["skill_level"] = skill
    draft["complexity_score"] = draft["experience_score"] + sum(
        bonus for goal, bonus in GOAL_COMPLEXITY_BONUS.items() if goal in goals
    )
    draft["mood_affinities"] = rank_moods(draft["favorite_spirits"])
    draft["preferred_difficulty"] = list(DIFFICULTY_LADDER[skill.value])
    draft["lesson_track"] = select_lesson_track(draft["preferred_abv"], skill, goals)

    spirit_scores = {k: _clamp(v) for k, v in draft["spirit_scores"].items()}
    for spirit in KNOWN_SPIRITS:
        spirit_scores.setdefault(spirit, NEUTRAL_SPIRIT_SCORE)
    flavor_scores = {k: _clamp(v) for k, v in draft["flavor_scores"].items()}
    for flavor in KNOWN_FLAVORS:
        flavor_scores.setdefault(flavor, NEUTRAL_FLAVOR_SCORE)
    draft["spirit_scores"] = spirit_scores
    draft["flavor_scores"] = flavor_scores

    return PersonalizationProfile(**draft)


def _empty_draft() -> dict[str, Any]:
    return {
        "favorite_spirits": [],
        "flavor_preferences": [],
        "preferred_abv": Track.alcoholic,
        "avoids_alcohol": False,
        "learning_goals": [],
        "available_tools": [],
        "session_length": 5,
        "spirit_scores": {},
        "flavor_scores": {},
        "experience_score": 0,
    }


def _draft_from(profile: PersonalizationProfile) -> dict[str, Any]:
    draft = _empty_draft()
    for key in draft:
        value = getattr(profile, key)
        draft[key] = value.copy() if isinstance(value, (list, dict)) else value
    return draft


# ── Public API ─────────────────────────────────────────────────────────────


def build_profile(answers: dict[str, Any] | None) -> PersonalizationProfile:
    """Fold survey answers into a profile. Unanswered questions keep defaults."""
    draft = _empty_draft()
    answers = answers or {}
    for question_id in QUESTION_IDS:
        rule = PROFILE_RULES.get(question_id)
        if rule is not None and question_id in answers:
            rule(draft, answers)
    profile = _derive(draft)
    logger.debug(
        "Built profile: skill=%s abv=%s track=%s",
        profile.skill_level.value,
        profile.preferred_abv.value,
        profile.lesson_track.value,
    )
    return profile


def update_profile(profile: PersonalizationProfile, update: ProfileUpdate) -> PersonalizationProfile:
    """Apply explicit edits and rerun the derivation. ``profile`` is not mutated."""
    draft = _draft_from(profile)

    if update.favorite_spirits is not None:
        spirits = [s.lower() for s in update.favorite_spirits if s != NONE_SENTINEL]
        draft["favorite_spirits"] = spirits[:MAX_FAVORITE_SPIRITS]
        draft["spirit_scores"] = spirit_rank_scores(spirits)
    if update.flavor_preferences is not None:
        flavors = [f.lower() for f in update.flavor_preferences]
        draft["flavor_preferences"] = flavors
        draft["flavor_scores"] = flavor_rank_scores(flavors)
    if update.avoids_alcohol is not None:
        draft["avoids_alcohol"] = update.avoids_alcohol
    if update.preferred_abv is not None:
        draft["preferred_abv"] = update.preferred_abv
    if update.learning_goals is not None:
        draft["learning_goals"] = list(update.learning_goals)
    if update.available_tools is not None:
        draft["available_tools"] = [t for t in update.available_tools if t != NONE_SENTINEL]
    if update.session_length is not None:
        draft["session_length"] = update.session_length
    draft["experience_score"] += update.experience_delta

    return _derive(draft)


def _spirit_in(category: str) -> str | None:
    lowered = category.lower()
    return next((s for s in SIGNAL_SPIRITS if s in lowered), None)


def apply_signals(profile: PersonalizationProfile, signals: list[UserSignal]) -> PersonalizationProfile:
    """Shift favourites and track from recent behaviour.

    A spirit named by at least three engagement or completion signals moves to
    the front of the favourites. With five or more track-tagged signals the
    ABV preference follows the dominant track, but an alcohol-avoiding profile
    is never moved off zero-proof.
    """
    if not signals:
        return profile
    draft = _draft_from(profile)

    engaged: Counter[str] = Counter()
    for signal in signals:
        if signal.type in (SignalType.engagement, SignalType.completion):
            spirit = _spirit_in(signal.category)
            if spirit:
                engaged[spirit] += 1

    favorites = draft["favorite_spirits"]
    for spirit, count in engaged.items():
        if count >= SPIRIT_PROMOTION_THRESHOLD and spirit not in favorites:
            logger.info("Promoting %s to favourite spirits after %d signals", spirit, count)
            favorites = [spirit] + favorites[: MAX_FAVORITE_SPIRITS - 1]
    if favorites != draft["favorite_spirits"]:
        draft["favorite_spirits"] = favorites
        draft["spirit_scores"].update(spirit_rank_scores(favorites))

    tracked = [s for s in signals if any(m in s.category for m in _TRACK_MARKERS)]
    if len(tracked) >= TRACK_SIGNAL_MINIMUM:
        zero_ratio = sum("zero-proof" in s.category for s in tracked) / len(tracked)
        low_ratio = sum("low-abv" in s.category for s in tracked) / len(tracked)
        if zero_ratio > ZERO_PROOF_RATIO:
            draft["preferred_abv"] = Track.zero_proof
        elif low_ratio > LOW_ABV_RATIO and not draft["avoids_alcohol"]:
            draft["preferred_abv"] = Track.low_abv

    return _derive(draft)
