from __future__ import annotations

from mixmind.survey.models import PlacementResult, SkillLevel, Track
from mixmind.survey.placement import SOUR_BUILD_ORDER, level_score, place_user

MAXED_ANSWERS = {
    "q2": "very-confident",
    "q3": "margarita",
    "q4": "coupe",
    "q13": ["jigger", "shaker", "barspoon", "strainer"],
    "q14": list(SOUR_BUILD_ORDER),
}


def test_all_signals_maximal_is_advanced():
    result = place_user(MAXED_ANSWERS)
    assert result.level_score == 10
    assert result.level == SkillLevel.advanced
    assert result.start_module_id == "ch2-tools-terms"


def test_empty_answers_use_defaults():
    result = place_user({})
    assert result.level == SkillLevel.beginner
    assert result.level_score == 0
    assert result.track == Track.alcoholic
    assert result.spirits == ["gin", "rum"]
    assert result.start_module_id == "ch1-intro"
    assert result.session_minutes == 5


def test_none_answers_are_total():
    assert place_user(None).level == SkillLevel.beginner


def test_level_thresholds():
    # 2 + 1 = 3 -> beginner
    assert place_user({"q2": "very-confident", "q13": ["jigger"]}).level == SkillLevel.beginner
    # 2 + 2 = 4 -> intermediate
    assert place_user({"q2": "very-confident", "q3": "margarita"}).level == SkillLevel.intermediate
    # 2 + 2 + 2 + 2 = 8 -> advanced
    answers = {"q2": "very-confident", "q3": "margarita", "q4": "coupe", "q14": list(SOUR_BUILD_ORDER)}
    assert place_user(answers).level == SkillLevel.advanced


def test_tool_count_ignores_none_sentinel():
    assert level_score({"q13": ["none"]}) == 0
    assert level_score({"q13": ["jigger", "none"]}) == 1
    assert level_score({"q13": ["jigger", "shaker", "barspoon"]}) == 2


def test_build_order_must_match_exactly():
    shuffled = list(reversed(SOUR_BUILD_ORDER))
    assert level_score({"q14": shuffled}) == 0
    assert level_score({"q14": SOUR_BUILD_ORDER[:5]}) == 0


def test_avoid_alcohol_forces_zero_proof():
    for preference in ("alcoholic", "low-abv", "zero-proof", None):
        answers = {"q10": "yes"}
        if preference:
            answers["q9"] = preference
        assert place_user(answers).track == Track.zero_proof


def test_zero_proof_default_spirits():
    result = place_user({"q10": "yes"})
    assert result.spirits == ["gin-alternative", "rum-alternative"]


def test_explicit_track_passthrough():
    assert place_user({"q9": "low-abv"}).track == Track.low_abv
    assert place_user({"q9": "bogus"}).track == Track.alcoholic


def test_spirits_capped_at_two_without_none():
    result = place_user({"q8": ["none", "whiskey", "tequila", "rum"]})
    assert result.spirits == ["whiskey", "tequila"]


def test_intermediate_start_depends_on_technique():
    confident = place_user({"q2": "very-confident", "q3": "margarita"})
    assert confident.start_module_id == "ch2-tools-terms"
    somewhat = place_user({"q2": "somewhat", "q3": "margarita", "q4": "coupe"})
    assert somewhat.level == SkillLevel.intermediate
    assert somewhat.start_module_id == "ch1-intro"


def test_session_minutes():
    assert place_user({"q15": "3m"}).session_minutes == 3
    assert place_user({"q15": "8m"}).session_minutes == 8
    assert place_user({"q15": "20m"}).session_minutes == 5


def test_rationale_phrases():
    result = place_user({"q8": ["tequila", "gin"], "q9": "low-abv"})
    assert "fundamentals" in result.rationale
    assert "lower-alcohol options" in result.rationale
    assert "We'll start with tequila and gin to match your preferences." in result.rationale

    advanced = place_user({**MAXED_ANSWERS, "q10": "yes"})
    assert advanced.rationale.startswith("Impressive skills!")
    assert "alcohol-free cocktails" in advanced.rationale


def test_round_trips_through_model_dump():
    result = place_user(MAXED_ANSWERS)
    assert PlacementResult.model_validate(result.model_dump()) == result
