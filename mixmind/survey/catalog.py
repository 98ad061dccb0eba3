from __future__ import annotations

from typing import Any

from .models import AnswerType, SurveyOption, SurveyQuestion

_EXPERIENCE = "Experience & Skill"
_BEHAVIOR = "Behavior & Frequency"
_PREFERENCES = "Preferences & Profile"
_KNOWLEDGE = "Placement Knowledge Check"


def _options(*pairs: tuple[str, str]) -> list[SurveyOption]:
    return [SurveyOption(value=value, label=label) for value, label in pairs]


SURVEY_QUESTIONS: tuple[SurveyQuestion, ...] = (
    SurveyQuestion(
        id="q1",
        section=_EXPERIENCE,
        type=AnswerType.single_choice,
        question="What's your home bartending experience?",
        options=_options(
            ("never", "Never"),
            ("occasionally", "Occasionally (few times a year)"),
            ("regularly", "Regularly (monthly+)"),
        ),
    ),
    SurveyQuestion(
        id="q2",
        section=_EXPERIENCE,
        type=AnswerType.single_choice,
        question="How confident are you with shake vs stir techniques?",
        options=_options(
            ("not-at-all", "Not at all"),
            ("somewhat", "Somewhat"),
            ("very-confident", "Very confident"),
        ),
    ),
    SurveyQuestion(
        id="q3",
        section=_EXPERIENCE,
        type=AnswerType.single_choice,
        question="Which cocktail uses tequila by default?",
        options=_options(
            ("margarita", "Margarita"),
            ("mojito", "Mojito"),
            ("tom-collins", "Tom Collins"),
            ("daiquiri", "Daiquiri"),
        ),
    ),
    SurveyQuestion(
        id="q4",
        section=_EXPERIENCE,
        type=AnswerType.image_choice,
        question="Which is a coupe?",
        options=[
            SurveyOption(value="coupe", label="Wide, shallow bowl", image="coupe.jpg"),
            SurveyOption(value="martini", label="Triangular cone", image="martini.jpg"),
            SurveyOption(value="rocks", label="Short cylinder", image="rocks.jpg"),
            SurveyOption(value="highball", label="Tall cylinder", image="highball.jpg"),
        ],
    ),
    SurveyQuestion(
        id="q5",
        section=_BEHAVIOR,
        type=AnswerType.single_choice,
        question="How often do you make drinks?",
        options=_options(
            ("rarely", "Rarely/Never"),
            ("monthly", "Monthly"),
            ("weekly", "Weekly"),
            ("daily", "Most days"),
        ),
    ),
    SurveyQuestion(
        id="q6",
        section=_BEHAVIOR,
        type=AnswerType.single_choice,
        question="How often do you go out for drinks?",
        options=_options(
            ("rarely", "Rarely"),
            ("monthly", "Monthly"),
            ("weekly", "Weekly"),
            ("weekends", "Most weekends"),
        ),
    ),
    SurveyQuestion(
        id="q7",
        section=_BEHAVIOR,
        type=AnswerType.multi_choice,
        question="What matters most when you go out? (Choose up to 3)",
        options=_options(
            ("music", "Music/DJ or live performances"),
            ("drinks", "Quality drinks/cocktails"),
            ("decor", "Room decor & design"),
            ("atmosphere", "Atmosphere/crowd vibe"),
            ("food", "Food options"),
            ("price", "Price/promotions"),
        ),
    ),
    SurveyQuestion(
        id="q8",
        section=_PREFERENCES,
        type=AnswerType.multi_choice,
        question="Which spirits interest you most? (Select all that apply)",
        options=_options(
            ("tequila", "Tequila"),
            ("whiskey", "Whiskey"),
            ("rum", "Rum"),
            ("gin", "Gin"),
            ("brandy", "Brandy"),
            ("liqueurs", "Liqueurs"),
            ("none", "None"),
        ),
    ),
    SurveyQuestion(
        id="q9",
        section=_PREFERENCES,
        type=AnswerType.single_choice,
        question="What's your preferred alcohol content?",
        options=_options(
            ("alcoholic", "Alcoholic"),
            ("low-abv", "Low-ABV"),
            ("zero-proof", "Zero-proof"),
        ),
    ),
    SurveyQuestion(
        id="q10",
        section=_PREFERENCES,
        type=AnswerType.single_choice,
        question="Do you avoid alcohol entirely?",
        options=_options(("yes", "Yes"), ("no", "No")),
    ),
    SurveyQuestion(
        id="q11",
        section=_PREFERENCES,
        type=AnswerType.multi_choice,
        question="What flavor profiles do you prefer? (Pick three)",
        options=_options(
            ("citrus", "Citrus & Fresh"),
            ("herbal", "Herbal & Green"),
            ("bitter", "Bitter & Complex"),
            ("sweet", "Sweet & Fruity"),
            ("smoky", "Smoky & Bold"),
            ("floral", "Floral & Light"),
            ("spiced", "Spiced & Warm"),
        ),
    ),
    SurveyQuestion(
        id="q12",
        section=_PREFERENCES,
        type=AnswerType.multi_choice,
        question="What are your goals for learning?",
        options=_options(
            ("host", "Host better"),
            ("classics", "Learn classics"),
            ("originals", "Create originals"),
            ("professional", "Train for professional bar work"),
        ),
    ),
    SurveyQuestion(
        id="q13",
        section=_PREFERENCES,
        type=AnswerType.multi_choice,
        question="What bar tools do you have? (Select all that apply)",
        options=_options(
            ("jigger", "Jigger"),
            ("shaker", "Shaker"),
            ("barspoon", "Barspoon"),
            ("strainer", "Fine Strainer"),
            ("none", "None"),
        ),
    ),
    SurveyQuestion(
        id="q14",
        section=_KNOWLEDGE,
        type=AnswerType.ordering,
        question="Put these steps in order for making a shaken sour:",
        options=_options(
            ("spirit", "Spirit"),
            ("citrus", "Citrus"),
            ("syrup", "Syrup"),
            ("ice", "Ice"),
            ("shake", "Shake"),
            ("double-strain", "Double-strain"),
        ),
    ),
    SurveyQuestion(
        id="q15",
        section=_KNOWLEDGE,
        type=AnswerType.single_choice,
        question="Preferred lesson time:",
        options=_options(("3m", "3m"), ("5m", "5m"), ("8m", "8m")),
    ),
)

QUESTION_IDS: list[str] = [q.id for q in SURVEY_QUESTIONS]
_BY_ID: dict[str, SurveyQuestion] = {q.id: q for q in SURVEY_QUESTIONS}

NONE_SENTINEL = "none"


def get_survey_questions() -> list[SurveyQuestion]:
    """Return the onboarding questions in presentation order."""
    return list(SURVEY_QUESTIONS)


def get_question(question_id: str) -> SurveyQuestion | None:
    return _BY_ID.get(question_id)


def get_sections() -> list[str]:
    """Return section labels in first-appearance order."""
    sections: list[str] = []
    for q in SURVEY_QUESTIONS:
        if q.section not in sections:
            sections.append(q.section)
    return sections


def answer_value(answers: dict[str, Any] | None, question_id: str) -> str | None:
    """Read a single-valued answer.

    A list is read as its first element; anything that is not a string is
    treated as unanswered.
    """
    if not answers:
        return None
    raw = answers.get(question_id)
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if isinstance(raw, str):
        raw = raw.strip()
        return raw or None
    return None


def answer_values(answers: dict[str, Any] | None, question_id: str) -> list[str]:
    """Read a multi-valued answer, preserving the user's order.

    A bare string is read as a one-element list; non-string entries are dropped.
    """
    if not answers:
        return []
    raw = answers.get(question_id)
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        return []
    return [v.strip() for v in raw if isinstance(v, str) and v.strip()]
