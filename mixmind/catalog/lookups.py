"""
Shared lookup tables for profile building and recommendation scoring.

Bump ``LOOKUP_VERSION`` whenever a table changes so that cached
recommendations computed against an older table can be told apart.
"""
from __future__ import annotations

LOOKUP_VERSION = "2"

KNOWN_SPIRITS: list[str] = ["tequila", "whiskey", "rum", "gin", "brandy", "vodka", "liqueurs"]
# Spirits recognised in engagement signal categories. Mezcal is checked
# before tequila so "mezcal-cocktails" is not read as tequila.
SIGNAL_SPIRITS: list[str] = ["mezcal"] + KNOWN_SPIRITS
KNOWN_FLAVORS: list[str] = ["citrus", "herbal", "bitter", "sweet", "smoky", "floral", "spiced"]

NEUTRAL_SPIRIT_SCORE = 30
NEUTRAL_FLAVOR_SCORE = 40

MOOD_CATEGORIES: list[str] = [
    "Bold & Serious",
    "Romantic & Elegant",
    "Playful & Fun",
    "Tropical Escape",
    "Cozy & Comforting",
    "Late-Night Energy",
    "Mystery & Depth",
    "Party Crowd-Pleasers",
    "After-Dinner Indulgence",
]

# Moods a favourite spirit contributes to the profile's affinity list.
SPIRIT_MOODS: dict[str, list[str]] = {
    "whiskey": ["Bold & Serious", "Mystery & Depth", "After-Dinner Indulgence"],
    "gin": ["Romantic & Elegant", "Mystery & Depth", "Playful & Fun"],
    "tequila": ["Playful & Fun", "Tropical Escape", "Party Crowd-Pleasers"],
    "rum": ["Tropical Escape", "Cozy & Comforting", "Party Crowd-Pleasers"],
    "brandy": ["After-Dinner Indulgence", "Romantic & Elegant", "Mystery & Depth"],
    "vodka": ["Late-Night Energy", "Playful & Fun", "Party Crowd-Pleasers"],
    "liqueurs": ["After-Dinner Indulgence", "Cozy & Comforting", "Romantic & Elegant"],
}

# Affinity points added to a mood category per favourite spirit.
SPIRIT_MOOD_BOOSTS: dict[str, dict[str, int]] = {
    "whiskey": {
        "Bold & Serious": 20,
        "Mystery & Depth": 15,
        "After-Dinner Indulgence": 10,
        "Cozy & Comforting": 10,
    },
    "gin": {
        "Romantic & Elegant": 20,
        "Mystery & Depth": 15,
        "Playful & Fun": 10,
    },
    "tequila": {
        "Playful & Fun": 20,
        "Tropical Escape": 15,
        "Party Crowd-Pleasers": 15,
    },
    "rum": {
        "Tropical Escape": 20,
        "Party Crowd-Pleasers": 15,
        "Cozy & Comforting": 10,
    },
    "vodka": {
        "Late-Night Energy": 20,
        "Playful & Fun": 15,
        "Party Crowd-Pleasers": 10,
    },
}

# Affinity points added to a mood category per flavour preference.
FLAVOR_MOOD_BOOSTS: dict[str, dict[str, int]] = {
    "citrus": {
        "Playful & Fun": 10,
        "Tropical Escape": 15,
        "Party Crowd-Pleasers": 10,
    },
    "sweet": {
        "Romantic & Elegant": 10,
        "After-Dinner Indulgence": 15,
        "Cozy & Comforting": 10,
    },
    "bitter": {
        "Bold & Serious": 15,
        "Mystery & Depth": 10,
    },
    "smoky": {
        "Bold & Serious": 20,
        "Mystery & Depth": 15,
        "Late-Night Energy": 10,
    },
}

SPIRIT_BRANDS: dict[str, list[str]] = {
    "whiskey": ["Buffalo Trace", "Maker's Mark", "Jameson", "Glenfiddich"],
    "gin": ["Hendrick's", "Bombay Sapphire", "Tanqueray", "Aviation"],
    "tequila": ["Patron", "Don Julio", "Herradura", "Casamigos"],
    "rum": ["Mount Gay", "Appleton", "Bacardi", "Captain Morgan"],
    "vodka": ["Tito's", "Grey Goose", "Belvedere", "Stolichnaya"],
}

LESSON_TRACKS: dict[str, list[str]] = {
    "fundamentals": [
        "Basic Equipment",
        "Measuring Techniques",
        "Shake vs Stir",
        "Simple Syrups",
        "Classic Three-Ingredient Cocktails",
    ],
    "enthusiast": [
        "Advanced Techniques",
        "Flavor Balancing",
        "Garnish Preparation",
        "Creating Original Recipes",
        "Seasonal Ingredients",
    ],
    "professional": [
        "Speed Techniques",
        "Batch Cocktails",
        "Advanced Garnishes",
        "Customer Service",
        "Bar Management",
    ],
    "mocktails": [
        "Non-Alcoholic Spirits",
        "Complex Syrups",
        "Shrubs and Vinegars",
        "Layering Techniques",
        "Presentation",
    ],
}

DIFFICULTY_LADDER: dict[str, list[str]] = {
    "beginner": ["Easy"],
    "intermediate": ["Easy", "Medium"],
    "advanced": ["Easy", "Medium", "Hard"],
}


def moods_for_spirit(spirit: str) -> list[str]:
    """Return the mood tags a spirit contributes, or an empty list."""
    return SPIRIT_MOODS.get(spirit.lower(), [])
