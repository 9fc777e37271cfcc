"""Persona questionnaire answers and labels."""

from dataclasses import dataclass, field, fields
from enum import Enum


class PersonaLabel(str, Enum):
    """The eight reader personas."""
    ROMANTIC_OPTIMIST = "The Romantic Optimist"
    RIGHTEOUS_JUDGE = "The Righteous Judge"
    MELANCHOLIC_REALIST = "The Melancholic Realist"
    MYSTERY_SEEKER = "The Mystery Seeker"
    NOBLE_HERO = "The Noble Hero"
    COMPASSIONATE_SOUL = "The Compassionate Soul"
    ROMANTIC_REALIST = "The Romantic Realist"
    ECLECTIC_READER = "The Eclectic Reader"


PERSONA_DESCRIPTIONS = {
    PersonaLabel.ROMANTIC_OPTIMIST: (
        "You believe in the power of love to overcome all obstacles and always "
        "approach stories with hope and optimism."
    ),
    PersonaLabel.RIGHTEOUS_JUDGE: (
        "You value justice and fairness above all, and prefer stories where the "
        "wicked face consequences for their actions."
    ),
    PersonaLabel.MELANCHOLIC_REALIST: (
        "You appreciate the bittersweet nature of life and prefer stories that "
        "don't shy away from the hard truths."
    ),
    PersonaLabel.MYSTERY_SEEKER: (
        "You love being surprised and challenged by stories that keep you "
        "guessing until the very end."
    ),
    PersonaLabel.NOBLE_HERO: (
        "You believe in sacrifice for the greater good and are drawn to stories "
        "of heroism and moral courage."
    ),
    PersonaLabel.COMPASSIONATE_SOUL: (
        "You value personal connections and mercy, and prefer stories where "
        "relationships triumph over rigid principles."
    ),
    PersonaLabel.ROMANTIC_REALIST: (
        "You believe in love, but expect pain along the way. You want authentic "
        "emotional journeys with hard-earned happy endings."
    ),
    PersonaLabel.ECLECTIC_READER: (
        "You have diverse tastes that span many genres and storytelling styles, "
        "always open to new experiences."
    ),
}


# =============================================================================
# Questionnaire
# =============================================================================

ENDING_OPTIONS = [
    "Love wins",
    "Justice served",
    "Bittersweet",
    "Twist you never saw coming",
]

TWIST_OPTIONS = [
    "Identity reveal",
    "Hidden betrayal",
    "Time/reality bend",
    "Karma hits hard",
]

VIBE_OPTIONS = [
    "Cozy & Heartwarming",
    "Dark & Brooding",
    "Epic & Grandiose",
    "Mind-Bending & Mysterious",
    "Witty & Charming",
    "Tragic & Cathartic",
    "Action-Packed & Thrilling",
]

# (answer field, question title, options) for the this-or-that steps, in quiz order
BINARY_QUESTIONS = [
    ("justice_or_mercy", "Justice or Mercy?", ["Justice", "Mercy"]),
    ("plan_or_mess", "A Perfect Plan or A Glorious Mess?", ["Perfect Plan", "Glorious Mess"]),
    ("risk_or_faith", "A Calculated Risk or A Leap of Faith?", ["Calculated Risk", "Leap of Faith"]),
    ("twist_or_payoff", "A Shocking Twist or A Satisfying Payoff?", ["Shocking Twist", "Satisfying Payoff"]),
    ("hope_or_honesty", "Unshakeable Hope or Brutal Honesty?", ["Unshakeable Hope", "Brutal Honesty"]),
    (
        "greater_good_or_personal_bond",
        "The Greater Good or The Personal Bond?",
        ["Greater Good", "Personal Bond"],
    ),
]

MIN_VIBES = 3
MAX_VIBES = 5

# Stored JSON keys <-> dataclass fields
_JSON_KEYS = {
    "story_ending_preference": "storyEndingPreference",
    "justice_or_mercy": "justiceOrMercy",
    "plan_or_mess": "planOrMess",
    "risk_or_faith": "riskOrFaith",
    "twist_or_payoff": "twistOrPayoff",
    "hope_or_honesty": "hopeOrHonesty",
    "greater_good_or_personal_bond": "greaterGoodOrPersonalBond",
    "favorite_twist": "favoriteTwist",
    "vibes": "vibes",
}


@dataclass
class PersonaAnswers:
    """
    Answers collected by the onboarding quiz.

    Unanswered questions are empty strings; they never match a classifier rule
    or a ranking tag.
    """

    story_ending_preference: str = ""
    justice_or_mercy: str = ""
    plan_or_mess: str = ""
    risk_or_faith: str = ""
    twist_or_payoff: str = ""
    hope_or_honesty: str = ""
    greater_good_or_personal_bond: str = ""
    favorite_twist: str = ""
    vibes: list[str] = field(default_factory=list)

    @property
    def binary_answers(self) -> list[str]:
        """The six this-or-that answers, in quiz order."""
        return [getattr(self, name) for name, _, _ in BINARY_QUESTIONS]

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[_JSON_KEYS[f.name]] = list(value) if f.name == "vibes" else value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "PersonaAnswers":
        """Read answers from the stored camelCase object; missing keys stay empty."""
        kwargs = {}
        for name, key in _JSON_KEYS.items():
            value = data.get(key, data.get(name))
            if value is None:
                continue
            kwargs[name] = list(value) if name == "vibes" else str(value)
        return cls(**kwargs)
