"""Persona classifier - maps quiz answers to one of eight persona labels."""

from typing import Union

from ..models.persona import PersonaAnswers, PersonaLabel

# Ordered rules: (required answers, label). First match wins, so a reader who
# picked "Love wins" + "Unshakeable Hope" is an optimist even if a later rule
# would also match.
PERSONA_RULES = [
    (
        {"story_ending_preference": "Love wins", "hope_or_honesty": "Unshakeable Hope"},
        PersonaLabel.ROMANTIC_OPTIMIST,
    ),
    (
        {"story_ending_preference": "Justice served", "justice_or_mercy": "Justice"},
        PersonaLabel.RIGHTEOUS_JUDGE,
    ),
    (
        {"story_ending_preference": "Bittersweet", "hope_or_honesty": "Brutal Honesty"},
        PersonaLabel.MELANCHOLIC_REALIST,
    ),
    (
        {"story_ending_preference": "Twist you never saw coming", "twist_or_payoff": "Shocking Twist"},
        PersonaLabel.MYSTERY_SEEKER,
    ),
    (
        {"greater_good_or_personal_bond": "Greater Good", "justice_or_mercy": "Justice"},
        PersonaLabel.NOBLE_HERO,
    ),
    (
        {"greater_good_or_personal_bond": "Personal Bond", "justice_or_mercy": "Mercy"},
        PersonaLabel.COMPASSIONATE_SOUL,
    ),
    (
        {"story_ending_preference": "Love wins", "hope_or_honesty": "Brutal Honesty"},
        PersonaLabel.ROMANTIC_REALIST,
    ),
]

FALLBACK_LABEL = PersonaLabel.ECLECTIC_READER


def classify(answers: Union[PersonaAnswers, dict]) -> PersonaLabel:
    """
    Classify a (possibly partial) set of answers.

    Dicts may use the stored camelCase keys or field names. Missing answers never
    match a rule; anything unmatched is The Eclectic Reader.
    """
    if isinstance(answers, dict):
        answers = PersonaAnswers.from_dict(answers)

    for required, label in PERSONA_RULES:
        if all(getattr(answers, name) == value for name, value in required.items()):
            return label

    return FALLBACK_LABEL
