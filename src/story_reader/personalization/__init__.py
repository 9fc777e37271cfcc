"""Personalization module - persona classification, onboarding and catalog ranking."""

from .classifier import classify
from .onboarding import OnboardingFlow
from .ranker import PersonaRanker, RankedItem, rank_by_persona, recommend, top_rated, trending

__all__ = [
    "classify",
    "OnboardingFlow",
    "PersonaRanker",
    "RankedItem",
    "rank_by_persona",
    "recommend",
    "top_rated",
    "trending",
]
