"""Persona Ranker - orders a catalog by category-tag overlap with a persona."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..models.content import ContentItem
from ..models.persona import PersonaAnswers, TWIST_OPTIONS

# Ending preference -> category tags that satisfy it
ENDING_TAGS = {
    "Love wins": {"Love wins"},
    "Justice served": {"Justice served"},
    "Bittersweet": {"Tragic & Cathartic"},
    "Twist you never saw coming": set(TWIST_OPTIONS),
}


@dataclass
class RankedItem:
    """A content item with its persona score and score breakdown."""

    item: ContentItem
    score: int

    # Score breakdown
    ending_score: int = 0
    vibe_score: int = 0
    twist_score: int = 0
    preference_score: int = 0

    # Metadata
    matched_vibes: list[str] = field(default_factory=list)
    matched_preferences: list[str] = field(default_factory=list)


class PersonaRanker:
    """
    Scores catalog items against a persona's answers.

    Scoring (integer, per item):
    1. Ending match: +3 if a category fits the ending preference
    2. Vibes: +2 for every category that contains one of the selected vibes
    3. Favorite twist: +3 if the exact twist is a category
    4. This-or-that answers: +1 for every (answer, category) pair where the
       category contains the answer

    Matching for 2 and 4 is substring containment, so "Epic & Grandiose
    Adventure" counts for the vibe "Epic & Grandiose". Unanswered questions
    never match.

    Items are returned by descending score; equal scores keep catalog order.
    """

    ENDING_WEIGHT = 3
    VIBE_WEIGHT = 2
    TWIST_WEIGHT = 3
    PREFERENCE_WEIGHT = 1

    def rank(self, catalog: list[ContentItem], answers: PersonaAnswers) -> list[RankedItem]:
        """Score every item and sort, highest first."""
        ranked = [self.score_item(item, answers) for item in catalog]
        # sorted() is stable: ties stay in catalog order
        return sorted(ranked, key=lambda r: r.score, reverse=True)

    def score_item(self, item: ContentItem, answers: PersonaAnswers) -> RankedItem:
        """Compute the score for a single item."""
        categories = item.categories

        # 1. Ending preference
        ending_tags = ENDING_TAGS.get(answers.story_ending_preference, set())
        ending_score = self.ENDING_WEIGHT if any(c in ending_tags for c in categories) else 0

        # 2. Vibes - one match per category, however many vibes it contains
        vibes = [v for v in answers.vibes if v]
        matched_vibes = [c for c in categories if any(v in c for v in vibes)]
        vibe_score = self.VIBE_WEIGHT * len(matched_vibes)

        # 3. Favorite twist
        twist = answers.favorite_twist
        twist_score = self.TWIST_WEIGHT if twist and twist in categories else 0

        # 4. This-or-that answers
        matched_preferences = [
            answer
            for answer in answers.binary_answers
            if answer
            for c in categories
            if answer in c
        ]
        preference_score = self.PREFERENCE_WEIGHT * len(matched_preferences)

        return RankedItem(
            item=item,
            score=ending_score + vibe_score + twist_score + preference_score,
            ending_score=ending_score,
            vibe_score=vibe_score,
            twist_score=twist_score,
            preference_score=preference_score,
            matched_vibes=matched_vibes,
            matched_preferences=matched_preferences,
        )

    def explain_ranking(self, ranked_item: RankedItem) -> str:
        """Generate human-readable explanation of ranking."""
        parts = [f"Score: {ranked_item.score}"]

        if ranked_item.ending_score:
            parts.append(f"Ending: +{ranked_item.ending_score}")

        if ranked_item.vibe_score:
            parts.append(f"Vibes ({', '.join(ranked_item.matched_vibes[:3])}): +{ranked_item.vibe_score}")

        if ranked_item.twist_score:
            parts.append(f"Twist: +{ranked_item.twist_score}")

        if ranked_item.preference_score:
            parts.append(f"Preferences: +{ranked_item.preference_score}")

        return " | ".join(parts)


def rank_by_persona(catalog: list[ContentItem], answers: PersonaAnswers) -> list[ContentItem]:
    """Order a catalog by relevance to a persona (pure, stable)."""
    return [r.item for r in PersonaRanker().rank(catalog, answers)]


def top_rated(catalog: list[ContentItem], limit: int = 10) -> list[ContentItem]:
    """Highest rated first; equal ratings keep catalog order."""
    return sorted(catalog, key=lambda item: item.rating, reverse=True)[:limit]


def recommend(
    catalog: list[ContentItem],
    answers: Optional[PersonaAnswers] = None,
    limit: int = 10,
) -> list[ContentItem]:
    """
    "For you" row of the browse page.

    Persona ranking when onboarding is done, otherwise the top rated items.
    """
    if answers is None:
        return top_rated(catalog, limit)
    return rank_by_persona(catalog, answers)[:limit]


def trending(
    catalog: list[ContentItem],
    now: Optional[datetime] = None,
    days: int = 30,
    limit: int = 8,
) -> list[ContentItem]:
    """Highest rated items released within the last `days` days."""
    # Release dates are compared as naive wall-clock times
    now = (now or datetime.now()).replace(tzinfo=None)
    cutoff = now - timedelta(days=days)

    recent = []
    for item in catalog:
        if not item.release_date:
            continue
        try:
            released = datetime.fromisoformat(item.release_date)
        except ValueError:
            continue
        if released.tzinfo is not None:
            released = released.replace(tzinfo=None)
        if released >= cutoff:
            recent.append(item)

    return top_rated(recent, limit)
