"""Onboarding quiz - collects persona answers step by step."""

from dataclasses import replace
from typing import Optional

from ..errors import PersonaValidationError
from ..models.persona import (
    BINARY_QUESTIONS,
    ENDING_OPTIONS,
    MAX_VIBES,
    MIN_VIBES,
    TWIST_OPTIONS,
    VIBE_OPTIONS,
    PersonaAnswers,
    PersonaLabel,
)
from ..observability import logger
from ..storage.session import PersonaRepository
from .classifier import classify

WELCOME_TITLE = "Every story has a twist... but yours will be shaped by you."

# step name -> (answer field, title, options)
QUIZ_STEPS: dict[str, tuple[Optional[str], str, list[str]]] = {
    "welcome": (None, WELCOME_TITLE, []),
    "storyEnding": ("story_ending_preference", "How should a story end?", ENDING_OPTIONS),
    **{
        f"thisOrThat{i}": (name, title, options)
        for i, (name, title, options) in enumerate(BINARY_QUESTIONS, start=1)
    },
    "vibes": ("vibes", "Pick 3-5 vibes you love in a story.", VIBE_OPTIONS),
    "favoriteTwist": ("favorite_twist", "Which twist do you secretly love?", TWIST_OPTIONS),
}

STEP_ORDER = list(QUIZ_STEPS)


class OnboardingFlow:
    """
    One run of the persona quiz.

    Single-choice steps advance as soon as an option is selected; the vibes step
    toggles options and advances with next_step() once 3-5 are picked. Each run
    builds a fresh PersonaAnswers.
    """

    def __init__(self, repository: Optional[PersonaRepository] = None):
        self.repository = repository
        self.answers = PersonaAnswers()
        self.step_index = 0

    @property
    def current_step(self) -> str:
        return STEP_ORDER[self.step_index]

    @property
    def total_steps(self) -> int:
        return len(STEP_ORDER)

    @property
    def title(self) -> str:
        return QUIZ_STEPS[self.current_step][1]

    @property
    def options(self) -> list[str]:
        return list(QUIZ_STEPS[self.current_step][2])

    @property
    def is_last_step(self) -> bool:
        return self.step_index == len(STEP_ORDER) - 1

    def selected_options(self) -> list[str]:
        """Options currently chosen for this step."""
        field_name = QUIZ_STEPS[self.current_step][0]
        if field_name is None:
            return []
        value = getattr(self.answers, field_name)
        if field_name == "vibes":
            return list(value)
        return [value] if value else []

    def select(self, option: Optional[str] = None):
        """Handle an option pick on the current step."""
        field_name, _, options = QUIZ_STEPS[self.current_step]

        if field_name is None:
            self.next_step()
            return

        if option not in options:
            raise PersonaValidationError(f"{option!r} is not an option for {self.current_step}")

        if field_name == "vibes":
            self.toggle_vibe(option)
            return

        self.answers = replace(self.answers, **{field_name: option})
        self.next_step()

    def toggle_vibe(self, option: str):
        """Add or remove a vibe; at most 5 can be selected."""
        if option not in VIBE_OPTIONS:
            raise PersonaValidationError(f"Unknown vibe: {option!r}")

        vibes = list(self.answers.vibes)
        if option in vibes:
            vibes.remove(option)
        elif len(vibes) >= MAX_VIBES:
            raise PersonaValidationError(f"At most {MAX_VIBES} vibes can be selected")
        else:
            vibes.append(option)
        self.answers = replace(self.answers, vibes=vibes)

    def can_continue(self) -> bool:
        if self.current_step == "vibes":
            return MIN_VIBES <= len(self.answers.vibes) <= MAX_VIBES
        return True

    def next_step(self):
        if not self.can_continue():
            raise PersonaValidationError(f"Pick {MIN_VIBES}-{MAX_VIBES} vibes to continue")
        if not self.is_last_step:
            self.step_index += 1

    def finalize(self) -> tuple[PersonaAnswers, PersonaLabel]:
        """
        Classify the answers and save them.

        Raises:
            PersonaValidationError: if fewer than 3 or more than 5 vibes are selected.
        """
        vibe_count = len(self.answers.vibes)
        if not MIN_VIBES <= vibe_count <= MAX_VIBES:
            raise PersonaValidationError(
                f"Expected {MIN_VIBES}-{MAX_VIBES} vibes, got {vibe_count}"
            )

        label = classify(self.answers)
        if self.repository is not None:
            self.repository.save(self.answers, label)
        logger.info(f"Onboarding complete: {label.value}")
        return self.answers, label
