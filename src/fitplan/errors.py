"""Exception hierarchy for the planning and analytics engine.

Every error raised on purpose by fitplan derives from FitplanError so callers
can show a generic "failed to load/save" message and offer a retry.
"""

from __future__ import annotations


class FitplanError(Exception):
    """Base class for all fitplan errors."""


class PreconditionError(FitplanError):
    """A required upstream record (profile, nutrition goals) is missing."""


class NotFoundError(FitplanError):
    """An expected per-day record does not exist."""


class NotYetVisibleError(NotFoundError):
    """A record was still absent after the bounded wait for it to appear."""

    def __init__(self, collection: str, key: str, attempts: int):
        super().__init__(
            f"{collection}/{key} not visible after {attempts} attempt(s)"
        )
        self.collection = collection
        self.key = key
        self.attempts = attempts


class IndexOutOfRangeError(FitplanError, IndexError):
    """An exercise index is outside the plan's exercise list."""


class NoCandidatesError(FitplanError):
    """Dietary and goal filters eliminated every catalog option for a slot."""

    def __init__(self, meal_type: str, restrictions: list[str], goal: str):
        restriction_text = ", ".join(restrictions) if restrictions else "none"
        super().__init__(
            f"No {meal_type} recipes match restrictions [{restriction_text}] "
            f"and goal '{goal}'"
        )
        self.meal_type = meal_type
        self.restrictions = restrictions
        self.goal = goal


class PersistenceError(FitplanError):
    """A store write did not take effect on the verification read."""
