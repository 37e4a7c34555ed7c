"""Result budget shared by every file processed in one invocation."""

from __future__ import annotations

from dataclasses import dataclass

from search.models import RESULT_LIMIT


@dataclass
class ResultBudget:
    """Mutable counter cell capping the results of a single invocation.

    The budget is created per call and passed explicitly to each per-file
    function; it is never shared between invocations.
    """

    limit: int = RESULT_LIMIT
    used: int = 0

    @property
    def exhausted(self) -> bool:
        """Return True once the cap has been reached."""
        return self.used >= self.limit

    @property
    def remaining(self) -> int:
        """Return how many more results may be produced."""
        return max(self.limit - self.used, 0)

    def take(self) -> bool:
        """Consume one unit.

        Returns
        -------
        bool
            ``True`` when a unit was available and consumed.
        """
        if self.exhausted:
            return False
        self.used += 1
        return True


__all__ = ["ResultBudget"]
