"""Prize pool — fixed catalog and the per-game case assignment."""
from typing import Optional, Sequence

from casebank.base import StateError
from config.game_schema import NUM_CASES, PRIZE_CATALOG


class PrizePool:
    """Owns the 26-value prize catalog and shuffles it onto cases."""

    def __init__(self, catalog: Optional[Sequence[float]] = None):
        self._catalog = list(PRIZE_CATALOG if catalog is None else catalog)

    def initialize(self) -> list[float]:
        """Return a fresh copy of the catalog after checking its invariants."""
        catalog = list(self._catalog)
        if len(catalog) != NUM_CASES:
            raise StateError(
                f"Invalid number of prizes initialized: {len(catalog)} (expected {NUM_CASES})")
        if len(set(catalog)) != len(catalog):
            raise StateError("Prize catalog contains duplicate values")
        return catalog

    @staticmethod
    def shuffle(catalog: Sequence[float], rng) -> list[float]:
        """Uniform permutation of the catalog. Index i is the value in case i."""
        assignment = list(catalog)
        rng.shuffle(assignment)
        return assignment
