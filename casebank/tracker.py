"""Reveal tracker — which cases are open and what is still hidden."""
from typing import Sequence

from casebank.base import StateError


class RevealTracker:
    """Opened/unopened state over one game's case assignment.

    The player's case is an ordinary unopened case here: it counts toward
    hidden_prizes() and remaining_count() until the game ends.
    """

    def __init__(self, assignment: Sequence[float]):
        self._values = list(assignment)
        self._opened = [False] * len(self._values)

    @property
    def num_cases(self) -> int:
        return len(self._values)

    @property
    def opened_set(self) -> tuple:
        return tuple(self._opened)

    def _check_id(self, case_id: int) -> None:
        if not isinstance(case_id, int) or not 0 <= case_id < len(self._values):
            raise StateError(f"Invalid case number: {case_id!r}")

    def is_open(self, case_id: int) -> bool:
        self._check_id(case_id)
        return self._opened[case_id]

    def value_of(self, case_id: int) -> float:
        self._check_id(case_id)
        return self._values[case_id]

    def open_case(self, case_id: int) -> float:
        """Mark a case opened and return its value."""
        self._check_id(case_id)
        if self._opened[case_id]:
            raise StateError(f"Case {case_id + 1} already opened")
        self._opened[case_id] = True
        return self._values[case_id]

    def unopened_cases(self) -> list[int]:
        return [i for i, is_open in enumerate(self._opened) if not is_open]

    def hidden_prizes(self) -> list[float]:
        """Values behind every unopened case, largest first."""
        return sorted(
            (v for v, is_open in zip(self._values, self._opened) if not is_open),
            reverse=True,
        )

    def remaining_count(self) -> int:
        return self._opened.count(False)


def split_prizes(hidden: Sequence[float], ceiling: float = 500.0) -> dict:
    """Board buckets: low prizes ascending, high prizes descending."""
    return {
        "low": sorted(p for p in hidden if p <= ceiling),
        "high": sorted((p for p in hidden if p > ceiling), reverse=True),
    }
