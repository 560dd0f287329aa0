"""Case selection policy — which cases a scripted player opens."""
from typing import Sequence


class CaseSelectionPolicy:
    """Uniform random sample of unopened cases.

    The policy does not know about the player's reserved case; callers
    filter it out of the returned ids before opening them.
    """

    def __init__(self, rng):
        self.rng = rng

    def select_cases_to_open(self, opened_set: Sequence[bool], count: int) -> list[int]:
        available = [i for i, is_open in enumerate(opened_set) if not is_open]
        k = max(0, min(count, len(available)))
        return self.rng.sample(available, k)
