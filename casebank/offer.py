"""Offer engine — the bank's buyout offer for the current round."""
from typing import Optional, Sequence

from config.game_schema import OfferConfig


class OfferEngine:
    """Offers a rising fraction of the mean hidden prize.

    pct = min(cap, base + step * round); the cap keeps every offer below
    the true expected value.
    """

    def __init__(self, config: Optional[OfferConfig] = None):
        self.config = config or OfferConfig()

    def percentage(self, round_no: int) -> float:
        c = self.config
        return min(c.cap, c.base + c.step * round_no)

    def compute_offer(self, hidden_prizes: Sequence[float], round_no: int) -> float:
        if not hidden_prizes:
            return 0.0
        mean = sum(hidden_prizes) / len(hidden_prizes)
        return mean * self.percentage(round_no)
