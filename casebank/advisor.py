"""
CASEBANK — Decision Advisor

Expected value, dispersion and a risk-adjusted accept/reject call for a
bank offer. The same evaluate() drives the scripted player's decisions
and the advice shown to a human, so the two can never disagree.

Tiers (keyed on cases still hidden, the player's own included):
    early   remaining > 10        accept iff offer >= 0.90 * EV
    mid     5 < remaining <= 10   accept iff offer >= 0.85 * EV
    late    remaining <= 5        accept iff risk < 0.4 or offer >= 0.80 * EV
            where risk = P(prize > offer) - 0.3 * std / (EV + 1)
"""

import math
from typing import Optional, Sequence

from casebank.base import Decision, Evaluation, Tier
from config.game_schema import AdvisorConfig


def expected_value(prizes: Sequence[float]) -> float:
    if not prizes:
        return 0.0
    return sum(prizes) / len(prizes)


def std_deviation(prizes: Sequence[float]) -> float:
    """Population standard deviation (divides by n); 0 below two values."""
    if len(prizes) < 2:
        return 0.0
    mean = expected_value(prizes)
    variance = sum((p - mean) ** 2 for p in prizes) / len(prizes)
    return math.sqrt(variance)


def prob_exceeds(prizes: Sequence[float], offer: float) -> float:
    """Fraction of prizes strictly greater than the offer."""
    if not prizes:
        return 0.0
    return sum(1 for p in prizes if p > offer) / len(prizes)


class DecisionAdvisor:
    """Three-tier heuristic shared by human advice and scripted play."""

    def __init__(self, config: Optional[AdvisorConfig] = None):
        self.config = config or AdvisorConfig()

    def tier_for(self, cases_remaining: int) -> Tier:
        if cases_remaining > self.config.early_above:
            return Tier.EARLY
        if cases_remaining > self.config.mid_above:
            return Tier.MID
        return Tier.LATE

    def evaluate(self, hidden_prizes: Sequence[float], offer: float,
                 cases_remaining: int) -> Evaluation:
        if not hidden_prizes:
            return Evaluation(0.0, 0.0, Decision.ACCEPT, Tier.EMPTY)

        c = self.config
        ev = expected_value(hidden_prizes)
        sd = std_deviation(hidden_prizes)
        p_better = prob_exceeds(hidden_prizes, offer)
        tier = self.tier_for(cases_remaining)
        risk = None

        if tier is Tier.EARLY:
            accept = offer >= ev * c.early_ratio
        elif tier is Tier.MID:
            accept = offer >= ev * c.mid_ratio
        else:
            risk = p_better - c.risk_weight * (sd / (ev + 1.0))
            accept = risk < c.risk_threshold or offer >= ev * c.late_ratio

        return Evaluation(
            expected_value=ev,
            std_deviation=sd,
            recommendation=Decision.from_bool(accept),
            tier=tier,
            prob_exceeds_offer=p_better,
            risk_factor=risk,
        )

    def decide(self, hidden_prizes: Sequence[float], offer: float,
               cases_remaining: int) -> Decision:
        """ActorDecision-shaped entry point for scripted players."""
        return self.evaluate(hidden_prizes, offer, cases_remaining).recommendation

    def advise(self, hidden_prizes: Sequence[float], offer: float,
               cases_remaining: int) -> dict:
        """Advice payload for a human player; rendering is left to the caller."""
        ev = self.evaluate(hidden_prizes, offer, cases_remaining)
        mean = ev.expected_value
        if ev.accept:
            message = "DEAL! The offer is favorable."
        else:
            message = "NO DEAL! You can likely do better."
        return {
            "expected_value": mean,
            "bank_offer": offer,
            "offer_vs_expected_pct": (offer / mean * 100) if mean > 0 else 0.0,
            "risk_level_pct": (ev.std_deviation / mean * 100) if mean > 0 else 0.0,
            "recommendation": ev.recommendation,
            "message": message,
            "evaluation": ev,
        }
