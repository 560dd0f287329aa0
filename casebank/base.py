"""
CASEBANK — Shared engine types

Errors, decisions and result records used across the case game engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence


# ═══════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════

class GameError(Exception):
    """Base for every error the case game raises."""


class InputError(GameError):
    """Malformed or out-of-range actor input. Always recoverable."""

    def __init__(self, message: str):
        super().__init__(f"Invalid Input: {message}")
        self.reason = message


class StateError(GameError):
    """Invariant violation: bad catalog, reopened case, out-of-range id."""

    def __init__(self, message: str):
        super().__init__(f"Game State Error: {message}")
        self.reason = message


# ═══════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════

class Decision(str, Enum):
    ACCEPT = "deal"
    REJECT = "no_deal"

    @classmethod
    def from_bool(cls, accept: bool) -> "Decision":
        return cls.ACCEPT if accept else cls.REJECT


class Tier(str, Enum):
    EMPTY = "empty"
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class GamePhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    CONCLUDED = "concluded"


class Outcome(str, Enum):
    DEAL = "deal"
    FINAL_REVEAL = "final_reveal"


# Actor contract: (hidden_prizes, offer, cases_remaining) -> Decision
ActorDecision = Callable[[Sequence[float], float, int], Decision]
# Selector contract: (opened_set, count) -> case ids
CaseSelector = Callable[[Sequence[bool], int], Sequence[int]]


# ═══════════════════════════════════════════════════════════════
# Records
# ═══════════════════════════════════════════════════════════════

@dataclass
class Evaluation:
    """Advisor verdict for one offer."""
    expected_value: float
    std_deviation: float
    recommendation: Decision
    tier: Tier
    prob_exceeds_offer: float = 0.0
    risk_factor: Optional[float] = None  # late tier only

    @property
    def accept(self) -> bool:
        return self.recommendation is Decision.ACCEPT

    def to_dict(self) -> dict:
        return {
            "expected_value": round(self.expected_value, 2),
            "std_deviation": round(self.std_deviation, 2),
            "recommendation": self.recommendation.value,
            "tier": self.tier.value,
            "prob_exceeds_offer": round(self.prob_exceeds_offer, 4),
            "risk_factor": None if self.risk_factor is None else round(self.risk_factor, 4),
        }


@dataclass
class RoundRecord:
    """One round: the cases opened, then the offer and what was decided."""
    round: int
    opened: list = field(default_factory=list)   # [(case_id, value), ...]
    offer: Optional[float] = None
    decision: Optional[Decision] = None

    def to_dict(self) -> dict:
        return {
            "round": self.round,
            "opened": [{"case": cid + 1, "value": v} for cid, v in self.opened],
            "offer": None if self.offer is None else round(self.offer, 2),
            "decision": None if self.decision is None else self.decision.value,
        }


@dataclass
class GameResult:
    """Final result of a concluded game."""
    outcome: Outcome
    payout: float
    player_case: int
    player_case_value: float
    rounds: list = field(default_factory=list)   # [RoundRecord, ...]

    @property
    def rounds_played(self) -> int:
        return len(self.rounds)

    @property
    def won(self) -> bool:
        return self.payout > 0

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "payout": round(self.payout, 2),
            "player_case": self.player_case + 1,
            "player_case_value": self.player_case_value,
            "rounds_played": self.rounds_played,
            "rounds": [r.to_dict() for r in self.rounds],
        }
