"""
CASEBANK — Game Rules Schema

Every tunable constant of the case game lives here: the prize catalog,
the round schedule, the offer curve and the advisor thresholds.
Engines read a GameRules instance instead of hardcoded values.

Usage:
    from config.game_schema import GameRules, default_rules
    rules = default_rules()
    rules.offer.cap            # 0.9
    rules.model_dump_json(indent=2)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


# ═══════════════════════════════════════════════════════════════
# Defaults
# ═══════════════════════════════════════════════════════════════

NUM_CASES = 26

PRIZE_CATALOG = [
    0.01, 1.0, 5.0, 10.0, 25.0, 50.0, 75.0, 100.0, 200.0, 300.0,
    400.0, 500.0, 750.0, 1000.0, 5000.0, 10000.0, 25000.0, 50000.0,
    75000.0, 100000.0, 200000.0, 300000.0, 400000.0, 500000.0, 750000.0, 1000000.0,
]

ROUND_SCHEDULE = [6, 5, 4, 3, 2, 1, 1, 1, 1]


# ═══════════════════════════════════════════════════════════════
# Sub-Models
# ═══════════════════════════════════════════════════════════════

class OfferConfig(BaseModel):
    """Bank offer curve: pct = min(cap, base + step * round)."""
    base: float = Field(0.10, ge=0.0)
    step: float = Field(0.05, ge=0.0)
    cap: float = 0.90

    @field_validator("cap")
    @classmethod
    def _cap_in_range(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"offer cap must be in (0, 1], got {v}")
        return v


class AdvisorConfig(BaseModel):
    """Three-tier accept/reject thresholds keyed on cases remaining."""
    early_above: int = 10             # remaining > 10 → early tier
    mid_above: int = 5                # 5 < remaining <= 10 → mid tier
    early_ratio: float = 0.90         # accept iff offer >= ratio * EV
    mid_ratio: float = 0.85
    late_ratio: float = 0.80
    risk_weight: float = 0.30         # weight on std / (EV + 1)
    risk_threshold: float = 0.40      # accept iff risk factor below this


# ═══════════════════════════════════════════════════════════════
# Top-Level Rules
# ═══════════════════════════════════════════════════════════════

class GameRules(BaseModel):
    """Complete rule set for one game instance.

    The catalog is not size-checked here; PrizePool.initialize() enforces
    the 26-case invariant and raises StateError.
    """
    prize_catalog: list[float] = Field(default_factory=lambda: list(PRIZE_CATALOG))
    round_schedule: list[int] = Field(default_factory=lambda: list(ROUND_SCHEDULE))
    offer: OfferConfig = Field(default_factory=OfferConfig)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)
    low_prize_ceiling: float = 500.0  # board split: low <= ceiling < high

    @field_validator("round_schedule")
    @classmethod
    def _schedule_positive(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("round_schedule must not be empty")
        if any(n < 1 for n in v):
            raise ValueError(f"round_schedule counts must be >= 1, got {v}")
        return v

    @property
    def num_cases(self) -> int:
        return len(self.prize_catalog)


def default_rules() -> GameRules:
    """Fresh rules instance with the standard 26-case setup."""
    return GameRules()
