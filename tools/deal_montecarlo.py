"""
CASEBANK — Monte Carlo Simulator

Plays N games with the scripted agent and summarizes how the advisor
policy fares against the bank's offer curve:
  • Deal rate and the round deals are taken in
  • Payout mean / median / spread / max
  • Payout as a fraction of the catalog's expected value
  • Payout distribution buckets

Every game is seeded from (base seed, game index), so a run replays exactly.

Usage:
    from tools.deal_montecarlo import DealSimulator
    sim = DealSimulator(seed=42)
    summary = sim.run(n_games=10_000)
    print(summary.summary())
    print(summary.to_json())
"""

from __future__ import annotations

import hashlib
import json
import random
import statistics
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from casebank.agent import ScriptedAgent
from casebank.base import GameResult, Outcome
from config.game_schema import GameRules, default_rules


# ═══════════════════════════════════════════════════════════════
# Data Structures
# ═══════════════════════════════════════════════════════════════

@dataclass
class SimulationSummary:
    """Results from a batch of scripted games."""
    n_games: int
    deals: int
    deal_rate: float
    mean_payout: float
    median_payout: float
    std_payout: float
    max_payout: float
    catalog_ev: float
    payout_to_ev: float               # mean_payout / catalog_ev
    mean_deal_round: float = 0.0      # 0 when no deals were taken
    deals_by_round: dict = field(default_factory=dict)
    distribution: dict = field(default_factory=dict)
    duration_seconds: float = 0.0
    games_per_second: float = 0.0
    seed: int = 0
    generated_at: str = ""

    def __post_init__(self):
        if not self.generated_at:
            self.generated_at = datetime.now(timezone.utc).isoformat()

    def summary(self) -> str:
        lines = [
            "═══ Monte Carlo: SCRIPTED AGENT ═══",
            f"  Games:        {self.n_games:,}",
            f"  Deals:        {self.deals:,} ({self.deal_rate*100:.1f}%)",
            f"  Mean round:   {self.mean_deal_round:.2f}",
            f"  Mean payout:  ${self.mean_payout:,.2f}",
            f"  Median:       ${self.median_payout:,.2f}",
            f"  Std Dev:      ${self.std_payout:,.2f}",
            f"  Max payout:   ${self.max_payout:,.2f}",
            f"  Catalog EV:   ${self.catalog_ev:,.2f}",
            f"  Payout / EV:  {self.payout_to_ev*100:.2f}%",
            f"  Speed:        {self.games_per_second:,.0f} games/sec",
            f"  Duration:     {self.duration_seconds:.2f}s",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "n_games": self.n_games,
            "deals": self.deals,
            "deal_rate_pct": round(self.deal_rate * 100, 2),
            "mean_deal_round": round(self.mean_deal_round, 3),
            "deals_by_round": self.deals_by_round,
            "payout": {
                "mean": round(self.mean_payout, 2),
                "median": round(self.median_payout, 2),
                "std_dev": round(self.std_payout, 2),
                "max": round(self.max_payout, 2),
            },
            "catalog_ev": round(self.catalog_ev, 2),
            "payout_to_ev_pct": round(self.payout_to_ev * 100, 2),
            "distribution": self.distribution,
            "performance": {
                "duration_s": round(self.duration_seconds, 2),
                "games_per_sec": int(self.games_per_second),
            },
            "seed": self.seed,
            "generated_at": self.generated_at,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


# ═══════════════════════════════════════════════════════════════
# Distribution Analysis
# ═══════════════════════════════════════════════════════════════

PAYOUT_BUCKETS = [
    ("<$100", 100.0),
    ("$100-1K", 1_000.0),
    ("$1K-10K", 10_000.0),
    ("$10K-50K", 50_000.0),
    ("$50K-100K", 100_000.0),
    ("$100K-250K", 250_000.0),
    ("$250K-500K", 500_000.0),
]


def _payout_distribution(payouts: list[float]) -> dict:
    """Percent of games per payout range."""
    buckets = {name: 0 for name, _ in PAYOUT_BUCKETS}
    buckets["$500K+"] = 0
    for p in payouts:
        for name, upper in PAYOUT_BUCKETS:
            if p < upper:
                buckets[name] += 1
                break
        else:
            buckets["$500K+"] += 1
    n = len(payouts)
    return {k: round(v / n * 100, 2) if n else 0.0 for k, v in buckets.items()}


# ═══════════════════════════════════════════════════════════════
# Simulator
# ═══════════════════════════════════════════════════════════════

class DealSimulator:
    """Batch-plays the scripted agent."""

    def __init__(self, seed: int = 42, rules: Optional[GameRules] = None):
        self.base_seed = seed
        self.rules = rules or default_rules()

    def _game_seed(self, index: int) -> int:
        h = hashlib.md5(f"{self.base_seed}:game:{index}".encode()).hexdigest()[:8]
        return int(h, 16)

    def play_one(self, index: int) -> GameResult:
        agent = ScriptedAgent(rng=random.Random(self._game_seed(index)), rules=self.rules)
        return agent.play_game()

    def run(self, n_games: int = 10_000) -> SimulationSummary:
        if n_games < 1:
            raise ValueError(f"n_games must be >= 1, got {n_games}")

        t0 = time.time()
        results = [self.play_one(i) for i in range(n_games)]
        duration = time.time() - t0

        payouts = [r.payout for r in results]
        deal_rounds = [r.rounds_played for r in results if r.outcome is Outcome.DEAL]
        by_round: dict = {}
        for rnd in deal_rounds:
            by_round[rnd] = by_round.get(rnd, 0) + 1

        catalog = self.rules.prize_catalog
        catalog_ev = sum(catalog) / len(catalog)
        mean_payout = statistics.fmean(payouts)

        return SimulationSummary(
            n_games=n_games,
            deals=len(deal_rounds),
            deal_rate=len(deal_rounds) / n_games,
            mean_payout=mean_payout,
            median_payout=statistics.median(payouts),
            std_payout=statistics.pstdev(payouts) if n_games > 1 else 0.0,
            max_payout=max(payouts),
            catalog_ev=catalog_ev,
            payout_to_ev=mean_payout / catalog_ev if catalog_ev else 0.0,
            mean_deal_round=statistics.fmean(deal_rounds) if deal_rounds else 0.0,
            deals_by_round=dict(sorted(by_round.items())),
            distribution=_payout_distribution(payouts),
            duration_seconds=duration,
            games_per_second=n_games / duration if duration > 0 else 0.0,
            seed=self.base_seed,
        )


# ═══════════════════════════════════════════════════════════════
# CLI
# ═══════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import sys
    n = int(sys.argv[1]) if len(sys.argv) > 1 else 10_000
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else 42
    print(DealSimulator(seed=seed).run(n_games=n).summary())
