"""
CASEBANK — Case Game Engine

Offer engine and decision advisor for the 26-case buyout game.
Randomness is always injected, so a seeded RNG replays a game exactly.

Usage:
    import random
    from casebank import RoundSequencer, ScriptedAgent

    agent = ScriptedAgent(rng=random.Random(7))
    result = agent.play_game()
    print(result.outcome, result.payout)

    # Step-by-step (human front end)
    seq = RoundSequencer(rng=random.Random(7))
    seq.start(player_case=12)
    seq.open_cases([0, 1, 2, 3, 4, 5])
    print(seq.pending_offer, seq.evaluate().recommendation)
    seq.decide(False)
"""

from casebank.base import (
    Decision, Evaluation, GameError, GamePhase, GameResult, InputError,
    Outcome, RoundRecord, StateError, Tier,
)
from casebank.prizes import PrizePool
from casebank.tracker import RevealTracker, split_prizes
from casebank.offer import OfferEngine
from casebank.advisor import DecisionAdvisor
from casebank.policy import CaseSelectionPolicy
from casebank.sequencer import RoundSequencer
from casebank.agent import ScriptedAgent

__all__ = [
    "Decision", "Evaluation", "GameError", "GamePhase", "GameResult",
    "InputError", "Outcome", "RoundRecord", "StateError", "Tier",
    "PrizePool", "RevealTracker", "split_prizes", "OfferEngine",
    "DecisionAdvisor", "CaseSelectionPolicy", "RoundSequencer", "ScriptedAgent",
]
