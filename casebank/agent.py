"""Scripted agent — the computer auto-player."""
import random
from typing import Optional

from casebank.advisor import DecisionAdvisor
from casebank.base import GameResult
from casebank.policy import CaseSelectionPolicy
from casebank.sequencer import RoundSequencer
from config.game_schema import GameRules, default_rules


class ScriptedAgent:
    """Random case picks, advisor-driven DEAL / NO DEAL."""

    def __init__(self, rng=None, rules: Optional[GameRules] = None):
        self.rng = rng if rng is not None else random.Random()
        self.rules = rules or default_rules()
        self.policy = CaseSelectionPolicy(self.rng)
        self.advisor = DecisionAdvisor(self.rules.advisor)

    def choose_case(self) -> int:
        return self.rng.randrange(len(self.rules.prize_catalog))

    def play_game(self, sequencer: Optional[RoundSequencer] = None,
                  recorder=None) -> GameResult:
        if sequencer is None:
            sequencer = RoundSequencer(self.rules, rng=self.rng, recorder=recorder)
        return sequencer.play(
            self.advisor.decide,
            self.policy.select_cases_to_open,
            player_case=self.choose_case(),
        )
