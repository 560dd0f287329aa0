"""
CASEBANK — Round Sequencer

Drives one game instance through the fixed round schedule:

    NOT_STARTED ──start()──▶ IN_PROGRESS(round N) ──▶ CONCLUDED(DEAL | FINAL_REVEAL)

Each round the caller opens the scheduled number of cases, the bank
makes an offer, and the caller decides. Accept ends the game with the offer
as payout. Reject moves to the next scheduled batch. When the schedule runs
out, or fewer than two cases are left, the player's case is revealed and
paid out.

The sequencer owns no I/O and no retry logic. Human front ends call
open_cases()/decide() step by step. Scripted players go through play().
"""

import logging
import random
from typing import Optional, Sequence, Union

from casebank.advisor import DecisionAdvisor
from casebank.base import (
    ActorDecision, CaseSelector, Decision, Evaluation, GamePhase, GameResult,
    InputError, Outcome, RoundRecord, StateError,
)
from casebank.offer import OfferEngine
from casebank.prizes import PrizePool
from casebank.tracker import RevealTracker
from config.game_schema import GameRules, default_rules

logger = logging.getLogger("casebank.sequencer")


class RoundSequencer:
    """State machine for a single case game."""

    def __init__(self, rules: Optional[GameRules] = None, rng=None,
                 offer_engine: Optional[OfferEngine] = None, recorder=None):
        """
        Args:
            rules: Rule set (catalog, schedule, offer curve). Defaults to the standard game.
            rng: RandomSource used for the case shuffle. Pass a seeded one in tests.
            offer_engine: Override the bank's offer computation.
            recorder: Optional object with record_outcome(payout), called once per concluded game.
        """
        self.rules = rules or default_rules()
        self.rng = rng if rng is not None else random.Random()
        self.pool = PrizePool(self.rules.prize_catalog)
        self.offer_engine = offer_engine or OfferEngine(self.rules.offer)
        self.recorder = recorder

        self.phase = GamePhase.NOT_STARTED
        self.tracker: Optional[RevealTracker] = None
        self.player_case: Optional[int] = None
        self.round = 0
        self.pending_offer: Optional[float] = None
        self.rounds: list[RoundRecord] = []
        self.result: Optional[GameResult] = None
        self._slot = 0   # index into round_schedule

    # ── Lifecycle ────────────────────────────────────────────

    def start(self, player_case: int) -> None:
        """Begin a new game instance with the player's reserved case."""
        if self.phase is GamePhase.IN_PROGRESS:
            raise StateError("Game already in progress")

        catalog = self.pool.initialize()
        if not isinstance(player_case, int) or not 0 <= player_case < len(catalog):
            raise StateError(f"Invalid case number: {player_case!r}")

        self.tracker = RevealTracker(self.pool.shuffle(catalog, self.rng))
        self.player_case = player_case
        self.round = 1
        self.pending_offer = None
        self.rounds = []
        self.result = None
        self._slot = 0
        self.phase = GamePhase.IN_PROGRESS
        logger.debug(f"Game started: player case {player_case + 1}")

    def _require_in_progress(self) -> None:
        if self.phase is not GamePhase.IN_PROGRESS:
            raise StateError(f"No game in progress (phase={self.phase.value})")

    @property
    def schedule(self) -> list[int]:
        return self.rules.round_schedule

    @property
    def cases_to_open(self) -> int:
        """How many cases the current round still expects (0 while an offer is pending)."""
        if self.phase is not GamePhase.IN_PROGRESS or self.pending_offer is not None:
            return 0
        return self.schedule[self._slot]

    def hidden_prizes(self) -> list[float]:
        self._require_tracker()
        return self.tracker.hidden_prizes()

    def remaining_count(self) -> int:
        self._require_tracker()
        return self.tracker.remaining_count()

    def _require_tracker(self) -> None:
        if self.tracker is None:
            raise StateError("Game not started")

    # ── Round steps ──────────────────────────────────────────

    def openable_count(self) -> int:
        """Unopened cases other than the player's."""
        self._require_tracker()
        return sum(1 for cid in self.tracker.unopened_cases() if cid != self.player_case)

    def open_cases(self, case_ids: Sequence[int], allow_short: bool = False) -> list[tuple]:
        """Open this round's batch and price the bank offer.

        The batch must hold exactly the scheduled count (fewer only when
        not enough openable cases are left). allow_short relaxes that to
        "at most", for scripted selectors whose picks were filtered.

        The whole batch is validated before any case is opened, so a
        rejected batch leaves the game untouched.
        """
        self._require_in_progress()
        if self.pending_offer is not None:
            raise StateError("Offer pending: decide before opening more cases")

        ids = list(case_ids)
        quota = min(self.cases_to_open, self.openable_count())
        if len(ids) > quota or (not allow_short and len(ids) != quota):
            raise StateError(f"Round {self.round} opens {quota} case(s), got {len(ids)}")

        seen = set()
        for cid in ids:
            if not isinstance(cid, int) or not 0 <= cid < self.tracker.num_cases:
                raise StateError(f"Invalid case number: {cid!r}")
            if cid == self.player_case:
                raise StateError(f"Case {cid + 1} is the player's case")
            if cid in seen:
                raise StateError(f"Case {cid + 1} selected twice")
            if self.tracker.is_open(cid):
                raise StateError(f"Case {cid + 1} already opened")
            seen.add(cid)

        record = RoundRecord(round=self.round)
        for cid in ids:
            value = self.tracker.open_case(cid)
            record.opened.append((cid, value))
            logger.debug(f"Round {self.round}: case {cid + 1} contained ${value:,.2f}")
        self.rounds.append(record)

        if self.tracker.remaining_count() < 2:
            self._conclude(Outcome.FINAL_REVEAL, self.tracker.value_of(self.player_case))
            return record.opened

        self.pending_offer = self.offer_engine.compute_offer(
            self.tracker.hidden_prizes(), self.round)
        record.offer = self.pending_offer
        logger.debug(f"Round {self.round}: bank offers ${self.pending_offer:,.2f}")
        return record.opened

    def evaluate(self, advisor: Optional[DecisionAdvisor] = None) -> Evaluation:
        """Advisor verdict on the pending offer."""
        self._require_in_progress()
        if self.pending_offer is None:
            raise StateError("No offer pending")
        advisor = advisor or DecisionAdvisor(self.rules.advisor)
        return advisor.evaluate(
            self.tracker.hidden_prizes(), self.pending_offer, self.tracker.remaining_count())

    def decide(self, decision: Union[Decision, bool]) -> None:
        """Apply DEAL / NO DEAL to the pending offer."""
        self._require_in_progress()
        if self.pending_offer is None:
            raise StateError("No offer pending")
        if isinstance(decision, bool):
            decision = Decision.from_bool(decision)
        try:
            decision = Decision(decision)
        except ValueError:
            raise InputError(f"Unknown decision: {decision!r}") from None

        offer = self.pending_offer
        self.pending_offer = None
        self.rounds[-1].decision = decision

        if decision is Decision.ACCEPT:
            self._conclude(Outcome.DEAL, offer)
            return

        self.round += 1
        self._slot += 1
        if self._slot >= len(self.schedule):
            self._conclude(Outcome.FINAL_REVEAL, self.tracker.value_of(self.player_case))

    def _conclude(self, outcome: Outcome, payout: float) -> None:
        self.phase = GamePhase.CONCLUDED
        self.result = GameResult(
            outcome=outcome,
            payout=payout,
            player_case=self.player_case,
            player_case_value=self.tracker.value_of(self.player_case),
            rounds=list(self.rounds),
        )
        logger.info(f"Game concluded: {outcome.value} after {len(self.rounds)} round(s), "
                    f"payout ${payout:,.2f}")
        if self.recorder is not None:
            self.recorder.record_outcome(payout)

    # ── Whole-game driver ────────────────────────────────────

    def play(self, decide: ActorDecision, select: CaseSelector,
             player_case: Optional[int] = None) -> GameResult:
        """Run a full game with callable actors.

        select(opened_set, count) proposes cases; the reserved case is
        filtered out here, so a round may open fewer cases than scheduled.
        decide(hidden_prizes, offer, cases_remaining) answers each offer.
        """
        if player_case is None:
            player_case = self.rng.randrange(len(self.rules.prize_catalog))
        self.start(player_case)

        while self.phase is GamePhase.IN_PROGRESS:
            picks = select(self.tracker.opened_set, self.cases_to_open)
            self.open_cases([cid for cid in picks if cid != self.player_case], allow_short=True)
            if self.phase is GamePhase.CONCLUDED:
                break
            self.decide(decide(self.tracker.hidden_prizes(), self.pending_offer,
                               self.tracker.remaining_count()))
        return self.result
