"""
CASEBANK — Aggregate Statistics Store

Lifetime win/loss counters across games, persisted to a small JSON file.
Load once at process start, record_outcome() once per concluded game,
save once at shutdown. Persistence problems never stop a game: a missing
or corrupt file means zeroed stats, and a failed write is logged.

Usage:
    from tools.deal_stats import StatsStore
    store = StatsStore("dealornodeal_stats.json")
    stats = store.load()
    RoundSequencer(recorder=stats)      # stats.record_outcome(payout) per game
    store.save(stats)
"""

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger("casebank.stats")


@dataclass
class GameStats:
    games_played: int = 0
    games_won: int = 0
    total_winnings: float = 0.0
    best_winning: float = 0.0

    @property
    def average_winning(self) -> float:
        return self.total_winnings / self.games_played if self.games_played else 0.0

    @property
    def win_rate(self) -> float:
        """Percent of games with a positive payout."""
        return self.games_won / self.games_played * 100 if self.games_played else 0.0

    def record_outcome(self, payout: float) -> None:
        self.games_played += 1
        self.total_winnings += payout
        if payout > self.best_winning:
            self.best_winning = payout
        if payout > 0:
            self.games_won += 1

    def to_dict(self) -> dict:
        d = asdict(self)
        d["average_winning"] = round(self.average_winning, 2)
        d["win_rate_pct"] = round(self.win_rate, 1)
        return d


class StatsStore:
    """JSON-file persistence for GameStats."""

    FIELDS = ("games_played", "games_won", "total_winnings", "best_winning")

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> GameStats:
        if not self.path.exists():
            return GameStats()
        try:
            data = json.loads(self.path.read_text())
            return GameStats(
                games_played=int(data.get("games_played", 0)),
                games_won=int(data.get("games_won", 0)),
                total_winnings=float(data.get("total_winnings", 0.0)),
                best_winning=float(data.get("best_winning", 0.0)),
            )
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Could not load statistics from {self.path}: {e}; starting fresh")
            return GameStats()

    def save(self, stats: GameStats) -> bool:
        """Atomic write. Returns False (and logs) on failure."""
        payload = {k: getattr(stats, k) for k in self.FIELDS}
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=self.path.stem + ".", suffix=".json",
                                            dir=str(self.path.parent))
            with os.fdopen(fd, "w") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_path, self.path)
            return True
        except OSError as e:
            logger.warning(f"Could not save statistics to {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass
            return False

    def reset(self) -> GameStats:
        """Delete the stats file and return zeroed stats."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not delete statistics file {self.path}: {e}")
        return GameStats()
