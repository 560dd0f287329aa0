"""
CASEBANK — Configuration & Environment

Environment-driven settings for the case game front ends.
Values come from the process environment (or a .env file) and fall back
to sane defaults so the game runs with no setup at all.

    CASEBANK_STATS_PATH   where aggregate win/loss stats are persisted
    CASEBANK_SEED         fixed RNG seed (unset = OS entropy)
    CASEBANK_LOG_LEVEL    DEBUG / INFO / WARNING ...
    CASEBANK_SIM_GAMES    default game count for Monte Carlo runs
"""

import logging
import os
import random
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger("casebank.settings").warning(
            f"{name}={raw!r} is not an integer, using {default}")
        return default


# ============================================================
# Game settings
# ============================================================

class GameSettings:

    STATS_PATH = Path(os.getenv("CASEBANK_STATS_PATH", "./dealornodeal_stats.json"))
    SEED = _env_int("CASEBANK_SEED", None)
    LOG_LEVEL = os.getenv("CASEBANK_LOG_LEVEL", "INFO").upper()
    SIM_GAMES = _env_int("CASEBANK_SIM_GAMES", 10_000)

    @classmethod
    def reload(cls) -> None:
        """Re-read the environment (for tests that patch os.environ)."""
        cls.STATS_PATH = Path(os.getenv("CASEBANK_STATS_PATH", "./dealornodeal_stats.json"))
        cls.SEED = _env_int("CASEBANK_SEED", None)
        cls.LOG_LEVEL = os.getenv("CASEBANK_LOG_LEVEL", "INFO").upper()
        cls.SIM_GAMES = _env_int("CASEBANK_SIM_GAMES", 10_000)


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build the RandomSource handed to the engine.

    An explicit seed wins over CASEBANK_SEED; with neither, the generator
    is seeded from OS entropy.
    """
    if seed is None:
        seed = GameSettings.SEED
    return random.Random(seed)


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach one stream handler to the casebank logger tree."""
    logger = logging.getLogger("casebank")
    if not logger.handlers:
        _h = logging.StreamHandler()
        _h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(message)s", datefmt="%H:%M:%S"))
        logger.addHandler(_h)
    logger.setLevel(getattr(logging, (level or GameSettings.LOG_LEVEL).upper(), logging.INFO))
    return logger
