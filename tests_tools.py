#!/usr/bin/env python3
"""
Tests for the application-side tools around the engine

Validates:
1.  Actor input parsing returns ParseResult, never raises
2.  Case-choice parsing rejects own / opened / already-selected cases
3.  Yes/no parsing only looks at the first character
4.  GameStats.record_outcome updates counters, best, average, win rate
5.  StatsStore round-trips through the JSON file
6.  Missing and corrupt stats files load as zeroed stats
7.  Unwritable stats path logs instead of raising
8.  StatsStore.reset deletes the file
9.  DealSimulator is reproducible for a seed and summary fields are sane
10. Settings: make_rng honours explicit seeds, env parsing tolerates junk
11. CLI commands run end to end against a temp stats file
12. advise and stats emit JSON with --json
"""

import io
import json
import os
import random
import sys
import tempfile
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from casebank.base import InputError, Outcome
from tools.deal_input import (
    parse_case_choice, parse_case_number, parse_int_in_range, parse_yes_no,
)
from tools.deal_montecarlo import DealSimulator, _payout_distribution
from tools.deal_stats import GameStats, StatsStore


# ============================================================
# Input parsing
# ============================================================

def test_parse_int_errors():
    """Empty, non-numeric and out-of-range inputs come back as InputError."""
    cases = {
        "": "Empty input",
        "   ": "Empty input",
        None: "Empty input",
        "abc": "Non-numeric input",
        "3x": "Non-numeric input",
        "2.5": "Non-numeric input",
        "0": "Input out of range (1-26)",
        "27": "Input out of range (1-26)",
    }
    for text, reason in cases.items():
        res = parse_int_in_range(text, 1, 26)
        assert not res.ok, text
        assert isinstance(res.error, InputError)
        assert res.error.reason == reason, (text, res.error.reason)
    print("✅ parse_int_in_range reports every malformed input")


def test_parse_case_number_zero_based():
    assert parse_case_number("1").value == 0
    assert parse_case_number(" 26 ").value == 25
    print("✅ case numbers map 1..26 → 0..25")


def test_parse_case_choice_rules():
    opened = [False] * 26
    opened[4] = True
    assert parse_case_choice("3", player_case=2, opened=opened).error.reason == "You can't open your own case!"
    assert parse_case_choice("5", player_case=2, opened=opened).error.reason == "Case already opened!"
    assert parse_case_choice("7", player_case=2, opened=opened,
                             selected=[6]).error.reason == "Case already selected for this round!"
    res = parse_case_choice("8", player_case=2, opened=opened, selected=[6])
    assert res.ok and res.value == 7
    print("✅ case choice rejects own / opened / duplicate picks")


def test_parse_yes_no():
    assert parse_yes_no("y").value is True
    assert parse_yes_no("Yes please").value is True
    assert parse_yes_no("NO").value is False
    assert parse_yes_no("").error.reason == "Empty input"
    assert parse_yes_no("maybe").error.reason == "Invalid choice"
    print("✅ yes/no parsing uses the first character")


# ============================================================
# Stats
# ============================================================

def test_game_stats_record_outcome():
    s = GameStats()
    assert s.average_winning == 0.0 and s.win_rate == 0.0
    for payout in (100.0, 0.0, 50_000.0, 0.01):
        s.record_outcome(payout)
    assert s.games_played == 4
    assert s.games_won == 3
    assert s.best_winning == 50_000.0
    assert abs(s.total_winnings - 50_100.01) < 1e-6
    assert abs(s.average_winning - 50_100.01 / 4) < 1e-6
    assert s.win_rate == 75.0
    print("✅ GameStats counters, best, average and win rate")


def test_stats_store_roundtrip():
    with tempfile.TemporaryDirectory() as d:
        store = StatsStore(Path(d) / "stats.json")
        s = store.load()
        assert s == GameStats()
        s.record_outcome(1234.5)
        assert store.save(s) is True
        loaded = store.load()
        assert loaded == s
        data = json.loads((Path(d) / "stats.json").read_text())
        assert set(data) == {"games_played", "games_won", "total_winnings", "best_winning"}
    print("✅ StatsStore save/load round trip")


def test_stats_store_corrupt_file_is_fresh():
    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / "stats.json"
        for junk in ("not json", "[1, 2, 3]", '{"games_played": "many"}'):
            path.write_text(junk)
            assert StatsStore(path).load() == GameStats(), junk
    print("✅ corrupt stats load as zeroed")


def test_stats_store_unwritable_path_does_not_raise():
    with tempfile.TemporaryDirectory() as d:
        blocker = Path(d) / "file"
        blocker.write_text("x")
        store = StatsStore(blocker / "nested" / "stats.json")
        assert store.save(GameStats(games_played=1)) is False
    print("✅ failed save returns False without raising")


def test_stats_store_reset():
    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / "stats.json"
        store = StatsStore(path)
        store.save(GameStats(games_played=3))
        assert path.exists()
        assert store.reset() == GameStats()
        assert not path.exists()
        store.reset()  # missing file is fine
    print("✅ reset deletes the stats file")


# ============================================================
# Monte Carlo
# ============================================================

def test_simulator_reproducible():
    a = DealSimulator(seed=9).run(n_games=60)
    b = DealSimulator(seed=9).run(n_games=60)
    assert a.mean_payout == b.mean_payout
    assert a.deals == b.deals
    assert a.deals_by_round == b.deals_by_round
    print("✅ simulator replays for a fixed seed")


def test_simulator_summary_fields():
    s = DealSimulator(seed=3).run(n_games=80)
    assert s.n_games == 80
    assert 0.0 <= s.deal_rate <= 1.0
    assert s.deals == sum(s.deals_by_round.values())
    assert s.max_payout <= 1_000_000.0
    assert abs(s.catalog_ev - 131_477.5388) < 0.01
    assert abs(sum(s.distribution.values()) - 100.0) < 0.1
    if s.deals:
        assert 1.0 <= s.mean_deal_round <= 9.0
    payload = json.loads(s.to_json())
    assert payload["n_games"] == 80
    assert "Monte Carlo" in s.summary()
    print(f"✅ simulator summary: deal rate {s.deal_rate*100:.1f}%, mean ${s.mean_payout:,.0f}")


def test_simulator_game_matches_agent():
    sim = DealSimulator(seed=5)
    result = sim.play_one(0)
    assert result.outcome in (Outcome.DEAL, Outcome.FINAL_REVEAL)
    assert result.to_dict() == sim.play_one(0).to_dict()
    print("✅ play_one is deterministic per index")


def test_simulator_rejects_zero_games():
    try:
        DealSimulator().run(n_games=0)
    except ValueError:
        print("✅ n_games=0 rejected")
        return
    raise AssertionError("expected ValueError")


def test_payout_distribution_buckets():
    dist = _payout_distribution([0.01, 500.0, 5_000.0, 750_000.0])
    assert dist["<$100"] == 25.0
    assert dist["$100-1K"] == 25.0
    assert dist["$1K-10K"] == 25.0
    assert dist["$500K+"] == 25.0
    print("✅ payout buckets")


# ============================================================
# Settings
# ============================================================

def test_make_rng_seeded():
    from config.settings import make_rng
    assert make_rng(5).random() == random.Random(5).random()
    print("✅ make_rng honours explicit seed")


def test_settings_reload_from_env():
    from config.settings import GameSettings
    with patch.dict(os.environ, {"CASEBANK_SEED": "17", "CASEBANK_SIM_GAMES": "junk",
                                 "CASEBANK_STATS_PATH": "/tmp/x.json"}):
        GameSettings.reload()
        assert GameSettings.SEED == 17
        assert GameSettings.SIM_GAMES == 10_000
        assert GameSettings.STATS_PATH == Path("/tmp/x.json")
    GameSettings.reload()
    print("✅ settings read from environment")


# ============================================================
# CLI
# ============================================================

def test_cli_autoplay_records_stats():
    from tools.deal_cli import main
    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / "stats.json"
        assert main(["--stats-path", str(path), "autoplay", "--games", "3", "--seed", "1"]) == 0
        stats = StatsStore(path).load()
        assert stats.games_played == 3
        assert main(["--stats-path", str(path), "autoplay", "--seed", "2"]) == 0
        assert StatsStore(path).load().games_played == 4
        assert main(["--stats-path", str(path), "stats"]) == 0
        assert main(["--stats-path", str(path), "reset-stats"]) == 0
        assert not path.exists()
    print("✅ CLI autoplay → stats → reset")


def test_cli_advise_and_rules():
    from tools.deal_cli import main
    assert main(["advise", "--prizes", "100", "200", "300", "--offer", "150", "--remaining", "3"]) == 0
    assert main(["rules"]) == 0
    assert main(["simulate", "--games", "20", "--seed", "4", "--json"]) == 0
    print("✅ CLI advise / rules / simulate")


def test_cli_json_output():
    from tools.deal_cli import main
    out = io.StringIO()
    with redirect_stdout(out):
        assert main(["advise", "--prizes", "100", "200", "300", "--offer", "250", "--json"]) == 0
    advice = json.loads(out.getvalue())
    assert advice["recommendation"] == "deal"
    assert advice["evaluation"]["tier"] == "late"
    assert abs(advice["evaluation"]["risk_factor"] - 0.2115) < 1e-3

    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / "stats.json"
        StatsStore(path).save(GameStats(games_played=4, games_won=3, total_winnings=400.0,
                                        best_winning=300.0))
        out = io.StringIO()
        with redirect_stdout(out):
            assert main(["--stats-path", str(path), "stats", "--json"]) == 0
        stats = json.loads(out.getvalue())
    assert stats["games_played"] == 4
    assert stats["average_winning"] == 100.0
    assert stats["win_rate_pct"] == 75.0
    print("✅ CLI advise / stats --json")


# ============================================================
# Run all tests
# ============================================================

if __name__ == "__main__":
    tests = [
        test_parse_int_errors,
        test_parse_case_number_zero_based,
        test_parse_case_choice_rules,
        test_parse_yes_no,
        test_game_stats_record_outcome,
        test_stats_store_roundtrip,
        test_stats_store_corrupt_file_is_fresh,
        test_stats_store_unwritable_path_does_not_raise,
        test_stats_store_reset,
        test_simulator_reproducible,
        test_simulator_summary_fields,
        test_simulator_game_matches_agent,
        test_simulator_rejects_zero_games,
        test_payout_distribution_buckets,
        test_make_rng_seeded,
        test_settings_reload_from_env,
        test_cli_autoplay_records_stats,
        test_cli_advise_and_rules,
        test_cli_json_output,
    ]

    print(f"\n{'='*60}")
    print(f"Casebank Tools Tests — {len(tests)} tests")
    print(f"{'='*60}\n")

    passed = 0
    failed = 0
    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"❌ {test.__name__}: {e}")
            failed += 1
        print()

    print(f"{'='*60}")
    print(f"Results: {passed} passed, {failed} failed, {passed + failed} total")
    print(f"{'='*60}")

    sys.exit(0 if failed == 0 else 1)
