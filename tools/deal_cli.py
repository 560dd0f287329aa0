#!/usr/bin/env python3
"""
CASEBANK — Command Line

Usage:
    python -m tools.deal_cli autoplay
    python -m tools.deal_cli autoplay --games 50 --seed 7
    python -m tools.deal_cli simulate --games 20000 --json
    python -m tools.deal_cli advise --prizes 100 200 300 --offer 150 --remaining 3
    python -m tools.deal_cli advise --prizes 100 200 300 --offer 250 --json
    python -m tools.deal_cli stats
    python -m tools.deal_cli stats --json
    python -m tools.deal_cli reset-stats
    python -m tools.deal_cli rules
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from casebank import Decision, DecisionAdvisor, GameError, Outcome, ScriptedAgent, split_prizes
from config.game_schema import default_rules
from config.settings import GameSettings, make_rng, setup_logging
from tools.deal_montecarlo import DealSimulator
from tools.deal_stats import GameStats, StatsStore

logger = logging.getLogger("casebank.cli")
console = Console()


RULES_TEXT = (
    "1. Choose your lucky case (1-26)\n"
    "2. Open other cases to reveal their prizes\n"
    "3. The bank will make offers based on remaining prizes\n"
    "4. Decide: DEAL (accept offer) or NO DEAL (continue)\n"
    "5. If you reject all offers, you win your case's prize\n"
    "6. AI Advisor provides recommendations\n"
    "7. Computer player uses advanced strategy\n"
    "\nPrizes range from $0.01 to $1,000,000"
)


def _stats_table(stats: GameStats) -> Table:
    t = Table(title="GAME STATISTICS", show_header=False)
    t.add_row("Games Played", f"{stats.games_played}")
    t.add_row("Games Won", f"{stats.games_won}")
    t.add_row("Win Rate", f"{stats.win_rate:.1f}%")
    t.add_row("Total Winnings", f"${stats.total_winnings:,.2f}")
    t.add_row("Best Winning", f"${stats.best_winning:,.2f}")
    t.add_row("Average Winning", f"${stats.average_winning:,.2f}")
    return t


# ── Commands ─────────────────────────────────────────────────

def cmd_autoplay(args) -> int:
    store = StatsStore(args.stats_path)
    stats = store.load()
    rng = make_rng(args.seed)
    rules = default_rules()
    agent = ScriptedAgent(rng=rng, rules=rules)

    for g in range(args.games):
        try:
            result = agent.play_game(recorder=stats)
        except GameError as e:
            logger.error(f"Game {g + 1} abandoned: {e}")
            console.print(f"[red]Computer Game Error: {e}[/red]")
            continue

        if args.games == 1:
            console.print(f"Computer chose case {result.player_case + 1}")
            for rec in result.rounds:
                opened = ", ".join(f"#{cid + 1}=${v:,.2f}" for cid, v in rec.opened)
                line = f"[bold]Round {rec.round}[/bold]  opened {opened or '-'}"
                if rec.offer is not None:
                    verdict = "DEAL!" if rec.decision is Decision.ACCEPT else "NO DEAL!"
                    line += f"  offer ${rec.offer:,.2f} → {verdict}"
                console.print(line)
        tag = "DEAL" if result.outcome is Outcome.DEAL else "FINAL CASE"
        console.print(f"[green]Game {g + 1}: {tag} ${result.payout:,.2f}[/green] "
                      f"(case #{result.player_case + 1} held ${result.player_case_value:,.2f})")

    store.save(stats)
    console.print(_stats_table(stats))
    return 0


def cmd_simulate(args) -> int:
    summary = DealSimulator(seed=args.seed if args.seed is not None else 42).run(n_games=args.games)
    if args.json:
        print(summary.to_json())
    else:
        console.print(Panel(summary.summary(), title="Monte Carlo", border_style="cyan"))
    return 0


def cmd_advise(args) -> int:
    prizes = sorted(args.prizes, reverse=True)
    remaining = args.remaining if args.remaining is not None else len(prizes)
    advice = DecisionAdvisor(default_rules().advisor).advise(prizes, args.offer, remaining)
    if args.json:
        payload = dict(advice, recommendation=advice["recommendation"].value,
                       evaluation=advice["evaluation"].to_dict())
        print(json.dumps(payload, indent=2))
        return 0

    board = split_prizes(prizes, default_rules().low_prize_ceiling)
    body = (
        f"Low Prizes: {' '.join(f'${p:,.2f}' for p in board['low']) or '-'}\n"
        f"High Prizes: {' '.join(f'${p:,.0f}' for p in board['high']) or '-'}\n\n"
        f"Expected Value: ${advice['expected_value']:,.2f}\n"
        f"Bank Offer: ${advice['bank_offer']:,.2f}\n"
        f"Offer vs Expected: {advice['offer_vs_expected_pct']:.1f}%\n"
        f"Risk Level: {advice['risk_level_pct']:.1f}%\n"
        f"RECOMMENDATION: {advice['message']}"
    )
    console.print(Panel(body, title="AI ADVISOR", border_style="yellow"))
    return 0


def cmd_stats(args) -> int:
    stats = StatsStore(args.stats_path).load()
    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
    else:
        console.print(_stats_table(stats))
    return 0


def cmd_reset_stats(args) -> int:
    StatsStore(args.stats_path).reset()
    console.print("Statistics reset successfully!")
    return 0


def cmd_rules(args) -> int:
    console.print(Panel(RULES_TEXT, title="GAME RULES", border_style="cyan"))
    return 0


# ── Entry point ──────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Case game: offer engine, advisor and auto-play")
    parser.add_argument("--stats-path", type=str, default=str(GameSettings.STATS_PATH))
    parser.add_argument("--log-level", type=str, default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("autoplay", help="Let the computer play")
    p.add_argument("--games", type=int, default=1)
    p.add_argument("--seed", type=int, default=None)
    p.set_defaults(func=cmd_autoplay)

    p = sub.add_parser("simulate", help="Monte Carlo run of the scripted agent")
    p.add_argument("--games", type=int, default=GameSettings.SIM_GAMES)
    p.add_argument("--seed", type=int, default=GameSettings.SEED)
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_simulate)

    p = sub.add_parser("advise", help="Advisor verdict for a board and offer")
    p.add_argument("--prizes", type=float, nargs="+", required=True)
    p.add_argument("--offer", type=float, required=True)
    p.add_argument("--remaining", type=int, default=None)
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_advise)

    p = sub.add_parser("stats", help="Show lifetime statistics")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_stats)
    sub.add_parser("reset-stats", help="Delete lifetime statistics").set_defaults(func=cmd_reset_stats)
    sub.add_parser("rules", help="Show the game rules").set_defaults(func=cmd_rules)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
