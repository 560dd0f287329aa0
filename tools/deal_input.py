"""
CASEBANK — Actor Input Parsing

Turns raw text from a human actor into validated game values.
Nothing here raises on bad input: every parser returns a ParseResult
carrying either the value or an InputError, and the caller owns the
retry loop.

Usage:
    from tools.deal_input import parse_case_choice
    res = parse_case_choice(line, player_case=seq.player_case,
                            opened=seq.tracker.opened_set, selected=batch)
    if res.ok:
        batch.append(res.value)
    else:
        print(f"{res.error}. Please try again.")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from casebank.base import InputError
from config.game_schema import NUM_CASES


@dataclass
class ParseResult:
    """Value on success, InputError on failure."""
    value: Any = None
    error: Optional[InputError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def fail(cls, message: str) -> "ParseResult":
        return cls(error=InputError(message))


def parse_int_in_range(text: Optional[str], lo: int, hi: int) -> ParseResult:
    """Whole-line integer in [lo, hi]."""
    line = (text or "").strip()
    if not line:
        return ParseResult.fail("Empty input")
    try:
        n = int(line)
    except ValueError:
        return ParseResult.fail("Non-numeric input")
    if n < lo or n > hi:
        return ParseResult.fail(f"Input out of range ({lo}-{hi})")
    return ParseResult(value=n)


def parse_case_number(text: Optional[str], num_cases: int = NUM_CASES) -> ParseResult:
    """1-based case number typed by the player → 0-based case id."""
    res = parse_int_in_range(text, 1, num_cases)
    if not res.ok:
        return res
    return ParseResult(value=res.value - 1)


def parse_case_choice(text: Optional[str], player_case: int,
                      opened: Sequence[bool],
                      selected: Sequence[int] = ()) -> ParseResult:
    """A case to open this round: in range, not ours, not open, not picked twice."""
    res = parse_case_number(text, len(opened))
    if not res.ok:
        return res
    cid = res.value
    if cid == player_case:
        return ParseResult.fail("You can't open your own case!")
    if opened[cid]:
        return ParseResult.fail("Case already opened!")
    if cid in selected:
        return ParseResult.fail("Case already selected for this round!")
    return res


def parse_yes_no(text: Optional[str]) -> ParseResult:
    """'y...' → True, 'n...' → False. Only the first character counts."""
    line = (text or "").strip()
    if not line:
        return ParseResult.fail("Empty input")
    ch = line[0].lower()
    if ch == "y":
        return ParseResult(value=True)
    if ch == "n":
        return ParseResult(value=False)
    return ParseResult.fail("Invalid choice")
