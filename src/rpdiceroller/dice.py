from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .errors import RollInvariantError
from .models import DieTerm, RollCommand
from .parser import parse_roll
from .session import RollSession


@dataclass(frozen=True)
class TermResult:
    term: DieTerm
    dice: tuple[int, ...]
    kept_count: int

    @property
    def kept(self) -> tuple[int, ...]:
        return self.dice[: self.kept_count]

    @property
    def discarded(self) -> tuple[int, ...]:
        return self.dice[self.kept_count :]

    @property
    def subtotal(self) -> int:
        return self.term.sign * sum(self.kept)


@dataclass(frozen=True)
class Repetition:
    terms: tuple[TermResult, ...]
    modifier: int
    total: int


@dataclass(frozen=True)
class RollOutcome:
    command: RollCommand
    repetitions: tuple[Repetition, ...]
    total: int


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _check_invariants(cmd: RollCommand) -> None:
    if cmd.repeats < 1:
        raise RollInvariantError(f"repeats must be >= 1, got {cmd.repeats}")
    if cmd.mode != "none" and cmd.repeats != 2:
        raise RollInvariantError(f"{cmd.mode} requires exactly 2 repeats, got {cmd.repeats}")
    for term in cmd.terms:
        if term.count < 1 or term.sides < 1:
            raise RollInvariantError(f"cannot roll {term.count}d{term.sides}")
        if cmd.mode != "none" and term.keep_mode != "all":
            raise RollInvariantError(f"{cmd.mode} combined with keep on {term.notation}")


def roll_term(term: DieTerm, session: RollSession) -> TermResult:
    rolls = [session.draw(term.sides) for _ in range(term.count)]
    if term.keep_mode == "high":
        rolls.sort(reverse=True)
    elif term.keep_mode == "low":
        rolls.sort()
    return TermResult(term=term, dice=tuple(rolls), kept_count=term.kept_count)


def roll_once(cmd: RollCommand, session: RollSession) -> Repetition:
    results = tuple(roll_term(term, session) for term in cmd.terms)
    total = sum(r.subtotal for r in results) + cmd.modifier
    return Repetition(terms=results, modifier=cmd.modifier, total=total)


def evaluate(cmd: RollCommand, session: RollSession) -> RollOutcome:
    """Roll every repetition of ``cmd`` and reduce them to one total.

    Plain repeats are summed; advantage keeps the higher of the two totals,
    disadvantage the lower.
    """

    _check_invariants(cmd)
    repetitions = tuple(roll_once(cmd, session) for _ in range(cmd.repeats))
    totals = [rep.total for rep in repetitions]

    if cmd.mode == "advantage":
        total = max(totals)
    elif cmd.mode == "disadvantage":
        total = min(totals)
    else:
        total = sum(totals)

    return RollOutcome(command=cmd, repetitions=repetitions, total=total)


def format_dice(result: TermResult) -> str:
    shown = [str(v) for v in result.kept] + [f"({v})" for v in result.discarded]
    return "[" + " ".join(shown) + "]"


def format_repetition(rep: Repetition) -> str:
    chunks: list[str] = []
    for result in rep.terms:
        dice = format_dice(result)
        if not chunks:
            chunks.append(dice if result.term.sign > 0 else f"-{dice}")
        else:
            chunks.append(f"{'+' if result.term.sign > 0 else '-'} {dice}")

    if not chunks:
        chunks.append(str(rep.modifier))
    elif rep.modifier:
        chunks.append(f"{'+' if rep.modifier > 0 else '-'} {abs(rep.modifier)}")

    return " ".join(chunks) + f" = {rep.total}"


def render_outcome(outcome: RollOutcome) -> list[str]:
    mode = outcome.command.mode
    lines: list[str] = []

    for i, rep in enumerate(outcome.repetitions):
        if mode == "none" and i > 0:
            lines.append(f"Repeating roll #{i + 1}:")
        lines.append(format_repetition(rep))

    if mode != "none":
        lines.append(f"Rolled with {mode}, final result: {outcome.total}")
    elif len(outcome.repetitions) > 1:
        lines.append(f"Sum of all rolls: {outcome.total}")
    return lines


def roll_from_text(text: str, session: RollSession) -> dict[str, Any]:
    """Parse, validate, then roll. Raises DiceError for invalid input."""

    cmd = parse_roll(text)
    outcome = evaluate(cmd, session)

    return {
        "request_id": uuid.uuid4().hex,
        "timestamp": _now_utc_iso(),
        "input": text,
        "normalized_expression": cmd.notation,
        "mode": cmd.mode,
        "rng": {
            "source": type(session.rng).__name__,
            "seed": session.seed,
        },
        "repetitions": [
            {
                "terms": [
                    {
                        "expression": r.term.notation,
                        "sign": r.term.sign,
                        "rolls": list(r.dice),
                        "kept": list(r.kept),
                        "discarded": list(r.discarded),
                        "subtotal": r.subtotal,
                    }
                    for r in rep.terms
                ],
                "modifier": rep.modifier,
                "total": rep.total,
            }
            for rep in outcome.repetitions
        ],
        "lines": render_outcome(outcome),
        "total": outcome.total,
    }
