"""Tabletop dice-notation parser and roll evaluator."""

from .dice import RollOutcome, evaluate, render_outcome, roll_from_text
from .errors import ConflictingLimits, DiceError, MalformedCommand, UnparsableNumber
from .models import DieTerm, QuitCommand, ReseedCommand, RollCommand
from .parser import parse_line, parse_roll
from .session import RollSession

__all__ = [
    "ConflictingLimits",
    "DiceError",
    "DieTerm",
    "MalformedCommand",
    "QuitCommand",
    "ReseedCommand",
    "RollCommand",
    "RollOutcome",
    "RollSession",
    "UnparsableNumber",
    "evaluate",
    "parse_line",
    "parse_roll",
    "render_outcome",
    "roll_from_text",
]
