from __future__ import annotations


class DiceError(ValueError):
    """User-facing parse errors (fail-fast, no roll performed)."""

    user_message: str = "Invalid input"


class MalformedCommand(DiceError):
    user_message = "Invalid input: malformed command"


class UnparsableNumber(DiceError):
    user_message = "Invalid input: unparsable number"


class ConflictingLimits(DiceError):
    user_message = "Invalid input; conflicting limits"


class RollInvariantError(RuntimeError):
    """A command reached the evaluator without passing the parser's checks."""
