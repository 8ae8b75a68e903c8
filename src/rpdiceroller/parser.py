from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import ConflictingLimits, MalformedCommand, UnparsableNumber
from .models import (
    MAX_MODIFIER,
    MAX_UNSIGNED,
    MIN_MODIFIER,
    DieTerm,
    KeepMode,
    Mode,
    ParsedLine,
    QuitCommand,
    ReseedCommand,
    RollCommand,
    Sign,
)


_TOKEN_RE = re.compile(
    r"(?P<number>[0-9]+)"
    r"|(?P<keep>k[hl])"
    r"|(?P<die>d)"
    r"|(?P<repeat>r)"
    r"|(?P<advantage>a)"
    r"|(?P<sign>[+-])"
    r"|(?P<other>.)"
)

_SEED_RE = re.compile(r"([0-9]+)$")


@dataclass(frozen=True)
class Token:
    kind: str
    text: str


def normalize_text(text: str) -> str:
    # Whitespace is insignificant anywhere in a command.
    return re.sub(r"\s+", "", text).lower()


def tokenize(normalized: str) -> list[Token]:
    """Split a normalized command into tokens.

    Characters outside the notation come back as ``other`` tokens; whether
    they are a bad number or a bad structure depends on where they appear.
    """

    return [Token(kind=m.lastgroup or "other", text=m.group()) for m in _TOKEN_RE.finditer(normalized)]


class _TokenStream:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def peek_kind(self) -> str | None:
        if self._pos >= len(self._tokens):
            return None
        return self._tokens[self._pos].kind

    def next(self) -> Token | None:
        if self._pos >= len(self._tokens):
            return None
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def take(self) -> Token:
        tok = self.next()
        if tok is None:
            raise MalformedCommand("Unexpected end of input.")
        return tok


def _unsigned(text: str, what: str) -> int:
    value = int(text)
    if value > MAX_UNSIGNED:
        raise UnparsableNumber(f"{what} {text} is out of range.")
    return value


def _expect_number(stream: _TokenStream, what: str) -> int:
    tok = stream.next()
    if tok is None:
        raise UnparsableNumber(f"Missing {what} at end of input.")
    if tok.kind != "number":
        raise UnparsableNumber(f"Expected {what}, found {tok.text!r}.")
    return _unsigned(tok.text, what)


def _parse_keep(stream: _TokenStream, count: int) -> tuple[KeepMode, int | None]:
    marker = stream.take()
    if stream.peek_kind() == "keep":
        raise MalformedCommand("A die term takes at most one keep marker.")
    keep = _expect_number(stream, "keep count")
    if keep > count:
        # Keeping more dice than were rolled silently keeps them all.
        return "all", None
    return ("high" if marker.text == "kh" else "low"), keep


def _parse_term(stream: _TokenStream, sign: Sign) -> DieTerm | int:
    """Parse one die term or flat number. A flat number comes back signed."""

    tok = stream.next()
    if tok is None:
        raise UnparsableNumber("Expected a die term or number at end of input.")

    if tok.kind == "number":
        if stream.peek_kind() != "die":
            value = sign * int(tok.text)
            if not MIN_MODIFIER <= value <= MAX_MODIFIER:
                raise UnparsableNumber(f"Modifier {tok.text} is out of range.")
            return value
        count = _unsigned(tok.text, "dice count")
        stream.next()
    elif tok.kind == "die":
        count = 1
    else:
        raise UnparsableNumber(f"Expected a die term or number, found {tok.text!r}.")

    if count == 0:
        raise MalformedCommand("Dice count must be at least 1.")

    sides = _expect_number(stream, "die sides")
    if sides == 0:
        raise MalformedCommand("Dice must have at least one side.")

    keep_mode: KeepMode = "all"
    keep: int | None = None
    if stream.peek_kind() == "keep":
        keep_mode, keep = _parse_keep(stream, count)
        if stream.peek_kind() == "keep":
            raise MalformedCommand("A die term takes at most one keep marker.")

    return DieTerm(count=count, sides=sides, sign=sign, keep_mode=keep_mode, keep=keep)


def _parse_repeat(stream: _TokenStream) -> tuple[int, Mode]:
    stream.take()
    tok = stream.next()
    if tok is None:
        raise UnparsableNumber("Missing repeat count after 'r'.")

    repeats: int
    mode: Mode
    if tok.kind == "advantage":
        repeats, mode = 2, "advantage"
    elif tok.kind == "die":
        repeats, mode = 2, "disadvantage"
    elif tok.kind == "number":
        repeats, mode = _unsigned(tok.text, "repeat count"), "none"
        if repeats == 0:
            raise MalformedCommand("Repeat count must be at least 1.")
    elif tok.kind == "repeat":
        raise ConflictingLimits("Only one repeat suffix is allowed.")
    else:
        raise UnparsableNumber(f"Expected 'a', 'd' or a count after 'r', found {tok.text!r}.")

    trailing = stream.next()
    if trailing is not None:
        if trailing.kind == "repeat":
            raise ConflictingLimits("Only one repeat suffix is allowed.")
        raise MalformedCommand(f"Unexpected {trailing.text!r} after the repeat suffix.")
    return repeats, mode


def _sign_of(tok: Token) -> Sign:
    return -1 if tok.text == "-" else 1


def _parse_expression(normalized: str) -> RollCommand:
    if not normalized:
        raise MalformedCommand("Empty input.")

    stream = _TokenStream(tokenize(normalized))

    terms: list[DieTerm] = []
    modifier = 0
    repeats = 1
    mode: Mode = "none"

    sign: Sign = 1
    if stream.peek_kind() == "sign":
        sign = _sign_of(stream.take())

    while True:
        parsed = _parse_term(stream, sign)
        if isinstance(parsed, DieTerm):
            terms.append(parsed)
        else:
            modifier += parsed
            if not MIN_MODIFIER <= modifier <= MAX_MODIFIER:
                raise UnparsableNumber("Summed modifier is out of range.")

        kind = stream.peek_kind()
        if kind is None:
            break
        if kind == "sign":
            sign = _sign_of(stream.take())
            continue
        if kind == "repeat":
            repeats, mode = _parse_repeat(stream)
            break

        tok = stream.take()
        raise MalformedCommand(f"Expected '+', '-' or 'r' before {tok.text!r}.")

    if mode != "none" and any(t.keep_mode != "all" for t in terms):
        raise ConflictingLimits("Advantage/disadvantage cannot be combined with kh/kl.")

    return RollCommand(terms=tuple(terms), modifier=modifier, repeats=repeats, mode=mode)


def parse_roll(text: str) -> RollCommand:
    """Parse a dice expression such as ``4d6kh3+2d4-1`` or ``d20+5ra``.

    Raises a ``DiceError`` subclass on invalid input; never rolls anything.
    """

    return _parse_expression(normalize_text(text))


def parse_line(text: str) -> ParsedLine:
    """Parse one line of the interactive session, sentinels included.

    ``q...`` quits, ``s<digits>`` reseeds from the trailing digit run (no
    digits, or a seed of 0, means keep the current generator), anything else
    is a roll expression.
    """

    normalized = normalize_text(text)
    if normalized.startswith("q"):
        return QuitCommand()
    if normalized.startswith("s"):
        m = _SEED_RE.search(normalized)
        seed = int(m.group(1)) if m else 0
        return ReseedCommand(seed=seed or None)
    return _parse_expression(normalized)
