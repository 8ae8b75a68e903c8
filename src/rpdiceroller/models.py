from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias


Mode: TypeAlias = Literal["advantage", "disadvantage", "none"]
KeepMode: TypeAlias = Literal["all", "high", "low"]
Sign: TypeAlias = Literal[1, -1]

MAX_UNSIGNED: int = 2**32 - 1
MIN_MODIFIER: int = -(2**63)
MAX_MODIFIER: int = 2**63 - 1


@dataclass(frozen=True)
class DieTerm:
    count: int
    sides: int
    sign: Sign = 1
    keep_mode: KeepMode = "all"
    keep: int | None = None

    @property
    def kept_count(self) -> int:
        if self.keep_mode == "all" or self.keep is None:
            return self.count
        return min(self.keep, self.count)

    @property
    def notation(self) -> str:
        base = f"{self.count}d{self.sides}" if self.count != 1 else f"d{self.sides}"
        if self.keep_mode == "high":
            base += f"kh{self.keep}"
        elif self.keep_mode == "low":
            base += f"kl{self.keep}"
        return base


@dataclass(frozen=True)
class RollCommand:
    terms: tuple[DieTerm, ...] = ()
    modifier: int = 0
    repeats: int = 1
    mode: Mode = "none"

    @property
    def notation(self) -> str:
        chunks: list[str] = []
        for term in self.terms:
            if not chunks:
                chunks.append(term.notation if term.sign > 0 else f"-{term.notation}")
            else:
                chunks.append(f"{'+' if term.sign > 0 else '-'}{term.notation}")
        if self.modifier or not chunks:
            chunks.append(f"{self.modifier:+d}" if chunks else str(self.modifier))

        expr = "".join(chunks)
        if self.mode == "advantage":
            expr += "ra"
        elif self.mode == "disadvantage":
            expr += "rd"
        elif self.repeats > 1:
            expr += f"r{self.repeats}"
        return expr


@dataclass(frozen=True)
class QuitCommand:
    pass


@dataclass(frozen=True)
class ReseedCommand:
    seed: int | None = None


ParsedLine: TypeAlias = RollCommand | QuitCommand | ReseedCommand
