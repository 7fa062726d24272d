"""Events yielded by the PGN reader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class GameStart:
    """Marks the beginning of a game."""


@dataclass(frozen=True, slots=True)
class Header:
    """A single tag pair, e.g. ``[Event "Casual"]``."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class MoveToken:
    """A mainline move exactly as written, e.g. ``Nf3`` or ``Pe2e4``."""

    san: str


@dataclass(frozen=True, slots=True)
class GameEnd:
    """Terminates a game with its result token (``"*"`` when absent)."""

    result_token: str


PgnEvent: TypeAlias = GameStart | Header | MoveToken | GameEnd
