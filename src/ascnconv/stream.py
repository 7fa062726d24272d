"""The move stream: the format-neutral form of one game."""

from __future__ import annotations

from dataclasses import dataclass

from ascnconv.core.enums import Outcome
from ascnconv.core.move import Move
from ascnconv.core.position import Position


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A move together with the position it was played from."""

    move: Move
    board: Position


@dataclass(frozen=True, slots=True)
class MoveStream:
    """Ordered move records plus the game outcome.

    Applying ``records[i].move`` to ``records[i].board`` yields
    ``records[i + 1].board``.
    """

    records: tuple[MoveRecord, ...]
    outcome: Outcome = Outcome.UNKNOWN

    def __len__(self) -> int:
        return len(self.records)

    @property
    def moves(self) -> list[Move]:
        return [record.move for record in self.records]
