"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ascnconv.core.board import squares_of
from ascnconv.core.move_generator import MoveGenerator
from ascnconv.core.types import Square

if TYPE_CHECKING:
    from ascnconv.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def checkers(position: Position) -> list[Square]:
        """Squares of the pieces giving check to the side to move."""
        gen = MoveGenerator(position)
        king_sq = position.board.king_square(position.side_to_move)
        return squares_of(gen.attackers(king_sq, position.side_to_move.opposite))

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0
