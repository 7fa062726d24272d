"""Chess rules: pure logic with zero external dependencies.

Quick start::

    from ascnconv.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move)
"""

from ascnconv.core.board import Board
from ascnconv.core.enums import CastlingRights, Color, MoveFlag, Outcome, PieceType
from ascnconv.core.move import Move
from ascnconv.core.move_generator import MoveGenerator
from ascnconv.core.notation import (
    STARTING_FEN,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from ascnconv.core.piece import Piece
from ascnconv.core.position import Position
from ascnconv.core.rules import Rules
from ascnconv.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "Outcome",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
]
