"""Long-form move notation and movetext assembly.

Tokens always carry the moving piece and its source square (``Pe2e4``,
``Ng1xf3``, ``Pe7e8=Q+``), so reading them back never needs a
disambiguation search.
"""

from __future__ import annotations

from ascnconv.core.enums import Color
from ascnconv.core.move import Move
from ascnconv.core.notation.pgn import format_header, outcome_token
from ascnconv.core.piece import piece_letter
from ascnconv.core.position import Position
from ascnconv.core.types import square_name
from ascnconv.engine import RulesEngine
from ascnconv.stream import MoveStream


def move_token(engine: RulesEngine, board: Position, move: Move) -> str:
    """Render *move*, played from *board*, as a long-form token."""
    piece = engine.piece_at(board, move.from_sq)
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)} for {move.uci}")

    token = piece_letter(piece.piece_type) + square_name(move.from_sq)
    if engine.piece_at(board, move.to_sq) is not None:
        token += "x"
    token += square_name(move.to_sq)

    if move.promotion is not None:
        token += "=" + piece_letter(move.promotion)

    successor = engine.apply(board, move)
    if engine.is_checkmate(successor):
        token += "#"
    elif engine.checkers(successor):
        token += "+"
    return token


def assemble_movetext(engine: RulesEngine, stream: MoveStream) -> str:
    """Number and join the tokens of *stream*.

    White moves are prefixed with ``"<n>. "``; every token is followed by a
    single space, so the result ends in a space unless it is empty.
    """
    parts: list[str] = []
    move_number = 1
    for record in stream.records:
        token = move_token(engine, record.board, record.move)
        if engine.side_to_move(record.board) == Color.WHITE:
            parts.append(f"{move_number}. {token} ")
            move_number += 1
        else:
            parts.append(f"{token} ")
    return "".join(parts)


def render_pgn(engine: RulesEngine, stream: MoveStream) -> str:
    """Full text document: ``Result`` tag, blank line, movetext, result."""
    result = outcome_token(stream.outcome)
    movetext = assemble_movetext(engine, stream)
    return f"{format_header('Result', result)}\n\n{movetext}{result}"
