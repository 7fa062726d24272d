"""Rules-engine capability interface and its default implementation.

The codec never inspects boards directly: everything it needs to know
about a position goes through a :class:`RulesEngine`. Boards are treated
as immutable values; :meth:`RulesEngine.apply` returns a successor and
leaves its argument alone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ascnconv.core.enums import Color, MoveFlag, PieceType
from ascnconv.core.move import Move
from ascnconv.core.notation.san import parse_san
from ascnconv.core.piece import Piece
from ascnconv.core.position import Position
from ascnconv.core.rules import Rules
from ascnconv.core.types import Square, file_of, make_square, rank_of, square_name


class RulesEngine(ABC):
    """What the codec needs from chess rules, and nothing more."""

    @abstractmethod
    def initial_board(self) -> Position: ...

    @abstractmethod
    def apply(self, board: Position, move: Move) -> Position:
        """Return the position after *move*; *board* is not modified."""

    @abstractmethod
    def piece_at(self, board: Position, square: Square) -> Piece | None: ...

    @abstractmethod
    def side_to_move(self, board: Position) -> Color: ...

    @abstractmethod
    def is_checkmate(self, board: Position) -> bool: ...

    @abstractmethod
    def checkers(self, board: Position) -> list[Square]:
        """Squares of pieces giving check to the side to move."""

    @abstractmethod
    def resolve(self, token: str, board: Position) -> Move:
        """Resolve a text move token against *board*.

        Raises:
            ValueError: when the token does not name exactly one legal move.
        """

    @abstractmethod
    def complete_move(
        self,
        board: Position,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None,
    ) -> Move:
        """Build a fully classified move from its coordinates.

        Raises:
            ValueError: when the coordinates cannot describe a move of the
                side to move on *board*.
        """


class StandardRulesEngine(RulesEngine):
    """Orthodox chess from the standard starting position."""

    def initial_board(self) -> Position:
        return Position()

    def apply(self, board: Position, move: Move) -> Position:
        return board.after(move)

    def piece_at(self, board: Position, square: Square) -> Piece | None:
        return board.board[square]

    def side_to_move(self, board: Position) -> Color:
        return board.side_to_move

    def is_checkmate(self, board: Position) -> bool:
        return Rules.is_checkmate(board)

    def checkers(self, board: Position) -> list[Square]:
        return Rules.checkers(board)

    def resolve(self, token: str, board: Position) -> Move:
        return parse_san(board, token)

    def complete_move(
        self,
        board: Position,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None,
    ) -> Move:
        piece = board.board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(from_sq)}")
        if piece.color != board.side_to_move:
            raise ValueError(
                f"Piece on {square_name(from_sq)} does not belong to "
                f"{board.side_to_move}"
            )
        target = board.board[to_sq]
        if target is not None and target.color == piece.color:
            raise ValueError(f"{square_name(to_sq)} is occupied by own piece")
        if target is not None and target.piece_type == PieceType.KING:
            raise ValueError(f"King on {square_name(to_sq)} cannot be captured")

        if promotion is not None:
            if piece.piece_type != PieceType.PAWN or rank_of(to_sq) not in (0, 7):
                raise ValueError(
                    f"{square_name(from_sq)}{square_name(to_sq)} cannot promote"
                )
            return Move(from_sq, to_sq, MoveFlag.PROMOTION, promotion)

        flag = MoveFlag.NORMAL
        file_delta = file_of(to_sq) - file_of(from_sq)
        if piece.piece_type == PieceType.KING and abs(file_delta) == 2:
            flag = (
                MoveFlag.CASTLE_KINGSIDE if file_delta > 0 else MoveFlag.CASTLE_QUEENSIDE
            )
            back_rank = 0 if piece.color == Color.WHITE else 7
            if from_sq != make_square(4, back_rank) or rank_of(to_sq) != back_rank:
                raise ValueError(
                    f"King move {square_name(from_sq)}{square_name(to_sq)} "
                    f"cannot castle"
                )
            rook_sq = make_square(7 if file_delta > 0 else 0, back_rank)
            if board.board[rook_sq] != Piece(piece.color, PieceType.ROOK):
                raise ValueError(f"No rook on {square_name(rook_sq)} to castle with")
            between = range(5, 7) if file_delta > 0 else range(1, 4)
            if any(
                board.board[make_square(f, back_rank)] is not None for f in between
            ):
                raise ValueError(f"Castling path to {square_name(rook_sq)} is blocked")
        elif piece.piece_type == PieceType.PAWN:
            if rank_of(to_sq) in (0, 7):
                raise ValueError(f"Pawn move to {square_name(to_sq)} must promote")
            if abs(rank_of(to_sq) - rank_of(from_sq)) == 2:
                flag = MoveFlag.DOUBLE_PAWN
            elif file_delta != 0 and target is None:
                if to_sq != board.en_passant:
                    raise ValueError(
                        f"Pawn capture to empty {square_name(to_sq)} is not en passant"
                    )
                flag = MoveFlag.EN_PASSANT
        return Move(from_sq, to_sq, flag)
