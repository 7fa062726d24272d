"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from ascnconv.core.enums import MoveFlag, PieceType
from ascnconv.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``flag`` classifies castling, en passant and double pawn pushes so a
    :class:`~ascnconv.core.position.Position` can apply the move without a
    legal-move search. Two moves are equal when all four fields match.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, used in log and error messages."""
        return str(self)
