"""SAN move-token resolution.

:func:`parse_san` understands both standard algebraic notation (``Nf3``,
``exd5``, ``O-O``, ``e8=Q+``) and the long form written by
:mod:`ascnconv.movetext`, which spells out the moving piece and its source
square (``Pe2e4``, ``Ng1xf3``, ``Ke1g1``). The long form is just the
fully-disambiguated case of SAN, so a single resolver handles both.
"""

from __future__ import annotations

from ascnconv.core.enums import MoveFlag, PieceType
from ascnconv.core.move import Move
from ascnconv.core.move_generator import PROMOTION_TYPES, MoveGenerator
from ascnconv.core.piece import piece_letter, piece_type_from_letter
from ascnconv.core.position import Position
from ascnconv.core.types import file_of, parse_square, rank_of

_PROMOTION_LETTERS = frozenset(piece_letter(pt) for pt in PROMOTION_TYPES)
_CASTLING_TOKENS: dict[str, MoveFlag] = {
    "O-O": MoveFlag.CASTLE_KINGSIDE,
    "0-0": MoveFlag.CASTLE_KINGSIDE,
    "O-O-O": MoveFlag.CASTLE_QUEENSIDE,
    "0-0-0": MoveFlag.CASTLE_QUEENSIDE,
}


def _split_promotion(san: str, clean: str) -> tuple[str, PieceType | None]:
    if "=" in clean:
        body, _, letter = clean.partition("=")
    elif len(clean) >= 3 and clean[-1] in _PROMOTION_LETTERS and clean[-2].isdigit():
        body, letter = clean[:-1], clean[-1]
    else:
        return clean, None
    if letter not in _PROMOTION_LETTERS:
        raise ValueError(f"Invalid promotion in move: {san}")
    return body, piece_type_from_letter(letter)


def _parse_origin(san: str, origin: str) -> tuple[int | None, int | None]:
    """File and rank hints from the disambiguation part of *san*."""
    if not origin:
        return None, None
    if len(origin) == 2:
        sq = parse_square(origin)
        return file_of(sq), rank_of(sq)
    if len(origin) == 1 and origin in "abcdefgh":
        return ord(origin) - ord("a"), None
    if len(origin) == 1 and origin in "12345678":
        return None, int(origin) - 1
    raise ValueError(f"Malformed move: {san}")


def parse_san(position: Position, san: str) -> Move:
    """Resolve a move token into a legal :class:`Move` for *position*.

    Raises:
        ValueError: when the token is malformed, matches no legal move, or
            matches more than one.
    """
    legal = MoveGenerator(position).generate_legal_moves()
    clean = san.rstrip("+#!?")

    castle_flag = _CASTLING_TOKENS.get(clean)
    if castle_flag is not None:
        for m in legal:
            if m.flag == castle_flag:
                return m
        raise ValueError(f"Illegal move: {san}")

    clean, promotion = _split_promotion(san, clean)
    if len(clean) < 2:
        raise ValueError(f"Malformed move: {san}")

    to_sq = parse_square(clean[-2:])
    clean = clean[:-2]
    if clean.endswith("x"):
        clean = clean[:-1]

    if clean and clean[0].isupper():
        piece_type = piece_type_from_letter(clean[0])
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN
    from_file, from_rank = _parse_origin(san, clean)

    candidates: list[Move] = []
    for m in legal:
        p = position.board[m.from_sq]
        if p is None or p.piece_type != piece_type or m.to_sq != to_sq:
            continue
        if m.promotion != promotion:
            continue
        if from_file is not None and file_of(m.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(m.from_sq) != from_rank:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise ValueError(f"Illegal move: {san}")
    raise ValueError(f"Ambiguous move: {san} -> {[str(m) for m in candidates]}")
