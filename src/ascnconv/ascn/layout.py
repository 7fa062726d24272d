"""Byte layout of the ASCN format (version 1).

    [4s magic "ASCN"][u8 version]
    then one big-endian u16 word per half-move:
        bits 0-5    destination square
        bits 6-11   source square
        bits 12-14  promotion piece code (0 none, 2 N, 3 B, 4 R, 5 Q)
        bit  15     clear
    then an optional terminator word with bit 15 set and the outcome code
    (0 unknown, 1 white wins, 2 black wins, 3 draw) in bits 0-1.
"""

from __future__ import annotations

import struct
from typing import Final

from ascnconv.core.enums import Outcome, PieceType
from ascnconv.core.move import Move
from ascnconv.core.types import Square

MAGIC: Final = b"ASCN"
VERSION: Final = 1

HEADER: Final = struct.Struct(">4sB")
WORD: Final = struct.Struct(">H")

_SQUARE_MASK: Final = 0x3F
_PROMOTION_SHIFT: Final = 12
_PROMOTION_MASK: Final = 0x7
TERMINATOR_BIT: Final = 0x8000
_OUTCOME_MASK: Final = 0x3
_RESERVED_TERMINATOR_BITS: Final = 0x7FFC

PROMOTION_CODES: Final = frozenset(
    {PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN}
)


def encode_move(move: Move) -> int:
    promo = 0 if move.promotion is None else int(move.promotion)
    return (promo << _PROMOTION_SHIFT) | (move.from_sq << 6) | move.to_sq


def decode_move(word: int) -> tuple[Square, Square, PieceType | None]:
    """Split a move word into (source, destination, promotion).

    Raises:
        ValueError: when the promotion code is not a promotable piece.
    """
    code = (word >> _PROMOTION_SHIFT) & _PROMOTION_MASK
    promotion: PieceType | None = None
    if code:
        if code not in PROMOTION_CODES:
            raise ValueError(f"Invalid promotion code {code}")
        promotion = PieceType(code)
    return (word >> 6) & _SQUARE_MASK, word & _SQUARE_MASK, promotion


def encode_outcome(outcome: Outcome) -> int:
    return TERMINATOR_BIT | int(outcome)


def decode_outcome(word: int) -> Outcome:
    """Outcome carried by a terminator word.

    Raises:
        ValueError: when reserved bits are set.
    """
    if word & _RESERVED_TERMINATOR_BITS:
        raise ValueError(f"Reserved bits set in terminator 0x{word:04x}")
    return Outcome(word & _OUTCOME_MASK)
