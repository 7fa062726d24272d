"""Legal move generation and attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ascnconv.core.board import squares_of
from ascnconv.core.enums import CastlingRights, Color, MoveFlag, PieceType
from ascnconv.core.move import Move
from ascnconv.core.types import Square, make_square

if TYPE_CHECKING:
    from ascnconv.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Per color: (push step, start rank, last rank before promotion)
_PAWN_GEOMETRY: dict[Color, tuple[int, int, int]] = {
    Color.WHITE: (8, 1, 6),
    Color.BLACK: (-8, 6, 1),
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx, rank_idx = sq & 7, sq >> 3
        targets.append(
            tuple(
                make_square(file_idx + df, rank_idx + dr)
                for df, dr in offsets
                if 0 <= file_idx + df < 8 and 0 <= rank_idx + dr < 8
            )
        )
    return tuple(targets)


def _to_mask(squares: tuple[Square, ...]) -> int:
    mask = 0
    for sq in squares:
        mask |= 1 << sq
    return mask


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af, ar = (sq & 7) + df, (sq >> 3) + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attackers(color: Color) -> tuple[int, ...]:
    """Per target square: bitboard of squares a *color* pawn attacks it from."""
    behind = -1 if color == Color.WHITE else 1
    masks: list[int] = []
    for sq in range(64):
        file_idx, rank_idx = sq & 7, sq >> 3
        mask = 0
        if 0 <= rank_idx + behind < 8:
            for df in (-1, 1):
                if 0 <= file_idx + df < 8:
                    mask |= 1 << make_square(file_idx + df, rank_idx + behind)
        masks.append(mask)
    return tuple(masks)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_MASKS = tuple(_to_mask(t) for t in _KNIGHT_TARGETS)
_KING_MASKS = tuple(_to_mask(t) for t in _KING_TARGETS)
_PAWN_ATTACKERS = (
    _build_pawn_attackers(Color.WHITE),
    _build_pawn_attackers(Color.BLACK),
)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = tuple(b + r for b, r in zip(_BISHOP_RAYS, _ROOK_RAYS))


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The generator mutates the position via ``make_move`` / ``unmake_move``
    internally but always restores it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        moving_color = self._pos.side_to_move

        for move in self.generate_pseudo_legal_moves():
            self._pos.make_move(move)
            if not self.is_in_check(moving_color):
                legal.append(move)
            self._pos.unmake_move(move)
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in squares_of(board.pieces_bitboard(color, PieceType.PAWN)):
            self._gen_pawn(sq, color, moves)
        for sq in squares_of(board.pieces_bitboard(color, PieceType.KNIGHT)):
            self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
        for sq in squares_of(board.pieces_bitboard(color, PieceType.BISHOP)):
            self._gen_sliding(sq, color, _BISHOP_RAYS[sq], moves)
        for sq in squares_of(board.pieces_bitboard(color, PieceType.ROOK)):
            self._gen_sliding(sq, color, _ROOK_RAYS[sq], moves)
        for sq in squares_of(board.pieces_bitboard(color, PieceType.QUEEN)):
            self._gen_sliding(sq, color, _QUEEN_RAYS[sq], moves)
        for sq in squares_of(board.pieces_bitboard(color, PieceType.KING)):
            self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
            self._gen_castling(sq, color, moves)
        return moves

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return self.attackers(sq, by_color) != 0

    def attackers(self, sq: Square, by_color: Color) -> int:
        """Bitboard of *by_color* pieces attacking *sq*."""
        board = self._board
        found = (
            board.pieces_bitboard(by_color, PieceType.PAWN)
            & _PAWN_ATTACKERS[int(by_color)][sq]
        )
        found |= board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_MASKS[sq]
        found |= board.pieces_bitboard(by_color, PieceType.KING) & _KING_MASKS[sq]

        queens = board.pieces_bitboard(by_color, PieceType.QUEEN)
        for rays, slider in (
            (_BISHOP_RAYS[sq], PieceType.BISHOP),
            (_ROOK_RAYS[sq], PieceType.ROOK),
        ):
            sliders = board.pieces_bitboard(by_color, slider) | queens
            if not sliders:
                continue
            for ray in rays:
                for to_sq in ray:
                    if board[to_sq] is None:
                        continue
                    if sliders & (1 << to_sq):
                        found |= 1 << to_sq
                    break
        return found

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step, start_rank, promo_rank = _PAWN_GEOMETRY[color]
        file_idx, rank_idx = sq & 7, sq >> 3
        promotes = rank_idx == promo_rank

        one_step = sq + step
        if not 0 <= one_step < 64:
            return
        if board.is_empty(one_step):
            if promotes:
                _add_promotions(sq, one_step, moves)
            else:
                moves.append(Move(sq, one_step))
                two_step = one_step + step
                if rank_idx == start_rank and board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for df in (-1, 1):
            if not 0 <= file_idx + df < 8:
                continue
            cap_sq = one_step + df
            target = board[cap_sq]
            if target is not None and target.color != color:
                if promotes:
                    _add_promotions(sq, cap_sq, moves)
                else:
                    moves.append(Move(sq, cap_sq))
            elif target is None and cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        offset = 0 if color == Color.WHITE else 56
        if king_sq != offset + 4 or self.is_in_check(color):
            return

        board = self._board
        opponent = color.opposite

        ks = (
            CastlingRights.WHITE_KINGSIDE
            if color == Color.WHITE
            else CastlingRights.BLACK_KINGSIDE
        )
        if self._pos.castling & ks:
            f_sq, g_sq = offset + 5, offset + 6
            if (
                board.is_empty(f_sq)
                and board.is_empty(g_sq)
                and not self.is_square_attacked(f_sq, opponent)
                and not self.is_square_attacked(g_sq, opponent)
            ):
                moves.append(Move(king_sq, g_sq, MoveFlag.CASTLE_KINGSIDE))

        qs = (
            CastlingRights.WHITE_QUEENSIDE
            if color == Color.WHITE
            else CastlingRights.BLACK_QUEENSIDE
        )
        if self._pos.castling & qs:
            b_sq, c_sq, d_sq = offset + 1, offset + 2, offset + 3
            if (
                board.is_empty(b_sq)
                and board.is_empty(c_sq)
                and board.is_empty(d_sq)
                and not self.is_square_attacked(c_sq, opponent)
                and not self.is_square_attacked(d_sq, opponent)
            ):
                moves.append(Move(king_sq, c_sq, MoveFlag.CASTLE_QUEENSIDE))


def _add_promotions(from_sq: Square, to_sq: Square, moves: list[Move]) -> None:
    for pt in PROMOTION_TYPES:
        moves.append(Move(from_sq, to_sq, MoveFlag.PROMOTION, pt))
