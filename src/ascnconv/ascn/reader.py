"""ASCN reader."""

from __future__ import annotations

import logging

from ascnconv.ascn.layout import (
    HEADER,
    MAGIC,
    TERMINATOR_BIT,
    VERSION,
    WORD,
    decode_move,
    decode_outcome,
)
from ascnconv.core.enums import Outcome
from ascnconv.core.move import Move
from ascnconv.core.position import Position
from ascnconv.engine import RulesEngine, StandardRulesEngine
from ascnconv.errors import ParseError
from ascnconv.stream import MoveRecord, MoveStream

_LOGGER = logging.getLogger(__name__)


class Reader:
    """Forward-only cursor over an ASCN payload.

    Iterating yields ``(move, board_after)`` pairs in game order. Once the
    iterator is exhausted :attr:`outcome` holds the stored outcome, or
    ``None`` when the payload carried no terminator.

    Raises:
        ParseError: from the constructor on a bad header, and from
            iteration on a malformed or impossible move word.
    """

    __slots__ = ("_data", "_offset", "_engine", "_board", "_ply", "_outcome")

    def __init__(self, data: bytes, engine: RulesEngine | None = None) -> None:
        if len(data) < HEADER.size:
            raise ParseError("Truncated ASCN header", offset=0, stage="decode")
        magic, version = HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise ParseError(
                f"Not an ASCN payload (magic {magic!r})", offset=0, stage="decode"
            )
        if version != VERSION:
            raise ParseError(
                f"Unsupported ASCN version {version}", offset=4, stage="decode"
            )
        if (len(data) - HEADER.size) % WORD.size:
            raise ParseError(
                "Truncated move word at end of payload",
                offset=len(data) - 1,
                stage="decode",
            )

        self._data = data
        self._offset = HEADER.size
        self._engine = engine if engine is not None else StandardRulesEngine()
        self._board = self._engine.initial_board()
        self._ply = 0
        self._outcome: Outcome | None = None

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    @property
    def board(self) -> Position:
        """Position after the last move read."""
        return self._board

    def __iter__(self) -> Reader:
        return self

    def __next__(self) -> tuple[Move, Position]:
        if self._offset >= len(self._data) or self._outcome is not None:
            raise StopIteration

        offset = self._offset
        (word,) = WORD.unpack_from(self._data, offset)
        self._offset += WORD.size

        if word & TERMINATOR_BIT:
            try:
                self._outcome = decode_outcome(word)
            except ValueError as exc:
                raise ParseError(
                    str(exc), ply=self._ply, offset=offset, stage="decode"
                ) from exc
            if self._offset != len(self._data):
                raise ParseError(
                    "Data after outcome terminator",
                    ply=self._ply,
                    offset=self._offset,
                    stage="decode",
                )
            raise StopIteration

        try:
            from_sq, to_sq, promotion = decode_move(word)
            move = self._engine.complete_move(self._board, from_sq, to_sq, promotion)
            self._board = self._engine.apply(self._board, move)
        except ValueError as exc:
            raise ParseError(
                f"Invalid move word 0x{word:04x} at ply {self._ply + 1}: {exc}",
                ply=self._ply,
                offset=offset,
                stage="decode",
            ) from exc

        _LOGGER.debug("ply %d: %s", self._ply + 1, move.uci)
        self._ply += 1
        return move, self._board

    def read_stream(self) -> MoveStream:
        """Drain the cursor into a :class:`MoveStream`."""
        records: list[MoveRecord] = []
        board_before = self._board
        for move, board_after in self:
            records.append(MoveRecord(move, board_before))
            board_before = board_after
        outcome = self._outcome if self._outcome is not None else Outcome.UNKNOWN
        return MoveStream(tuple(records), outcome)


def read_stream(data: bytes, engine: RulesEngine | None = None) -> MoveStream:
    """Decode a whole ASCN payload."""
    return Reader(data, engine).read_stream()
