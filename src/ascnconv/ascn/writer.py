"""ASCN writer."""

from __future__ import annotations

import logging

from ascnconv.ascn.layout import (
    HEADER,
    MAGIC,
    PROMOTION_CODES,
    VERSION,
    WORD,
    encode_move,
    encode_outcome,
)
from ascnconv.core.enums import Outcome
from ascnconv.core.move import Move
from ascnconv.stream import MoveStream

_LOGGER = logging.getLogger(__name__)


class Writer:
    """Accumulates moves and serialises them with an outcome.

    Mirrors the reader: moves are added one at a time in game order and
    :meth:`get_data` seals the payload.
    """

    __slots__ = ("_words",)

    def __init__(self) -> None:
        self._words: list[int] = []

    def __len__(self) -> int:
        return len(self._words)

    def add_move(self, move: Move) -> None:
        if move.promotion is not None and move.promotion not in PROMOTION_CODES:
            raise ValueError(f"Cannot encode promotion to {move.promotion.name}")
        self._words.append(encode_move(move))

    def get_data(self, outcome: Outcome | None) -> bytes:
        """Header, move words and, unless *outcome* is ``None``, a terminator."""
        words = list(self._words)
        if outcome is not None:
            words.append(encode_outcome(outcome))
        payload = HEADER.pack(MAGIC, VERSION) + b"".join(WORD.pack(w) for w in words)
        _LOGGER.debug("Encoded %d moves into %d bytes", len(self._words), len(payload))
        return payload


def write_stream(stream: MoveStream) -> bytes:
    """Serialise a whole :class:`MoveStream`."""
    writer = Writer()
    for record in stream.records:
        writer.add_move(record.move)
    return writer.get_data(stream.outcome)
