"""Fold a PGN event stream into a :class:`MoveStream`."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ascnconv.core.enums import Outcome
from ascnconv.core.notation.models import GameEnd, GameStart, MoveToken, PgnEvent
from ascnconv.core.notation.pgn import outcome_from_token
from ascnconv.core.position import Position
from ascnconv.engine import RulesEngine, StandardRulesEngine
from ascnconv.errors import ParseError
from ascnconv.stream import MoveRecord, MoveStream

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _FoldState:
    board: Position
    records: list[MoveRecord] = field(default_factory=list)
    outcome: Outcome | None = None


def stream_from_events(
    events: Iterable[PgnEvent],
    engine: RulesEngine | None = None,
) -> MoveStream:
    """Resolve every move token against the running board.

    Headers are ignored. The stream is sealed by the first
    :class:`GameEnd`; anything after it is not consumed.

    Raises:
        ParseError: when a token does not resolve to exactly one legal move
            or the events end without a :class:`GameEnd`.
    """
    engine = engine if engine is not None else StandardRulesEngine()
    state = _FoldState(board=engine.initial_board())

    for event in events:
        if isinstance(event, GameStart):
            state = _FoldState(board=engine.initial_board())
        elif isinstance(event, MoveToken):
            ply = len(state.records)
            try:
                move = engine.resolve(event.san, state.board)
            except ValueError as exc:
                _LOGGER.warning("Cannot resolve %r at ply %d", event.san, ply + 1)
                raise ParseError(
                    f"Move {ply // 2 + 1} ({event.san!r}): {exc}", ply=ply
                ) from exc
            state.records.append(MoveRecord(move, state.board))
            state.board = engine.apply(state.board, move)
        elif isinstance(event, GameEnd):
            state.outcome = outcome_from_token(event.result_token)
            break

    if state.outcome is None:
        raise ParseError("Game has no termination", ply=len(state.records))
    return MoveStream(tuple(state.records), state.outcome)
