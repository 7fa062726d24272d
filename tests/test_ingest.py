"""Tests for folding PGN events into a move stream."""

from collections.abc import Iterator

import pytest

from ascnconv.core.enums import Outcome
from ascnconv.core.notation import (
    GameEnd,
    GameStart,
    Header,
    MoveToken,
    PgnEvent,
    iter_pgn_events,
)
from ascnconv.engine import StandardRulesEngine
from ascnconv.errors import ParseError
from ascnconv.ingest import stream_from_events
from conftest import SampleGame


class TestStreamFromEvents:
    def test_sample_pgn(
        self, engine: StandardRulesEngine, sample_game: SampleGame
    ) -> None:
        stream = stream_from_events(iter_pgn_events(sample_game.pgn), engine)
        assert len(stream) == len(sample_game.sans)
        assert stream.outcome is sample_game.outcome

    def test_records_chain(
        self, engine: StandardRulesEngine, sample_game: SampleGame
    ) -> None:
        stream = stream_from_events(iter_pgn_events(sample_game.pgn), engine)
        assert stream.records[0].board == engine.initial_board()
        for prev, nxt in zip(stream.records, stream.records[1:]):
            assert engine.apply(prev.board, prev.move) == nxt.board

    def test_headers_ignored(self) -> None:
        events = [
            GameStart(),
            Header("White", "Somebody"),
            MoveToken("e4"),
            GameEnd("1-0"),
        ]
        stream = stream_from_events(events)
        assert [m.uci for m in stream.moves] == ["e2e4"]
        assert stream.outcome is Outcome.WHITE_WINS

    def test_game_start_resets(self) -> None:
        events = [
            GameStart(),
            MoveToken("d4"),
            GameStart(),
            MoveToken("e4"),
            GameEnd("*"),
        ]
        assert [m.uci for m in stream_from_events(events).moves] == ["e2e4"]

    def test_unknown_result_token(self) -> None:
        stream = stream_from_events([GameStart(), GameEnd("abandoned")])
        assert stream.outcome is Outcome.UNKNOWN

    def test_stops_at_game_end(self) -> None:
        consumed: list[PgnEvent] = []

        def events() -> Iterator[PgnEvent]:
            for event in (GameStart(), GameEnd("0-1"), MoveToken("e4")):
                consumed.append(event)
                yield event

        stream = stream_from_events(events())
        assert len(stream) == 0
        assert consumed == [GameStart(), GameEnd("0-1")]

    def test_illegal_move(self) -> None:
        events = [GameStart(), MoveToken("e4"), MoveToken("Ke5"), GameEnd("*")]
        with pytest.raises(ParseError, match=r"Move 1 \('Ke5'\)") as info:
            stream_from_events(events)
        assert info.value.ply == 1
        assert info.value.stage == "parse"

    def test_ambiguous_move(self) -> None:
        sans = ["d4", "d5", "Nf3", "Nf6", "Nd2"]
        events = [GameStart(), *(MoveToken(s) for s in sans), GameEnd("*")]
        with pytest.raises(ParseError, match="Ambiguous") as info:
            stream_from_events(events)
        assert info.value.ply == 4

    def test_missing_game_end(self) -> None:
        with pytest.raises(ParseError, match="no termination") as info:
            stream_from_events([GameStart(), MoveToken("e4")])
        assert info.value.ply == 1
