"""Tests for the ASCN binary reader and writer."""

from collections.abc import Callable

import pytest

from ascnconv.ascn import Reader, Writer, read_stream, write_stream
from ascnconv.ascn.layout import decode_move, decode_outcome, encode_move, encode_outcome
from ascnconv.core.enums import MoveFlag, Outcome, PieceType
from ascnconv.core.move import Move
from ascnconv.core.types import parse_square as sq
from ascnconv.errors import ParseError
from ascnconv.stream import MoveStream
from conftest import SampleGame

HEADER = b"ASCN\x01"
E2E4 = b"\x03\x1c"


class TestLayout:
    def test_move_word(self) -> None:
        move = Move(sq("e2"), sq("e4"), MoveFlag.DOUBLE_PAWN)
        assert encode_move(move) == 0x031C
        assert decode_move(0x031C) == (sq("e2"), sq("e4"), None)

    def test_promotion_word(self) -> None:
        move = Move(sq("e7"), sq("e8"), MoveFlag.PROMOTION, PieceType.QUEEN)
        assert encode_move(move) == 0x5D3C
        assert decode_move(0x5D3C) == (sq("e7"), sq("e8"), PieceType.QUEEN)

    @pytest.mark.parametrize("code", [1, 6, 7])
    def test_invalid_promotion_code(self, code: int) -> None:
        with pytest.raises(ValueError, match="promotion code"):
            decode_move((code << 12) | 0x031C)

    @pytest.mark.parametrize("outcome", list(Outcome))
    def test_outcome_word(self, outcome: Outcome) -> None:
        word = encode_outcome(outcome)
        assert word & 0x8000
        assert decode_outcome(word) is outcome

    def test_reserved_terminator_bits(self) -> None:
        with pytest.raises(ValueError, match="Reserved"):
            decode_outcome(0x8010)


class TestWriter:
    def test_empty_without_outcome(self) -> None:
        assert Writer().get_data(None) == HEADER

    def test_empty_with_unknown_outcome(self) -> None:
        assert Writer().get_data(Outcome.UNKNOWN) == HEADER + b"\x80\x00"

    def test_single_move(self) -> None:
        writer = Writer()
        writer.add_move(Move(sq("e2"), sq("e4"), MoveFlag.DOUBLE_PAWN))
        assert len(writer) == 1
        assert writer.get_data(Outcome.DRAW) == HEADER + E2E4 + b"\x80\x03"

    def test_get_data_does_not_seal(self) -> None:
        writer = Writer()
        writer.get_data(Outcome.WHITE_WINS)
        writer.add_move(Move(sq("e2"), sq("e4"), MoveFlag.DOUBLE_PAWN))
        assert writer.get_data(None) == HEADER + E2E4

    def test_rejects_king_promotion(self) -> None:
        with pytest.raises(ValueError, match="KING"):
            Writer().add_move(
                Move(sq("e7"), sq("e8"), MoveFlag.PROMOTION, PieceType.KING)
            )


class TestReader:
    def test_iterates_moves_and_boards(self) -> None:
        reader = Reader(HEADER + E2E4 + b"\x0d\xae" + b"\x80\x01")
        pairs = list(reader)
        assert [m.uci for m, _ in pairs] == ["e2e4", "g7g6"]
        assert pairs[-1][1] is reader.board
        assert reader.outcome is Outcome.WHITE_WINS

    def test_missing_terminator(self) -> None:
        reader = Reader(HEADER + E2E4)
        assert len(list(reader)) == 1
        assert reader.outcome is None
        assert read_stream(HEADER + E2E4).outcome is Outcome.UNKNOWN

    def test_empty_game(self) -> None:
        stream = read_stream(HEADER + b"\x80\x03")
        assert stream == MoveStream((), Outcome.DRAW)

    @pytest.mark.parametrize(
        ("data", "offset", "match"),
        [
            (b"ASC", 0, "Truncated"),
            (b"PGN!\x01", 0, "Not an ASCN"),
            (b"ASCN\x02", 4, "version 2"),
            (HEADER + b"\x03", 5, "Truncated move word"),
        ],
    )
    def test_bad_header(self, data: bytes, offset: int, match: str) -> None:
        with pytest.raises(ParseError, match=match) as info:
            Reader(data)
        assert info.value.offset == offset
        assert info.value.stage == "decode"

    def test_data_after_terminator(self) -> None:
        with pytest.raises(ParseError, match="after outcome"):
            read_stream(HEADER + b"\x80\x01" + E2E4)

    def test_reserved_bits(self) -> None:
        with pytest.raises(ParseError, match="Reserved") as info:
            read_stream(HEADER + E2E4 + b"\x80\x10")
        assert info.value.ply == 1
        assert info.value.offset == 7

    def test_empty_source_square(self) -> None:
        with pytest.raises(ParseError, match="at ply 1: No piece on e4") as info:
            read_stream(HEADER + b"\x07\x24")
        assert info.value.ply == 0
        assert info.value.offset == 5

    def test_second_ply_error(self) -> None:
        # e2 is empty once the pawn has moved
        with pytest.raises(ParseError, match="at ply 2") as info:
            read_stream(HEADER + E2E4 + E2E4)
        assert info.value.ply == 1
        assert info.value.offset == 7

    def test_pawn_capture_into_empty_square(self) -> None:
        # e2e4 a7a6 e1e2 a6a5 d2e3 h7h6
        data = HEADER + bytes.fromhex("031c0c28010c0a2002d40def") + b"\x80\x00"
        with pytest.raises(ParseError, match="at ply 5: .*not en passant") as info:
            read_stream(data)
        assert info.value.ply == 4
        assert info.value.offset == 13

    def test_bad_promotion_code(self) -> None:
        with pytest.raises(ParseError, match="promotion code"):
            read_stream(HEADER + b"\x13\x1c")


class TestRoundTrip:
    def test_sample_games(
        self, make_stream: Callable[..., MoveStream], sample_game: SampleGame
    ) -> None:
        stream = make_stream(sample_game.sans, sample_game.outcome)
        data = write_stream(stream)
        assert len(data) == len(HEADER) + 2 * (len(sample_game.sans) + 1)
        assert read_stream(data) == stream
