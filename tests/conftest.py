"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pytest

from ascnconv.core.enums import Outcome
from ascnconv.core.notation import GameEnd, GameStart, MoveToken, outcome_token
from ascnconv.engine import StandardRulesEngine
from ascnconv.ingest import stream_from_events
from ascnconv.stream import MoveStream


@dataclass(frozen=True)
class SampleGame:
    """A legal game with its expected long-form movetext."""

    pgn: str
    sans: tuple[str, ...]
    outcome: Outcome
    movetext: str


FOOLS_MATE = SampleGame(
    pgn='[Event "Fool\'s mate"]\n[Result "0-1"]\n\n1. f3 e5 2. g4 Qh4# 0-1\n',
    sans=("f3", "e5", "g4", "Qh4#"),
    outcome=Outcome.BLACK_WINS,
    movetext="1. Pf2f3 Pe7e5 2. Pg2g4 Qd8h4# ",
)

SCHOLARS_MATE = SampleGame(
    pgn="1. e4 e5 2. Bc4 Nc6 3. Qh5 Nf6 4. Qxf7# 1-0",
    sans=("e4", "e5", "Bc4", "Nc6", "Qh5", "Nf6", "Qxf7#"),
    outcome=Outcome.WHITE_WINS,
    movetext="1. Pe2e4 Pe7e5 2. Bf1c4 Nb8c6 3. Qd1h5 Ng8f6 4. Qh5xf7# ",
)

# en passant on move 3, castling on both sides
CASTLES_AND_EN_PASSANT = SampleGame(
    pgn=(
        '[Result "1/2-1/2"]\n\n'
        "1. e4 d5 2. e5 f5 3. exf6 Nxf6 4. Nf3 e6 5. Be2 Be7 6. O-O O-O 1/2-1/2\n"
    ),
    sans=(
        "e4", "d5", "e5", "f5", "exf6", "Nxf6",
        "Nf3", "e6", "Be2", "Be7", "O-O", "O-O",
    ),
    outcome=Outcome.DRAW,
    movetext=(
        "1. Pe2e4 Pd7d5 2. Pe4e5 Pf7f5 3. Pe5f6 Ng8xf6 "
        "4. Ng1f3 Pe7e6 5. Bf1e2 Bf8e7 6. Ke1g1 Ke8g8 "
    ),
)

PROMOTION = SampleGame(
    pgn="1. e4 d5 2. exd5 c6 3. dxc6 Qb6 4. cxb7 Nf6 5. bxa8=Q *",
    sans=("e4", "d5", "exd5", "c6", "dxc6", "Qb6", "cxb7", "Nf6", "bxa8=Q"),
    outcome=Outcome.UNKNOWN,
    movetext=(
        "1. Pe2e4 Pd7d5 2. Pe4xd5 Pc7c6 3. Pd5xc6 Qd8b6 "
        "4. Pc6xb7 Ng8f6 5. Pb7xa8=Q "
    ),
)

SAMPLE_GAMES = (FOOLS_MATE, SCHOLARS_MATE, CASTLES_AND_EN_PASSANT, PROMOTION)


@pytest.fixture
def engine() -> StandardRulesEngine:
    return StandardRulesEngine()


@pytest.fixture
def make_stream(
    engine: StandardRulesEngine,
) -> Callable[..., MoveStream]:
    """Build a :class:`MoveStream` from SAN moves."""

    def _make(
        sans: tuple[str, ...] | list[str], outcome: Outcome = Outcome.UNKNOWN
    ) -> MoveStream:
        events = [
            GameStart(),
            *(MoveToken(s) for s in sans),
            GameEnd(outcome_token(outcome)),
        ]
        return stream_from_events(events, engine)

    return _make


@pytest.fixture(params=SAMPLE_GAMES, ids=lambda g: g.sans[-1])
def sample_game(request: pytest.FixtureRequest) -> SampleGame:
    return request.param
