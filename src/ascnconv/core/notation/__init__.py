"""Notation package: FEN, SAN resolution and PGN reading."""

from ascnconv.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from ascnconv.core.notation.models import GameEnd, GameStart, Header, MoveToken, PgnEvent
from ascnconv.core.notation.pgn import (
    format_header,
    iter_pgn_events,
    outcome_from_token,
    outcome_token,
)
from ascnconv.core.notation.san import parse_san

__all__ = [
    "STARTING_FEN",
    "GameEnd",
    "GameStart",
    "Header",
    "MoveToken",
    "PgnEvent",
    "format_header",
    "iter_pgn_events",
    "outcome_from_token",
    "outcome_token",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
]
