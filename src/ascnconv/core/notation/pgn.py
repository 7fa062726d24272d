"""PGN reading helpers and the result-token table."""

from __future__ import annotations

import re
from collections.abc import Iterator

from ascnconv.core.enums import Outcome
from ascnconv.core.notation.models import (
    GameEnd,
    GameStart,
    Header,
    MoveToken,
    PgnEvent,
)

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_MOVE_NUMBER_RE = re.compile(r"^\d+\.(?:\.\.)?$")

_OUTCOME_TOKENS: dict[Outcome, str] = {
    Outcome.WHITE_WINS: "1-0",
    Outcome.BLACK_WINS: "0-1",
    Outcome.DRAW: "1/2-1/2",
    Outcome.UNKNOWN: "*",
}
_TOKEN_OUTCOMES: dict[str, Outcome] = {v: k for k, v in _OUTCOME_TOKENS.items()}


def outcome_token(outcome: Outcome) -> str:
    """Convert an :class:`Outcome` to its PGN result token."""
    return _OUTCOME_TOKENS[outcome]


def outcome_from_token(token: str) -> Outcome:
    """Convert a PGN result token to an :class:`Outcome`.

    Total: anything that is not a recognised token decodes to
    ``Outcome.UNKNOWN``.
    """
    return _TOKEN_OUTCOMES.get(token.strip(), Outcome.UNKNOWN)


def format_header(name: str, value: str) -> str:
    """Render a tag pair, escaping backslashes and quotes."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[{name} "{escaped}"]'


def _iter_movetext_tokens(movetext: str) -> Iterator[str]:
    """Yield bare mainline tokens, dropping comments and variations."""
    variation_depth = 0
    idx = 0
    total = len(movetext)

    while idx < total:
        ch = movetext[idx]

        if ch.isspace():
            idx += 1
            continue

        if ch == "{":
            end = movetext.find("}", idx + 1)
            idx = total if end < 0 else end + 1
            continue

        if ch == ";":
            end = movetext.find("\n", idx + 1)
            idx = total if end < 0 else end
            continue

        if ch == "(":
            variation_depth += 1
            idx += 1
            continue

        if ch == ")":
            variation_depth = max(0, variation_depth - 1)
            idx += 1
            continue

        token_end = idx
        while (
            token_end < total
            and not movetext[token_end].isspace()
            and movetext[token_end] not in "{};()"
        ):
            token_end += 1
        token = movetext[idx:token_end]
        idx = token_end

        if variation_depth == 0:
            yield token


def iter_pgn_events(pgn_text: str) -> Iterator[PgnEvent]:
    """Lazily parse the first game of *pgn_text* into reader events.

    Yields a :class:`GameStart`, its :class:`Header` tag pairs, one
    :class:`MoveToken` per mainline move and a closing :class:`GameEnd`.
    The first termination marker in the movetext ends it and becomes the
    result token, falling back to the ``Result`` header and then to ``"*"``.

    Raises:
        ValueError: on a malformed tag pair.
    """
    yield GameStart()

    header_result: str | None = None
    move_lines: list[str] = []
    in_headers = True
    lines = iter(pgn_text.splitlines())

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            if in_headers and header_result is None and not move_lines:
                continue
            in_headers = False
            if move_lines:
                break
            continue

        if in_headers and line.startswith("["):
            match = _PGN_HEADER_RE.match(line)
            if match is None:
                raise ValueError(f"Invalid PGN header line: {line}")
            name, raw_value = match.groups()
            value = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            if name == "Result":
                header_result = value
            yield Header(name, value)
            continue

        if not in_headers and line.startswith("[") and move_lines:
            # next game in the file
            break
        in_headers = False
        if line.startswith("%"):
            continue
        move_lines.append(line)

    result_token: str | None = None
    for token in _iter_movetext_tokens("\n".join(move_lines)):
        if token in _TOKEN_OUTCOMES:
            result_token = token
            break
        if _MOVE_NUMBER_RE.match(token):
            continue
        if token.startswith("$") and token[1:].isdigit():
            continue
        # "12.e4" and "12...e5" glue the number to the move
        san = token.split(".")[-1] if "." in token else token
        if san:
            yield MoveToken(san)

    if result_token is None:
        result_token = header_result if header_result in _TOKEN_OUTCOMES else "*"
    yield GameEnd(result_token)
