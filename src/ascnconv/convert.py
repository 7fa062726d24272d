"""Conversion pipelines between PGN text and ASCN bytes."""

from __future__ import annotations

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path

from ascnconv.ascn import read_stream, write_stream
from ascnconv.config import ConverterSettings
from ascnconv.core.notation.pgn import iter_pgn_events, outcome_token
from ascnconv.engine import RulesEngine, StandardRulesEngine
from ascnconv.errors import ConversionIOError, ParseError, UnknownFormatError
from ascnconv.ingest import stream_from_events
from ascnconv.movetext import render_pgn

_LOGGER = logging.getLogger(__name__)


class Format(Enum):
    """Supported file formats, valued by their file extension."""

    ASCN = "ascn"
    PGN = "pgn"

    @property
    def opposite(self) -> Format:
        return Format.PGN if self is Format.ASCN else Format.ASCN

    @property
    def extension(self) -> str:
        return self.value


def detect_format(path: Path) -> Format:
    """Pick the format from *path*'s extension (case-insensitive)."""
    suffix = path.suffix.lower().lstrip(".")
    try:
        return Format(suffix)
    except ValueError:
        raise UnknownFormatError(
            f"Unknown input file type {path.suffix or '(none)'!r} for {path}; "
            f"expected .ascn or .pgn"
        ) from None


def default_output_path(path: Path, input_format: Format) -> Path:
    """Input path with the extension of the opposite format."""
    return path.with_suffix(f".{input_format.opposite.extension}")


# ── In-memory pipelines ──────────────────────────────────────────────────────


def pgn_to_ascn(text: str, engine: RulesEngine | None = None) -> bytes:
    """Encode the first game of a PGN document."""
    engine = engine if engine is not None else StandardRulesEngine()
    try:
        stream = stream_from_events(iter_pgn_events(text), engine)
    except ParseError:
        raise
    except ValueError as exc:
        raise ParseError(str(exc)) from exc
    _LOGGER.info(
        "Parsed %d half-moves, result %s", len(stream), outcome_token(stream.outcome)
    )
    return write_stream(stream)


def ascn_to_pgn(data: bytes, engine: RulesEngine | None = None) -> str:
    """Decode an ASCN payload into a movetext document."""
    engine = engine if engine is not None else StandardRulesEngine()
    stream = read_stream(data, engine)
    _LOGGER.info(
        "Decoded %d half-moves, result %s", len(stream), outcome_token(stream.outcome)
    )
    return render_pgn(engine, stream)


# ── Files ────────────────────────────────────────────────────────────────────


def _read_input(path: Path, fmt: Format, settings: ConverterSettings) -> str | bytes:
    try:
        if fmt is Format.ASCN:
            return path.read_bytes()
        return path.read_text(encoding=settings.text_encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(
            f"{path} is not valid {settings.text_encoding} text: {exc}", stage="read"
        ) from exc
    except OSError as exc:
        raise ConversionIOError(f"Could not read {path}: {exc}", stage="read") from exc


def _write_output(path: Path, payload: bytes, settings: ConverterSettings) -> None:
    """Write *payload* to *path*; on failure nothing is left at *path*."""
    if not settings.overwrite and path.exists():
        raise ConversionIOError(f"{path} already exists", stage="write")

    if not settings.atomic_write:
        try:
            with path.open("wb") as fh:
                fh.write(payload)
                fh.flush()
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise ConversionIOError(
                f"Could not write {path}: {exc}", stage="write"
            ) from exc
        return

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise ConversionIOError(
            f"Could not write {path}: {exc}", stage="write"
        ) from exc


def convert_file(
    input_path: Path,
    output_path: Path | None = None,
    settings: ConverterSettings | None = None,
    engine: RulesEngine | None = None,
) -> Path:
    """Convert one game file to the opposite format.

    The input is read completely before conversion starts and the output
    is only committed once the whole conversion succeeded.

    Returns:
        The path that was written.

    Raises:
        ConversionError: subclass naming the failing stage.
    """
    settings = settings if settings is not None else ConverterSettings()
    input_format = detect_format(input_path)
    target = output_path or default_output_path(input_path, input_format)
    _LOGGER.info("Converting %s (%s) -> %s", input_path, input_format.extension, target)

    raw = _read_input(input_path, input_format, settings)
    try:
        if isinstance(raw, bytes):
            payload = ascn_to_pgn(raw, engine).encode(settings.text_encoding)
        else:
            payload = pgn_to_ascn(raw, engine)
    except ParseError as exc:
        _LOGGER.warning("Conversion of %s failed: %s", input_path, exc)
        raise

    _write_output(target, payload, settings)
    _LOGGER.info("Wrote %d bytes to %s", len(payload), target)
    return target
