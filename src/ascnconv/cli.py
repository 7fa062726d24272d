"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ascnconv.config import ConverterSettings
from ascnconv.convert import convert_file, detect_format
from ascnconv.errors import ConversionError, UnknownFormatError

_LOGGER = logging.getLogger(__name__)
_VERBOSITY_LEVELS = ("WARNING", "INFO", "DEBUG")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascnconv",
        description="Convert a chess game between ASCN and PGN.",
    )
    parser.add_argument("input", type=Path, help="Input .ascn or .pgn file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output path (default: input name with the opposite extension)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress; repeat for per-move detail",
    )
    parser.add_argument(
        "--no-clobber",
        action="store_true",
        help="Refuse to overwrite an existing output file",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> ConverterSettings:
    settings = ConverterSettings.from_env()
    if args.verbose:
        settings.log_level = _VERBOSITY_LEVELS[min(args.verbose, 2)]
    if args.no_clobber:
        settings.overwrite = False
    return settings


def main(argv: list[str] | None = None) -> int:
    """Run one conversion; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = _settings_from_args(args)
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        detect_format(args.input)
    except UnknownFormatError as exc:
        parser.error(str(exc))

    try:
        output = convert_file(args.input, args.output, settings)
    except ConversionError as exc:
        print(f"ascnconv: {exc.stage} failed: {exc}", file=sys.stderr)
        return 1

    _LOGGER.info("Done: %s", output)
    return 0
