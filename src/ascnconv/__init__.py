"""Convert chess games between the ASCN binary format and PGN movetext.

Quick start::

    from ascnconv import ascn_to_pgn, pgn_to_ascn

    data = pgn_to_ascn("1. e4 e5 2. Nf3 1/2-1/2")
    print(ascn_to_pgn(data))
"""

from ascnconv.config import ConverterSettings
from ascnconv.convert import (
    Format,
    ascn_to_pgn,
    convert_file,
    default_output_path,
    detect_format,
    pgn_to_ascn,
)
from ascnconv.engine import RulesEngine, StandardRulesEngine
from ascnconv.errors import (
    ConversionError,
    ConversionIOError,
    ParseError,
    UnknownFormatError,
)
from ascnconv.movetext import assemble_movetext, move_token, render_pgn
from ascnconv.stream import MoveRecord, MoveStream

__version__ = "0.1.0"

__all__ = [
    # Settings / formats
    "ConverterSettings",
    "Format",
    # Pipelines
    "ascn_to_pgn",
    "convert_file",
    "default_output_path",
    "detect_format",
    "pgn_to_ascn",
    # Stream model
    "MoveRecord",
    "MoveStream",
    # Rules engine
    "RulesEngine",
    "StandardRulesEngine",
    # Notation
    "assemble_movetext",
    "move_token",
    "render_pgn",
    # Errors
    "ConversionError",
    "ConversionIOError",
    "ParseError",
    "UnknownFormatError",
]
