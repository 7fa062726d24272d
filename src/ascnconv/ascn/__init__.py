"""ASCN binary game format."""

from ascnconv.ascn.reader import Reader, read_stream
from ascnconv.ascn.writer import Writer, write_stream

__all__ = ["Reader", "Writer", "read_stream", "write_stream"]
