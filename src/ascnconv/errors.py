"""Exception hierarchy for conversions.

Every error names the ``stage`` that failed so the command line can report
it; the message itself stays free of that prefix.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class: the conversion was aborted and produced no output."""

    stage = "convert"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class UnknownFormatError(ConversionError, ValueError):
    """The input path does not carry a recognised extension."""

    stage = "detect"


class ParseError(ConversionError, ValueError):
    """A move token or a binary payload could not be decoded.

    Args:
        message: Human-readable description.
        ply: Zero-based half-move index the failure refers to, if any.
        offset: Byte offset into a binary payload, if any.
    """

    stage = "parse"

    def __init__(
        self,
        message: str,
        *,
        ply: int | None = None,
        offset: int | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(message, stage=stage)
        self.ply = ply
        self.offset = offset


class ConversionIOError(ConversionError):
    """Reading the input or committing the output failed."""

    stage = "io"
