"""Result codes and exceptions shared by the conversion pipeline.

Every failure kind maps to exactly one :class:`Result` value so that the
command-line front-end can turn an exception back into a process exit code.
"""

from __future__ import annotations

from enum import IntEnum


class Result(IntEnum):
    """Process exit codes reported by ``run.py``."""

    OK = 0
    USAGE_SHOWN = 1
    UNSUPPORTED = 2
    INVALID_ARGUMENTS = 3
    CANNOT_OPEN_FILE = 4
    END_OF_FILE = 5
    IO_ERROR = 6
    INVALID_DATA = 7
    MIXED_ADDRESSING_MODES = 8
    INVALID_RECORD_TYPE = 9
    END_RECORD_ERROR = 10
    CHECKSUM_ERROR = 11
    NO_MEMORY = 12
    OVERLAPPING_SEGMENT = 13


class ConversionError(RuntimeError):
    """Base class for every error raised while loading or writing images."""

    result: Result = Result.INVALID_DATA


class UnsupportedError(ConversionError):
    """Raised for a recognised file format that has no implementation."""

    result = Result.UNSUPPORTED


class InvalidArgumentsError(ConversionError):
    """Raised when file names or per-file options cannot be parsed."""

    result = Result.INVALID_ARGUMENTS


class CannotOpenFileError(ConversionError):
    """Raised when an input or output file cannot be opened."""

    result = Result.CANNOT_OPEN_FILE


class UnexpectedEndOfFileError(ConversionError):
    """Raised when an input stream ends in the middle of a field."""

    result = Result.END_OF_FILE


class OutputError(ConversionError):
    """Raised when writing the output file fails."""

    result = Result.IO_ERROR


class InvalidDataError(ConversionError):
    """Raised when a hex digit pair is malformed."""

    result = Result.INVALID_DATA


class MixedAddressingModesError(ConversionError):
    """Raised when one HEX file uses both segment and linear addressing."""

    result = Result.MIXED_ADDRESSING_MODES


class InvalidRecordTypeError(ConversionError):
    """Raised for an Intel HEX record type outside ``00``-``05``."""

    result = Result.INVALID_RECORD_TYPE


class EndRecordError(ConversionError):
    """Raised when the end-of-file record is missing or repeated."""

    result = Result.END_RECORD_ERROR


class ChecksumError(ConversionError):
    """Raised when a record checksum does not match its contents."""

    result = Result.CHECKSUM_ERROR


class OutOfMemoryError(ConversionError):
    """Raised when the interpreter runs out of memory during a conversion."""

    result = Result.NO_MEMORY


class OverlappingSegmentError(ConversionError):
    """Raised when a new region intersects data that is already loaded."""

    result = Result.OVERLAPPING_SEGMENT


__all__ = [
    "Result",
    "ConversionError",
    "UnsupportedError",
    "InvalidArgumentsError",
    "CannotOpenFileError",
    "UnexpectedEndOfFileError",
    "OutputError",
    "InvalidDataError",
    "MixedAddressingModesError",
    "InvalidRecordTypeError",
    "EndRecordError",
    "ChecksumError",
    "OutOfMemoryError",
    "OverlappingSegmentError",
]
