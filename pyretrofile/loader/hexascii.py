"""Readers for hex-ASCII encoded fields."""

from __future__ import annotations

from typing import BinaryIO

from pyretrofile.errors import InvalidDataError, UnexpectedEndOfFileError

_DIGITS = {ord(ch): int(ch, 16) for ch in "0123456789abcdefABCDEF"}


class HexAsciiReader:
    """Decodes big-endian values written as pairs of hex digits.

    Every byte read with ``accumulate=True`` is added to an 8-bit running
    checksum that the caller resets at the start of each record.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._checksum = 0

    @property
    def checksum(self) -> int:
        return self._checksum

    def reset_checksum(self) -> None:
        self._checksum = 0

    def scan_to(self, marker: bytes) -> bool:
        """Skip input up to and including ``marker``; False at end of stream."""

        while True:
            ch = self._stream.read(1)
            if not ch:
                return False
            if ch == marker:
                return True

    def read_u8(self, *, accumulate: bool = True) -> int:
        value = (self._read_digit() << 4) | self._read_digit()
        if accumulate:
            self._checksum = (self._checksum + value) & 0xFF
        return value

    def read_u16(self, *, accumulate: bool = True) -> int:
        high = self.read_u8(accumulate=accumulate)
        low = self.read_u8(accumulate=accumulate)
        return (high << 8) | low

    def read_u32(self, *, accumulate: bool = True) -> int:
        value = 0
        for _ in range(4):
            value = (value << 8) | self.read_u8(accumulate=accumulate)
        return value

    def read_bytes(self, count: int, *, accumulate: bool = True) -> bytes:
        return bytes(self.read_u8(accumulate=accumulate) for _ in range(count))

    def _read_digit(self) -> int:
        ch = self._stream.read(1)
        if not ch:
            raise UnexpectedEndOfFileError("Unexpected end of file")
        digit = _DIGITS.get(ch[0])
        if digit is None:
            raise InvalidDataError(f"Invalid hex byte value: {ch!r}")
        return digit
