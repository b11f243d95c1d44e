"""Intel HEX loader.

Records have the form ``:LLAAAATT[DD...]CC``. Bytes between records are
ignored, so both CRLF and LF line endings are accepted. A file may use either
extended segment addressing or extended linear addressing, never both.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pyretrofile.bus import Region
from pyretrofile.errors import (
    ChecksumError,
    EndRecordError,
    InvalidRecordTypeError,
    MixedAddressingModesError,
)
from pyretrofile.utils import CATEGORY_HEX, debug_log

from .hexascii import HexAsciiReader
from .program import ProgramImage

RECORD_MARK = b":"

REC_DATA = 0x00
REC_EOF = 0x01
REC_EXT_SEG_ADDR = 0x02
REC_START_SEG_ADDR = 0x03
REC_EXT_LIN_ADDR = 0x04
REC_START_LIN_ADDR = 0x05


def load_intel_hex(stream: BinaryIO, program: ProgramImage) -> int:
    """Decode Intel HEX records from ``stream`` into ``program``.

    Returns the number of records processed. Regions inserted before a
    failure stay in the address space.
    """

    loader = _IntelHexLoader(stream, program)
    return loader.load()


def load_intel_hex_from_path(path: Path, program: ProgramImage) -> int:
    """Load an Intel HEX file from the filesystem."""

    with path.open("rb") as handle:
        return load_intel_hex(handle, program)


class _IntelHexLoader:
    def __init__(self, stream: BinaryIO, program: ProgramImage) -> None:
        self._reader = HexAsciiReader(stream)
        self._program = program
        self._ext_linear = 0
        self._ext_segment = 0
        self._end_seen = False
        self._records = 0

    def load(self) -> int:
        reader = self._reader
        while reader.scan_to(RECORD_MARK):
            if self._end_seen:
                debug_log(CATEGORY_HEX, "record after end record #%d", self._records)
                raise EndRecordError("Multiple end records encountered")

            reader.reset_checksum()
            byte_count = reader.read_u8()
            address = reader.read_u16()
            record_type = reader.read_u8()

            self._handle_record(record_type, byte_count, address)

            expected = (-reader.checksum) & 0xFF
            actual = reader.read_u8(accumulate=False)
            if actual != expected:
                debug_log(
                    CATEGORY_HEX,
                    "checksum record=%d type=%02X addr=%04X expected=%02X actual=%02X",
                    self._records,
                    record_type,
                    address,
                    expected,
                    actual,
                )
                raise ChecksumError(
                    f"Checksum error in record {self._records + 1}: "
                    f"expected {expected:02X}, found {actual:02X}"
                )
            self._records += 1

        if not self._end_seen:
            debug_log(CATEGORY_HEX, "missing end record after %d records", self._records)
            raise EndRecordError("No end record was found")

        return self._records

    def _handle_record(self, record_type: int, byte_count: int, address: int) -> None:
        reader = self._reader
        if record_type == REC_DATA:
            payload = reader.read_bytes(byte_count)
            region = Region(self._absolute_address(address), payload)
            debug_log(CATEGORY_HEX, "data addr=%08X len=%d", region.start, byte_count)
            self._program.address_space.insert(region)
        elif record_type == REC_EOF:
            self._end_seen = True
        elif record_type == REC_EXT_SEG_ADDR:
            if self._ext_linear != 0:
                raise self._mixed_modes()
            self._ext_segment = reader.read_u16()
            debug_log(CATEGORY_HEX, "segment base=%04X", self._ext_segment)
        elif record_type == REC_START_SEG_ADDR:
            segment = reader.read_u16()
            offset = reader.read_u16()
            self._program.start_address = (segment << 4) + offset
        elif record_type == REC_EXT_LIN_ADDR:
            if self._ext_segment != 0:
                raise self._mixed_modes()
            self._ext_linear = reader.read_u16()
            debug_log(CATEGORY_HEX, "linear base=%04X", self._ext_linear)
        elif record_type == REC_START_LIN_ADDR:
            self._program.start_address = reader.read_u32()
        else:
            debug_log(CATEGORY_HEX, "invalid record type=%02X", record_type)
            raise InvalidRecordTypeError(f"Invalid record type: {record_type}")

    def _absolute_address(self, address: int) -> int:
        if self._ext_segment != 0:
            return (self._ext_segment << 4) + address
        return (self._ext_linear << 16) | address

    def _mixed_modes(self) -> MixedAddressingModesError:
        debug_log(CATEGORY_HEX, "mixed addressing segment=%04X linear=%04X", self._ext_segment, self._ext_linear)
        return MixedAddressingModesError(
            "Both segment addressing and linear addressing used. "
            "Only one type or the other is supported."
        )
