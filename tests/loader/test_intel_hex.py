"""Tests for the Intel HEX loader."""

from __future__ import annotations

import io

import pytest

from pyretrofile.errors import (
    ChecksumError,
    EndRecordError,
    InvalidDataError,
    InvalidRecordTypeError,
    MixedAddressingModesError,
    OverlappingSegmentError,
    UnexpectedEndOfFileError,
)
from pyretrofile.loader import ProgramImage, load_intel_hex, load_intel_hex_from_path

EOF_RECORD = ":00000001FF\n"


def record(record_type: int, address: int, payload: bytes = b"") -> str:
    body = bytes([len(payload), (address >> 8) & 0xFF, address & 0xFF, record_type]) + payload
    checksum = (-sum(body)) & 0xFF
    return ":" + body.hex().upper() + f"{checksum:02X}\n"


def load_text(text: str) -> ProgramImage:
    program = ProgramImage()
    load_intel_hex(io.BytesIO(text.encode("ascii")), program)
    return program


def snapshot(program: ProgramImage) -> list[tuple[int, int, bytes]]:
    return [(rng.start, rng.length, rng.data()) for rng in program.address_space]


def test_single_data_record() -> None:
    program = load_text(":0300300002337A1E\r\n:00000001FF\r\n")

    assert snapshot(program) == [(0x0030, 3, bytes([0x02, 0x33, 0x7A]))]
    assert program.start_address is None


def test_returns_record_count() -> None:
    program = ProgramImage()
    text = record(0x00, 0x0000, b"\x01") + record(0x00, 0x0010, b"\x02") + EOF_RECORD
    assert load_intel_hex(io.BytesIO(text.encode("ascii")), program) == 3


def test_consecutive_records_form_one_range() -> None:
    text = record(0x00, 0x1000, bytes(range(16))) + record(0x00, 0x1010, bytes(range(16, 20))) + EOF_RECORD
    program = load_text(text)

    assert snapshot(program) == [(0x1000, 20, bytes(range(20)))]
    assert program.address_space.data_bytes == 20


def test_lowercase_digits_and_noise_between_records() -> None:
    text = "garbage\n" + record(0x00, 0x0200, b"\xAB\xCD").lower() + "  \r\n" + EOF_RECORD
    program = load_text(text)

    assert snapshot(program) == [(0x0200, 2, b"\xAB\xCD")]


def test_extended_linear_address() -> None:
    text = record(0x04, 0, b"\x00\x02") + record(0x00, 0x1234, b"\x55") + EOF_RECORD
    program = load_text(text)

    assert snapshot(program) == [(0x00021234, 1, b"\x55")]


def test_data_past_top_of_linear_space_is_invalid() -> None:
    text = record(0x04, 0, b"\xFF\xFF") + record(0x00, 0xFFFF, b"\x01\x02") + EOF_RECORD

    with pytest.raises(InvalidDataError):
        load_text(text)


def test_data_ending_on_last_linear_address() -> None:
    text = record(0x04, 0, b"\xFF\xFF") + record(0x00, 0xFFFE, b"\x01\x02") + EOF_RECORD
    program = load_text(text)

    assert snapshot(program) == [(0xFFFFFFFE, 2, b"\x01\x02")]


def test_extended_segment_address() -> None:
    text = record(0x02, 0, b"\x12\x00") + record(0x00, 0x0034, b"\x66") + EOF_RECORD
    program = load_text(text)

    assert snapshot(program) == [(0x12000 + 0x34, 1, b"\x66")]


def test_start_segment_address() -> None:
    text = record(0x03, 0, b"\x01\x00\x00\x10") + EOF_RECORD
    program = load_text(text)

    assert program.start_address == 0x1010
    assert len(program.address_space) == 0


def test_start_linear_address() -> None:
    text = record(0x05, 0, b"\x00\x01\x02\x03") + EOF_RECORD
    program = load_text(text)

    assert program.start_address == 0x00010203


@pytest.mark.parametrize(
    "first, second",
    [
        (record(0x04, 0, b"\x00\x01"), record(0x02, 0, b"\x10\x00")),
        (record(0x02, 0, b"\x10\x00"), record(0x04, 0, b"\x00\x01")),
    ],
)
def test_mixed_addressing_modes_rejected(first: str, second: str) -> None:
    with pytest.raises(MixedAddressingModesError):
        load_text(first + second + EOF_RECORD)


def test_zero_extended_base_does_not_count_as_mode() -> None:
    text = record(0x04, 0, b"\x00\x00") + record(0x02, 0, b"\x00\x10") + record(0x00, 0, b"\x01") + EOF_RECORD
    program = load_text(text)

    assert snapshot(program) == [(0x100, 1, b"\x01")]


def test_addressing_state_is_per_file() -> None:
    program = ProgramImage()
    first = record(0x04, 0, b"\x00\x01") + record(0x00, 0, b"\x01") + EOF_RECORD
    second = record(0x02, 0, b"\x00\x10") + record(0x00, 0, b"\x02") + EOF_RECORD

    load_intel_hex(io.BytesIO(first.encode("ascii")), program)
    load_intel_hex(io.BytesIO(second.encode("ascii")), program)

    assert snapshot(program) == [(0x100, 1, b"\x02"), (0x10000, 1, b"\x01")]


def test_invalid_record_type() -> None:
    with pytest.raises(InvalidRecordTypeError):
        load_text(record(0x06, 0, b"") + EOF_RECORD)


def test_checksum_mismatch_stops_processing() -> None:
    good = record(0x00, 0x0000, b"\x10\x20")
    corrupted = ":0300300002337B1E\n"  # one data bit flipped
    after = record(0x00, 0x0100, b"\x99")
    program = ProgramImage()

    with pytest.raises(ChecksumError):
        load_intel_hex(io.BytesIO((good + corrupted + after + EOF_RECORD).encode("ascii")), program)

    assert [rng.start for rng in program.address_space] == [0x0000, 0x0030]


def test_missing_end_record() -> None:
    with pytest.raises(EndRecordError):
        load_text(record(0x00, 0, b"\x01"))


def test_empty_input_has_no_end_record() -> None:
    with pytest.raises(EndRecordError):
        load_text("")


def test_duplicate_end_record() -> None:
    with pytest.raises(EndRecordError):
        load_text(EOF_RECORD + EOF_RECORD)


def test_data_after_end_record() -> None:
    with pytest.raises(EndRecordError):
        load_text(EOF_RECORD + record(0x00, 0, b"\x01"))


def test_text_after_end_record_is_ignored() -> None:
    program = load_text(record(0x00, 0, b"\x01") + EOF_RECORD + "\n\x1a trailing text\n")
    assert snapshot(program) == [(0, 1, b"\x01")]


def test_truncated_record() -> None:
    with pytest.raises(UnexpectedEndOfFileError):
        load_text(":0300300002")


def test_invalid_hex_digit() -> None:
    with pytest.raises(InvalidDataError):
        load_text(":03003X0002337A1E\n" + EOF_RECORD)


def test_overlapping_records_rejected() -> None:
    text = record(0x00, 0x0100, b"\x00" * 4) + record(0x00, 0x0102, b"\x00" * 4) + EOF_RECORD
    with pytest.raises(OverlappingSegmentError):
        load_text(text)


def test_zero_length_data_record_is_accepted() -> None:
    program = load_text(record(0x00, 0x4000, b"") + EOF_RECORD)
    assert len(program.address_space) == 0


def test_load_from_path(tmp_path) -> None:
    path = tmp_path / "image.hex"
    path.write_text(record(0x00, 0x0800, b"\xEA\xEA") + EOF_RECORD)
    program = ProgramImage()

    assert load_intel_hex_from_path(path, program) == 2
    assert snapshot(program) == [(0x0800, 2, b"\xEA\xEA")]
