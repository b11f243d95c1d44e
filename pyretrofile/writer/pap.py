"""MOS Technology paper tape (KIM-1 PAP) writer.

Each record is ``;LLAAAA<data>CCCC`` followed by CR/LF and six NUL padding
bytes. The final record carries ``00`` as its length and repeats the number
of data records twice.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Tuple

from pyretrofile.bus import AddressSpace
from pyretrofile.errors import OutputError
from pyretrofile.utils import CATEGORY_PAP, debug_log

from .output import abandon_output, finish_output, open_output

PAP_RECORD_LENGTH = 24
RECORD_TRAILER = b"\r\n" + bytes(6)


def write_pap(stream: BinaryIO, space: AddressSpace) -> int:
    """Serialize ``space`` to ``stream`` and return the number of data records.

    Raises :class:`OutputError` when the stream rejects a write; whatever was
    written before the failure is left in place.
    """

    count = 0
    for address, payload in iter_records(space):
        _write(stream, encode_record(address, payload))
        count += 1
        debug_log(CATEGORY_PAP, "record=%d addr=%04X len=%d", count, address & 0xFFFF, len(payload))
    _write(stream, encode_end_record(count))
    return count


def write_pap_to_path(path: Path, space: AddressSpace) -> int:
    handle = open_output(path)
    try:
        count = write_pap(handle, space)
    except BaseException:
        abandon_output(handle)
        raise
    finish_output(handle)
    return count


def iter_records(space: AddressSpace, size: int = PAP_RECORD_LENGTH) -> Iterator[Tuple[int, bytes]]:
    """Yield ``(address, payload)`` chunks of at most ``size`` bytes per range."""

    if not 0 < size <= PAP_RECORD_LENGTH:
        raise ValueError(f"record length must be 1-{PAP_RECORD_LENGTH}, got {size}")
    for rng in space:
        data = rng.data()
        for offset in range(0, len(data), size):
            yield rng.start + offset, data[offset:offset + size]


def encode_record(address: int, payload: bytes) -> bytes:
    length = len(payload)
    if not 0 < length <= PAP_RECORD_LENGTH:
        raise ValueError(f"PAP record length must be 1-{PAP_RECORD_LENGTH}, got {length}")
    header = bytes([length, (address >> 8) & 0xFF, address & 0xFF])
    checksum = _checksum(header, payload)
    text = ";" + header.hex().upper() + payload.hex().upper() + f"{checksum:04X}"
    return text.encode("ascii") + RECORD_TRAILER


def encode_end_record(count: int) -> bytes:
    count &= 0xFFFF
    return f";00{count:04X}{count:04X}".encode("ascii") + RECORD_TRAILER


def _checksum(*chunks: Iterable[int]) -> int:
    total = 0
    for chunk in chunks:
        total += sum(chunk)
    return total & 0xFFFF


def _write(stream: BinaryIO, data: bytes) -> None:
    try:
        stream.write(data)
    except OSError as exc:
        debug_log(CATEGORY_PAP, "write failed: %s", exc)
        raise OutputError(f"Error writing output file: {exc}") from exc
