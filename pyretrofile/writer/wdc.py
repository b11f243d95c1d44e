"""WDC binary writer (not implemented yet)."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pyretrofile.bus import AddressSpace
from pyretrofile.errors import UnsupportedError

from .output import abandon_output, open_output


def write_wdc(stream: BinaryIO, space: AddressSpace) -> int:
    raise UnsupportedError("WDC file output is currently not supported")


def write_wdc_to_path(path: Path, space: AddressSpace) -> int:
    handle = open_output(path)
    try:
        return write_wdc(handle, space)
    finally:
        abandon_output(handle)
