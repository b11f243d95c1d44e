"""Raw binary loader."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pyretrofile.bus import Region
from pyretrofile.utils import CATEGORY_CONVERT, debug_log

from .program import ProgramImage


def load_binary(stream: BinaryIO, program: ProgramImage, start_address: int) -> int:
    """Place the whole of ``stream`` at ``start_address``; returns the byte count."""

    payload = stream.read()
    if payload:
        program.address_space.insert(Region(start_address, payload))
    debug_log(CATEGORY_CONVERT, "binary addr=%08X len=%d", start_address, len(payload))
    return len(payload)


def load_binary_from_path(path: Path, program: ProgramImage, start_address: int) -> int:
    with path.open("rb") as handle:
        return load_binary(handle, program, start_address)
