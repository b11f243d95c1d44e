"""Retro file conversion tool.

Loads Intel HEX and raw binary files into one sparse memory image and writes
the image as a MOS Technology paper tape (KIM-1 PAP) file.
"""

from __future__ import annotations

from . import errors, utils
from . import bus, loader, writer, system

__version__ = "1.0"

__all__: list[str] = [
    "bus",
    "errors",
    "loader",
    "system",
    "utils",
    "writer",
]
