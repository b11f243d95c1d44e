"""Loaders for the supported input file formats."""

from __future__ import annotations

from .binary import load_binary, load_binary_from_path
from .hexascii import HexAsciiReader
from .intel_hex import load_intel_hex, load_intel_hex_from_path
from .program import ProgramImage

__all__ = [
    "HexAsciiReader",
    "ProgramImage",
    "load_binary",
    "load_binary_from_path",
    "load_intel_hex",
    "load_intel_hex_from_path",
]
