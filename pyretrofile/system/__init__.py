"""Conversion driver helpers."""

from __future__ import annotations

from .converter import (
    Converter,
    ConverterConfig,
    FileSpec,
    FileType,
    parse_address,
    parse_file_argument,
)

__all__ = [
    "Converter",
    "ConverterConfig",
    "FileSpec",
    "FileType",
    "parse_address",
    "parse_file_argument",
]
