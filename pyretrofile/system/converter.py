"""Conversion driver: loads every input into one image and writes the output."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO

from pyretrofile.errors import (
    CannotOpenFileError,
    InvalidArgumentsError,
    OutOfMemoryError,
)
from pyretrofile.loader import ProgramImage, load_binary_from_path, load_intel_hex_from_path
from pyretrofile.utils import CATEGORY_CONVERT, debug_log
from pyretrofile.writer import write_pap_to_path, write_wdc_to_path


class FileType(Enum):
    """File formats understood by the converter."""

    HEX = "hex"
    BIN = "bin"
    PAP = "pap"
    WDC = "wdc"

    @property
    def is_input(self) -> bool:
        return self in (FileType.HEX, FileType.BIN)

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    FileType.HEX: "Intel HEX",
    FileType.BIN: "raw binary",
    FileType.PAP: "PAP",
    FileType.WDC: "WDC binary",
}


@dataclass
class FileSpec:
    """One file named on the command line together with its options."""

    path: Path
    file_type: FileType
    start_address: Optional[int] = None


@dataclass
class ConverterConfig:
    """Everything needed for one conversion run."""

    inputs: List[FileSpec] = field(default_factory=list)
    output: Optional[FileSpec] = None
    quiet: bool = False


def parse_address(text: str, description: str = "start address") -> int:
    """Parse ``text`` as decimal, ``0x``-prefixed hex or ``$``-prefixed hex."""

    value_text = text.strip()
    try:
        if value_text.startswith("$"):
            value = int(value_text[1:], 16)
        elif value_text[:2].lower() == "0x":
            value = int(value_text[2:], 16)
        else:
            value = int(value_text, 10)
    except ValueError:
        raise InvalidArgumentsError(f'Invalid or unspecified {description}: "{text}"') from None
    if not 0 <= value <= 0xFFFFFFFF:
        raise InvalidArgumentsError(f'Invalid {description}: "{text}"')
    return value


def parse_file_argument(text: str, file_type: FileType) -> FileSpec:
    """Split ``NAME[,OPT...]`` and validate the options for ``file_type``."""

    name, *options = text.split(",")
    if not name:
        raise InvalidArgumentsError("Missing file name")
    spec = FileSpec(Path(name), file_type)

    for option in options:
        if file_type is FileType.BIN and option.startswith("A="):
            spec.start_address = parse_address(option[2:])
        else:
            raise InvalidArgumentsError(f'Invalid {file_type.description} file option: "{option}"')

    if file_type is FileType.BIN and spec.start_address is None:
        raise InvalidArgumentsError("Missing start address (A=<ADDR>)")
    return spec


class Converter:
    """Runs one conversion described by a :class:`ConverterConfig`."""

    def __init__(self, config: ConverterConfig, stream: TextIO | None = None) -> None:
        if not config.inputs:
            raise InvalidArgumentsError("At least one input file must be specified")
        if config.output is None:
            raise InvalidArgumentsError("An output file must be specified")
        self._config = config
        self._stream = stream if stream is not None else sys.stdout
        self.program = ProgramImage()

    def run(self) -> ProgramImage:
        try:
            for spec in self._config.inputs:
                self.load_input(spec)
            self.report_ranges()
            self.write_output()
        except MemoryError as exc:
            raise OutOfMemoryError("Out of memory") from exc
        return self.program

    def load_input(self, spec: FileSpec) -> None:
        if not spec.file_type.is_input:
            raise InvalidArgumentsError(f"Invalid input file type: {spec.file_type.value}")
        if spec.file_type is FileType.BIN and spec.start_address is None:
            raise InvalidArgumentsError("Missing start address (A=<ADDR>)")

        try:
            if spec.file_type is FileType.HEX:
                self._emit(f'Loading "{spec.path}" as an Intel HEX file.')
                load_intel_hex_from_path(spec.path, self.program)
            else:
                self._emit(f'Loading "{spec.path}" as a raw binary file, addr=0x{spec.start_address:X}.')
                load_binary_from_path(spec.path, self.program, spec.start_address)
        except OSError as exc:
            raise CannotOpenFileError(f'Unable to open the input file "{spec.path}": {exc.strerror or exc}') from exc

        self.program.add_source(str(spec.path))
        merged = self.program.address_space.combine_adjacent()
        debug_log(
            CATEGORY_CONVERT,
            "loaded=%s ranges=%d merged=%d bytes=%d",
            spec.path,
            len(self.program.address_space),
            merged,
            self.program.address_space.data_bytes,
        )

    def report_ranges(self) -> None:
        self._emit("")
        self._emit("Ranges:")
        for rng in self.program.address_space:
            self._emit(f"0x{rng.start:04X} - 0x{rng.end:04X}: {rng.length} bytes.")
        if self.program.start_address is not None:
            self._emit(f"Start address: 0x{self.program.start_address:04X}.")

    def write_output(self) -> None:
        spec = self._config.output
        assert spec is not None
        self._emit("")
        self._emit(f'Writing "{spec.path}"...')

        if spec.file_type is FileType.PAP:
            writer = write_pap_to_path
        elif spec.file_type is FileType.WDC:
            writer = write_wdc_to_path
        else:
            raise InvalidArgumentsError(f"Invalid output file type: {spec.file_type.value}")

        writer(spec.path, self.program.address_space)
        self._emit(f"File written as {spec.file_type.description} file.")

    def _emit(self, message: str) -> None:
        if not self._config.quiet:
            print(message, file=self._stream)
