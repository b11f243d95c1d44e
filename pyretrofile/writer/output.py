"""Output file handling shared by the writers."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pyretrofile.errors import CannotOpenFileError, OutputError
from pyretrofile.utils import CATEGORY_CONVERT, debug_log


def open_output(path: Path) -> BinaryIO:
    try:
        return path.open("wb")
    except OSError as exc:
        raise CannotOpenFileError(f'Unable to open the output file "{path}": {exc.strerror or exc}') from exc


def finish_output(handle: BinaryIO) -> None:
    """Flush and close ``handle``; buffered data that cannot be stored is an I/O error."""

    try:
        handle.flush()
    except OSError as exc:
        debug_log(CATEGORY_CONVERT, "flush failed: %s", exc)
        _close_quietly(handle)
        raise OutputError(f"Error writing output file: {exc}") from exc
    try:
        handle.close()
    except OSError as exc:
        debug_log(CATEGORY_CONVERT, "close failed: %s", exc)
        raise OutputError(f"Error writing output file: {exc}") from exc


def abandon_output(handle: BinaryIO) -> None:
    """Close ``handle`` after a failed write, keeping whatever already reached the file."""

    _close_quietly(handle)


def _close_quietly(handle: BinaryIO) -> None:
    try:
        handle.close()
    except OSError as exc:
        # The buffered tail could not be stored either; the first failure is reported.
        debug_log(CATEGORY_CONVERT, "close after failure: %s", exc)
