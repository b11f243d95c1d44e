"""Writers for the supported output file formats."""

from __future__ import annotations

from .pap import (
    PAP_RECORD_LENGTH,
    encode_end_record,
    encode_record,
    iter_records,
    write_pap,
    write_pap_to_path,
)
from .wdc import write_wdc, write_wdc_to_path

__all__ = [
    "PAP_RECORD_LENGTH",
    "encode_end_record",
    "encode_record",
    "iter_records",
    "write_pap",
    "write_pap_to_path",
    "write_wdc",
    "write_wdc_to_path",
]
