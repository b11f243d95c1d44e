"""Address-space assembly for the retro file conversion tool."""

from .address_space import AddressSpace, Range, Region

__all__ = [
    "AddressSpace",
    "Range",
    "Region",
]
