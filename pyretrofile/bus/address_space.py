"""Sparse address space assembled from decoded file regions.

Loaders hand over one :class:`Region` per decoded data unit. The
:class:`AddressSpace` groups regions into :class:`Range` objects, each of
which covers a maximal gap-free interval, and keeps the ranges sorted by
start address. Overlapping data is always an error; there is no precedence
between files.
"""

from __future__ import annotations

import itertools
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Iterator, List

from pyretrofile.errors import InvalidDataError, OverlappingSegmentError
from pyretrofile.utils import CATEGORY_BUS, debug_log

ADDRESS_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class Region:
    """Contiguous run of bytes starting at ``start``."""

    start: int
    data: bytes

    def __post_init__(self) -> None:
        if not 0 <= self.start <= ADDRESS_MASK or self.end > ADDRESS_MASK:
            raise InvalidDataError(
                f"region {self.start:#x}+{len(self.data)} outside 32-bit address space"
            )

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        """Inclusive end address."""

        return self.start + len(self.data) - 1


@dataclass
class Range:
    """Maximal contiguous interval made of one or more regions."""

    start: int
    length: int
    regions: List[Region] = field(default_factory=list)

    @classmethod
    def from_region(cls, region: Region) -> "Range":
        return cls(region.start, region.length, [region])

    @property
    def end(self) -> int:
        """Inclusive end address."""

        return self.start + self.length - 1

    def overlaps(self, start: int, end: int) -> bool:
        return start <= self.end and self.start <= end

    def prepend(self, region: Region) -> None:
        self.start = region.start
        self.length += region.length
        self.regions.insert(0, region)

    def append(self, region: Region) -> None:
        self.length += region.length
        self.regions.append(region)

    def absorb(self, other: "Range") -> None:
        """Take over the regions of ``other``, which must start right after us."""

        self.length += other.length
        self.regions.extend(other.regions)
        other.regions = []

    def iter_bytes(self) -> Iterator[int]:
        return itertools.chain.from_iterable(region.data for region in self.regions)

    def data(self) -> bytes:
        return b"".join(region.data for region in self.regions)


class AddressSpace:
    """Address-ordered collection of disjoint ranges."""

    def __init__(self) -> None:
        self._ranges: list[Range] = []
        self._data_bytes = 0

    def __iter__(self) -> Iterator[Range]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    @property
    def ranges(self) -> tuple[Range, ...]:
        return tuple(self._ranges)

    @property
    def data_bytes(self) -> int:
        return self._data_bytes

    def insert(self, region: Region) -> None:
        """Add ``region``, extending a bordering range when there is one.

        Raises :class:`OverlappingSegmentError` if the region intersects any
        loaded range; the space is left untouched in that case.
        """

        if region.length == 0:
            return

        start = region.start
        end = region.end

        for rng in self._ranges:
            if rng.overlaps(start, end):
                debug_log(
                    CATEGORY_BUS,
                    "overlap region=%08X-%08X range=%08X-%08X",
                    start,
                    end,
                    rng.start,
                    rng.end,
                )
                raise OverlappingSegmentError(
                    f"segment {start:#06x}-{end:#06x} overlaps previously loaded data "
                    f"at {rng.start:#06x}-{rng.end:#06x}"
                )

        self._data_bytes += region.length

        for rng in self._ranges:
            if end + 1 == rng.start:
                rng.prepend(region)
                debug_log(CATEGORY_BUS, "prepend region=%08X len=%d range=%08X", start, region.length, rng.start)
                return
            if rng.end + 1 == start:
                rng.append(region)
                debug_log(CATEGORY_BUS, "append region=%08X len=%d range=%08X", start, region.length, rng.start)
                return

        index = bisect_left([rng.start for rng in self._ranges], start)
        self._ranges.insert(index, Range.from_region(region))
        debug_log(CATEGORY_BUS, "new range=%08X len=%d index=%d", start, region.length, index)

    def combine_adjacent(self) -> int:
        """Merge ranges that have grown to touch each other.

        Returns the number of ranges absorbed into a predecessor.
        """

        merged = 0
        index = 0
        while index + 1 < len(self._ranges):
            current = self._ranges[index]
            following = self._ranges[index + 1]
            if current.end + 1 == following.start:
                current.absorb(following)
                del self._ranges[index + 1]
                merged += 1
            else:
                index += 1
        if merged:
            debug_log(CATEGORY_BUS, "combined=%d ranges=%d", merged, len(self._ranges))
        return merged
