"""Program image shared by the loaders and writers of one conversion run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pyretrofile.bus import AddressSpace


@dataclass
class ProgramImage:
    """Holds the assembled address space alongside metadata from the inputs."""

    address_space: AddressSpace = field(default_factory=AddressSpace)
    start_address: Optional[int] = None
    sources: List[str] = field(default_factory=list)

    def add_source(self, name: str) -> None:
        self.sources.append(name)
