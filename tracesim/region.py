"""Region metadata for region-based heaps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(eq=False)
class Region:
    """A fixed-size area of a region-based heap and its bookkeeping."""

    address: Any
    size: int
    heap_address: Any = None
    num_obj: int = 0
    age: int = 0
    is_leaf: bool = False
    associated_spine: Optional[Any] = None
    curr_free: int = field(init=False)
    curr_free_addr: Any = field(init=False)
    remset: set = field(default_factory=set)
    spine_remset: set = field(default_factory=set)

    def __post_init__(self) -> None:
        self.curr_free = self.size
        self.curr_free_addr = self.address

    def reset(self) -> None:
        """Return the region to its empty state; the leaf marking is kept."""
        self.num_obj = 0
        self.curr_free_addr = self.address
        self.curr_free = self.size
        self.age = 0
        self.remset.clear()
        self.spine_remset.clear()

    def increment_object_count(self) -> None:
        self.num_obj += 1

    def insert_object_reference(self, address: Any) -> None:
        """Remember that an object at ``address`` refers into this region."""
        self.remset.add(address)

    def erase_object_reference(self, address: Any) -> None:
        """Forget a remembered reference; raises KeyError if it is absent."""
        self.remset.remove(address)