"""Metadata records for simulated heap objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .defines import AllocationType, Color


class PointerSlotError(IndexError):
    """Raised when a pointer slot outside an object's slots is used."""


@dataclass
class ArrayRecord:
    """Descriptor of an allocated array."""

    id: int
    address: Any
    size: int
    number_of_pointers: int
    class_name: str


@dataclass(eq=False)
class HeapObject:
    """An object living in the simulated heap, with its reference slots."""

    id: int
    address: Any
    size: int
    pointers_max: int
    class_name: str
    allocation_type: AllocationType = AllocationType.OBJECT
    generation: int = 0
    age: int = 0
    visited: bool = False
    depth: int = 0
    forwarded: bool = False
    forwarded_pointer: Any = None
    reference_count: int = 0
    color: Color = Color.BLACK
    _slots: list = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._slots = [None] * self.pointers_max
        if self.forwarded_pointer is None:
            self.forwarded_pointer = self.address

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < self.pointers_max:
            raise PointerSlotError(
                f"object {self.id}: slot {slot} outside 0..{self.pointers_max - 1}"
            )

    @property
    def slots(self) -> tuple:
        """The current targets of all slots, ``None`` for empty ones."""
        return tuple(self._slots)

    def reference_to(self, slot: int) -> Optional["HeapObject"]:
        """Return the object referenced from ``slot``, or ``None``."""
        self._check_slot(slot)
        return self._slots[slot]

    def set_pointer(self, slot: int, target: Optional["HeapObject"]) -> None:
        """Point ``slot`` at ``target`` (``None`` clears it)."""
        self._check_slot(slot)
        self._slots[slot] = target

    def increase_reference_count(self) -> None:
        self.reference_count += 1

    def decrease_reference_count(self) -> None:
        self.reference_count -= 1