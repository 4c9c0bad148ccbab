"""Write barriers that keep reference counts up to date on pointer stores."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Protocol

from .defines import Color
from .objects import HeapObject

log = logging.getLogger(__name__)


class _Collector(Protocol):
    def free_object(self, obj: HeapObject) -> None: ...

    def add_candidate(self, obj: HeapObject) -> None: ...

    def candidates_not_contain_obj(self, obj: HeapObject) -> bool: ...

    def add_dead_object_locked(self, obj: HeapObject) -> None: ...


class WriteBarrier(ABC):
    """Reacts to a reference changing from ``old_child`` to ``child``."""

    def __init__(self, collector: Optional[_Collector] = None) -> None:
        self.collector = collector

    def _backup(self) -> _Collector:
        if self.collector is None:
            raise RuntimeError("write barrier has no collector attached")
        return self.collector

    @abstractmethod
    def process(self, old_child: Optional[HeapObject], child: Optional[HeapObject]) -> None:
        """Account for a reference moving from ``old_child`` to ``child``."""

    @abstractmethod
    def already_dead_object(self, obj: Optional[HeapObject]) -> None:
        """Handle an object whose count dropped to zero earlier."""


def _children(obj: HeapObject):
    return (obj.reference_to(slot) for slot in range(obj.pointers_max))


class RecyclerWriteBarrier(WriteBarrier):
    """Reference counting with cycle candidates handed to the collector."""

    def process(self, old_child, child):
        if child is not None:
            child.increase_reference_count()
            child.color = Color.BLACK
        if old_child is not None:
            self._delete_reference(old_child)

    def _delete_reference(self, obj: HeapObject) -> None:
        obj.decrease_reference_count()
        if obj.reference_count == 0:
            self._release(obj)
        else:
            self._candidate(obj)

    def _release(self, obj: HeapObject) -> None:
        collector = self._backup()
        stack = [(obj, _children(obj))]
        while stack:
            node, children = stack[-1]
            child = next(children, StopIteration)
            if child is StopIteration:
                stack.pop()
                node.color = Color.BLACK
                if collector.candidates_not_contain_obj(node):
                    collector.free_object(node)
            elif child is not None:
                child.decrease_reference_count()
                if child.reference_count == 0:
                    stack.append((child, _children(child)))
                else:
                    self._candidate(child)

    def _candidate(self, obj: HeapObject) -> None:
        if obj.color != Color.PURPLE:
            obj.color = Color.PURPLE
            self._backup().add_candidate(obj)

    def already_dead_object(self, obj):
        if obj is not None:
            log.warning("dead-object handling is not available for the recycler")


class ReferenceCountingWriteBarrier(WriteBarrier):
    """Plain reference counting; frees objects once no reference is left.

    While ``lock_number`` is non-zero the trace is inside a locked section
    and objects whose count reaches zero are parked with the collector.
    """

    def __init__(self, collector: Optional[_Collector] = None, lock_number: int = 0) -> None:
        super().__init__(collector)
        self.lock_number = lock_number

    def process(self, old_child, child):
        if child is not None:
            child.increase_reference_count()
        if old_child is not None:
            old_child.decrease_reference_count()
            self._settle(old_child)

    def already_dead_object(self, obj):
        if obj is not None:
            self._settle(obj)

    def _settle(self, obj: HeapObject) -> None:
        """Free ``obj`` and everything only it kept alive, if its count is zero."""
        if obj.reference_count != 0:
            return
        collector = self._backup()
        if self.lock_number != 0:
            collector.add_dead_object_locked(obj)
            return
        stack = [(obj, _children(obj))]
        while stack:
            node, children = stack[-1]
            child = next(children, StopIteration)
            if child is StopIteration:
                stack.pop()
                collector.free_object(node)
            elif child is not None:
                child.decrease_reference_count()
                if child.reference_count == 0:
                    if self.lock_number == 0:
                        stack.append((child, _children(child)))
                    else:
                        collector.add_dead_object_locked(child)