"""Bookkeeping of live objects, root sets, remembered sets and static fields."""

from __future__ import annotations

import logging
from typing import Optional

from .defines import NUM_THREADS
from .objects import HeapObject

log = logging.getLogger(__name__)

# Arraylet leaves carry this id and are never entered in the object map.
_LEAF_ID = -1


class ObjectNotFoundError(LookupError):
    """Raised when an object that must exist is missing."""


class ObjectContainer:
    """Holds the objects of one generation together with their roots."""

    def __init__(self, threads: int = NUM_THREADS, catch_zombies: bool = False) -> None:
        self.catch_zombies = catch_zombies
        self._roots: list[dict[int, list[HeapObject]]] = [{} for _ in range(threads)]
        self._objects: dict[int, HeapObject] = {}
        self._rem_set: list[Optional[HeapObject]] = [None]
        self._statics: dict[int, dict[int, Optional[HeapObject]]] = {}
        self.root_count = 0
        self.rem_count = 0

    # -- object map -------------------------------------------------------

    def add(self, obj: HeapObject) -> None:
        """Register ``obj`` under its id, replacing any earlier entry."""
        self._objects[obj.id] = obj

    def get_by_id(self, object_id: int) -> Optional[HeapObject]:
        """Return the object with ``object_id``, or ``None`` if it is unknown."""
        obj = self._objects.get(object_id)
        if obj is None and not self.catch_zombies:
            log.warning("object with id %d was not found", object_id)
        return obj

    def delete_object(self, obj: Optional[HeapObject]) -> None:
        """Drop ``obj`` from the object map; arraylet leaves are ignored."""
        if obj is None:
            raise ObjectNotFoundError("trying to delete an object that doesn't exist")
        if obj.id == _LEAF_ID:
            return
        if self._objects.pop(obj.id, None) is None:
            raise ObjectNotFoundError(f"object to delete not found: id {obj.id}")

    def remove_reference_to(self, obj: HeapObject) -> bool:
        """Remove ``obj`` from the object map; False if it was not there."""
        if obj.id == _LEAF_ID:
            return True
        return self._objects.pop(obj.id, None) is not None

    def live_objects(self) -> list[HeapObject]:
        """All registered objects, ordered by id."""
        return [self._objects[key] for key in sorted(self._objects)]

    def count_elements(self) -> int:
        return len(self._objects)

    # -- root sets --------------------------------------------------------

    def add_to_root(self, obj: HeapObject, thread: int) -> None:
        """Make ``obj`` a root of ``thread``; a root may be added repeatedly."""
        if obj.id not in self._objects:
            self.add(obj)
        self._roots[thread].setdefault(obj.id, []).append(obj)
        self.root_count += 1

    def remove_from_root(self, thread: int, object_id: int) -> bool:
        """Remove one root entry for ``object_id``; False if there was none."""
        entries = self._roots[thread].get(object_id)
        self.root_count -= 1
        if not entries:
            return False
        entries.pop(0)
        if not entries:
            del self._roots[thread][object_id]
        return True

    def is_already_root(self, thread: int, object_id: int) -> bool:
        return object_id in self._roots[thread]

    def get_root(self, thread: int, object_id: int) -> Optional[HeapObject]:
        """Return the root object ``object_id`` of ``thread``, or ``None``."""
        entries = self._roots[thread].get(object_id)
        return entries[0] if entries else None

    def roots(self, thread: int) -> list[HeapObject]:
        """The roots of ``thread`` by id, followed by every static reference."""
        table = self._roots[thread]
        result = [obj for key in sorted(table) for obj in table[key]]
        result.extend(self.all_static_references())
        return result

    # -- remembered set ---------------------------------------------------

    def add_to_gen_root(self, obj: HeapObject) -> None:
        """Put ``obj`` in the first free remembered-set slot, growing the set."""
        try:
            slot = self._rem_set.index(None)
        except ValueError:
            slot = len(self._rem_set)
            self._rem_set.extend([None] * len(self._rem_set))
        self._rem_set[slot] = obj
        self.rem_count += 1

    def remove_from_gen_root(self, obj: HeapObject) -> bool:
        """Clear the first remembered-set slot holding ``obj``."""
        for slot, entry in enumerate(self._rem_set):
            if entry is obj:
                self._rem_set[slot] = None
                self.rem_count -= 1
                return True
        return False

    def gen_root(self, slot: int) -> Optional[HeapObject]:
        if not 0 <= slot < len(self._rem_set):
            raise IndexError(f"illegal remembered-set slot {slot}")
        return self._rem_set[slot]

    def gen_root_size(self) -> int:
        return len(self._rem_set)

    def clear_rem_set(self) -> None:
        self._rem_set = [None]
        self.rem_count = 0

    # -- static references ------------------------------------------------

    def set_static_reference(self, class_id: int, field_offset: int, object_id: int) -> None:
        """Point a static field at ``object_id``; id 0 stands for null."""
        target = self.get_by_id(object_id) if object_id != 0 else None
        self._statics.setdefault(class_id, {})[field_offset] = target

    def get_static_reference(self, class_id: int, field_offset: int) -> Optional[HeapObject]:
        return self._statics.get(class_id, {}).get(field_offset)

    def all_static_references(self) -> list[HeapObject]:
        """Non-null static references ordered by class id and field offset."""
        return [
            fields[offset]
            for class_id in sorted(self._statics)
            for fields in (self._statics[class_id],)
            for offset in sorted(fields)
            if fields[offset] is not None
        ]