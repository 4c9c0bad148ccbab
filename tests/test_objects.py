import pytest

from tracesim.defines import AllocationType, Color
from tracesim.objects import ArrayRecord, HeapObject, PointerSlotError


def make(obj_id=1, pointers=3, address=100):
    return HeapObject(obj_id, address, 64, pointers, "Foo")


def test_new_object_has_empty_slots_and_defaults():
    obj = make()
    assert obj.slots == (None, None, None)
    assert obj.generation == 0
    assert obj.reference_count == 0
    assert obj.color is Color.BLACK
    assert obj.allocation_type is AllocationType.OBJECT
    assert obj.forwarded_pointer == obj.address


def test_set_pointer_round_trip():
    parent, child = make(1), make(2)
    parent.set_pointer(2, child)
    assert parent.reference_to(2) is child
    assert parent.reference_to(0) is None


def test_set_pointer_none_clears():
    parent, child = make(1), make(2)
    parent.set_pointer(1, child)
    parent.set_pointer(1, None)
    assert parent.reference_to(1) is None


def test_set_pointer_out_of_range():
    parent = make(pointers=2)
    with pytest.raises(PointerSlotError):
        parent.set_pointer(2, make(2))


def test_reference_to_out_of_range():
    obj = make(pointers=0)
    with pytest.raises(PointerSlotError):
        obj.reference_to(0)


def test_negative_slot_rejected():
    with pytest.raises(IndexError):
        make().set_pointer(-1, None)


def test_reference_count_changes():
    obj = make()
    obj.increase_reference_count()
    obj.increase_reference_count()
    obj.decrease_reference_count()
    assert obj.reference_count == 1


def test_pointers_survive_address_change():
    parent, child = make(1), make(2)
    parent.set_pointer(0, child)
    parent.address = 900
    assert parent.reference_to(0) is child


def test_objects_compare_by_identity():
    target = make(1)
    assert [make(1), target].index(target) == 1
    assert [target, make(1)].index(target) == 0


def test_array_record_fields():
    rec = ArrayRecord(7, 200, 48, 4, "[I")
    assert (rec.id, rec.size, rec.number_of_pointers, rec.class_name) == (7, 48, 4, "[I")