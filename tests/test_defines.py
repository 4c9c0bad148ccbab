import pytest

from tracesim.defines import (
    AllocationType,
    AllocatorKind,
    Color,
    CollectorKind,
    GCReason,
    TRACEFILESIM_VERSION,
    TraversalKind,
    WriteBarrierKind,
    version_string,
)


def test_version_string_of_current_version():
    assert version_string(TRACEFILESIM_VERSION) == "5.0.0"


def test_version_string_splits_fields():
    assert version_string(100000 * 2 + 100 * 13 + 7) == "2.13.7"


def test_enum_values_fixed_by_format():
    assert CollectorKind.from_option("balanced") == 3
    assert AllocatorKind.from_option("threadBased") == 3
    assert WriteBarrierKind.from_option("disabled") == 2
    assert GCReason(6).name == "FORCED"
    assert AllocationType(2).name == "DISCONTIGUOUS_INDEXABLE"
    assert Color(3).name == "PURPLE"


def test_collector_labels():
    assert CollectorKind.from_option("markSweepTB").label == "mark-sweep (thread-based)"
    assert CollectorKind.from_option("traversal").label == "traversal"


@pytest.mark.parametrize("kind", list(CollectorKind))
def test_collector_option_round_trip(kind):
    name = {
        CollectorKind.MARK_SWEEP: "markSweep",
        CollectorKind.TRAVERSAL: "traversal",
        CollectorKind.RECYCLER: "recycler",
        CollectorKind.BALANCED: "balanced",
        CollectorKind.MARK_SWEEP_TB: "markSweepTB",
    }[kind]
    assert CollectorKind.from_option(name) is kind


@pytest.mark.parametrize("kind", list(AllocatorKind))
def test_allocator_option_round_trip(kind):
    assert AllocatorKind.from_option(kind.label) is kind


@pytest.mark.parametrize("kind", list(WriteBarrierKind))
def test_writebarrier_option_round_trip(kind):
    assert WriteBarrierKind.from_option(kind.label) is kind


def test_traversal_options_and_labels():
    assert TraversalKind.from_option("breadthFirst") is TraversalKind.BREADTH_FIRST
    assert TraversalKind.from_option("depthFirst") is TraversalKind.DEPTH_FIRST
    assert TraversalKind.HIERARCHICAL.label == "depthFirst"


@pytest.mark.parametrize(
    "enum_cls", [CollectorKind, AllocatorKind, WriteBarrierKind, TraversalKind]
)
def test_unknown_option_raises(enum_cls):
    with pytest.raises(ValueError):
        enum_cls.from_option("nonsense")


def test_hierarchical_is_not_selectable():
    with pytest.raises(ValueError):
        TraversalKind.from_option("hierarchical")