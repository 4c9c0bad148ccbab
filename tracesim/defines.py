"""Simulator-wide constants and the enumerations used for configuration."""

from __future__ import annotations

from enum import IntEnum

TRACEFILESIM_VERSION = 500000

NUM_THREADS = 50
ROOTSET_SIZE = 50
VISUALIZE_GCS = 1
OBJECT_HEADER_SIZE = 16
MAGNITUDE_CONVERSION = 1024

DEBUG_MODE = 0
WRITE_DETAILED_LOG = 0
WRITE_HEAPMAP = 0
WRITE_ALLOCATION_INFO = 0
FINAL_GC = 0

# Generational collection
GENERATIONS = 1
GEN_DEBUG = 0
GENRATIO = 0.3
PROMOTIONAGE = 3
PROMOTIONAGEFACTOR = 0
SHIFTING = 1
SHIFTINGFACTOR = 2

ZOMBIE = 0

# Balanced collector
MINREGIONSIZE = 2000
REGIONEXPONENT = 1
MINREGIONS = 1024
MAXREGIONS = 2047
EDENREGIONS = 25
MAXREGIONAGE = 23
DEAD_SPACE = 1
DEAD_SPACE_THRESHOLD = 10

HIER_DEPTH_DEFAULT = 2

MAX64BIT = 0xFFFFFFFFFFFFFFFF
MAX32BIT = 0xFFFFFFFF
MAX16BIT = 0xFFFF
MAX8BIT = 0xFF


def version_string(version: int) -> str:
    """Render an encoded version number as ``major.minor.patch``."""
    major = version // 100000
    minor = (version // 100) % 1000
    patch = version % 100
    return f"{major}.{minor}.{patch}"


def _lookup(options: dict, kind: str, name: str):
    try:
        return options[name]
    except KeyError:
        raise ValueError(f"unknown {kind}: {name!r}") from None


class AllocationType(IntEnum):
    OBJECT = 0
    CONTIGUOUS_INDEXABLE = 1
    DISCONTIGUOUS_INDEXABLE = 2


class TraversalKind(IntEnum):
    BREADTH_FIRST = 0
    DEPTH_FIRST = 1
    HIERARCHICAL = 2

    @property
    def label(self) -> str:
        """Name shown in logs; anything but breadth-first reads as depth-first."""
        return "breadthFirst" if self is TraversalKind.BREADTH_FIRST else "depthFirst"

    @classmethod
    def from_option(cls, name: str) -> "TraversalKind":
        return _lookup(_TRAVERSAL_OPTIONS, "traversal", name)


class CollectorKind(IntEnum):
    MARK_SWEEP = 0
    TRAVERSAL = 1
    RECYCLER = 2
    BALANCED = 3
    MARK_SWEEP_TB = 4

    @property
    def label(self) -> str:
        return _COLLECTOR_LABELS[self]

    @classmethod
    def from_option(cls, name: str) -> "CollectorKind":
        return _lookup(_COLLECTOR_OPTIONS, "collector", name)


class AllocatorKind(IntEnum):
    BASIC = 0
    NEXT_FIT = 1
    REGION_BASED = 2
    THREAD_BASED = 3

    @property
    def label(self) -> str:
        return _ALLOCATOR_LABELS[self]

    @classmethod
    def from_option(cls, name: str) -> "AllocatorKind":
        return _lookup(_ALLOCATOR_OPTIONS, "allocator", name)


class WriteBarrierKind(IntEnum):
    RECYCLER = 0
    REFERENCE_COUNTING = 1
    DISABLED = 2

    @property
    def label(self) -> str:
        return _WRITEBARRIER_LABELS[self]

    @classmethod
    def from_option(cls, name: str) -> "WriteBarrierKind":
        return _lookup(_WRITEBARRIER_OPTIONS, "write barrier", name)


class GCReason(IntEnum):
    STATISTICS = 0
    FAILED_ALLOC = 1
    HIGH_WATERMARK = 2
    DEBUG = 3
    SHIFT = 4
    EVAL = 5
    FORCED = 6


class Color(IntEnum):
    BLACK = 1
    GREY = 2
    PURPLE = 3
    WHITE = 4


_TRAVERSAL_OPTIONS = {
    "breadthFirst": TraversalKind.BREADTH_FIRST,
    "depthFirst": TraversalKind.DEPTH_FIRST,
}

_COLLECTOR_LABELS = {
    CollectorKind.MARK_SWEEP: "markSweep",
    CollectorKind.TRAVERSAL: "traversal",
    CollectorKind.RECYCLER: "recycler",
    CollectorKind.BALANCED: "balanced",
    CollectorKind.MARK_SWEEP_TB: "mark-sweep (thread-based)",
}

_COLLECTOR_OPTIONS = {
    "markSweep": CollectorKind.MARK_SWEEP,
    "traversal": CollectorKind.TRAVERSAL,
    "recycler": CollectorKind.RECYCLER,
    "balanced": CollectorKind.BALANCED,
    "markSweepTB": CollectorKind.MARK_SWEEP_TB,
}

_ALLOCATOR_LABELS = {
    AllocatorKind.BASIC: "basic",
    AllocatorKind.NEXT_FIT: "nextFit",
    AllocatorKind.REGION_BASED: "regionBased",
    AllocatorKind.THREAD_BASED: "threadBased",
}

_ALLOCATOR_OPTIONS = {label: kind for kind, label in _ALLOCATOR_LABELS.items()}

_WRITEBARRIER_LABELS = {
    WriteBarrierKind.RECYCLER: "recycler",
    WriteBarrierKind.REFERENCE_COUNTING: "referenceCounting",
    WriteBarrierKind.DISABLED: "disabled",
}

_WRITEBARRIER_OPTIONS = {label: kind for kind, label in _WRITEBARRIER_LABELS.items()}