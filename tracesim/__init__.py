"""Building blocks for trace-driven simulation of garbage-collected heaps."""

__version__ = "5.0.0"

__all__ = [
    "barriers",
    "container",
    "defines",
    "locking",
    "objects",
    "options",
    "region",
    "tracefile",
]