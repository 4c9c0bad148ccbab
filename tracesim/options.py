"""Command-line options of the simulator and the log names derived from them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from .defines import (
    FINAL_GC,
    MAGNITUDE_CONVERSION,
    TRACEFILESIM_VERSION,
    AllocatorKind,
    CollectorKind,
    TraversalKind,
    WriteBarrierKind,
    version_string,
)

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_WATERMARK = 90
DEFAULT_HEAP_SIZE = 350000
DEFAULT_TRAVERSAL_HEAP_SIZE = 600000

USAGE = (
    "Usage: TraceFileSimulator traceFile [OPTIONS]\n"
    "Options:\n"
    "  --watermark x, -w x        uses x percent as the high watermark (default: 90)\n"
    "  --heapsize x,  -h x        uses x bytes for the heap size "
    "(default: Traversal-600000, markSweep-350000)\n"
    "  --maxheapsize x, -m x      uses x bytes for the maximum heap size (default: heapsize)\n"
    "  --collector x, -c x        uses x as the garbage collector "
    "(valid: markSweep, traversal, recycler, balanced, default: traversal)\n"
    "  --traversal x, -t x        uses x as the traversal algorithm "
    "(valid: breadthFirst depthFirst, default: breadthFirst)\n"
    "  --allocator x, -a x        uses x as the allocator "
    "(valid: basic, nextFit, regionBased, threadBased, default: nextFit)\n"
    "  --writebarrier x, -wb x    uses x as the write Barrier "
    "(valid: referenceCounting, recycler, disabled, default: disabled)\n"
    "  --finalGC x, -fGC x        uses x as the final GC (valid: disabled, enabled, default: disabled)\n"
    "  --logLocation x, -l x      uses x as the filename to print the log file "
    "(default: trace file's location and name)\n"
    "  --directory x, -d x        uses x as the location to print the log file "
    "(default: trace file's location and name)\n"
)

_STRTOUL = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_MULTIPLIERS = {
    "k": MAGNITUDE_CONVERSION,
    "m": MAGNITUDE_CONVERSION ** 2,
    "g": MAGNITUDE_CONVERSION ** 3,
}

_STATE_LABELS = {True: "enabled", False: "disabled"}


class OptionError(ValueError):
    """Raised when the command line cannot be used."""


def _leading_unsigned(text: str) -> int:
    """Read the leading integer of ``text`` in C notation (hex, octal, decimal)."""
    match = _STRTOUL.match(text)
    if not match:
        return 0
    sign, digits = match.groups()
    if sign == "-":
        raise OptionError(f"size must not be negative: {text!r}")
    if digits[:2].lower() == "0x":
        return int(digits, 16)
    if len(digits) > 1 and digits[0] == "0":
        return int(digits, 8)
    return int(digits)


def parse_heap_size(text: str) -> int:
    """Parse a byte count such as ``4096``, ``512K``, ``2MB`` or ``1g``."""
    if not text:
        raise OptionError("empty heap size")
    if text[-1].isdigit():
        return _leading_unsigned(text)
    suffix = text[-1]
    if suffix in "Bb" and len(text) >= 2:
        suffix = text[-2]
    return _leading_unsigned(text) * _MULTIPLIERS.get(suffix.lower(), 1)


def global_file_name(path: str) -> str:
    """The trace file's name without directories and without ``.trace``."""
    name = re.split(r"[/\\]", path)[-1]
    return name.partition(".trace")[0]


def default_log_directory(path: str) -> str:
    """The directory part of ``path`` with its trailing separator, or ``./``."""
    cut = max(path.rfind("/"), path.rfind("\\"))
    if cut < 0:
        return "./"
    return path[: cut + 1]


def log_file_name(custom_log: str, global_name: str, forced: bool) -> str:
    """Name of the main log file, ending in ``log``."""
    if custom_log:
        return custom_log if custom_log.endswith("log") else custom_log + ".log"
    if forced:
        return global_name + "Forced.log"
    return global_name + ".log"


@dataclass
class SimulatorOptions:
    """Everything the command line configures for one simulation run."""

    trace_file: str
    heap_size: int = DEFAULT_TRAVERSAL_HEAP_SIZE
    max_heap_size: int = DEFAULT_TRAVERSAL_HEAP_SIZE
    watermark: int = DEFAULT_WATERMARK
    collector: CollectorKind = CollectorKind.TRAVERSAL
    traversal: TraversalKind = TraversalKind.BREADTH_FIRST
    allocator: AllocatorKind = AllocatorKind.NEXT_FIT
    write_barrier: WriteBarrierKind = WriteBarrierKind.DISABLED
    final_gc: bool = bool(FINAL_GC)
    force_gc: bool = False
    catch_zombies: bool = False
    count_roots: bool = False
    count_traversal_depth: bool = False
    locking_stats: bool = False
    log_directory: str = ""
    custom_log: str = ""
    log_identifier: Optional[int] = None

    @property
    def global_name(self) -> str:
        return global_file_name(self.trace_file)

    @property
    def log_name(self) -> str:
        return log_file_name(self.custom_log, self.global_name, self.force_gc)

    @property
    def balanced_log_name(self) -> str:
        return "Balanced" + self.log_name

    @property
    def resolved_log_directory(self) -> str:
        return self.log_directory or default_log_directory(self.trace_file)

    @property
    def log_path(self) -> str:
        return self.resolved_log_directory + self.log_name

    @property
    def balanced_log_path(self) -> str:
        return self.resolved_log_directory + self.balanced_log_name


def _value_of(args: Sequence[str], names: tuple[str, ...]) -> Optional[str]:
    """The argument following the first occurrence of one of ``names``."""
    for index, arg in enumerate(args):
        if arg in names:
            if index + 1 >= len(args):
                raise OptionError(f"option {arg} needs a value")
            return args[index + 1]
    return None


def _choice(args: Sequence[str], names: tuple[str, ...],
            convert: Callable[[str], T], default: T) -> T:
    value = _value_of(args, names)
    if value is None:
        return default
    try:
        return convert(value)
    except ValueError:
        log.warning("ignoring invalid value %r for %s", value, names[0])
        return default


def _switch(value: str) -> bool:
    if value == "enabled":
        return True
    if value == "disabled":
        return False
    raise ValueError(value)


def _watermark(value: str) -> int:
    return int(value)


def parse_args(argv: Sequence[str]) -> SimulatorOptions:
    """Build the options from ``argv``: the trace file followed by options."""
    args = list(argv)
    if not args:
        raise OptionError(USAGE)

    collector = _choice(args, ("--collector", "-c"), CollectorKind.from_option,
                        CollectorKind.TRAVERSAL)

    heap_text = _value_of(args, ("--heapsize", "-h"))
    heap_size = parse_heap_size(heap_text) if heap_text is not None else 0
    if heap_size == 0:
        heap_size = (DEFAULT_TRAVERSAL_HEAP_SIZE if collector == CollectorKind.TRAVERSAL
                     else DEFAULT_HEAP_SIZE)

    max_text = _value_of(args, ("--maxheapsize", "-m"))
    max_heap_size = parse_heap_size(max_text) if max_text is not None else 0
    if max_heap_size == 0 or max_heap_size < heap_size:
        max_heap_size = heap_size

    custom_log = _value_of(args, ("--logLocation", "-l")) or ""
    if "/" in custom_log or "\\" in custom_log:
        raise OptionError(
            "File name is a path, use the -d /path/to/directory option "
            "to specify a directory for log files."
        )

    identifier = _value_of(args, ("--logIdentifier", "-li"))

    return SimulatorOptions(
        trace_file=args[0],
        heap_size=heap_size,
        max_heap_size=max_heap_size,
        watermark=_choice(args, ("--watermark", "-w"), _watermark, DEFAULT_WATERMARK),
        collector=collector,
        traversal=_choice(args, ("--traversal", "-t"), TraversalKind.from_option,
                          TraversalKind.BREADTH_FIRST),
        allocator=_choice(args, ("--allocator", "-a"), AllocatorKind.from_option,
                          AllocatorKind.NEXT_FIT),
        write_barrier=_choice(args, ("--writebarrier", "-wb"), WriteBarrierKind.from_option,
                              WriteBarrierKind.DISABLED),
        final_gc=_choice(args, ("--finalGC", "-fGC"), _switch, bool(FINAL_GC)),
        force_gc=any(arg in ("--force", "-f") for arg in args),
        catch_zombies=_choice(args, ("--catchZombies", "-cZ"), _switch, False),
        count_roots=_choice(args, ("--countRoots", "-cr"), _switch, False),
        count_traversal_depth=_choice(args, ("--countTraversalDepth", "-ctd"), _switch, False),
        locking_stats=_choice(args, ("--printLockingStats", "-pls"), _switch, False),
        log_directory=_value_of(args, ("--directory", "-d")) or "",
        custom_log=custom_log,
        log_identifier=_choice(args, ("--logIdentifier", "-li"), int, None)
        if identifier is not None else None,
    )


def describe(options: SimulatorOptions) -> str:
    """The configuration block that opens a simulation log."""
    split = " (split heap)" if options.collector == CollectorKind.TRAVERSAL else ""
    lines = [
        f"TraceFileSimulator Version: {version_string(TRACEFILESIM_VERSION)}",
        f"Collector: {options.collector.label}",
        f"Traversal: {options.traversal.label}",
        f"Allocator: {options.allocator.label}",
        f"Heapsize: {options.heap_size}{split}",
        f"MaximumHeapsize: {options.max_heap_size}",
        f"WriteBarrier: {options.write_barrier.label}",
        f"Final GC: {_STATE_LABELS[bool(options.final_gc)]}",
        f"CatchZombies: {_STATE_LABELS[bool(options.catch_zombies)]}",
        f"LockingStats: {_STATE_LABELS[bool(options.locking_stats)]}",
        f"CountTraversalDepth: {_STATE_LABELS[bool(options.count_traversal_depth)]}",
        f"Watermark: {options.watermark}",
    ]
    return "\n".join(lines) + "\n\n"