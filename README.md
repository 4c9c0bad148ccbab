# tracesim

`tracesim` provides the building blocks for replaying allocation traces
recorded from a managed runtime and modelling a garbage-collected heap:
a trace-line parser, heap objects with pointer slots, per-thread root
sets, remembered sets, static (class field) references, heap regions,
reference-counting and recycler write barriers, lock-section bookkeeping,
and the simulator's command-line option syntax.

It is a library with no dependencies outside the standard library.

## What it does not do

The package holds no allocators, no garbage collectors and no memory
manager that ties the pieces together, and it has no command that runs a
trace from start to finish or writes log files. The write barriers call
out to a collector object that you supply (see below); `parse_args` and
`describe` build and render a configuration but do not act on it.

## Trace format

Each line starts with a one-character operation followed by
space-separated attributes, each a letter (or `#`) and a number:

| Operation | Meaning                                   |
|-----------|-------------------------------------------|
| `a`       | allocate an object into a root set        |
| `+`       | add an object to a thread's roots         |
| `-`       | remove an object from a thread's roots    |
| `w`       | write a pointer into an object slot       |
| `c`       | write a pointer into a class (static) field |
| `r`       | read an object                            |
| `s`       | store a primitive field                   |
| `x`       | lock (`L1`) or unlock (`L0`)              |
| `%`       | comment                                   |

Attributes: `T` thread, `O` object, `P` parent, `#` parent slot,
`S` size, `N` number of pointer slots, `C` class, `F` field offset,
`I` field index, `V` field type, `L` lock status. An unknown attribute
letter is logged and skipped; a value without leading digits reads as 0.

```
a T0 O1 S64 N2 C3
w T0 P1 #0 O2
- T0 O1
```

## Parsing traces

```python
from tracesim.tracefile import Operation, parse_trace_line, read_trace

line = parse_trace_line("a T0 O1 S64 N2 C3")
line.operation is Operation.ALLOCATE   # True
line.require("size")                   # 64; raises TraceParseError if absent

with open("program.trace") as stream:
    for entry in read_trace(stream):   # lines numbered from 1
        if entry.is_comment:
            continue
        ...
```

`TraceLine` fields absent from a line are `None`; `operation` is `None`
for comments and unknown operation characters.

## Objects, roots and static references

```python
from tracesim.container import ObjectContainer
from tracesim.objects import HeapObject

parent = HeapObject(id=1, address=None, size=64, pointers_max=2, class_name="Node")
child = HeapObject(id=2, address=None, size=32, pointers_max=0, class_name="Leaf")
parent.set_pointer(0, child)           # PointerSlotError for slots out of range

container = ObjectContainer()
container.add(child)
container.add_to_root(parent, thread=0)
container.set_static_reference(class_id=5, field_offset=0, object_id=2)

container.roots(0)                     # [parent, child]: roots by id, then statics
container.get_by_id(2)                 # child
container.delete_object(child)         # ObjectNotFoundError if not registered
```

`ObjectContainer` also keeps a remembered set (`add_to_gen_root`,
`remove_from_gen_root`, `gen_root`, `gen_root_size`, `clear_rem_set`).
Objects with id `-1` stand for arraylet leaves and are never entered in
the object map.

## Write barriers

`RecyclerWriteBarrier` and `ReferenceCountingWriteBarrier` update
reference counts when a reference changes from `old_child` to `child`.
They hand work to a collector object providing `free_object`,
`add_candidate`, `candidates_not_contain_obj` and `add_dead_object_locked`:

```python
from tracesim.barriers import ReferenceCountingWriteBarrier

class Collector:
    def __init__(self):
        self.freed = []
    def free_object(self, obj):
        self.freed.append(obj.id)
    def add_candidate(self, obj):
        pass
    def candidates_not_contain_obj(self, obj):
        return True
    def add_dead_object_locked(self, obj):
        pass

collector = Collector()
barrier = ReferenceCountingWriteBarrier(collector)
barrier.process(None, child)           # child.reference_count == 1
barrier.process(child, None)           # count drops to 0: child is freed
```

While `barrier.lock_number` is non-zero, objects whose count reaches zero
are passed to `add_dead_object_locked` instead of being freed.

## Lock sections

`tracesim.locking.LockTracker` follows lock nesting: `lock(status, line_number)`
returns `True` when the trace is unlocked afterwards. With `stats=True` it
counts locked and unlocked lines and how often each nesting depth was
reached (`counter`); `finish(line_number)` closes the count and returns
`False` if the trace ends locked.

## Options

The simulator's option syntax is available for tools that wrap it:

```python
from tracesim.options import describe, parse_args, parse_heap_size

parse_heap_size("4M")                  # 4194304
options = parse_args(["program.trace", "--collector", "markSweep", "-h", "512k"])
options.log_path                       # "./program.log"
print(describe(options))
```

Heap sizes accept an optional `k`, `m` or `g` suffix (powers of 1024),
optionally followed by `b`. Unknown option values are logged and fall
back to the defaults: traversal collector, next-fit allocator,
breadth-first traversal, no write barrier and a 90 % high watermark. The
default heap size is 600000 bytes for the traversal collector and 350000
otherwise. A `--logLocation` value containing a path separator raises
`OptionError`.

## Modules

- `tracesim.defines` – collector, allocator, traversal, write-barrier,
  GC-reason, allocation-type and colour enumerations, and `version_string`.
- `tracesim.tracefile` – `parse_trace_line`, `read_trace`, `TraceLine`, `Operation`.
- `tracesim.objects` – `HeapObject` and `ArrayRecord`.
- `tracesim.region` – `Region` bookkeeping for region-based heaps.
- `tracesim.container` – `ObjectContainer`.
- `tracesim.barriers` – `RecyclerWriteBarrier`, `ReferenceCountingWriteBarrier`.
- `tracesim.locking` – `LockTracker`.
- `tracesim.options` – `parse_args`, `parse_heap_size`, `describe`,
  `SimulatorOptions` and log-name helpers.