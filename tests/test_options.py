import pytest

from tracesim.defines import (
    MAGNITUDE_CONVERSION,
    AllocatorKind,
    CollectorKind,
    TraversalKind,
    WriteBarrierKind,
)
from tracesim.options import (
    OptionError,
    SimulatorOptions,
    default_log_directory,
    describe,
    global_file_name,
    log_file_name,
    parse_args,
    parse_heap_size,
)


def test_heap_size_plain_number():
    assert parse_heap_size("4096") == 4096


def test_heap_size_kilobyte_suffix():
    assert parse_heap_size("1K") == MAGNITUDE_CONVERSION


@pytest.mark.parametrize("unit", ["K", "M", "G"])
def test_heap_size_suffix_variants_agree(unit):
    value = parse_heap_size("3" + unit)
    assert parse_heap_size("3" + unit.lower()) == value
    assert parse_heap_size("3" + unit + "B") == value
    assert parse_heap_size("3" + unit.lower() + "b") == value


def test_heap_size_units_scale():
    assert parse_heap_size("5M") == parse_heap_size("5K") * MAGNITUDE_CONVERSION
    assert parse_heap_size("5G") == parse_heap_size("5M") * MAGNITUDE_CONVERSION


def test_heap_size_hex_and_unknown_suffix():
    assert parse_heap_size("0x10") == parse_heap_size("16")
    assert parse_heap_size("77X") == 77


def test_heap_size_errors():
    with pytest.raises(OptionError):
        parse_heap_size("")
    with pytest.raises(OptionError):
        parse_heap_size("-5")


def test_global_file_name():
    assert global_file_name("dir/sub/prog.trace") == "prog"
    assert global_file_name("a\\b/c.trace") == "c"
    assert global_file_name("plain") == "plain"


def test_default_log_directory():
    assert default_log_directory("prog.trace") == "./"
    assert default_log_directory("dir/sub/prog.trace") == "dir/sub/"
    assert default_log_directory("dir\\prog.trace") == "dir\\"


def test_log_file_name():
    assert log_file_name("", "prog", False) == "prog.log"
    assert log_file_name("", "prog", True) == "progForced.log"
    assert log_file_name("mine", "prog", False) == "mine.log"
    assert log_file_name("mine.log", "prog", True) == "mine.log"


def test_defaults():
    options = parse_args(["prog.trace"])
    assert options.collector == CollectorKind.TRAVERSAL
    assert options.traversal == TraversalKind.BREADTH_FIRST
    assert options.allocator == AllocatorKind.NEXT_FIT
    assert options.write_barrier == WriteBarrierKind.DISABLED
    assert options.heap_size == 600000
    assert options.max_heap_size == options.heap_size
    assert options.watermark == 90
    assert options.final_gc is False
    assert options.force_gc is False
    assert options.log_identifier is None


def test_non_traversal_collector_default_heap():
    options = parse_args(["prog.trace", "-c", "markSweep"])
    assert options.collector == CollectorKind.MARK_SWEEP
    assert options.heap_size == 350000


def test_full_command_line():
    options = parse_args([
        "traces/prog.trace", "-h", "2K", "-m", "4K", "-c", "balanced",
        "-t", "depthFirst", "-a", "regionBased", "-wb", "referenceCounting",
        "-fGC", "enabled", "-cZ", "enabled", "-pls", "enabled", "-f", "-li", "42",
    ])
    assert options.heap_size == parse_heap_size("2K")
    assert options.max_heap_size == parse_heap_size("4K")
    assert options.collector == CollectorKind.BALANCED
    assert options.traversal == TraversalKind.DEPTH_FIRST
    assert options.allocator == AllocatorKind.REGION_BASED
    assert options.write_barrier == WriteBarrierKind.REFERENCE_COUNTING
    assert options.final_gc is True
    assert options.catch_zombies is True
    assert options.locking_stats is True
    assert options.force_gc is True
    assert options.log_identifier == 42
    assert options.log_path == "traces/progForced.log"
    assert options.balanced_log_path == "traces/BalancedprogForced.log"


def test_max_heap_never_below_heap():
    options = parse_args(["prog.trace", "-h", "8K", "-m", "1K"])
    assert options.max_heap_size == options.heap_size


def test_invalid_choice_falls_back_to_default():
    options = parse_args(["prog.trace", "-a", "bogus", "-fGC", "maybe"])
    assert options.allocator == AllocatorKind.NEXT_FIT
    assert options.final_gc is False


def test_custom_log_and_directory():
    options = parse_args(["x/prog.trace", "-l", "run", "-d", "out/"])
    assert options.log_name == "run.log"
    assert options.log_path == "out/run.log"


def test_log_location_with_path_rejected():
    with pytest.raises(OptionError):
        parse_args(["prog.trace", "-l", "logs/run"])


def test_missing_value_and_empty_argv():
    with pytest.raises(OptionError):
        parse_args(["prog.trace", "-c"])
    with pytest.raises(OptionError):
        parse_args([])


def test_describe_contents():
    text = describe(SimulatorOptions(trace_file="prog.trace"))
    lines = text.splitlines()
    assert lines[0] == "TraceFileSimulator Version: 5.0.0"
    assert "Collector: traversal" in lines
    assert "Heapsize: 600000 (split heap)" in lines
    assert "WriteBarrier: disabled" in lines
    assert "Watermark: 90" in lines
    assert text.endswith("\n\n")


def test_describe_without_split_heap():
    options = parse_args(["prog.trace", "-c", "recycler", "-fGC", "enabled"])
    text = describe(options)
    assert "Heapsize: 350000\n" in text
    assert "Final GC: enabled" in text
    assert "Collector: recycler" in text