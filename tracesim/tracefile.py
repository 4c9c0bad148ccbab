"""Parsing of trace files: one operation per line, attributes as tagged values."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Iterable, Iterator, Optional

log = logging.getLogger(__name__)

COMMENT_MARK = "%"

_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")

# Attribute tag -> TraceLine field it fills.
_ATTRIBUTES = {
    "C": "class_id",
    "I": "field_index",
    "F": "field_offset",
    "S": "size",
    "V": "field_type",
    "O": "object_id",
    "P": "parent_id",
    "#": "parent_slot",
    "N": "max_pointers",
    "T": "thread_id",
    "L": "lock_status",
}


class TraceParseError(ValueError):
    """Raised when a trace line lacks an attribute its operation needs."""


class Operation(str, Enum):
    """Operations a trace line can describe, keyed by the line's first character."""

    WRITE = "w"
    ALLOCATE = "a"
    ROOT_ADD = "+"
    ROOT_DELETE = "-"
    CLASS_FIELD = "c"
    READ = "r"
    STORE = "s"
    LOCK = "x"


@dataclass
class TraceLine:
    """One parsed trace line; attributes absent from the line are ``None``."""

    kind: str
    line_number: int = 0
    raw: str = ""
    class_id: Optional[int] = None
    field_index: Optional[int] = None
    field_offset: Optional[int] = None
    field_size: Optional[int] = None
    field_type: Optional[int] = None
    object_id: Optional[int] = None
    parent_id: Optional[int] = None
    parent_slot: Optional[int] = None
    max_pointers: Optional[int] = None
    size: Optional[int] = None
    thread_id: Optional[int] = None
    lock_status: Optional[int] = None

    @property
    def operation(self) -> Optional[Operation]:
        """The operation of this line, or ``None`` for comments and unknown kinds."""
        try:
            return Operation(self.kind)
        except ValueError:
            return None

    @property
    def is_comment(self) -> bool:
        return self.kind == COMMENT_MARK

    def require(self, name: str) -> int:
        """Return attribute ``name``, raising TraceParseError if the line lacks it."""
        if name not in _ATTRIBUTE_FIELDS:
            raise AttributeError(f"trace lines have no attribute {name!r}")
        value = getattr(self, name)
        if value is None:
            raise TraceParseError(
                f"line {self.line_number}: operation {self.kind!r} needs attribute {name!r}"
            )
        return value


_ATTRIBUTE_FIELDS = frozenset(
    f.name for f in fields(TraceLine) if f.name not in {"kind", "line_number", "raw"}
)


def _parse_number(text: str) -> int:
    """Read the leading integer of ``text``; no digits at all reads as 0."""
    match = _INTEGER_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _parse(text: str, line_number: int) -> TraceLine:
    text = text.rstrip("\r\n")
    line = TraceLine(kind=text[:1], line_number=line_number, raw=text)
    if line.is_comment:
        return line
    for token in text[1:].split():
        tag, value = token[0], token[1:]
        name = _ATTRIBUTES.get(tag)
        if name is None:
            log.warning("line %d: invalid attribute %r", line_number, tag)
            continue
        setattr(line, name, _parse_number(value))
    return line


def parse_trace_line(text: str) -> TraceLine:
    """Parse one trace line such as ``a T0 O1 S24 N2 C5``."""
    return _parse(text, 0)


def read_trace(stream: Iterable[str]) -> Iterator[TraceLine]:
    """Yield the parsed lines of a trace, numbered from 1."""
    for number, text in enumerate(stream, start=1):
        yield _parse(text, number)