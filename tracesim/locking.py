"""Bookkeeping of locked sections in a trace."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

_COUNTER_SIZE = 10


def _initial_counter() -> list[int]:
    counter = [0] * _COUNTER_SIZE
    counter[0] = 1  # a trace starts unlocked
    return counter


@dataclass
class LockTracker:
    """Follows lock nesting and, with ``stats`` on, counts locked and unlocked lines.

    ``counter[n]`` counts how often the nesting depth became ``n``.
    """

    stats: bool = False
    lock_number: int = 0
    locked_lines: int = 0
    unlocked_lines: int = 0
    last_lock_line: int = 0
    counter: list[int] = field(default_factory=_initial_counter)

    def _lines_since_last_lock(self, line_number: int) -> int:
        return line_number - self.last_lock_line - 1

    def lock(self, status: int, line_number: int) -> bool:
        """Apply a lock (1) or unlock (0) at ``line_number``.

        Returns True when the trace is unlocked afterwards, the moment at
        which objects parked while locked may be checked again.
        """
        if self.stats:
            gap = self._lines_since_last_lock(line_number)
            if self.lock_number == 0:
                self.unlocked_lines += gap
            else:
                self.locked_lines += gap

        if status == 1:
            self.lock_number += 1
        elif status == 0:
            self.lock_number -= 1
        else:
            log.warning("invalid locking value %r at line %d", status, line_number)

        if self.lock_number < 0:
            log.warning("negative lock number at line %d", line_number)

        if self.stats:
            if self.lock_number >= 0:
                if self.lock_number >= len(self.counter):
                    self.counter.extend([0] * (self.lock_number + 1 - len(self.counter)))
                self.counter[self.lock_number] += 1
            self.last_lock_line = line_number

        return self.lock_number == 0

    def finish(self, line_number: int) -> bool:
        """Close the count at the last line; False if the trace ends locked."""
        if self.lock_number != 0:
            log.warning("locking not zero at end of execution")
            return False
        self.unlocked_lines += self._lines_since_last_lock(line_number)
        return True