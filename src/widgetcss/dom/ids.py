"""Node identity: DomId and the process-wide id generator."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class DomId:
    """Opaque node identifier. Never reused within a process."""

    value: int

    def __str__(self) -> str:
        return f"#{self.value}"


class DomIdGenerator:
    """Monotonic DomId source.

    Ids start at 1, only ever increase, and are never reset. Trees share the
    module-level default generator unless given their own.
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> DomId:
        with self._lock:
            return DomId(next(self._counter))


DEFAULT_GENERATOR = DomIdGenerator()


def next_dom_id() -> DomId:
    """Allocate an id from the process-wide generator."""
    return DEFAULT_GENERATOR.next_id()
