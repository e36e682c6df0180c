"""Sort keys for the ordered storage behind `RangeMap`.

Stored ranges never overlap, so their start bounds alone order the whole
partition. `Key` exposes exactly that order to `SortedDict`, and lets
lookups probe the storage with a bare value or start bound instead of a
full range.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sortedcontainers import SortedDict

from spanmap.bounds import Bound, StartBound
from spanmap.ranges import Range

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class Key(Generic[T]):
    start: StartBound[T]
    range: Range[T] | None = field(default=None, compare=False)

    @classmethod
    def of(cls, rng: Range[T]) -> "Key[T]":
        return cls(rng.start, rng)

    @classmethod
    def probe(cls, point: T) -> "Key[T]":
        """Search key for a bare value, treated as ``included(point)``."""
        return cls(StartBound(Bound.included(point)))

    @classmethod
    def probe_start(cls, start: StartBound[T]) -> "Key[T]":
        return cls(start)

    def __repr__(self) -> str:
        return f"Key({self.range if self.range is not None else self.start})"


def floor_index(storage: SortedDict, probe: Key[Any]) -> int:
    """Index of the entry with the greatest start <= `probe`, or -1."""
    return storage.bisect_right(probe) - 1
