"""Iteration over a `RangeMap`: entry views, mutable entries and gaps.

Every iterator here borrows the map. Inserting into or removing from the map
while one is alive makes its next step raise RuntimeError, the same contract
``dict`` iteration has.
"""

from collections.abc import Callable, Iterator, Reversible, Sized
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from typing_extensions import override

from spanmap.bounds import encloses
from spanmap.errors import InvariantError
from spanmap.key import Key
from spanmap.ranges import Range

if TYPE_CHECKING:
    from spanmap.core import RangeMap

K = TypeVar("K")
V = TypeVar("V")
Item = TypeVar("Item")


def _check_version(owner: "RangeMap[Any, Any]", version: int) -> None:
    if owner._version != version:
        raise RuntimeError("RangeMap changed during iteration")


def _guarded(owner: "RangeMap[Any, Any]", keys: Iterator[Any]) -> Iterator[Any]:
    version = owner._version
    while True:
        _check_version(owner, version)
        try:
            key = next(keys)
        except StopIteration:
            return
        yield key


class _ViewIterator(Iterator, Generic[Item]):
    """Iterator over a view that knows how many items remain."""

    __slots__ = ("_items", "_remaining")

    def __init__(self, items: Iterator[Item], remaining: int):
        self._items: Iterator[Item] = items
        self._remaining: int = remaining

    @override
    def __next__(self) -> Item:
        item = next(self._items)
        self._remaining -= 1
        return item

    def __length_hint__(self) -> int:
        return max(self._remaining, 0)


class RangeMapView(Reversible, Sized, Generic[Item]):
    """Live, ordered view over the entries of a map.

    Reflects the map's current contents each time it is iterated. Supports
    ``len()``, ``iter()`` and ``reversed()``; the iterators it hands out
    report the number of items left through ``operator.length_hint``.
    """

    def __init__(
        self, owner: "RangeMap[Any, Any]", project: Callable[[Key[Any], Any], Item]
    ):
        self._owner: "RangeMap[Any, Any]" = owner
        self._project: Callable[[Key[Any], Any], Item] = project

    @override
    def __len__(self) -> int:
        return len(self._owner._storage)

    @override
    def __iter__(self) -> Iterator[Item]:
        return self._walk(iter(self._owner._storage))

    @override
    def __reversed__(self) -> Iterator[Item]:
        return self._walk(reversed(self._owner._storage))

    def _walk(self, keys: Iterator[Key[Any]]) -> Iterator[Item]:
        storage = self._owner._storage
        items = (
            self._project(key, storage[key]) for key in _guarded(self._owner, keys)
        )
        return _ViewIterator(items, len(storage))

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class Entry(Generic[K, V]):
    """A stored entry whose value may be reassigned, but not its range.

    The handle is only valid while the map keeps its shape: once a range is
    inserted or removed, reading or writing `value` raises RuntimeError.
    """

    __slots__ = ("_owner", "_key", "_version")

    def __init__(self, owner: "RangeMap[K, V]", key: Key[K]):
        self._owner: "RangeMap[K, V]" = owner
        self._key: Key[K] = key
        self._version: int = owner._version

    @property
    def range(self) -> Range[K]:
        return self._key.range  # type: ignore[return-value]

    @property
    def value(self) -> V:
        _check_version(self._owner, self._version)
        return self._owner._storage[self._key]

    @value.setter
    def value(self, value: V) -> None:
        _check_version(self._owner, self._version)
        self._owner._storage[self._key] = value

    @override
    def __repr__(self) -> str:
        return f"Entry({self.range}: {self.value!r})"


def iter_gaps(owner: "RangeMap[K, Any]") -> Iterator[Range[K]]:
    """Yield the uncovered ranges between consecutive stored ranges.

    For neighbours ``prev`` and ``next`` the gap runs from the bound right
    after ``prev.end`` to the bound right before ``next.start``. Neighbours
    that touch (different values meeting with zero width) have no gap.
    """
    previous: Range[K] | None = None
    for key in _guarded(owner, iter(owner._storage)):
        current: Range[K] = key.range
        if previous is not None:
            start = previous.end.after()
            if start is None:
                # previous already runs to infinity
                return
            end = current.start.before()
            if end is None:
                raise InvariantError(
                    f"Stored range {current} has an unbounded start but "
                    f"follows {previous}"
                )
            if not previous.touches(current):
                yield Range(start, end)
        previous = current


def iter_gaps_in(owner: "RangeMap[K, Any]", outer: Range[K]) -> Iterator[Range[K]]:
    """Yield the uncovered parts of `outer`, ascending.

    Algorithm: a cursor holds the start of the next potential gap, beginning
    at ``outer.start``. For each stored range overlapping `outer`, the space
    between the cursor and that range's start is a gap (clipped to `outer`),
    and the cursor moves to just after the range's end. Whatever remains
    between the cursor and ``outer.end`` is the trailing gap.
    """
    cursor = outer.start
    for key, _ in _guarded(owner, owner._scan(outer)):
        current: Range[K] = key.range
        if not current.overlaps(outer):
            continue
        if cursor < current.start:
            before = current.start.before()
            if before is None:
                raise InvariantError(
                    f"Stored range {current} has an unbounded start but "
                    f"sorts after {cursor}"
                )
            yield Range(cursor, min(before, outer.end))
        after = current.end.after()
        if after is None:
            return
        cursor = after

    if encloses(cursor, outer.end):
        yield Range(cursor, outer.end)
