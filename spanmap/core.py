import logging
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeAlias, TypeVar

from sortedcontainers import SortedDict
from typing_extensions import override

from spanmap.iterators import Entry, RangeMapView, iter_gaps, iter_gaps_in
from spanmap.key import Key, floor_index
from spanmap.ranges import Range, to_range

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

RangeLike: TypeAlias = "Range[Any] | slice | range"


class RangeMap(Generic[K, V]):
    """Map from non-overlapping ranges to values.

    Stored ranges never overlap, and two ranges that touch never carry equal
    values: inserting a value next to (or over) an equal one merges them into
    a single range. Inserting over a different value carves the old range
    down to whatever lies outside the new one.

    Ranges can be given as `Range` objects, slices (``m[1:5] = v`` stores
    ``[1, 5)``) or step-1 integer ``range`` objects.

    Example:
        >>> m = RangeMap()
        >>> m[1:5] = True
        >>> m[2:4] = False
        >>> m
        {[1, 2): True, [2, 4): False, [4, 5): True}
        >>> m.get(3)
        False
    """

    def __init__(self, pairs: Iterable[tuple[RangeLike, V]] = ()) -> None:
        """Initialize an empty map, or one built from `(range, value)` pairs.

        Args:
            pairs: Pairs applied with `insert` in order, so later pairs
                overwrite or merge with earlier ones.
        """
        self._storage: SortedDict = SortedDict()
        self._version: int = 0
        self.extend(pairs)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[RangeLike, V]]) -> "RangeMap[K, V]":
        return cls(pairs)

    def extend(self, pairs: Iterable[tuple[RangeLike, V]]) -> None:
        for span, value in pairs:
            self.insert(span, value)

    # --- mutation ---

    def insert(self, span: RangeLike, value: V) -> None:
        """Map every point of `span` to `value`.

        Algorithm: collect the stored entries that overlap the new range, or
        touch it with an equal value. Equal-valued ones are absorbed, widening
        the new range to cover them. Different-valued ones are cut back to
        the parts lying strictly before or after the new range, which are
        stored again with their old value. Finally the (possibly widened)
        range is stored once.

        Raises:
            TypeError: If `span` is not range-like
            EmptyRangeError: If `span` has both ends excluded at one value
        """
        new = to_range(span)
        start, end = new.start, new.end

        displaced = [
            (key, stored)
            for key, stored in self._scan(new)
            if stored == value or key.range.overlaps(new)
        ]

        kept: list[tuple[Range[K], V]] = []
        for key, stored in displaced:
            del self._storage[key]
            current = key.range
            if stored == value:
                start = min(start, current.start)
                end = max(end, current.end)
            else:
                kept.extend((piece, stored) for piece in _outside(current, new))

        for piece, stored in kept:
            self._storage[Key.of(piece)] = stored

        merged = Range(start, end)
        self._storage[Key.of(merged)] = value
        self._version += 1

        logger.debug(
            "insert %s: displaced %d entries, kept %d fragments, stored %s",
            new,
            len(displaced),
            len(kept),
            merged,
        )

    def remove(self, span: RangeLike) -> None:
        """Unmap every point of `span`.

        Entries inside `span` are dropped, entries crossing one of its edges
        are truncated, and an entry strictly containing it is split in two.
        Removing a span that covers nothing is a no-op.
        """
        cut = to_range(span)
        overlapping = [
            (key, stored) for key, stored in self._scan(cut) if key.range.overlaps(cut)
        ]
        if not overlapping:
            return

        kept = 0
        for key, stored in overlapping:
            del self._storage[key]
            for piece in _outside(key.range, cut):
                self._storage[Key.of(piece)] = stored
                kept += 1
        self._version += 1

        logger.debug(
            "remove %s: displaced %d entries, kept %d fragments",
            cut,
            len(overlapping),
            kept,
        )

    def clear(self) -> None:
        self._storage.clear()
        self._version += 1

    def _scan(self, span: Range[K]) -> Iterator[tuple[Key[K], V]]:
        """Yield stored entries touching `span`, in ascending order.

        Starts one entry before the floor of ``span.start``: that neighbour
        can end exactly where `span` begins. Past the floor, the first entry
        that does not touch `span` starts beyond it, and so does everything
        after it.
        """
        floor = floor_index(self._storage, Key.probe_start(span.start))
        for index in range(max(floor - 1, 0), len(self._storage)):
            key, stored = self._storage.peekitem(index)
            if key.range.touches(span):
                yield key, stored
            elif index > floor:
                return

    # --- queries ---

    def get(self, point: K, default: V | None = None) -> V | None:
        """Value mapped at `point`, or `default` if no range covers it."""
        found = self.get_range_value(point)
        return default if found is None else found[1]

    def get_range_value(self, point: K) -> tuple[Range[K], V] | None:
        """The stored range covering `point` together with its value."""
        index = floor_index(self._storage, Key.probe(point))
        if index < 0:
            return None
        key, stored = self._storage.peekitem(index)
        if key.range.end.admits(point):
            return key.range, stored
        return None

    def is_empty(self) -> bool:
        return not self._storage

    def copy(self) -> "RangeMap[K, V]":
        clone = type(self)()
        clone._storage = self._storage.copy()
        return clone

    # --- iteration ---

    def iter(self) -> RangeMapView[tuple[Range[K], V]]:
        """Ascending `(range, value)` pairs; supports len() and reversed()."""
        return RangeMapView(self, lambda key, stored: (key.range, stored))

    items = iter

    def ranges(self) -> RangeMapView[Range[K]]:
        return RangeMapView(self, lambda key, stored: key.range)

    def values(self) -> RangeMapView[V]:
        return RangeMapView(self, lambda key, stored: stored)

    def iter_mut(self) -> RangeMapView[Entry[K, V]]:
        """Ascending entries whose values can be reassigned in place.

        Ranges stay read-only: reshaping one means removing and inserting it
        again. Reassigned values are not merged with equal neighbours.
        """
        return RangeMapView(self, lambda key, stored: Entry(self, key))

    values_mut = iter_mut

    def drain(self) -> Iterator[tuple[Range[K], V]]:
        """Empty the map, returning an iterator over what it held."""
        pairs = [(key.range, stored) for key, stored in self._storage.items()]
        self.clear()
        return iter(pairs)

    def gaps(self) -> Iterator[Range[K]]:
        """Maximal uncovered ranges between stored ones, ascending.

        Space before the first and after the last stored range is not
        reported; use `gaps_in` for that.
        """
        return iter_gaps(self)

    def gaps_in(self, outer: RangeLike) -> Iterator[Range[K]]:
        """Maximal uncovered parts of `outer`, ascending.

        Unlike `gaps`, this includes the space before the first and after the
        last stored range, clipped to `outer`. A point `outer` yields itself
        when nothing covers it, and nothing otherwise.
        """
        return iter_gaps_in(self, to_range(outer))

    # --- Python protocols ---

    def __len__(self) -> int:
        return len(self._storage)

    def __iter__(self) -> Iterator[tuple[Range[K], V]]:
        return iter(self.iter())

    def __reversed__(self) -> Iterator[tuple[Range[K], V]]:
        return reversed(self.iter())

    def __contains__(self, point: object) -> bool:
        if point is None:
            return False
        try:
            return self.get_range_value(point) is not None  # type: ignore[arg-type]
        except TypeError:
            # not comparable with the stored keys
            return False

    def __getitem__(self, point: K) -> V:
        if isinstance(point, (slice, Range)):
            raise TypeError(
                f"RangeMap lookups take a single point, got {point!r}.\n"
                f"Hint: use m.gaps_in(...) or iterate m.iter() to inspect spans"
            )
        found = self.get_range_value(point)
        if found is None:
            raise KeyError(point)
        return found[1]

    def __setitem__(self, span: RangeLike, value: V) -> None:
        self.insert(span, value)

    def __delitem__(self, span: RangeLike) -> None:
        self.remove(span)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeMap):
            return NotImplemented
        return list(self.iter()) == list(other.iter())

    @override
    def __repr__(self) -> str:
        body = ", ".join(f"{span}: {stored!r}" for span, stored in self.iter())
        return "{" + body + "}"


def _outside(current: Range[K], cut: Range[K]) -> list[Range[K]]:
    """Parts of `current` lying strictly before and after `cut`."""
    pieces: list[Range[K]] = []
    if current.start < cut.start:
        pieces.append(Range(current.start, cut.start.before()))
    if cut.end < current.end:
        pieces.append(Range(cut.end.after(), current.end))
    return pieces


def rangemap(*pairs: tuple[RangeLike, V]) -> RangeMap[Any, V]:
    """Create a map from `(range, value)` pairs.

    Example:
        >>> from spanmap import Range, rangemap
        >>> rangemap((Range.half_open(1, 3), "a"), (slice(3, 5), "a"))
        {[1, 5): 'a'}
    """
    return RangeMap(pairs)
