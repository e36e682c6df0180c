import operator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from spanmap.bounds import UNBOUNDED, Bound, EndBound, StartBound, encloses, meets
from spanmap.errors import EmptyRangeError

T = TypeVar("T")


@dataclass(frozen=True, repr=False)
class Range(Generic[T]):
    """A normalized interval over an ordered type.

    Construction accepts plain `Bound` objects or ready-made start/end
    wrappers and normalizes them:

    - a backwards pair is flipped, each bound keeping its inclusivity;
    - equal values with at least one side included collapse to ``[x, x]``;
    - equal values with both sides excluded raise `EmptyRangeError`.

    Example:
        >>> Range(Bound.included(0), Bound.excluded(5))
        [0, 5)
        >>> Range.half_open(5, 0)
        (0, 5]
    """

    start: StartBound[T]
    end: EndBound[T]

    def __post_init__(self) -> None:
        start = _unwrap(self.start, StartBound, "start")
        end = _unwrap(self.end, EndBound, "end")

        if not start.is_unbounded and not end.is_unbounded:
            if end.value < start.value:  # type: ignore[operator]
                start, end = end, start
            elif not start.value < end.value:  # type: ignore[operator]
                if start.is_excluded and end.is_excluded:
                    raise EmptyRangeError(start.value)
                start = Bound.included(start.value)
                end = Bound.included(end.value)

        object.__setattr__(self, "start", StartBound(start))
        object.__setattr__(self, "end", EndBound(end))

    @classmethod
    def half_open(cls, start: T, end: T) -> "Range[T]":
        """``[start, end)``, the shape of Python's slices."""
        return cls(Bound.included(start), Bound.excluded(end))

    @classmethod
    def closed(cls, start: T, end: T) -> "Range[T]":
        return cls(Bound.included(start), Bound.included(end))

    @classmethod
    def open(cls, start: T, end: T) -> "Range[T]":
        return cls(Bound.excluded(start), Bound.excluded(end))

    @classmethod
    def open_closed(cls, start: T, end: T) -> "Range[T]":
        return cls(Bound.excluded(start), Bound.included(end))

    @classmethod
    def at_least(cls, start: T) -> "Range[T]":
        return cls(Bound.included(start), UNBOUNDED)

    @classmethod
    def greater_than(cls, start: T) -> "Range[T]":
        return cls(Bound.excluded(start), UNBOUNDED)

    @classmethod
    def at_most(cls, end: T) -> "Range[T]":
        return cls(UNBOUNDED, Bound.included(end))

    @classmethod
    def less_than(cls, end: T) -> "Range[T]":
        return cls(UNBOUNDED, Bound.excluded(end))

    @classmethod
    def full(cls) -> "Range[Any]":
        """The range spanning every value."""
        return cls(UNBOUNDED, UNBOUNDED)

    @classmethod
    def point(cls, value: T) -> "Range[T]":
        return cls(Bound.included(value), Bound.included(value))

    @property
    def start_value(self) -> T | None:
        """Start value, or None when the start is unbounded."""
        return self.start.value

    @property
    def end_value(self) -> T | None:
        """End value, or None when the end is unbounded."""
        return self.end.value

    def overlaps(self, other: "Range[T]") -> bool:
        """True if the two ranges share at least one point."""
        return encloses(max(self.start, other.start), min(self.end, other.end))

    def touches(self, other: "Range[T]") -> bool:
        """True if the ranges overlap or meet with no gap between them.

        ``[1, 3)`` touches ``[3, 5)`` and ``[1, 3]`` touches ``(3, 5)``, but
        ``[1, 3)`` does not touch ``(3, 5)``: the point 3 lies between them.
        """
        return meets(max(self.start, other.start), min(self.end, other.end))

    def contains(self, point: T) -> bool:
        return self.start.admits(point) and self.end.admits(point)

    def __contains__(self, point: object) -> bool:
        return self.contains(point)  # type: ignore[arg-type]

    def shift(self, by: Any) -> "Range[T]":
        """Return the range translated by `by`; unbounded sides stay put."""
        return self.shift_right(by)

    def shift_right(self, by: Any) -> "Range[T]":
        return Range(
            self.start.shifted(operator.add, by), self.end.shifted(operator.add, by)
        )

    def shift_left(self, by: Any) -> "Range[T]":
        return Range(
            self.start.shifted(operator.sub, by), self.end.shifted(operator.sub, by)
        )

    def __str__(self) -> str:
        return f"{self.start}, {self.end}"

    def __repr__(self) -> str:
        return str(self)


def _unwrap(bound: Any, wrapper: type, edge: str) -> Bound[Any]:
    if isinstance(bound, wrapper):
        return bound.bound
    if isinstance(bound, Bound):
        return bound
    raise TypeError(
        f"Range {edge} must be a Bound or {wrapper.__name__}.\n"
        f"Got {type(bound).__name__!r}: {bound!r}\n"
        f"Hint: Range(Bound.included(1), Bound.excluded(5)) or Range.half_open(1, 5)"
    )


def to_range(item: Any) -> Range[Any]:
    """Coerce a range-like object into a `Range`.

    Accepts:
    - Range: returned as-is
    - slice: ``a:b`` becomes ``[a, b)``; a missing side is unbounded
    - range: integer ``range(a, b)`` with step 1 becomes ``[a, b)``

    Raises:
        TypeError: If the item is not range-like or carries a step
    """
    if isinstance(item, Range):
        return item
    if isinstance(item, slice):
        if item.step is not None:
            raise TypeError(
                f"Slices used as ranges cannot have a step, got {item!r}.\n"
                f"Hint: m[1:5] = value, not m[1:5:2] = value"
            )
        start = UNBOUNDED if item.start is None else Bound.included(item.start)
        end = UNBOUNDED if item.stop is None else Bound.excluded(item.stop)
        return Range(start, end)
    if isinstance(item, range):
        if item.step != 1:
            raise TypeError(
                f"Only step-1 ranges describe a contiguous span, got {item!r}"
            )
        return Range.half_open(item.start, item.stop)
    raise TypeError(
        f"Expected a Range, slice or range.\n"
        f"Got {type(item).__name__!r}: {item!r}\n"
        f"Examples:\n"
        f"  m.insert(Range.closed(1, 5), value)\n"
        f"  m.insert(slice(1, 5), value)  # [1, 5)\n"
        f"  m[1:5] = value  # same thing"
    )
