"""Endpoint arithmetic for ranges.

A `Bound` says where a range stops: at a value it includes, at a value it
excludes, or nowhere at all. The same bound sorts differently depending on
which end of a range it sits at, so starts and ends get their own wrappers:

- `StartBound`: unbounded sorts first; at equal values ``included(x)`` comes
  before ``excluded(x)`` (it begins earlier).
- `EndBound`: unbounded sorts last; at equal values ``excluded(x)`` comes
  before ``included(x)`` (it finishes earlier).

With those orders, "which range starts first" and "which range ends last"
are plain comparisons, and `before`/`after` give the bound of the region
directly adjacent to a start or end.
"""

from collections.abc import Callable
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Generic, Literal, TypeAlias, TypeVar

T = TypeVar("T")

Kind: TypeAlias = Literal["included", "excluded", "unbounded"]

NEG_INFINITY = "-∞"
INFINITY = "∞"

_KINDS: tuple[Kind, ...] = ("included", "excluded", "unbounded")


@dataclass(frozen=True)
class Bound(Generic[T]):
    kind: Kind
    value: T | None = None

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(
                f"Bound kind must be one of {_KINDS}, got {self.kind!r}"
            )
        if self.kind == "unbounded" and self.value is not None:
            raise ValueError(
                f"An unbounded Bound carries no value, got {self.value!r}"
            )
        if self.kind != "unbounded" and self.value is None:
            raise ValueError(
                f"An {self.kind} Bound needs a value, got None.\n"
                f"Hint: use Bound.unbounded() for an open-ended side"
            )

    @classmethod
    def included(cls, value: T) -> "Bound[T]":
        return cls("included", value)

    @classmethod
    def excluded(cls, value: T) -> "Bound[T]":
        return cls("excluded", value)

    @classmethod
    def unbounded(cls) -> "Bound[Any]":
        return UNBOUNDED

    @property
    def is_included(self) -> bool:
        return self.kind == "included"

    @property
    def is_excluded(self) -> bool:
        return self.kind == "excluded"

    @property
    def is_unbounded(self) -> bool:
        return self.kind == "unbounded"

    def flipped(self) -> "Bound[T]":
        """Same value, opposite inclusivity. Unbounded stays unbounded."""
        if self.kind == "included":
            return Bound("excluded", self.value)
        if self.kind == "excluded":
            return Bound("included", self.value)
        return self

    def map(self, fn: Callable[[T], T]) -> "Bound[T]":
        if self.is_unbounded:
            return self
        return Bound(self.kind, fn(self.value))  # type: ignore[arg-type]


UNBOUNDED: Bound[Any] = Bound("unbounded")


def _compare_values(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


@total_ordering
@dataclass(frozen=True)
class StartBound(Generic[T]):
    """A bound at the start (lower) side of a range."""

    bound: Bound[T]

    @property
    def value(self) -> T | None:
        return self.bound.value

    @property
    def is_unbounded(self) -> bool:
        return self.bound.is_unbounded

    def _cmp(self, other: "StartBound[T]") -> int:
        a, b = self.bound, other.bound
        if a.is_unbounded:
            return 0 if b.is_unbounded else -1
        if b.is_unbounded:
            return 1
        by_value = _compare_values(a.value, b.value)
        if by_value:
            return by_value
        # included(x) starts before excluded(x)
        return int(a.is_excluded) - int(b.is_excluded)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, StartBound):
            return NotImplemented
        return self._cmp(other) < 0

    def before(self) -> "EndBound[T] | None":
        """End bound of the region immediately preceding this start.

        ``[x`` is preceded by ``x)`` and ``(x`` by ``x]``. Nothing precedes an
        unbounded start, so that gives None.
        """
        if self.is_unbounded:
            return None
        return EndBound(self.bound.flipped())

    def admits(self, point: T) -> bool:
        """True if `point` is on or after this start."""
        if self.bound.is_unbounded:
            return True
        if self.bound.is_included:
            return self.bound.value <= point  # type: ignore[operator]
        return self.bound.value < point  # type: ignore[operator]

    def shifted(self, op: Callable[[Any, Any], Any], by: Any) -> "StartBound[T]":
        return StartBound(self.bound.map(lambda value: op(value, by)))

    def __str__(self) -> str:
        if self.bound.is_unbounded:
            return f"({NEG_INFINITY}"
        if self.bound.is_included:
            return f"[{self.bound.value!r}"
        return f"({self.bound.value!r}"


@total_ordering
@dataclass(frozen=True)
class EndBound(Generic[T]):
    """A bound at the end (upper) side of a range."""

    bound: Bound[T]

    @property
    def value(self) -> T | None:
        return self.bound.value

    @property
    def is_unbounded(self) -> bool:
        return self.bound.is_unbounded

    def _cmp(self, other: "EndBound[T]") -> int:
        a, b = self.bound, other.bound
        if a.is_unbounded:
            return 0 if b.is_unbounded else 1
        if b.is_unbounded:
            return -1
        by_value = _compare_values(a.value, b.value)
        if by_value:
            return by_value
        # excluded(x) ends before included(x)
        return int(a.is_included) - int(b.is_included)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EndBound):
            return NotImplemented
        return self._cmp(other) < 0

    def after(self) -> "StartBound[T] | None":
        """Start bound of the region immediately following this end.

        ``x)`` is followed by ``[x`` and ``x]`` by ``(x``. Nothing follows an
        unbounded end, so that gives None.
        """
        if self.is_unbounded:
            return None
        return StartBound(self.bound.flipped())

    def admits(self, point: T) -> bool:
        """True if `point` is on or before this end."""
        if self.bound.is_unbounded:
            return True
        if self.bound.is_included:
            return point <= self.bound.value  # type: ignore[operator]
        return point < self.bound.value  # type: ignore[operator]

    def shifted(self, op: Callable[[Any, Any], Any], by: Any) -> "EndBound[T]":
        return EndBound(self.bound.map(lambda value: op(value, by)))

    def __str__(self) -> str:
        if self.bound.is_unbounded:
            return f"{INFINITY})"
        if self.bound.is_included:
            return f"{self.bound.value!r}]"
        return f"{self.bound.value!r})"


def encloses(start: StartBound[Any], end: EndBound[Any]) -> bool:
    """True if the region from `start` to `end` holds at least one point.

    An unbounded side always leaves room. Two included bounds may meet at a
    single value; any excluded side needs a strictly larger end value.
    """
    if start.is_unbounded or end.is_unbounded:
        return True
    if start.bound.is_included and end.bound.is_included:
        return start.value <= end.value  # type: ignore[operator]
    return start.value < end.value  # type: ignore[operator]


def meets(start: StartBound[Any], end: EndBound[Any]) -> bool:
    """Like `encloses`, but also true when the region has zero width.

    ``x)`` against ``[x`` meets with no gap; ``x)`` against ``(x`` leaves the
    single point ``x`` uncovered, so it does not.
    """
    if start.is_unbounded or end.is_unbounded:
        return True
    if start.bound.is_excluded and end.bound.is_excluded:
        return start.value < end.value  # type: ignore[operator]
    return start.value <= end.value  # type: ignore[operator]
