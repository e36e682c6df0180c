"""Exceptions raised by spanmap."""


class SpanMapError(Exception):
    """Base class for spanmap errors."""


class EmptyRangeError(SpanMapError, ValueError):
    """Raised when a pair of bounds cannot denote any point.

    The only such pair is one with both sides excluded at the same value,
    e.g. ``(5, 5)``.
    """

    def __init__(self, value: object):
        self.value: object = value
        super().__init__(
            f"Range with both bounds excluded at {value!r} is empty.\n"
            f"Hint: use Range.point({value!r}) for the single value, or\n"
            f"      include at least one side: Range.half_open({value!r}, ...)"
        )


class InvariantError(SpanMapError, AssertionError):
    """Raised when the stored partition is found in an impossible state."""
