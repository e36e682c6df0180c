from .bounds import UNBOUNDED, Bound, EndBound, StartBound
from .core import RangeMap, rangemap
from .errors import EmptyRangeError, InvariantError, SpanMapError
from .iterators import Entry, RangeMapView
from .ranges import Range, to_range

__all__ = [
    "Bound",
    "StartBound",
    "EndBound",
    "UNBOUNDED",
    "Range",
    "to_range",
    "RangeMap",
    "rangemap",
    "RangeMapView",
    "Entry",
    "SpanMapError",
    "EmptyRangeError",
    "InvariantError",
]
