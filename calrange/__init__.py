from .capabilities import CanBeEmpty, CanBeInfinite, RangeLike
from .circular import CircularRange, TimeRange
from .core import BoundedRange
from .errors import InvalidRangeError, MergeError
from .linear import DateRange, DateTimeRange, LinearRange
from .multi import MultiDateRange, MultiDateTimeRange, MultiRange, MultiTimeRange

__all__ = [
    "RangeLike",
    "CanBeEmpty",
    "CanBeInfinite",
    "BoundedRange",
    "LinearRange",
    "DateTimeRange",
    "DateRange",
    "CircularRange",
    "TimeRange",
    "MultiRange",
    "MultiDateTimeRange",
    "MultiDateRange",
    "MultiTimeRange",
    "InvalidRangeError",
    "MergeError",
]
