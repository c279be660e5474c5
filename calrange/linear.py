"""Ranges over linear timelines.

A linear range never wraps: ``start <= end`` always holds and construction
fails otherwise. Merging two ranges that neither overlap nor touch is an
error, since the union would not be a single range.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, ClassVar

from dateutil import parser
from typing_extensions import Self, override

from calrange.capabilities import B
from calrange.core import SEPARATOR, BoundedRange, compare
from calrange.errors import InvalidRangeError, MergeError


@dataclass(frozen=True, kw_only=True)
class LinearRange(BoundedRange[B]):
    MIN: ClassVar[Any]
    MAX: ClassVar[Any]

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidRangeError(
                f"{type(self).__name__} start ({self.start}) must be <= end ({self.end})\n"
                f"Hint: swap the bounds, or use {type(self).__name__}.empty() "
                f"for a range that covers nothing"
            )

    @classmethod
    def empty(cls) -> Self:
        return cls(start=cls.MIN, end=cls.MIN)

    @classmethod
    def infinite(cls) -> Self:
        return cls(start=cls.MIN, end=cls.MAX)

    @classmethod
    def up_to(cls, bound: B) -> Self:
        """Range from the smallest representable bound up to ``bound``."""
        return cls(start=cls.MIN, end=bound)

    @classmethod
    def down_to(cls, bound: B) -> Self:
        """Range from ``bound`` up to the largest representable bound."""
        return cls(start=bound, end=cls.MAX)

    def is_infinite(self) -> bool:
        return (self.start, self.end) == (self.MIN, self.MAX)

    @override
    def overlaps_range(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, other: "LinearRange[B]"
    ) -> bool:
        return (
            (self.is_infinite() and other.is_empty())
            or (self.is_empty() and other.is_infinite())
            or super().overlaps_range(other)
        )

    def merge(self, other: Self) -> Self:
        """Return the smallest range spanning over both ranges.

        Raises:
            MergeError: If the ranges neither overlap nor are contiguous
        """
        if other.is_empty():
            return self
        if self.overlaps(other) or self.is_contiguous_with(other):
            return replace(
                self,
                start=min(self.start, other.start),
                end=max(self.end, other.end),
            )
        raise MergeError(
            f"Cannot merge {self} with {other}: they neither overlap nor touch.\n"
            f"Hint: check overlaps() or is_contiguous_with() before merging,\n"
            f"      or collect disjoint ranges in a MultiRange"
        )

    def intersect(self, other: Self) -> Self:
        """Return the part shared by both ranges, or the empty range."""
        if not self.overlaps(other):
            return self.empty()
        return replace(
            self,
            start=max(self.start, other.start),
            end=min(self.end, other.end),
        )

    def __add__(self, other: Self) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.merge(other)

    def __or__(self, other: Self) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.merge(other)

    def __and__(self, other: Self) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.intersect(other)

    @override
    def compare_to(self, other: BoundedRange[B]) -> int:
        return compare(self.start, other.start) or compare(self.end, other.end)

    @override
    def __str__(self) -> str:
        return f"{self.start}{SEPARATOR}{self.end}"

    @override
    def __format__(self, format_spec: str) -> str:
        """Render with ``format_spec`` applied to each bound.

        A range whose bounds coincide renders as the single formatted bound.
        """
        if not format_spec:
            return str(self)
        if self.start == self.end:
            return format(self.start, format_spec)
        return (
            f"{format(self.start, format_spec)}{SEPARATOR}"
            f"{format(self.end, format_spec)}"
        )


@dataclass(frozen=True, kw_only=True)
class DateTimeRange(LinearRange[datetime]):
    """Span between two naive datetimes, both bounds included.

    Example:
        >>> jan = DateTimeRange(start=datetime(2024, 1, 1), end=datetime(2024, 1, 10))
        >>> jan + DateTimeRange(start=datetime(2024, 1, 5), end=datetime(2024, 1, 20))
        DateTimeRange(start=datetime.datetime(2024, 1, 1, 0, 0), end=datetime.datetime(2024, 1, 20, 0, 0))
    """

    MIN = datetime.min
    MAX = datetime.max

    @override
    def merge(self, other: Self) -> Self:
        """Merge where an infinite range wins and an empty receiver yields ``other``."""
        if self.is_infinite() or other.is_infinite():
            return self.infinite()
        if self.is_empty():
            return other
        return super().merge(other)

    @classmethod
    @override
    def _parse_bound(cls, text: str) -> datetime:
        return parser.parse(text)


@dataclass(frozen=True, kw_only=True)
class DateRange(LinearRange[date]):
    """Span between two calendar dates, both included."""

    MIN = date.min
    MAX = date.max

    @classmethod
    @override
    def _parse_bound(cls, text: str) -> date:
        return parser.parse(text).date()
