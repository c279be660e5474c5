"""Ranges over cyclic domains such as the time of day.

A circular range may have ``start > end``: it then wraps past the zero point
of the period (midnight for :class:`TimeRange`). Every bound is mapped to an
integer offset within ``[0, PERIOD)`` so that arcs can be compared and
shifted around the cycle.
"""

import logging
from dataclasses import dataclass, replace
from datetime import time, timedelta
from typing import Any, ClassVar

from dateutil import parser
from typing_extensions import Self, override

from calrange.capabilities import B
from calrange.core import SEPARATOR, BoundedRange, compare
from calrange.util import (
    DAY,
    LAST_INSTANT,
    MIDNIGHT,
    offset_to_time,
    offset_to_timedelta,
    time_to_offset,
)

logger = logging.getLogger(__name__)


def is_between(point: B, start: B, end: B) -> bool:
    """Half-open membership ``[start, end)`` that follows a wrapping arc."""
    if start <= end:
        return start <= point < end
    return start <= point or point < end


@dataclass(frozen=True, kw_only=True)
class CircularRange(BoundedRange[B]):
    MIN: ClassVar[Any]
    MAX: ClassVar[Any]
    PERIOD: ClassVar[int]

    @classmethod
    def _offset(cls, bound: B) -> int:
        """Position of ``bound`` within the period."""
        raise NotImplementedError

    @classmethod
    def _bound(cls, offset: int) -> B:
        """Bound found ``offset`` units after the period's zero point."""
        raise NotImplementedError

    @classmethod
    def _length(cls, units: int) -> Any:
        return units

    @classmethod
    def empty(cls) -> Self:
        return cls(start=cls.MIN, end=cls.MIN)

    @classmethod
    def infinite(cls) -> Self:
        return cls(start=cls.MIN, end=cls.MAX)

    @classmethod
    def up_to(cls, bound: B) -> Self:
        return cls(start=cls.MIN, end=bound)

    @classmethod
    def down_to(cls, bound: B) -> Self:
        return cls(start=bound, end=cls.MAX)

    def wraps(self) -> bool:
        """True when the range crosses the zero point of the period."""
        return self.end < self.start

    def _span_units(self) -> int:
        start, end = self._offset(self.start), self._offset(self.end)
        return end - start if start <= end else start - end

    @property
    def span(self) -> Any:
        """Distance between the bounds, measured as a plain difference."""
        return self._length(self._span_units())

    def is_infinite(self) -> bool:
        if self.wraps():
            return self.complement()._span_units() <= 0
        return self._span_units() == self.infinite()._span_units()

    def complement(self) -> Self:
        """Return the arc covering every point this range does not cover."""
        if self == self.empty():
            return self.infinite()
        if self == self.infinite():
            return self.empty()
        return replace(self, start=self.end, end=self.start)

    def __invert__(self) -> Self:
        return self.complement()

    def _arcs(self) -> list[tuple[int, int]]:
        """Offsets covered by this range, split at the period boundary."""
        start, end = self._offset(self.start), self._offset(self.end)
        if start <= end:
            return [(start, end)]
        return [(start, self.PERIOD), (0, end)]

    def _shift(self, bound: B, units: int) -> B:
        return self._bound(self._offset(bound) + units)

    def _shift_to(self, bound: B) -> Self:
        return replace(self, start=bound, end=self._shift(bound, self._span_units()))

    @override
    def contains(self, point: B) -> bool:
        if self.is_infinite():
            return True
        return is_between(point, self.start, self.end)

    @override
    def overlaps_range(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, other: "CircularRange[B]"
    ) -> bool:
        """Check whether both arcs share more than a touching point.

        The infinite range overlaps everything, including the empty range.
        """
        if self.is_infinite() or other.is_infinite():
            return True
        if self.is_empty() or other.is_empty():
            return False
        return any(
            max(start, other_start) < min(end, other_end)
            for start, end in self._arcs()
            for other_start, other_end in other._arcs()
        )

    def _hull(self, other: Self) -> Self:
        return replace(
            self,
            start=min(self.start, other.start),
            end=max(self.end, other.end),
        )

    def _absorb(self, other: Self) -> Self:
        """Union of this wrapping range with an overlapping ``other``."""
        complement = self.complement()
        if not complement.overlaps(other):
            return self

        if other.wraps():
            # Both arcs cross the zero point; the hull wraps unless it
            # covers the whole period.
            hull = self._hull(other)
            return self.infinite() if hull.start <= hull.end else hull

        hole = complement.intersect(other)
        if not self.is_contiguous_with(hole):
            return self.empty()

        if self.end == hole.start:
            grown = replace(self, end=self._shift(self.end, hole._span_units()))
        else:
            grown = replace(self, start=self._shift(self.start, -hole._span_units()))
        return self.infinite() if grown.start == grown.end else grown

    def _normalize(self, candidate: Self) -> Self:
        forward = (
            self._offset(candidate.end) - self._offset(candidate.start)
        ) % self.PERIOD
        if forward >= self.infinite()._span_units():
            return self.infinite()._shift_to(candidate.start)
        if forward <= 0:
            return self.empty()
        return candidate

    def merge(self, other: Self) -> Self:
        """Return the arc spanning over both ranges.

        Never raises: ranges that neither overlap nor touch merge into the
        empty range.
        """
        if other.is_infinite():
            candidate = self.infinite()
        elif other.is_empty():
            candidate = self
        elif self.is_contiguous_with(other):
            if self.complement() == other:
                candidate = self.infinite()
            else:
                candidate = self._hull(other)
        elif self.overlaps(other):
            candidate = self._absorb(other) if self.wraps() else self._hull(other)
        else:
            logger.debug(
                "%s and %s neither overlap nor touch, merge is empty", self, other
            )
            candidate = self.empty()

        return self._normalize(candidate)

    def intersect(self, other: Self) -> Self:
        """Return the tightest arc shared by both ranges, or the empty range."""
        if self.is_empty() or other.is_empty() or not self.overlaps(other):
            return self.empty()

        start_inside = is_between(self.start, other.start, other.end)
        end_inside = is_between(self.end, other.start, other.end)
        if start_inside and end_inside:
            return self
        if start_inside:
            return replace(self, end=other.end)
        if end_inside:
            return replace(self, start=other.start)

        other_start_inside = is_between(other.start, self.start, self.end)
        other_end_inside = is_between(other.end, self.start, self.end)
        if other_start_inside and other_end_inside:
            return replace(self, start=other.start, end=other.end)
        if other_start_inside:
            return replace(self, start=other.start)
        if other_end_inside:
            return replace(self, end=other.end)
        return self.empty()

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


@dataclass(frozen=True, kw_only=True)
class TimeRange(CircularRange[time]):
    """Window between two naive times of day, wrapping at midnight.

    Example:
        >>> night = TimeRange(start=time(22), end=time(6))
        >>> night + TimeRange(start=time(5), end=time(7))
        TimeRange(start=datetime.time(22, 0), end=datetime.time(7, 0))
        >>> ~TimeRange(start=time(9), end=time(17))
        TimeRange(start=datetime.time(17, 0), end=datetime.time(9, 0))
    """

    MIN = MIDNIGHT
    MAX = LAST_INSTANT
    PERIOD = DAY

    @classmethod
    @override
    def _offset(cls, bound: time) -> int:
        return time_to_offset(bound)

    @classmethod
    @override
    def _bound(cls, offset: int) -> time:
        return offset_to_time(offset)

    @classmethod
    @override
    def _length(cls, units: int) -> timedelta:
        return offset_to_timedelta(units)

    @classmethod
    def all_day(cls) -> Self:
        """Alias of :meth:`infinite`."""
        return cls.infinite()

    @override
    def __str__(self) -> str:
        return f"{self.start}{SEPARATOR}{self.end}"

    @classmethod
    @override
    def _parse_bound(cls, text: str) -> time:
        return parser.parse(text).time()
