"""Collections of disjoint ranges.

A :class:`MultiRange` keeps its ranges sorted, non-overlapping and
non-contiguous: adding a range that overlaps or touches stored ranges merges
them into one. :class:`MultiTimeRange` does the same for time-of-day ranges,
joining pieces across midnight.
"""

from collections.abc import Iterable, Iterator
from functools import reduce
from itertools import chain, pairwise
from typing import Any, ClassVar, Generic, TypeVar

from typing_extensions import Self, override

from calrange.circular import CircularRange, TimeRange
from calrange.linear import DateRange, DateTimeRange, LinearRange

R = TypeVar("R", bound=LinearRange[Any] | CircularRange[Any])


def _sort_key(rng: R) -> tuple[Any, Any]:
    return (rng.start, rng.end)


class MultiRange(Generic[R]):
    """Immutable union of ranges of a single range type.

    Subclasses set ``range_type`` to the concrete range they hold.
    """

    range_type: ClassVar[type[Any]]

    def __init__(self, *ranges: R):
        self._ranges: tuple[R, ...] = ()
        for rng in sorted(ranges, key=_sort_key):
            self._ranges = self._absorb(rng)

    @classmethod
    def _from_disjoint(cls, ranges: tuple[R, ...]) -> Self:
        instance = cls()
        instance._ranges = ranges
        return instance

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def infinite(cls) -> Self:
        return cls(cls.range_type.infinite())

    @property
    def ranges(self) -> tuple[R, ...]:
        return self._ranges

    def _absorb(self, rng: R) -> tuple[R, ...]:
        if rng.is_empty() or self.is_infinite():
            return self._ranges
        if rng.is_infinite():
            return (rng,)

        touching = [
            item
            for item in self._ranges
            if item.overlaps(rng) or item.is_contiguous_with(rng)
        ]
        if not touching:
            return tuple(sorted((*self._ranges, rng), key=_sort_key))

        merged = reduce(lambda acc, item: acc.merge(item), touching, rng)
        kept = [item for item in self._ranges if item not in touching]
        return tuple(sorted((*kept, merged), key=_sort_key))

    def _holds(self, item: R, rng: R) -> bool:
        return item == rng or (
            item.overlaps(rng) and item.start <= rng.start and rng.end <= item.end
        )

    def add(self, rng: R) -> Self:
        """Return a copy that also covers ``rng``."""
        return self._from_disjoint(self._absorb(rng))

    def merge(self, other: "MultiRange[R]") -> Self:
        """Return the union of both collections."""
        return type(self)(*self._ranges, *other._ranges)

    def complement(self) -> Self:
        """Return the ranges covering everything this collection does not.

        Pieces share their bounds with the stored ranges, the same way
        ``up_to``/``down_to`` touch the bound they are built from.
        """
        if self.is_empty():
            return self.infinite()
        if self.is_infinite():
            return self.empty()

        kind = self.range_type
        pieces = [kind.up_to(self._ranges[0].start)]
        pieces.extend(
            kind(start=previous.end, end=following.start)
            for previous, following in pairwise(self._ranges)
        )
        pieces.append(kind.down_to(self._ranges[-1].end))
        return type(self)(*pieces)

    def diff(self, other: "MultiRange[R]") -> Self:
        """Return the parts of this collection that ``other`` does not cover."""
        return (self.complement() + other).complement()

    def covers(self, other: "MultiRange[R] | R") -> bool:
        """True when every range of ``other`` sits inside a single stored range."""
        if isinstance(other, MultiRange):
            return all(self.covers(rng) for rng in other)
        return any(self._holds(item, other) for item in self._ranges)

    def overlaps(self, other: "MultiRange[R] | R") -> bool:
        if isinstance(other, MultiRange):
            return any(self.overlaps(rng) for rng in other)
        return any(item.overlaps(other) for item in self._ranges)

    def is_empty(self) -> bool:
        return not self._ranges

    def is_infinite(self) -> bool:
        return self.covers(self.range_type.infinite())

    def __add__(self, other: "MultiRange[R] | R") -> Self:
        if isinstance(other, MultiRange):
            return self.merge(other)
        if isinstance(other, self.range_type):
            return self.add(other)
        return NotImplemented

    def __or__(self, other: "MultiRange[R]") -> Self:
        if not isinstance(other, MultiRange):
            return NotImplemented
        return self.merge(other)

    def __sub__(self, other: "MultiRange[R]") -> Self:
        if not isinstance(other, MultiRange):
            return NotImplemented
        return self.diff(other)

    def __invert__(self) -> Self:
        return self.complement()

    def __iter__(self) -> Iterator[R]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiRange):
            return NotImplemented
        return type(self) is type(other) and self._ranges == other._ranges

    @override
    def __hash__(self) -> int:
        return hash((type(self), self._ranges))

    @override
    def __repr__(self) -> str:
        inner = ", ".join(repr(rng) for rng in self._ranges)
        return f"{type(self).__name__}({inner})"

    @override
    def __str__(self) -> str:
        if self.is_empty():
            return "{empty}"
        if self.is_infinite():
            return "{infinite}"
        return "{" + ",".join(str(rng) for rng in self._ranges) + "}"


class MultiDateTimeRange(MultiRange[DateTimeRange]):
    range_type = DateTimeRange


class MultiDateRange(MultiRange[DateRange]):
    range_type = DateRange


class MultiTimeRange(MultiRange[TimeRange]):
    """Union of time-of-day ranges, any of which may wrap past midnight.

    Ranges are unioned as arcs over the day. A piece ending at the last
    instant of the day joins a piece starting at midnight, so the stored
    ranges never touch across the wrap point.

    Example:
        >>> night = MultiTimeRange(TimeRange(start=time(22), end=time(2)))
        >>> str(night + TimeRange(start=time(1), end=time(6)))
        '{22:00:00 - 06:00:00}'
    """

    range_type = TimeRange

    @classmethod
    def _arcs_of(cls, ranges: Iterable[TimeRange]) -> list[tuple[int, int]]:
        """Sorted, disjoint offset arcs covered by ``ranges``.

        The last instant of the day is mapped to the period end so that
        ``[x, MAX]`` reaches ``PERIOD``.
        """
        kind = cls.range_type
        last = kind._offset(kind.MAX)
        arcs = sorted(
            (start, kind.PERIOD if end == last else end)
            for rng in ranges
            for start, end in rng._arcs()
            if start < end
        )

        merged: list[tuple[int, int]] = []
        for start, end in arcs:
            if merged and start <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            else:
                merged.append((start, end))
        return merged

    @classmethod
    def _rebuild(cls, arcs: list[tuple[int, int]]) -> tuple[TimeRange, ...]:
        kind = cls.range_type
        if arcs == [(0, kind.PERIOD)]:
            return (kind.infinite(),)

        def build(start: int, end: int) -> TimeRange:
            return kind(
                start=kind._bound(start),
                end=kind.MAX if end == kind.PERIOD else kind._bound(end),
            )

        if len(arcs) > 1 and arcs[0][0] == 0 and arcs[-1][1] == kind.PERIOD:
            (_, head_end), *middle, (tail_start, _) = arcs
            pieces = [build(start, end) for start, end in middle]
            pieces.append(kind(start=kind._bound(tail_start), end=kind._bound(head_end)))
        else:
            pieces = [build(start, end) for start, end in arcs]
        return tuple(sorted(pieces, key=_sort_key))

    @override
    def _absorb(self, rng: TimeRange) -> tuple[TimeRange, ...]:
        if rng.is_empty() or self.is_infinite():
            return self._ranges
        if rng.is_infinite():
            return (rng,)
        return self._rebuild(self._arcs_of((*self._ranges, rng)))

    @override
    def _holds(self, item: TimeRange, rng: TimeRange) -> bool:
        return item == rng or (not rng.is_empty() and item.intersect(rng) == rng)

    @override
    def complement(self) -> Self:
        """Return the arcs of the day this collection does not cover."""
        if self.is_empty():
            return self.infinite()
        if self.is_infinite():
            return self.empty()

        period = self.range_type.PERIOD
        bounds = [0, *chain.from_iterable(self._arcs_of(self._ranges)), period]
        gaps = [
            (start, end)
            for start, end in zip(bounds[::2], bounds[1::2])
            if start < end
        ]
        return self._from_disjoint(self._rebuild(gaps))
