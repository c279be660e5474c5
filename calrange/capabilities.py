"""Capability contracts shared by range types.

A range exposes ``start`` and ``end`` bounds drawn from a totally ordered
domain. On top of that, a concrete type may be able to represent an *empty*
range and/or an *infinite* range. Those two capabilities are protocols so
that any type providing the right members satisfies them, whether or not it
inherits from :class:`~calrange.core.BoundedRange`.
"""

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from typing_extensions import Self


class Comparable(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...

    def __le__(self, other: Any, /) -> bool: ...


B = TypeVar("B", bound=Comparable)


class RangeLike(Generic[B]):
    """Mixin providing the default membership and overlap tests.

    The default overlap test only checks whether either bound of ``other``
    falls inside this range. Concrete types that need a stricter policy
    override :meth:`overlaps_range`; :meth:`overlaps` dispatches to it.
    """

    start: B
    end: B

    def contains(self, point: B) -> bool:
        """Closed membership test: ``start <= point <= end``."""
        return self.start <= point <= self.end

    def overlaps_range(self, other: "RangeLike[B]") -> bool:
        return self.contains(other.start) or self.contains(other.end)

    def overlaps(self, other: "RangeLike[B] | B") -> bool:
        """Check whether ``other`` (a point or a range) overlaps this range."""
        if isinstance(other, RangeLike):
            return self.overlaps_range(other)
        return self.contains(other)

    def __contains__(self, point: B) -> bool:
        return self.contains(point)


@runtime_checkable
class CanBeEmpty(Protocol):
    """A range type with a canonical empty value."""

    @classmethod
    def empty(cls) -> Self: ...

    def is_empty(self) -> bool: ...


@runtime_checkable
class CanBeInfinite(Protocol):
    """A range type with a canonical value overlapping every other value."""

    @classmethod
    def infinite(cls) -> Self: ...

    def is_infinite(self) -> bool: ...
