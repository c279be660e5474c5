from dataclasses import dataclass

from typing_extensions import Self, override

from calrange.capabilities import B, RangeLike
from calrange.errors import InvalidRangeError

SEPARATOR = " - "


def compare(left: B, right: B) -> int:
    """Three-way comparison returning -1, 0 or 1."""
    return (right < left) - (left < right)


@dataclass(frozen=True, kw_only=True)
class BoundedRange(RangeLike[B]):
    """A value spanning from ``start`` to ``end``.

    Holds the overlap, contiguity and ordering algorithms shared by every
    concrete range. No ordering between ``start`` and ``end`` is enforced
    here; subclasses decide.
    """

    start: B
    end: B

    def is_empty(self) -> bool:
        return self.start == self.end

    @override
    def overlaps_range(self, other: RangeLike[B]) -> bool:
        """Check whether this range and ``other`` overlap.

        Rules are evaluated in order and the first match wins:

        1. ``start`` lies strictly inside ``other``
        2. ``end`` lies strictly inside ``other``
        3. this range contains ``other``
        4. both ranges are empty and sit on the same point

        An empty range sitting on the boundary of a non-empty range does not
        overlap it; it only overlaps an identical empty range.
        """
        if other.start < self.start < other.end:
            return True
        if other.start < self.end < other.end:
            return True
        if self.start <= other.start and other.end <= self.end:
            return True
        return (
            self.is_empty()
            and other.start == other.end
            and self.start == other.start
        )

    def is_contiguous_with(self, other: RangeLike[B]) -> bool:
        """True when one range ends exactly where the other starts."""
        return self.end == other.start or self.start == other.end

    def compare_to(self, other: "BoundedRange[B]") -> int:
        return compare(self.start, other.start)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BoundedRange):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BoundedRange):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BoundedRange):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BoundedRange):
            return NotImplemented
        return self.compare_to(other) >= 0

    @override
    def __str__(self) -> str:
        return f"[{self.start}{SEPARATOR}{self.end}]"

    @override
    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return (
            f"{format(self.start, format_spec)}{SEPARATOR}"
            f"{format(self.end, format_spec)}"
        )

    @classmethod
    def _parse_bound(cls, text: str) -> B:
        raise NotImplementedError

    @classmethod
    def parse(cls, text: str) -> Self:
        """Build a range from its rendered form.

        Accepts ``"<start> - <end>"`` (optionally wrapped in square brackets)
        or a single bound, which yields the empty range at that point.

        Raises:
            InvalidRangeError: If ``text`` holds more than two bounds
        """
        body = text.strip().removeprefix("[").removesuffix("]").strip()
        parts = body.split(SEPARATOR)
        if len(parts) == 1:
            bound = cls._parse_bound(parts[0])
            return cls(start=bound, end=bound)
        if len(parts) == 2:
            return cls(
                start=cls._parse_bound(parts[0]),
                end=cls._parse_bound(parts[1]),
            )
        raise InvalidRangeError(
            f"Cannot parse {cls.__name__} from {text!r}.\n"
            f"Expected '<start>{SEPARATOR}<end>' or a single bound.\n"
            f"Example: {cls.__name__}.parse('2024-01-01{SEPARATOR}2024-01-10')"
        )
