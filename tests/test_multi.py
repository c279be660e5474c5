"""Tests for collections of disjoint ranges."""

from datetime import date, datetime, time

from calrange import (
    DateRange,
    DateTimeRange,
    MultiDateRange,
    MultiDateTimeRange,
    MultiTimeRange,
    TimeRange,
)


def dt_range(start: datetime, end: datetime) -> DateTimeRange:
    return DateTimeRange(start=start, end=end)


def days(start: date, end: date) -> DateRange:
    return DateRange(start=start, end=end)


def hours(start: int, end: int) -> TimeRange:
    return TimeRange(start=time(start), end=time(end))


def test_overlapping_ranges_are_merged():
    """Test that overlapping ranges collapse into one."""
    multi = MultiDateTimeRange(
        dt_range(datetime(2024, 4, 8), datetime(2024, 4, 16)),
        dt_range(datetime(2024, 4, 5), datetime(2024, 4, 12)),
    )

    assert multi.ranges == (dt_range(datetime(2024, 4, 5), datetime(2024, 4, 16)),)


def test_contiguous_ranges_are_merged():
    """Test that ranges sharing a bound collapse into one."""
    multi = MultiDateTimeRange(
        dt_range(datetime(2024, 1, 5), datetime(2024, 1, 9)),
        dt_range(datetime(2024, 1, 1), datetime(2024, 1, 5)),
    )

    assert list(multi) == [dt_range(datetime(2024, 1, 1), datetime(2024, 1, 9))]


def test_disjoint_ranges_are_kept_sorted():
    """Test that disjoint ranges are stored in start order."""
    march = dt_range(datetime(2024, 3, 1), datetime(2024, 3, 2))
    january = dt_range(datetime(2024, 1, 1), datetime(2024, 1, 2))

    multi = MultiDateTimeRange(march, january)

    assert multi.ranges == (january, march)
    assert len(multi) == 2


def test_range_bridging_two_stored_ranges_joins_them():
    """Test that a range spanning a gap joins its neighbours."""
    multi = MultiDateTimeRange(
        dt_range(datetime(2024, 1, 1), datetime(2024, 1, 5)),
        dt_range(datetime(2024, 1, 10), datetime(2024, 1, 15)),
    )

    bridged = multi.add(dt_range(datetime(2024, 1, 4), datetime(2024, 1, 11)))

    assert bridged.ranges == (dt_range(datetime(2024, 1, 1), datetime(2024, 1, 15)),)
    assert len(multi) == 2


def test_infinite_range_absorbs_everything():
    """Test that adding the infinite range replaces every stored range."""
    january = dt_range(datetime(2024, 1, 1), datetime(2024, 1, 2))

    assert MultiDateTimeRange(january, DateTimeRange.infinite()).is_infinite()
    assert MultiDateTimeRange(DateTimeRange.infinite(), january).ranges == (
        DateTimeRange.infinite(),
    )
    assert MultiDateTimeRange(january).add(DateTimeRange.infinite()).is_infinite()


def test_empty_ranges_are_dropped():
    """Test that empty ranges are never stored."""
    multi = MultiDateTimeRange(DateTimeRange.empty())

    assert multi.is_empty()
    assert multi == MultiDateTimeRange.empty()
    assert multi + DateTimeRange.empty() == multi


def test_add_returns_a_new_collection():
    """Test that adding leaves the original collection untouched."""
    january = dt_range(datetime(2024, 1, 1), datetime(2024, 1, 2))
    multi = MultiDateTimeRange(january)

    grown = multi + dt_range(datetime(2024, 3, 1), datetime(2024, 3, 2))

    assert len(grown) == 2
    assert multi.ranges == (january,)


def test_merge_collections():
    """Test the union of two collections."""
    first = MultiDateRange(days(date(2024, 1, 1), date(2024, 1, 5)))
    second = MultiDateRange(
        days(date(2024, 1, 4), date(2024, 1, 8)),
        days(date(2024, 2, 1), date(2024, 2, 2)),
    )

    assert (first | second).ranges == (
        days(date(2024, 1, 1), date(2024, 1, 8)),
        days(date(2024, 2, 1), date(2024, 2, 2)),
    )
    assert first.merge(second) == first + second


class TestComplement:
    def test_empty_and_infinite_swap(self):
        """Test that empty and infinite collections complement each other."""
        assert MultiDateTimeRange.empty().complement() == MultiDateTimeRange.infinite()
        assert ~MultiDateTimeRange.infinite() == MultiDateTimeRange.empty()

    def test_single_range(self):
        """Test that one range leaves a piece on each side."""
        start, end = datetime(2024, 1, 1), datetime(2024, 1, 10)
        multi = MultiDateTimeRange(dt_range(start, end))

        assert (~multi).ranges == (
            DateTimeRange.up_to(start),
            DateTimeRange.down_to(end),
        )

    def test_gaps_between_ranges(self):
        """Test that gaps between stored ranges become ranges."""
        multi = MultiDateRange(
            days(date(2024, 1, 1), date(2024, 1, 2)),
            days(date(2024, 3, 1), date(2024, 3, 2)),
        )

        assert (~multi).ranges == (
            DateRange.up_to(date(2024, 1, 1)),
            days(date(2024, 1, 2), date(2024, 3, 1)),
            DateRange.down_to(date(2024, 3, 2)),
        )

    def test_double_complement_is_identity(self):
        """Test that complementing twice restores the collection."""
        multi = MultiDateRange(
            days(date(2024, 1, 1), date(2024, 1, 2)),
            days(date(2024, 3, 1), date(2024, 3, 2)),
            days(date(2024, 5, 1), date(2024, 5, 2)),
        )

        assert ~~multi == multi

    def test_collection_and_complement_cover_everything(self):
        """Test that a collection merged with its complement is infinite."""
        multi = MultiDateTimeRange(dt_range(datetime(2024, 1, 1), datetime(2024, 1, 10)))

        assert (multi + ~multi).is_infinite()


class TestDiff:
    def test_removes_covered_part(self):
        """Test that subtracting a nested range splits the stored range."""
        multi = MultiDateTimeRange(dt_range(datetime(2024, 1, 1), datetime(2024, 1, 10)))
        hole = MultiDateTimeRange(dt_range(datetime(2024, 1, 3), datetime(2024, 1, 5)))

        assert (multi - hole).ranges == (
            dt_range(datetime(2024, 1, 1), datetime(2024, 1, 3)),
            dt_range(datetime(2024, 1, 5), datetime(2024, 1, 10)),
        )
        assert multi.diff(hole) == multi - hole

    def test_empty_operands(self):
        """Test subtracting from and subtracting the empty collection."""
        multi = MultiDateRange(days(date(2024, 1, 1), date(2024, 1, 10)))

        assert multi - MultiDateRange.empty() == multi
        assert MultiDateRange.empty() - multi == MultiDateRange.empty()
        assert multi - multi == MultiDateRange.empty()

    def test_infinite_minus_collection_is_complement(self):
        """Test that subtracting from infinite yields the complement."""
        multi = MultiDateRange(days(date(2024, 1, 1), date(2024, 1, 10)))

        assert MultiDateRange.infinite() - multi == ~multi


class TestQueries:
    def test_covers(self):
        """Test that covers requires a single stored range to contain the range."""
        multi = MultiDateRange(days(date(2024, 1, 1), date(2024, 1, 10)))

        assert multi.covers(days(date(2024, 1, 3), date(2024, 1, 5)))
        assert multi.covers(days(date(2024, 1, 1), date(2024, 1, 10)))
        assert not multi.covers(days(date(2024, 1, 8), date(2024, 1, 12)))

    def test_covers_needs_a_single_stored_range(self):
        """Test that a range straddling a gap is not covered."""
        multi = MultiDateRange(
            days(date(2024, 1, 1), date(2024, 1, 5)),
            days(date(2024, 1, 7), date(2024, 1, 10)),
        )

        assert not multi.covers(days(date(2024, 1, 4), date(2024, 1, 8)))

    def test_covers_collection(self):
        """Test that covering a collection means covering each of its ranges."""
        multi = MultiDateRange(
            days(date(2024, 1, 1), date(2024, 1, 5)),
            days(date(2024, 1, 7), date(2024, 1, 10)),
        )

        assert multi.covers(
            MultiDateRange(
                days(date(2024, 1, 2), date(2024, 1, 3)),
                days(date(2024, 1, 8), date(2024, 1, 9)),
            )
        )
        assert not multi.covers(
            MultiDateRange(
                days(date(2024, 1, 2), date(2024, 1, 3)),
                days(date(2024, 1, 9), date(2024, 1, 12)),
            )
        )
        assert multi.covers(multi)

    def test_overlaps(self):
        """Test overlap between a collection and a single range."""
        multi = MultiDateRange(days(date(2024, 1, 1), date(2024, 1, 10)))

        assert multi.overlaps(days(date(2024, 1, 8), date(2024, 1, 12)))
        assert not multi.overlaps(days(date(2024, 1, 10), date(2024, 1, 12)))

    def test_overlaps_collection(self):
        """Test that collections overlap when any of their ranges do."""
        multi = MultiDateTimeRange(
            dt_range(datetime(2024, 1, 1), datetime(2024, 1, 5)),
            dt_range(datetime(2024, 3, 1), datetime(2024, 3, 5)),
        )

        assert multi.overlaps(
            MultiDateTimeRange(
                dt_range(datetime(2024, 2, 1), datetime(2024, 2, 2)),
                dt_range(datetime(2024, 3, 4), datetime(2024, 3, 8)),
            )
        )
        assert not multi.overlaps(
            MultiDateTimeRange(dt_range(datetime(2024, 2, 1), datetime(2024, 2, 2)))
        )


class TestRendering:
    def test_str(self):
        """Test the braced rendering of collections."""
        assert str(MultiDateRange.empty()) == "{empty}"
        assert str(MultiDateRange.infinite()) == "{infinite}"
        assert (
            str(
                MultiDateRange(
                    days(date(2024, 3, 1), date(2024, 3, 2)),
                    days(date(2024, 1, 1), date(2024, 1, 10)),
                )
            )
            == "{2024-01-01 - 2024-01-10,2024-03-01 - 2024-03-02}"
        )

    def test_repr(self):
        """Test that repr names the collection and its ranges."""
        multi = MultiDateRange(days(date(2024, 1, 1), date(2024, 1, 2)))

        assert repr(multi).startswith("MultiDateRange(DateRange(")

    def test_hashable(self):
        """Test that equal collections hash alike."""
        january = days(date(2024, 1, 1), date(2024, 1, 2))

        assert len({MultiDateRange(january), MultiDateRange(january)}) == 1


class TestMultiTimeRange:
    def test_wrapping_range_absorbs_neighbours(self):
        """Test that a range bridging two pieces across midnight joins them."""
        multi = MultiTimeRange(hours(22, 2), hours(4, 6))

        assert multi.add(hours(1, 5)).ranges == (hours(22, 6),)

    def test_pieces_meeting_at_midnight_are_joined(self):
        """Test that a piece ending at the last instant joins one starting at midnight."""
        multi = MultiTimeRange(TimeRange.down_to(time(20)), TimeRange.up_to(time(5)))

        assert multi.ranges == (hours(20, 5),)

    def test_disjoint_pieces_are_kept_sorted(self):
        """Test that disjoint time ranges are stored in start order."""
        multi = MultiTimeRange(hours(22, 6), hours(9, 12))

        assert multi.ranges == (hours(9, 12), hours(22, 6))
        assert str(multi) == "{09:00:00 - 12:00:00,22:00:00 - 06:00:00}"

    def test_pieces_covering_the_day_become_all_day(self):
        """Test that overlapping pieces spanning the whole day are all-day."""
        multi = MultiTimeRange(hours(22, 10), hours(9, 23))

        assert multi.is_infinite()
        assert multi.ranges == (TimeRange.all_day(),)
        assert str(multi) == "{infinite}"

    def test_all_day_absorbs_everything(self):
        """Test that adding all-day replaces every stored range."""
        multi = MultiTimeRange(hours(9, 17)).add(TimeRange.all_day())

        assert multi == MultiTimeRange.infinite()

    def test_empty_ranges_are_dropped(self):
        """Test that empty time ranges are never stored."""
        assert MultiTimeRange(TimeRange.empty(), hours(5, 5)).is_empty()

    def test_complement_of_single_range_wraps(self):
        """Test that the complement of a day-time range is one overnight range."""
        multi = MultiTimeRange(hours(9, 17))

        assert (~multi).ranges == (hours(17, 9),)
        assert ~~multi == multi

    def test_complement_around_wrapping_range(self):
        """Test the gaps left by a plain and a wrapping range."""
        multi = MultiTimeRange(hours(9, 12), hours(22, 6))

        assert (~multi).ranges == (hours(6, 9), hours(12, 22))
        assert (multi + ~multi).is_infinite()

    def test_complement_of_range_reaching_end_of_day(self):
        """Test that a range up to the last instant leaves the morning."""
        multi = MultiTimeRange(TimeRange.down_to(time(20)))

        assert (~multi).ranges == (hours(0, 20),)
        assert ~~multi == multi

    def test_empty_and_infinite_swap(self):
        """Test that empty and all-day collections complement each other."""
        assert ~MultiTimeRange.empty() == MultiTimeRange.infinite()
        assert ~MultiTimeRange.infinite() == MultiTimeRange.empty()

    def test_diff(self):
        """Test removing an hour from an overnight range."""
        night = MultiTimeRange(hours(22, 6))

        assert (night - MultiTimeRange(hours(1, 2))).ranges == (hours(2, 6), hours(22, 1))
        assert night - night == MultiTimeRange.empty()

    def test_covers(self):
        """Test coverage across midnight."""
        night = MultiTimeRange(hours(22, 6))

        assert night.covers(hours(23, 2))
        assert night.covers(hours(22, 6))
        assert not night.covers(hours(5, 7))
        assert night.covers(MultiTimeRange(hours(23, 1), hours(3, 4)))
        assert not night.covers(MultiTimeRange(hours(23, 1), hours(12, 13)))

    def test_overlaps(self):
        """Test overlap across midnight."""
        night = MultiTimeRange(hours(22, 6))

        assert night.overlaps(hours(5, 7))
        assert not night.overlaps(hours(6, 22))
        assert not night.overlaps(MultiTimeRange(hours(8, 9), hours(12, 13)))
        assert night.overlaps(MultiTimeRange(hours(8, 9), hours(1, 2)))
