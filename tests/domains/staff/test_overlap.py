"""
Tests for shift overlap detection.
"""

from datetime import date, time

import pytest

from app.domains.staff.models import Shift
from app.domains.staff.overlap import ShiftInterval, overlaps

DAY = date(2024, 5, 6)


def interval(start, end, *, employee_id=1, on=DAY):
    return ShiftInterval(employee_id, on, time(*start), time(*end))


NINE_TO_FIVE = interval((9, 0), (17, 0))


class TestConflictsWith:
    """Tests for pairwise interval conflicts."""

    def test_partial_overlap(self):
        """Test that a partially overlapping shift conflicts."""
        assert interval((16, 0), (18, 0)).conflicts_with(NINE_TO_FIVE)

    def test_touching_boundary_is_not_overlap(self):
        """Test that shifts touching at a boundary do not conflict."""
        assert not interval((17, 0), (18, 0)).conflicts_with(NINE_TO_FIVE)
        assert not interval((7, 0), (9, 0)).conflicts_with(NINE_TO_FIVE)

    @pytest.mark.parametrize(
        "start, end",
        [
            ((9, 0), (17, 0)),  # identical
            ((10, 0), (11, 0)),  # contained
            ((8, 0), (18, 0)),  # containing
            ((8, 0), (9, 1)),  # overlaps the start
            ((16, 59), (20, 0)),  # overlaps the end
        ],
    )
    def test_overlapping_ranges(self, start, end):
        """Test ranges that intersect the existing shift."""
        candidate = interval(start, end)
        assert candidate.conflicts_with(NINE_TO_FIVE)
        assert NINE_TO_FIVE.conflicts_with(candidate)

    def test_different_date_never_conflicts(self):
        """Test that shifts on other dates never conflict."""
        candidate = interval((9, 0), (17, 0), on=date(2024, 5, 7))
        assert not candidate.conflicts_with(NINE_TO_FIVE)

    def test_different_employee_never_conflicts(self):
        """Test that other employees' shifts never conflict."""
        candidate = interval((9, 0), (17, 0), employee_id=2)
        assert not candidate.conflicts_with(NINE_TO_FIVE)


class TestOverlaps:
    """Tests for checking a candidate against existing shifts."""

    def test_no_existing_shifts(self):
        """Test that a shift fits when nothing is scheduled."""
        assert not overlaps(interval((9, 0), (17, 0)), [])

    def test_any_conflict_is_enough(self):
        """Test that one conflicting shift among many is enough."""
        existing = [interval((6, 0), (8, 0)), NINE_TO_FIVE, interval((18, 0), (22, 0))]
        assert overlaps(interval((16, 0), (18, 0)), existing)

    def test_fits_in_gap(self):
        """Test that a shift fitting between two others is accepted."""
        existing = [interval((6, 0), (9, 0)), interval((17, 0), (22, 0))]
        assert not overlaps(NINE_TO_FIVE, existing)

    def test_from_shift_uses_start_date(self):
        """Test that intervals are built from the shift's start date."""
        shift = Shift(
            employee_id=4,
            role_id=1,
            start_date=DAY,
            end_date=DAY,
            start_time=time(9, 0),
            end_time=time(17, 0),
        )
        assert ShiftInterval.from_shift(shift) == ShiftInterval(4, DAY, time(9, 0), time(17, 0))
