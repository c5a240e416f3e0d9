"""Shift overlap detection.

Shift times are half-open intervals ``[start, end)``: a shift ending at 17:00
and another starting at 17:00 on the same day do not conflict.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, time

from app.domains.staff.models import Shift


@dataclass(frozen=True)
class ShiftInterval:
    """The part of a shift that matters for conflict checks."""

    employee_id: int
    date: date
    start: time
    end: time

    @classmethod
    def from_shift(cls, shift: Shift) -> "ShiftInterval":
        return cls(shift.employee_id, shift.start_date, shift.start_time, shift.end_time)

    def conflicts_with(self, other: "ShiftInterval") -> bool:
        """True if both belong to the same employee and date and their times intersect."""
        if self.employee_id != other.employee_id or self.date != other.date:
            return False
        return self.start < other.end and other.start < self.end


def overlaps(candidate: ShiftInterval, existing: Iterable[ShiftInterval]) -> bool:
    """Return True as soon as one existing interval conflicts with the candidate.

    ``existing`` is expected to hold the employee's shifts on the candidate's
    date already; it is not queried or filtered here.
    """
    return any(candidate.conflicts_with(interval) for interval in existing)
