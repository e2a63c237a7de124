"""
Recurrence Schedule

Lazy, restartable stepping of a recurring booking template. Iterating a
schedule twice yields the same dates; nothing is computed until asked.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from itertools import count
from typing import Iterator, List, Optional

from shared.domain.base import ValueObject
from shared.domain.errors import InvalidRangeError, ValidationFailedError

from apps.bookings.domain.entities import RecurrencePattern


def add_months(anchor: date, months: int) -> date:
    """Same day-of-month ``months`` later, clamped to the end of a short month"""
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor.day, last_day))


@dataclass(frozen=True)
class RecurrenceSchedule(ValueObject):
    """
    Occurrence dates of a recurring booking

    Stops after ``end_date`` and after ``max_occurrences`` generated dates,
    whichever comes first. Monthly steps are taken from the anchor
    (start_date) so Jan 31 -> Feb 28 -> Mar 31, never drifting to the 28th.
    """
    pattern: RecurrencePattern
    start_date: date
    end_date: date
    frequency: int = 1
    max_occurrences: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.pattern, RecurrencePattern):
            object.__setattr__(self, 'pattern', RecurrencePattern(self.pattern))
        if self.start_date > self.end_date:
            raise InvalidRangeError(
                f"Start date ({self.start_date}) must not be after end date ({self.end_date})"
            )
        if self.frequency < 1:
            raise ValidationFailedError("Frequency must be at least 1")
        if self.max_occurrences is not None and self.max_occurrences < 1:
            raise ValidationFailedError("max_occurrences must be at least 1")

    def occurrence(self, index: int) -> date:
        """Date of the ``index``-th occurrence (0-based), ignoring the bounds"""
        if self.pattern is RecurrencePattern.DAILY:
            return self.start_date + timedelta(days=index * self.frequency)
        if self.pattern is RecurrencePattern.WEEKLY:
            return self.start_date + timedelta(weeks=index * self.frequency)
        return add_months(self.start_date, index * self.frequency)

    def __iter__(self) -> Iterator[date]:
        for index in count():
            if self.max_occurrences is not None and index >= self.max_occurrences:
                return
            current = self.occurrence(index)
            if current > self.end_date:
                return
            yield current

    def dates(self) -> List[date]:
        return list(self)
