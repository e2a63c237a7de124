from __future__ import annotations

from datetime import date

from django.test import SimpleTestCase

from shared.domain.errors import InvalidRangeError, ValidationFailedError

from apps.bookings.domain.entities import RecurrencePattern
from apps.bookings.domain.recurrence import RecurrenceSchedule, add_months


class RecurrenceScheduleTests(SimpleTestCase):
    def test_weekly_dates_until_end_date(self) -> None:
        schedule = RecurrenceSchedule(RecurrencePattern.WEEKLY, date(2025, 1, 1), date(2025, 1, 31))

        self.assertEqual(
            schedule.dates(),
            [date(2025, 1, 1), date(2025, 1, 8), date(2025, 1, 15), date(2025, 1, 22), date(2025, 1, 29)],
        )

    def test_max_occurrences_stops_early(self) -> None:
        schedule = RecurrenceSchedule(
            RecurrencePattern.WEEKLY,
            date(2025, 1, 1),
            date(2025, 1, 31),
            max_occurrences=3,
        )

        self.assertEqual(schedule.dates(), [date(2025, 1, 1), date(2025, 1, 8), date(2025, 1, 15)])

    def test_daily_with_frequency(self) -> None:
        schedule = RecurrenceSchedule("daily", date(2025, 1, 1), date(2025, 1, 7), frequency=3)

        self.assertEqual(schedule.dates(), [date(2025, 1, 1), date(2025, 1, 4), date(2025, 1, 7)])

    def test_monthly_clamps_without_drifting(self) -> None:
        schedule = RecurrenceSchedule(RecurrencePattern.MONTHLY, date(2025, 1, 31), date(2025, 4, 30))

        self.assertEqual(
            schedule.dates(),
            [date(2025, 1, 31), date(2025, 2, 28), date(2025, 3, 31), date(2025, 4, 30)],
        )

    def test_schedule_can_be_iterated_twice(self) -> None:
        schedule = RecurrenceSchedule(RecurrencePattern.DAILY, date(2025, 1, 1), date(2025, 1, 3))

        self.assertEqual(list(schedule), list(schedule))

    def test_single_day_range(self) -> None:
        schedule = RecurrenceSchedule(RecurrencePattern.WEEKLY, date(2025, 1, 1), date(2025, 1, 1))

        self.assertEqual(schedule.dates(), [date(2025, 1, 1)])

    def test_invalid_schedules(self) -> None:
        with self.assertRaises(InvalidRangeError):
            RecurrenceSchedule(RecurrencePattern.DAILY, date(2025, 2, 1), date(2025, 1, 1))
        with self.assertRaises(ValidationFailedError):
            RecurrenceSchedule(RecurrencePattern.DAILY, date(2025, 1, 1), date(2025, 2, 1), frequency=0)
        with self.assertRaises(ValueError):
            RecurrenceSchedule("hourly", date(2025, 1, 1), date(2025, 2, 1))

    def test_add_months_across_year_end(self) -> None:
        self.assertEqual(add_months(date(2024, 12, 31), 2), date(2025, 2, 28))
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
