"""Tests for the pure slot projection."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.test import SimpleTestCase

from shared.domain.value_objects import DateRange

from apps.availability.domain.slots import (
    ExceptionSnapshot,
    RuleSnapshot,
    find_slot,
    generate_slots,
    make_slot_id,
)

MONDAY = 0


def monday_rule(rule_id: int = 1, start: time = time(9), end: time = time(17)) -> RuleSnapshot:
    return RuleSnapshot(
        rule_id=rule_id,
        content_id="studio-1",
        day_of_week=MONDAY,
        start_time=start,
        end_time=end,
        max_capacity=4,
        price=Decimal("20.00"),
    )


class GenerateSlotsTests(SimpleTestCase):
    def test_closed_exception_removes_the_date(self) -> None:
        rule = monday_rule()
        closed = ExceptionSnapshot(rule_id=1, date=date(2025, 3, 10), is_available=False)

        slots = generate_slots(
            [rule],
            {(1, date(2025, 3, 10)): closed},
            {},
            DateRange(date(2025, 3, 3), date(2025, 3, 17)),
        )

        self.assertEqual([slot.date for slot in slots], [date(2025, 3, 3), date(2025, 3, 17)])
        first = slots[0]
        self.assertEqual(first.id, "studio-1:2025-03-03:09:00")
        self.assertEqual(first.max_capacity, 4)
        self.assertEqual(first.price, Decimal("20.00"))
        self.assertEqual(first.current_bookings, 0)
        self.assertTrue(first.is_available)

    def test_open_exception_overrides_capacity_and_price(self) -> None:
        override = ExceptionSnapshot(
            rule_id=1,
            date=date(2025, 3, 10),
            is_available=True,
            custom_price=Decimal("35.00"),
            custom_capacity=2,
        )

        slots = generate_slots(
            [monday_rule()],
            {(1, date(2025, 3, 10)): override},
            {},
            DateRange(date(2025, 3, 10), date(2025, 3, 10)),
        )

        self.assertEqual(len(slots), 1)
        self.assertEqual(slots[0].max_capacity, 2)
        self.assertEqual(slots[0].price, Decimal("35.00"))

    def test_booked_totals_fill_current_bookings(self) -> None:
        slot_id = make_slot_id("studio-1", date(2025, 3, 10), time(9))

        slots = generate_slots(
            [monday_rule()],
            {},
            {slot_id: 4},
            DateRange(date(2025, 3, 10), date(2025, 3, 10)),
        )

        self.assertEqual(slots[0].current_bookings, 4)
        self.assertFalse(slots[0].is_available)
        self.assertEqual(slots[0].remaining_capacity, 0)

    def test_output_is_ordered_and_deterministic(self) -> None:
        rules = [
            monday_rule(rule_id=2, start=time(14), end=time(15)),
            monday_rule(rule_id=1, start=time(9), end=time(10)),
        ]
        dates = DateRange(date(2025, 3, 3), date(2025, 3, 16))

        first = generate_slots(rules, {}, {}, dates)
        second = generate_slots(list(reversed(rules)), {}, {}, dates)

        self.assertEqual(first, second)
        self.assertEqual(
            [(slot.date, slot.start_time) for slot in first],
            [
                (date(2025, 3, 3), time(9)),
                (date(2025, 3, 3), time(14)),
                (date(2025, 3, 10), time(9)),
                (date(2025, 3, 10), time(14)),
            ],
        )

    def test_no_slots_on_other_weekdays(self) -> None:
        slots = generate_slots(
            [monday_rule()],
            {},
            {},
            DateRange(date(2025, 3, 11), date(2025, 3, 16)),
        )

        self.assertEqual(slots, [])

    def test_can_fit_respects_party_size(self) -> None:
        slot = generate_slots(
            [monday_rule()],
            {},
            {make_slot_id("studio-1", date(2025, 3, 10), time(9)): 3},
            DateRange(date(2025, 3, 10), date(2025, 3, 10)),
        )[0]

        self.assertTrue(slot.is_available)
        self.assertTrue(slot.can_fit(1))
        self.assertFalse(slot.can_fit(2))
        self.assertIs(find_slot([slot], time(9)), slot)
        self.assertIsNone(find_slot([slot], time(10)))
