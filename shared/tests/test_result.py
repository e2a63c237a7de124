"""Tests for the Result boundary."""

from __future__ import annotations

from django.db import DatabaseError
from django.test import SimpleTestCase

from shared.application.result import STORE_ERROR, Result, as_result
from shared.domain.errors import NotFoundError, SlotUnavailableError


class ResultTests(SimpleTestCase):
    def test_ok_result_is_truthy_and_unwraps(self) -> None:
        result = Result.ok(5)

        self.assertTrue(result)
        self.assertEqual(result.unwrap(), 5)
        self.assertIsNone(result.code)

    def test_failed_result_refuses_unwrap(self) -> None:
        result = Result.fail("boom", "not_found")

        self.assertFalse(result)
        with self.assertRaises(ValueError):
            result.unwrap()

    def test_as_result_converts_engine_errors(self) -> None:
        @as_result
        def reject():
            raise SlotUnavailableError()

        result = reject()

        self.assertFalse(result.success)
        self.assertEqual(result.code, "slot_unavailable")
        self.assertEqual(result.error, "This time slot is no longer available")

    def test_as_result_keeps_custom_messages(self) -> None:
        @as_result
        def missing():
            raise NotFoundError("Booking 7 not found")

        result = missing()

        self.assertEqual(result.code, "not_found")
        self.assertEqual(result.error, "Booking 7 not found")

    def test_as_result_reports_database_errors_as_store_error(self) -> None:
        @as_result
        def broken():
            raise DatabaseError("connection lost")

        result = broken()

        self.assertEqual(result.code, STORE_ERROR)
        self.assertIn("connection lost", result.error)

    def test_unexpected_errors_propagate(self) -> None:
        @as_result
        def buggy():
            raise KeyError("oops")

        with self.assertRaises(KeyError):
            buggy()
