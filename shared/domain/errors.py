"""
Domain errors of the booking engine.

Handlers raise these for expected conditions; the Result boundary
(`shared.application.result.as_result`) turns them into failure results
carrying ``code`` and the human-readable message.
"""

from __future__ import annotations


class BookingEngineError(Exception):
    """Base class for expected booking-engine failures."""

    code = "error"
    default_message = "The request could not be completed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NotFoundError(BookingEngineError):
    code = "not_found"
    default_message = "The requested record does not exist."


class SlotUnavailableError(BookingEngineError):
    code = "slot_unavailable"
    default_message = "This time slot is no longer available"


class InvalidTransitionError(BookingEngineError):
    code = "invalid_transition"
    default_message = "The booking cannot move to the requested status."


class InvalidRangeError(BookingEngineError):
    code = "invalid_range"
    default_message = "The start date must not be after the end date."


class InvalidPartySizeError(BookingEngineError):
    code = "invalid_party_size"
    default_message = "Party size must be at least 1."


class InvalidStatusError(BookingEngineError):
    code = "invalid_status"
    default_message = "Unknown booking status."


class DuplicateWaitlistEntryError(BookingEngineError):
    code = "duplicate_waitlist"
    default_message = "You are already on the waitlist for this time slot"


class DuplicateExceptionError(BookingEngineError):
    code = "duplicate_exception"
    default_message = "This rule already has an exception for that date."


class DuplicateRuleError(BookingEngineError):
    code = "duplicate_rule"
    default_message = "An active rule already opens a slot at that weekday and start time."


class TransactionFailedError(BookingEngineError):
    code = "transaction_failed"
    default_message = "The payment transaction could not be opened."


class ValidationFailedError(BookingEngineError):
    code = "validation_error"
    default_message = "The request is invalid."
