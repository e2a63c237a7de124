"""Transaction subsystem used by the booking engine."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from django.db import DatabaseError, transaction  # type: ignore

from shared.infrastructure.locking import lock_queryset_if_possible

from .models import Transaction

logger = logging.getLogger(__name__)


class TransactionError(Exception):
    """Raised when a transaction cannot be opened or updated."""


def open_booking_transaction(
    user_id: int,
    content_id: str,
    amount: Decimal,
    currency: str,
    metadata: dict[str, Any] | None = None,
    *,
    subtype: str = Transaction.Subtype.APPOINTMENT_BOOKING,
) -> Transaction:
    """Open a pending ``bookings_reservations`` transaction.

    Runs in its own savepoint so a failed insert leaves the caller's
    transaction usable; the caller decides whether to roll back.
    """

    metadata = dict(metadata or {})
    booking_date = metadata.get("booking_date", "")
    try:
        with transaction.atomic():
            txn = Transaction.objects.create(
                user_id=user_id,
                content_id=content_id,
                category=Transaction.Category.BOOKINGS_RESERVATIONS,
                subtype=subtype,
                amount=amount,
                currency=currency,
                description=f"Booking for {booking_date}".strip(),
                metadata=metadata,
            )
    except DatabaseError as exc:
        logger.error(f"Failed to open booking transaction for content {content_id}: {exc}")
        raise TransactionError(f"Could not open transaction: {exc}") from exc

    logger.info(f"Opened transaction {txn.pk} for content {content_id}: {amount} {currency}")
    return txn


def mark_transaction_succeeded(transaction_id: int, payment_reference: str = "") -> Transaction:
    """Mark a pending transaction succeeded. Already succeeded is a no-op."""

    try:
        txn = lock_queryset_if_possible(Transaction.objects.filter(pk=transaction_id)).get()
    except Transaction.DoesNotExist as exc:
        raise TransactionError(f"Transaction {transaction_id} not found") from exc

    if txn.status == Transaction.Status.SUCCEEDED:
        return txn
    if txn.status != Transaction.Status.PENDING:
        raise TransactionError(
            f"Transaction {transaction_id} cannot succeed from status {txn.status}"
        )

    txn.mark_succeeded(payment_reference)
    logger.info(f"Transaction {txn.pk} succeeded (reference {payment_reference or '-'})")
    return txn


def cancel_pending_transaction(transaction_id: int, reason: str = "") -> Transaction | None:
    """Cancel the transaction if it is still pending; settled ones are left alone."""

    txn = lock_queryset_if_possible(Transaction.objects.filter(pk=transaction_id)).first()
    if txn is None or txn.status != Transaction.Status.PENDING:
        return txn
    txn.mark_cancelled(reason or None)
    logger.info(f"Transaction {txn.pk} cancelled")
    return txn


def find_latest_pending_transaction(content_id: str, user_id: int) -> Transaction | None:
    """Most recent pending transaction for (content, user)."""

    return (
        Transaction.objects.filter(
            content_id=content_id,
            user_id=user_id,
            status=Transaction.Status.PENDING,
        )
        .order_by("-created_at", "-id")
        .first()
    )
