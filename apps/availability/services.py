"""Rule store: writes to availability rules and their exceptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Iterable, Mapping

from django.db import IntegrityError, transaction  # type: ignore

from shared.application.result import as_result
from shared.domain.errors import (
    DuplicateExceptionError,
    DuplicateRuleError,
    NotFoundError,
    ValidationFailedError,
)
from shared.domain.value_objects import Money, TimeWindow

from apps.bookings.conf import engine_setting

from .models import AvailabilityException, AvailabilityRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExceptionSpec:
    """Per-date override supplied while creating a rule."""

    date: date
    is_available: bool = False
    custom_price: Decimal | None = None
    custom_capacity: int | None = None
    reason: str = ""


def _validate_window(start_time: time, end_time: time) -> None:
    try:
        TimeWindow(start_time, end_time)
    except ValueError as exc:
        raise ValidationFailedError(str(exc)) from exc


def _validate_money(amount, currency: str) -> Money:
    try:
        return Money(amount, currency)
    except (ValueError, ArithmeticError) as exc:
        raise ValidationFailedError(str(exc)) from exc


def _validate_capacity(value: int | None, field_name: str) -> None:
    if value is not None and value < 0:
        raise ValidationFailedError(f"{field_name} cannot be negative")


def _get_rule(rule_id: int) -> AvailabilityRule:
    try:
        return AvailabilityRule.objects.get(pk=rule_id)
    except AvailabilityRule.DoesNotExist as exc:
        raise NotFoundError(f"Availability rule {rule_id} not found") from exc


def _create_exception(rule: AvailabilityRule, spec: ExceptionSpec) -> AvailabilityException:
    _validate_capacity(spec.custom_capacity, "custom_capacity")
    if spec.custom_price is not None:
        _validate_money(spec.custom_price, rule.currency)
    try:
        with transaction.atomic():
            return AvailabilityException.objects.create(
                rule=rule,
                date=spec.date,
                is_available=spec.is_available,
                custom_price=spec.custom_price,
                custom_capacity=spec.custom_capacity,
                reason=spec.reason,
            )
    except IntegrityError as exc:
        raise DuplicateExceptionError(
            f"Rule {rule.pk} already has an exception for {spec.date}"
        ) from exc


@as_result
def create_availability_rule(
    content_id: str,
    day_of_week: int,
    start_time: time,
    end_time: time,
    max_capacity: int,
    price: Decimal,
    currency: str | None = None,
    exceptions: Iterable[ExceptionSpec | Mapping] | None = None,
) -> AvailabilityRule:
    if not content_id:
        raise ValidationFailedError("content_id is required")
    if not 0 <= day_of_week <= 6:
        raise ValidationFailedError("day_of_week must be between 0 (Monday) and 6 (Sunday)")
    _validate_window(start_time, end_time)
    _validate_capacity(max_capacity, "max_capacity")
    money = _validate_money(price, currency or engine_setting("DEFAULT_CURRENCY"))

    specs = [item if isinstance(item, ExceptionSpec) else ExceptionSpec(**item) for item in exceptions or []]

    with transaction.atomic():
        clash = AvailabilityRule.objects.active().for_content(content_id).filter(
            day_of_week=day_of_week,
            start_time=start_time,
        )
        if clash.exists():
            logger.info(
                f"Rejected rule for {content_id}: weekday {day_of_week} {start_time:%H:%M} already open"
            )
            raise DuplicateRuleError()

        rule = AvailabilityRule.objects.create(
            content_id=content_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            max_capacity=max_capacity,
            price=money.amount,
            currency=money.currency,
        )
        for spec in specs:
            _create_exception(rule, spec)

    logger.info(
        f"Created availability rule {rule.pk} for {content_id}: "
        f"weekday {day_of_week} {start_time:%H:%M}-{end_time:%H:%M}, capacity {max_capacity}"
    )
    return rule


@as_result
def add_rule_exception(
    rule_id: int,
    exception_date: date,
    is_available: bool = False,
    custom_price: Decimal | None = None,
    custom_capacity: int | None = None,
    reason: str = "",
) -> AvailabilityException:
    rule = _get_rule(rule_id)
    exception = _create_exception(
        rule,
        ExceptionSpec(
            date=exception_date,
            is_available=is_available,
            custom_price=custom_price,
            custom_capacity=custom_capacity,
            reason=reason,
        ),
    )
    logger.info(f"Added exception to rule {rule_id} for {exception_date} (available={is_available})")
    return exception


@as_result
def remove_rule_exception(rule_id: int, exception_date: date) -> bool:
    deleted, _ = AvailabilityException.objects.filter(rule_id=rule_id, date=exception_date).delete()
    if not deleted:
        raise NotFoundError(f"Rule {rule_id} has no exception for {exception_date}")
    logger.info(f"Removed exception of rule {rule_id} for {exception_date}")
    return True


@as_result
def deactivate_rule(rule_id: int) -> AvailabilityRule:
    rule = _get_rule(rule_id)
    if rule.is_active:
        rule.is_active = False
        rule.save(update_fields=["is_active", "updated_at"])
        logger.info(f"Deactivated availability rule {rule_id}")
    return rule


@as_result
def get_active_rules(content_id: str) -> list[AvailabilityRule]:
    return list(AvailabilityRule.objects.active().for_content(content_id).prefetch_related("exceptions"))
