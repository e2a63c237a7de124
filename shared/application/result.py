"""
Result boundary

Every public engine operation returns a ``Result`` instead of raising for
expected conditions. Inside the engine, handlers raise
``BookingEngineError`` subclasses (and the ORM may raise
``DatabaseError``); ``as_result`` is the single place where both are
converted.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from django.db import DatabaseError  # type: ignore

from shared.domain.errors import BookingEngineError

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORE_ERROR = "store_error"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Discriminated success/failure value."""

    success: bool
    value: T | None = None
    error: str | None = None
    code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str = "error") -> "Result[T]":
        return cls(success=False, error=error, code=code)

    @classmethod
    def from_error(cls, exc: BookingEngineError) -> "Result[T]":
        return cls.fail(exc.message, exc.code)

    def unwrap(self) -> T:
        """Return the value or raise when the result is a failure."""
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result ({self.code}): {self.error}")
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.success


def as_result(func: Callable[..., Any]) -> Callable[..., Result]:
    """Run ``func`` and wrap its return value, or its expected failure, in a Result."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Result:
        try:
            return Result.ok(func(*args, **kwargs))
        except BookingEngineError as exc:
            logger.info(f"{func.__name__} rejected ({exc.code}): {exc.message}")
            return Result.from_error(exc)
        except DatabaseError as exc:
            logger.error(f"{func.__name__} failed on store access: {exc}", exc_info=True)
            return Result.fail(f"Storage error: {exc}", STORE_ERROR)

    return wrapper
