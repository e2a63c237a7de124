"""Mapping of engine results onto DRF responses."""

from __future__ import annotations

from typing import Any, Callable

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.application.result import Result

STATUS_BY_CODE = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "slot_unavailable": status.HTTP_409_CONFLICT,
    "duplicate_waitlist": status.HTTP_409_CONFLICT,
    "duplicate_exception": status.HTTP_409_CONFLICT,
    "duplicate_rule": status.HTTP_409_CONFLICT,
    "invalid_transition": status.HTTP_409_CONFLICT,
    "invalid_range": status.HTTP_400_BAD_REQUEST,
    "invalid_party_size": status.HTTP_400_BAD_REQUEST,
    "invalid_status": status.HTTP_400_BAD_REQUEST,
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "transaction_failed": status.HTTP_503_SERVICE_UNAVAILABLE,
    "store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(result: Result) -> Response:
    http_status = STATUS_BY_CODE.get(result.code or "", status.HTTP_400_BAD_REQUEST)
    return Response({"detail": result.error, "code": result.code}, status=http_status)


def result_to_response(
    result: Result,
    serialize: Callable[[Any], Any] | None = None,
    *,
    success_status: int = status.HTTP_200_OK,
) -> Response:
    """Success -> ``serialize(value)`` with ``success_status``; failure -> mapped error."""

    if not result.success:
        return error_response(result)
    data = serialize(result.value) if serialize else result.value
    return Response(data, status=success_status)
