# backend/common/exceptions.py
from __future__ import annotations

from typing import Any, Dict

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


def _first_message(detail: Any) -> str:
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        return "Validation failed"
    return str(detail)


def api_exception_handler(exc, context):
    """
    Wraps DRF's default handler so every error body looks alike:
      {"success": false, "statusCode": 409, "message": "...", "errors": {...}}
    `errors` is only present for field-level validation failures.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    body: Dict[str, Any] = {
        "success": False,
        "statusCode": response.status_code,
        "message": _first_message(data),
    }
    if isinstance(data, dict) and "detail" not in data:
        body["errors"] = data
    response.data = body
    return response
