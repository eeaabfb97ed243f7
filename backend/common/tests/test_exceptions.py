import pytest
from rest_framework import serializers
from rest_framework.exceptions import NotFound

from common.exceptions import ConflictError, api_exception_handler


class _Payload(serializers.Serializer):
    name = serializers.CharField()


def test_conflict_error_is_409_with_uniform_body():
    response = api_exception_handler(ConflictError("Order ORD-9 not found"), {})
    assert response.status_code == 409
    assert response.data == {"success": False, "statusCode": 409, "message": "Order ORD-9 not found"}


def test_not_found_has_no_errors_key():
    response = api_exception_handler(NotFound("Order not found"), {})
    assert response.status_code == 404
    assert response.data["message"] == "Order not found"
    assert "errors" not in response.data


def test_validation_errors_are_kept_per_field():
    with pytest.raises(serializers.ValidationError) as excinfo:
        _Payload(data={}).is_valid(raise_exception=True)

    response = api_exception_handler(excinfo.value, {})
    assert response.status_code == 400
    assert response.data["success"] is False
    assert response.data["message"] == "Validation failed"
    assert "name" in response.data["errors"]


def test_non_api_exceptions_are_left_to_django():
    assert api_exception_handler(RuntimeError("boom"), {}) is None
