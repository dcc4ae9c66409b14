"""Unit tests for error response helpers."""

from werkzeug.exceptions import MethodNotAllowed, NotFound

from packages.api.middleware import error_handler
from packages.inventory.errors import CredentialsError, UpstreamError


def test_handle_http_error_method_not_allowed():
    body, status = error_handler.handle_http_error(MethodNotAllowed(valid_methods=["GET"]))

    assert status == 405
    assert body["error_code"] == "METHOD_NOT_ALLOWED"
    assert body["details"] == {"http_status": 405}
    assert "timestamp" in body


def test_handle_http_error_not_found():
    body, status = error_handler.handle_http_error(NotFound())

    assert status == 404
    assert body["error_code"] == "NOT_FOUND"


def test_handle_upstream_error():
    error = UpstreamError("ec2", "DescribeVpcs", "throttled", error_code="Throttling")

    body, status = error_handler.handle_upstream_error(error)

    assert status == 502
    assert body["error_code"] == "EXTERNAL_SERVICE_ERROR"
    assert body["message"] == "ec2.DescribeVpcs failed: throttled"
    assert body["details"] == {
        "service": "ec2",
        "operation": "DescribeVpcs",
        "aws_error_code": "Throttling",
    }


def test_handle_credentials_error():
    body, status = error_handler.handle_credentials_error(CredentialsError("failed loading config"))

    assert status == 500
    assert body["error_code"] == "CONFIGURATION_ERROR"


def test_handle_generic_error():
    body, status = error_handler.handle_generic_error(RuntimeError("boom"))

    assert status == 500
    assert body["error_code"] == "INTERNAL_ERROR"
    assert body["details"] == {"exception_type": "RuntimeError"}


def test_create_error_response_unknown_code():
    body, status = error_handler.create_error_response("NOT_A_CODE", "oops")

    assert status == 500
    assert body["error_code"] == "INTERNAL_ERROR"
