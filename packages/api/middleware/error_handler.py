"""Error handling middleware for consistent API error responses."""

import logging
from typing import Any

from werkzeug.exceptions import HTTPException

from packages.api import ERROR_STATUS_CODES, ErrorResponse
from packages.inventory.errors import CredentialsError, UpstreamError

logger = logging.getLogger("aws_inventory.api.middleware.error_handler")

STATUS_TO_ERROR_CODE = {
    400: "VALIDATION_ERROR",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    500: "INTERNAL_ERROR",
    502: "EXTERNAL_SERVICE_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def handle_http_error(error: HTTPException) -> tuple[dict[str, Any], int]:
    """
    Handle HTTP exceptions with consistent error response format.

    Args:
        error: HTTP exception from Flask/Werkzeug

    Returns:
        Tuple of (error response dict, status code)
    """
    status_code = error.code or 500
    error_code = STATUS_TO_ERROR_CODE.get(status_code, "UNKNOWN_ERROR")

    error_response = ErrorResponse(
        error_code=error_code,
        message=error.description or "An error occurred",
        details={"http_status": status_code},
    )

    logger.warning(
        f"HTTP error {status_code}: {error_code} - {error.description}",
        extra={"error_code": error_code, "status_code": status_code},
    )

    return _serialize_error_response(error_response), status_code


def handle_credentials_error(error: CredentialsError) -> tuple[dict[str, Any], int]:
    """Credential loading failed before any AWS call was made."""
    logger.error(f"AWS configuration error: {error}")
    return create_error_response("CONFIGURATION_ERROR", str(error))


def handle_upstream_error(error: UpstreamError) -> tuple[dict[str, Any], int]:
    """
    Handle a failed AWS call on a read endpoint.

    The request fails with 502; the server keeps running.

    Args:
        error: Upstream error raised by the inventory layer

    Returns:
        Tuple of (error response dict, status code)
    """
    logger.error(
        f"Upstream AWS error: {error}",
        extra={"service": error.service, "operation": error.operation},
    )
    return create_error_response(
        "EXTERNAL_SERVICE_ERROR",
        str(error),
        details={
            "service": error.service,
            "operation": error.operation,
            "aws_error_code": error.error_code,
        },
    )


def handle_generic_error(error: Exception) -> tuple[dict[str, Any], int]:
    """
    Handle generic exceptions with consistent error response format.

    Args:
        error: Generic Python exception

    Returns:
        Tuple of (error response dict, status code)
    """
    error_response = ErrorResponse(
        error_code="INTERNAL_ERROR",
        message=str(error) or "An unexpected error occurred",
        details={"exception_type": type(error).__name__},
    )

    logger.error(
        f"Unhandled exception: {type(error).__name__} - {error}",
        extra={"exception_type": type(error).__name__},
        exc_info=True,
    )

    return _serialize_error_response(error_response), ERROR_STATUS_CODES["INTERNAL_ERROR"]


def _serialize_error_response(error_response: ErrorResponse) -> dict[str, Any]:
    """
    Serialize ErrorResponse dataclass to JSON-compatible dict.

    Args:
        error_response: ErrorResponse instance

    Returns:
        Dictionary representation of error response
    """
    return {
        "error_code": error_response.error_code,
        "message": error_response.message,
        "details": error_response.details,
        "timestamp": error_response.timestamp.isoformat(),
    }


def create_error_response(
    error_code: str, message: str, details: dict[str, Any] | None = None
) -> tuple[dict[str, Any], int]:
    """
    Create a standardized error response.

    Route handlers use this for errors they detect themselves.

    Args:
        error_code: Machine-readable error code (must be in ERROR_STATUS_CODES)
        message: Human-readable error message
        details: Optional additional context

    Returns:
        Tuple of (error response dict, status code)
    """
    if error_code not in ERROR_STATUS_CODES:
        logger.warning(f"Unknown error code: {error_code}, using INTERNAL_ERROR")
        error_code = "INTERNAL_ERROR"

    status_code = ERROR_STATUS_CODES[error_code]

    error_response = ErrorResponse(error_code=error_code, message=message, details=details)

    return _serialize_error_response(error_response), status_code
