"""API package for the AWS inventory proxy HTTP endpoints."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

__all__ = ["ErrorResponse", "ERROR_STATUS_CODES"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ErrorResponse:
    """Consistent error response format for all API endpoints."""

    error_code: str  # Machine-readable error code
    message: str  # Human-readable error message
    details: Optional[dict[str, Any]] = None  # Additional context
    timestamp: datetime = field(default_factory=_utcnow)


# HTTP Status Code Mapping
ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,
    "CONFIGURATION_ERROR": 500,
    "UPSTREAM_ERROR": 500,
    "INTERNAL_ERROR": 500,
    "EXTERNAL_SERVICE_ERROR": 502,
    "SERVICE_UNAVAILABLE": 503,
}
