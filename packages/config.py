"""Environment-driven configuration for the AWS inventory proxy."""

import os
from typing import Any, Mapping, Optional

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_EKS_MAX_RESULTS = 10
DEFAULT_QUOTA_SERVICE_CODES = ["vpc"]


def load_config(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Build the application configuration from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Configuration dictionary suitable for ``create_app(config)``.

    Raises:
        ValueError: If a numeric setting cannot be parsed.
    """
    if environ is None:
        environ = os.environ

    region = environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION") or None

    return {
        "AWS_PROFILE": environ.get("AWS_PROFILE") or None,
        "AWS_REGION": region,
        "AWS_ENDPOINT_URL": environ.get("AWS_ENDPOINT_URL") or None,
        "EKS_MAX_RESULTS": _parse_int(
            environ.get("EKS_MAX_RESULTS"), DEFAULT_EKS_MAX_RESULTS, "EKS_MAX_RESULTS"
        ),
        "QUOTA_SERVICE_CODES": _parse_service_codes(environ.get("QUOTA_SERVICE_CODES")),
        "HOST": environ.get("HOST") or DEFAULT_HOST,
        "PORT": _parse_int(environ.get("PORT"), DEFAULT_PORT, "PORT"),
        "LOG_LEVEL": (environ.get("LOG_LEVEL") or "INFO").upper(),
    }


def _parse_int(raw: Optional[str], default: int, name: str) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


def _parse_service_codes(raw: Optional[str]) -> list[str]:
    """Split a comma separated list of service codes.

    Falls back to the default list when nothing usable is given.
    """
    if not raw:
        return list(DEFAULT_QUOTA_SERVICE_CODES)

    codes = [code.strip().lower() for code in raw.split(",")]
    codes = [code for code in codes if code]
    return codes or list(DEFAULT_QUOTA_SERVICE_CODES)
