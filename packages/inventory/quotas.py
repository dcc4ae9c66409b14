"""Service Quotas listing and quota increase requests."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from packages.inventory.errors import InvalidFieldsError, InvalidPayloadError
from packages.inventory.resources import call_aws

logger = logging.getLogger("aws_inventory.inventory.quotas")


@dataclass
class QuotaSummary:
    """Applied value of a single service quota."""

    quota_name: str
    service_name: str
    value: float | None
    quota_code: str | None = None


@dataclass
class QuotaIncreaseRequest:
    """Validated body of a quota increase request."""

    desired_value: float
    quota_code: str
    service_code: str


def list_service_quotas(sq_client, service_codes: Iterable[str]) -> dict[str, list[QuotaSummary]]:
    """List applied quotas for each service code.

    Args:
        sq_client: boto3 ``service-quotas`` client
        service_codes: Service codes to query (e.g. "vpc", "ec2")

    Returns:
        Mapping of service code to its quotas, in the order given
    """
    quota_map: dict[str, list[QuotaSummary]] = {}

    for service_code in service_codes:
        response = call_aws(
            "service-quotas",
            "ListServiceQuotas",
            sq_client.list_service_quotas,
            ServiceCode=service_code,
        )

        quota_map[service_code] = [
            QuotaSummary(
                quota_name=quota.get("QuotaName", ""),
                service_name=quota.get("ServiceName", ""),
                value=quota.get("Value"),
                quota_code=quota.get("QuotaCode"),
            )
            for quota in response.get("Quotas", [])
        ]
        logger.debug(f"Fetched {len(quota_map[service_code])} quotas for {service_code}")

    return quota_map


def parse_increase_request(payload: Any) -> QuotaIncreaseRequest:
    """Validate a decoded quota increase body.

    Args:
        payload: Decoded JSON body

    Returns:
        QuotaIncreaseRequest

    Raises:
        InvalidPayloadError: If the body is not an object, a field has the wrong
            type, or desired_value is NaN or infinite
        InvalidFieldsError: If desired_value is missing or zero, or a code is missing or empty
    """
    # JSON null decodes to an empty request, which fails on its fields
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise InvalidPayloadError("Request body must be a JSON object")

    desired_value = payload.get("desired_value", 0)
    quota_code = payload.get("quota_code", "")
    service_code = payload.get("service_code", "")

    if desired_value is None:
        desired_value = 0
    if isinstance(desired_value, bool) or not isinstance(desired_value, (int, float)):
        raise InvalidPayloadError("desired_value must be a number")
    if isinstance(desired_value, float) and not math.isfinite(desired_value):
        raise InvalidPayloadError("desired_value must be a finite number")
    for name, value in (("quota_code", quota_code), ("service_code", service_code)):
        if value is not None and not isinstance(value, str):
            raise InvalidPayloadError(f"{name} must be a string")

    invalid = []
    if desired_value == 0:
        invalid.append("desired_value")
    if not quota_code:
        invalid.append("quota_code")
    if not service_code:
        invalid.append("service_code")
    if invalid:
        raise InvalidFieldsError(invalid)

    return QuotaIncreaseRequest(
        desired_value=float(desired_value),
        quota_code=quota_code,
        service_code=service_code,
    )


def request_quota_increase(sq_client, request: QuotaIncreaseRequest) -> dict[str, Any]:
    """Submit a quota increase request.

    Returns:
        The ``RequestedQuota`` object with datetimes as ISO-8601 strings
    """
    logger.info(
        f"Requesting increase of {request.service_code}/{request.quota_code} "
        f"to {request.desired_value}"
    )
    response = call_aws(
        "service-quotas",
        "RequestServiceQuotaIncrease",
        sq_client.request_service_quota_increase,
        DesiredValue=request.desired_value,
        QuotaCode=request.quota_code,
        ServiceCode=request.service_code,
    )

    response = {k: v for k, v in response.items() if k != "ResponseMetadata"}
    return _jsonable(response)


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value
