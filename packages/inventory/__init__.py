"""AWS inventory and quota queries used by the HTTP layer."""

from packages.inventory.errors import (
    CredentialsError,
    InvalidFieldsError,
    InvalidPayloadError,
    InventoryError,
    UpstreamError,
)
from packages.inventory.quotas import (
    QuotaIncreaseRequest,
    QuotaSummary,
    list_service_quotas,
    parse_increase_request,
    request_quota_increase,
)
from packages.inventory.resources import (
    ClusterSummary,
    InstanceSummary,
    VpcSummary,
    list_clusters,
    list_instances,
    list_vpcs,
)
from packages.inventory.session import client_from_config, get_client

__all__ = [
    "ClusterSummary",
    "CredentialsError",
    "InstanceSummary",
    "InvalidFieldsError",
    "InvalidPayloadError",
    "InventoryError",
    "QuotaIncreaseRequest",
    "QuotaSummary",
    "UpstreamError",
    "VpcSummary",
    "client_from_config",
    "get_client",
    "list_clusters",
    "list_instances",
    "list_service_quotas",
    "list_vpcs",
    "parse_increase_request",
    "request_quota_increase",
]
