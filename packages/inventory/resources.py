"""Read-only inventory queries for VPCs, EC2 instances and EKS clusters.

Each function takes an already constructed boto3 client, performs a single
describe/list call and returns plain dataclasses. botocore failures are
converted into inventory exceptions so callers never see boto internals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from packages.config import DEFAULT_EKS_MAX_RESULTS
from packages.inventory.errors import CredentialsError, UpstreamError

logger = logging.getLogger("aws_inventory.inventory.resources")


@dataclass
class VpcSummary:
    """VPC identity and address range."""

    vpc_id: str
    cidr_block: str


@dataclass
class InstanceSummary:
    """EC2 instance details."""

    instance_id: str
    instance_type: str
    public_ip: str | None = None
    vpc_id: str | None = None


@dataclass
class ClusterSummary:
    """EKS cluster name."""

    name: str


def call_aws(service: str, operation: str, func: Callable[..., dict], **kwargs: Any) -> dict:
    """Invoke a boto3 client method, translating botocore errors.

    Args:
        service: Service name used in error messages
        operation: API operation name used in error messages
        func: Bound client method
        **kwargs: Request parameters

    Returns:
        Raw response dictionary

    Raises:
        CredentialsError: If no credentials could be found
        UpstreamError: If the API call fails
    """
    try:
        return func(**kwargs)
    except NoCredentialsError as e:
        logger.error(f"No AWS credentials available for {service}.{operation}")
        raise CredentialsError(f"failed loading config, {e}") from e
    except ClientError as e:
        error = e.response.get("Error", {})
        logger.error(f"{service}.{operation} returned {error.get('Code')}: {error.get('Message')}")
        raise UpstreamError(
            service, operation, error.get("Message") or str(e), error_code=error.get("Code")
        ) from e
    except BotoCoreError as e:
        logger.error(f"{service}.{operation} failed: {e}")
        raise UpstreamError(service, operation, str(e)) from e


def list_vpcs(ec2_client) -> list[VpcSummary]:
    """List VPCs visible to the caller."""
    response = call_aws("ec2", "DescribeVpcs", ec2_client.describe_vpcs, DryRun=False)

    vpcs = [
        VpcSummary(vpc_id=vpc["VpcId"], cidr_block=vpc.get("CidrBlock", ""))
        for vpc in response.get("Vpcs", [])
    ]
    logger.info(f"Found {len(vpcs)} VPCs")
    return vpcs


def list_instances(ec2_client) -> list[InstanceSummary]:
    """List EC2 instances, flattened across reservations.

    Stopped instances have no public address, so ``public_ip`` and
    ``vpc_id`` are optional.
    """
    response = call_aws("ec2", "DescribeInstances", ec2_client.describe_instances, DryRun=False)

    instances = []
    for reservation in response.get("Reservations", []):
        for instance_data in reservation.get("Instances", []):
            instances.append(
                InstanceSummary(
                    instance_id=instance_data["InstanceId"],
                    instance_type=instance_data.get("InstanceType", ""),
                    public_ip=instance_data.get("PublicIpAddress"),
                    vpc_id=instance_data.get("VpcId"),
                )
            )

    logger.info(f"Found {len(instances)} EC2 instances")
    return instances


def list_clusters(eks_client, max_results: int = DEFAULT_EKS_MAX_RESULTS) -> list[ClusterSummary]:
    """List EKS cluster names, at most ``max_results`` of them."""
    response = call_aws("eks", "ListClusters", eks_client.list_clusters, maxResults=max_results)

    clusters = [ClusterSummary(name=name) for name in response.get("clusters", [])]
    if not clusters:
        logger.info("There are no EKS clusters in your AWS account")
    return clusters
