"""boto3 client construction with default or profile-based credentials."""

import logging
from typing import Any, Mapping, Optional

import boto3
from botocore.exceptions import NoCredentialsError, NoRegionError, ProfileNotFound

from packages.inventory.errors import CredentialsError

logger = logging.getLogger("aws_inventory.inventory.session")


def get_client(
    service_name: str,
    profile: Optional[str] = None,
    region: Optional[str] = None,
    endpoint_url: Optional[str] = None,
):
    """Create a boto3 client for an AWS service.

    Args:
        service_name: AWS service name (ec2, eks, service-quotas)
        profile: Shared config profile; None uses the default credential chain
        region: Region override; None lets boto3 resolve it
        endpoint_url: Endpoint override, e.g. a LocalStack URL

    Returns:
        Configured boto3 client

    Raises:
        CredentialsError: If the profile or region cannot be resolved
    """
    client_kwargs: dict[str, Any] = {}
    if region:
        client_kwargs["region_name"] = region
    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url

    try:
        session = boto3.Session(profile_name=profile) if profile else boto3.Session()
        client = session.client(service_name, **client_kwargs)
    except (ProfileNotFound, NoCredentialsError, NoRegionError) as e:
        logger.error(f"Failed loading AWS config for {service_name}: {e}")
        raise CredentialsError(f"failed loading config, {e}") from e

    logger.debug(
        f"Created {service_name} client",
        extra={"profile": profile or "default-chain", "region": region},
    )
    return client


def client_from_config(service_name: str, config: Mapping[str, Any]):
    """Create a boto3 client from application configuration."""
    return get_client(
        service_name,
        profile=config.get("AWS_PROFILE"),
        region=config.get("AWS_REGION"),
        endpoint_url=config.get("AWS_ENDPOINT_URL"),
    )
