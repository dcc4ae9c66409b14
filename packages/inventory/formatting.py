"""Text and JSON rendering of inventory results."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any, Iterable, Mapping

from packages.inventory.quotas import QuotaSummary
from packages.inventory.resources import ClusterSummary, InstanceSummary, VpcSummary

MISSING = "N/A"
NO_CLUSTERS_MESSAGE = "There are no EKS clusters in your AWS account"


def format_vpc(vpc: VpcSummary) -> str:
    """Render one VPC as CidrBlock and VpcId lines."""
    return f"CidrBlock: {vpc.cidr_block}\nVpcId: {vpc.vpc_id}\n"


def format_instance(instance: InstanceSummary) -> str:
    """Render one EC2 instance; missing address or VPC shows as N/A."""
    return (
        f"Instance ID: {instance.instance_id}\n"
        f"InstanceType: {instance.instance_type}\n"
        f"PublicIpAddress: {instance.public_ip or MISSING}\n"
        f"VpcId: {instance.vpc_id or MISSING}\n"
    )


def format_cluster(cluster: ClusterSummary) -> str:
    """Render one EKS cluster name."""
    return f"Clusters: {cluster.name}\n"


def format_quota(quota: QuotaSummary) -> str:
    """Render one quota with its name, service and applied value."""
    return (
        f"Quota Name: {quota.quota_name}\n"
        f"Service Name: {quota.service_name}\n"
        f"Value: {format_value(quota.value)}\n"
    )


def format_value(value: float | None) -> str:
    """Render a quota value, dropping the fraction of integral floats."""
    if value is None:
        return MISSING
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_list(entries: Iterable[str]) -> str:
    """Join formatted entries with a blank line between them."""
    return "\n".join(entries)


def render_vpcs(vpcs: list[VpcSummary]) -> str:
    """Render all VPCs as text."""
    return render_list(format_vpc(vpc) for vpc in vpcs)


def render_instances(instances: list[InstanceSummary]) -> str:
    """Render all EC2 instances as text."""
    return render_list(format_instance(instance) for instance in instances)


def render_clusters(clusters: list[ClusterSummary]) -> str:
    """Render cluster names, or a notice when the account has none."""
    if not clusters:
        return f"{NO_CLUSTERS_MESSAGE}\n"
    return render_list(format_cluster(cluster) for cluster in clusters)


def render_quotas(quota_map: Mapping[str, list[QuotaSummary]]) -> str:
    """Render quotas grouped under a ``[service_code]`` header."""
    sections = []
    for service_code, quotas in quota_map.items():
        body = render_list(format_quota(quota) for quota in quotas)
        sections.append(f"[{service_code}]\n{body}")
    return "\n".join(sections)


def to_json(value: Any) -> Any:
    """Convert dataclasses (and containers of them) to plain structures."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, Mapping):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value
