"""Unit tests for VPC, EC2 and EKS inventory queries."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError

from packages.config import DEFAULT_EKS_MAX_RESULTS
from packages.inventory.errors import CredentialsError, UpstreamError
from packages.inventory.resources import (
    ClusterSummary,
    InstanceSummary,
    VpcSummary,
    list_clusters,
    list_instances,
    list_vpcs,
)


def _client_error(code="UnauthorizedOperation", message="You are not authorized"):
    return ClientError({"Error": {"Code": code, "Message": message}}, "DescribeVpcs")


def test_list_vpcs():
    """Test VPCs are mapped to summaries."""
    mock_ec2 = MagicMock()
    mock_ec2.describe_vpcs.return_value = {
        "Vpcs": [
            {"VpcId": "vpc-111", "CidrBlock": "10.0.0.0/16"},
            {"VpcId": "vpc-222", "CidrBlock": "172.31.0.0/16"},
        ]
    }

    result = list_vpcs(mock_ec2)

    mock_ec2.describe_vpcs.assert_called_once_with(DryRun=False)
    assert result == [
        VpcSummary(vpc_id="vpc-111", cidr_block="10.0.0.0/16"),
        VpcSummary(vpc_id="vpc-222", cidr_block="172.31.0.0/16"),
    ]


def test_list_vpcs_empty():
    mock_ec2 = MagicMock()
    mock_ec2.describe_vpcs.return_value = {"Vpcs": []}

    assert list_vpcs(mock_ec2) == []


def test_list_vpcs_client_error():
    """Test an AWS error is raised as UpstreamError with the AWS code."""
    mock_ec2 = MagicMock()
    mock_ec2.describe_vpcs.side_effect = _client_error()

    with pytest.raises(UpstreamError) as exc_info:
        list_vpcs(mock_ec2)

    assert exc_info.value.service == "ec2"
    assert exc_info.value.operation == "DescribeVpcs"
    assert exc_info.value.error_code == "UnauthorizedOperation"
    assert "not authorized" in str(exc_info.value)


def test_list_vpcs_connection_error():
    """Test a transport failure is raised as UpstreamError."""
    mock_ec2 = MagicMock()
    mock_ec2.describe_vpcs.side_effect = EndpointConnectionError(
        endpoint_url="https://ec2.us-east-1.amazonaws.com"
    )

    with pytest.raises(UpstreamError) as exc_info:
        list_vpcs(mock_ec2)
    assert exc_info.value.error_code is None


def test_list_vpcs_no_credentials():
    """Test missing credentials are raised as CredentialsError."""
    mock_ec2 = MagicMock()
    mock_ec2.describe_vpcs.side_effect = NoCredentialsError()

    with pytest.raises(CredentialsError):
        list_vpcs(mock_ec2)


def test_list_instances_flattens_reservations():
    """Test instances from all reservations are returned in order."""
    mock_ec2 = MagicMock()
    mock_ec2.describe_instances.return_value = {
        "Reservations": [
            {
                "Instances": [
                    {
                        "InstanceId": "i-12345",
                        "InstanceType": "t3.micro",
                        "PublicIpAddress": "54.1.2.3",
                        "VpcId": "vpc-111",
                    },
                    {
                        "InstanceId": "i-67890",
                        "InstanceType": "m5.large",
                        "PublicIpAddress": "54.1.2.4",
                        "VpcId": "vpc-111",
                    },
                ]
            },
            {
                "Instances": [
                    {
                        "InstanceId": "i-abcde",
                        "InstanceType": "t3.small",
                        "PublicIpAddress": "54.1.2.5",
                        "VpcId": "vpc-222",
                    }
                ]
            },
        ]
    }

    result = list_instances(mock_ec2)

    mock_ec2.describe_instances.assert_called_once_with(DryRun=False)
    assert [i.instance_id for i in result] == ["i-12345", "i-67890", "i-abcde"]
    assert result[1].instance_type == "m5.large"
    assert result[2].vpc_id == "vpc-222"


def test_list_instances_without_public_ip():
    """Test a stopped instance with no public address does not fail."""
    mock_ec2 = MagicMock()
    mock_ec2.describe_instances.return_value = {
        "Reservations": [{"Instances": [{"InstanceId": "i-stopped", "InstanceType": "t3.micro"}]}]
    }

    result = list_instances(mock_ec2)

    assert result == [
        InstanceSummary(instance_id="i-stopped", instance_type="t3.micro", public_ip=None, vpc_id=None)
    ]


def test_list_clusters_uses_max_results():
    mock_eks = MagicMock()
    mock_eks.list_clusters.return_value = {"clusters": ["prod", "staging"]}

    result = list_clusters(mock_eks, max_results=5)

    mock_eks.list_clusters.assert_called_once_with(maxResults=5)
    assert result == [ClusterSummary(name="prod"), ClusterSummary(name="staging")]


def test_list_clusters_default_max_results():
    mock_eks = MagicMock()
    mock_eks.list_clusters.return_value = {"clusters": ["prod"]}

    list_clusters(mock_eks)

    mock_eks.list_clusters.assert_called_once_with(maxResults=DEFAULT_EKS_MAX_RESULTS)
    assert DEFAULT_EKS_MAX_RESULTS == 10


def test_list_clusters_empty(caplog):
    """Test an account without clusters returns an empty list and logs it."""
    mock_eks = MagicMock()
    mock_eks.list_clusters.return_value = {"clusters": []}

    with caplog.at_level("INFO", logger="aws_inventory.inventory.resources"):
        result = list_clusters(mock_eks)

    assert result == []
    assert "There are no EKS clusters in your AWS account" in caplog.text


def test_list_clusters_client_error():
    mock_eks = MagicMock()
    mock_eks.list_clusters.side_effect = ClientError(
        {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "ListClusters"
    )

    with pytest.raises(UpstreamError) as exc_info:
        list_clusters(mock_eks)
    assert exc_info.value.service == "eks"
    assert exc_info.value.error_code == "AccessDeniedException"
