"""Shared pytest fixtures for ec2inst tests."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from ec2inst.models import IdentitySnapshot
from tests.ec2inst_test_values import INSTANCE_ID, REGION

_ISOLATED_ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "EC2INST_IMDS_ENDPOINT",
    "EC2INST_IMDS_TIMEOUT",
    "EC2INST_LOG_LEVEL",
    "EC2INST_BUILD_HASH",
    "EC2INST_BUILD_TIMESTAMP",
)


class _DefaultResponse(dict):
    """Dict returning empty list for missing keys."""

    def __missing__(self, key):
        return []


_DEFAULT_RESPONSES: dict[str, dict] = {
    "describe_instances": _DefaultResponse(Reservations=[]),
}


class _StubBotoClient:
    """Minimal stub for boto3 clients used in tests."""

    def __init__(self, service_name: str, **kwargs):
        self.service_name = service_name
        self.region_name = kwargs.get("region_name")
        self.exceptions = ClientError

    def __getattr__(self, name: str):
        def _method(*args, **kwargs):
            del args, kwargs
            response = _DEFAULT_RESPONSES.get(name)
            if response is None:
                return _DefaultResponse()
            return copy.deepcopy(response)

        return _method


@pytest.fixture(autouse=True)
def stub_boto3_client(monkeypatch):
    """Replace boto3.client with a stub so tests don't call real AWS."""

    def fake_client(service_name, **kwargs):
        return _StubBotoClient(service_name, **kwargs)

    monkeypatch.setattr("boto3.client", fake_client)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Clear credential and ec2inst variables and point AWS_ENV_FILE at a missing file."""
    for name in _ISOLATED_ENV_VARS:
        # setenv first so the deletion is undone even when the variable was unset
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.setenv("AWS_ENV_FILE", str(tmp_path / "missing.env"))


@pytest.fixture(name="identity_document")
def fixture_identity_document():
    """Identity document as served by IMDS."""
    return {
        "accountId": "123456789012",
        "architecture": "x86_64",
        "availabilityZone": "us-east-1a",
        "billingProducts": ["bp-6ba54002"],
        "devpayProductCodes": None,
        "marketplaceProductCodes": ["1abc2defghijklm3nopqrs4tu"],
        "imageId": "ami-0abcdef1234567890",
        "instanceId": INSTANCE_ID,
        "instanceType": "t3.micro",
        "kernelId": None,
        "pendingTime": "2023-01-01T00:00:00Z",
        "privateIp": "10.0.1.21",
        "ramdiskId": None,
        "region": REGION,
        "version": "2017-09-30",
    }


@pytest.fixture(name="identity")
def fixture_identity(identity_document):
    return IdentitySnapshot.from_document(identity_document)


@pytest.fixture(name="instance_record")
def fixture_instance_record():
    """Instance record shaped like a DescribeInstances response entry."""
    return {
        "InstanceId": INSTANCE_ID,
        "VpcId": "vpc-0a1b2c3d",
        "SubnetId": "subnet-0a1b2c3d",
        "State": {"Code": 16, "Name": "running"},
        "PublicDnsName": "ec2-54-10-10-21.compute-1.amazonaws.com",
        "PublicIpAddress": "54.10.10.21",
        "Tags": [{"Key": "Name", "Value": "web-1"}, {"Key": "Env", "Value": "prod"}],
        "SecurityGroups": [{"GroupId": "sg-0123", "GroupName": "web"}],
        "BlockDeviceMappings": [
            {
                "DeviceName": "/dev/xvda",
                "Ebs": {
                    "VolumeId": "vol-123",
                    "Status": "attached",
                    "AttachTime": datetime(2023, 1, 1, tzinfo=timezone.utc),
                    "DeleteOnTermination": True,
                },
            }
        ],
    }


@pytest.fixture(name="mock_ec2")
def fixture_mock_ec2(instance_record):
    """EC2 client mock returning instance_record for describe_instances."""
    mock_ec2 = MagicMock()
    mock_ec2.describe_instances.return_value = {"Reservations": [{"Instances": [instance_record]}]}
    return mock_ec2


@pytest.fixture(name="unauthorized_error")
def fixture_unauthorized_error():
    return ClientError(
        {
            "Error": {
                "Code": "UnauthorizedOperation",
                "Message": "You are not authorized to perform this operation.",
            }
        },
        "DescribeInstances",
    )
