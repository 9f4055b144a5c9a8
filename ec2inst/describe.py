"""
DescribeInstances lookups for the current instance.

A single describe call, always scoped to the instance ID from the identity
document, supplies tags, network placement, state and EBS volumes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .aws_client_factory import create_ec2_client
from .exceptions import DescribeFailedError, InstanceNotFoundError
from .models import EbsMapping, IdentitySnapshot, InstanceDescription, SecurityGroup, Tag


def extract_single_instance(response: dict, instance_id: str) -> dict:
    """
    Return the only instance in a DescribeInstances response.

    Raises:
        InstanceNotFoundError: If the response holds zero or several instances,
            or an instance with a different ID.
    """
    instances = [
        instance
        for reservation in response.get("Reservations", [])
        for instance in reservation.get("Instances", [])
    ]
    if len(instances) != 1:
        raise InstanceNotFoundError(instance_id, found=len(instances))
    instance = instances[0]
    returned_id = instance.get("InstanceId")
    if returned_id and returned_id != instance_id:
        raise InstanceNotFoundError(instance_id, found=1, returned_id=returned_id)
    return instance


def describe_instance(ec2_client, instance_id: str) -> dict:
    """
    Describe exactly one EC2 instance by ID.

    Raises:
        DescribeFailedError: If the AWS API call fails.
        InstanceNotFoundError: If the instance is missing from the response.
    """
    try:
        response = ec2_client.describe_instances(InstanceIds=[instance_id])
    except (ClientError, BotoCoreError) as exc:
        raise DescribeFailedError(instance_id, exc) from exc
    return extract_single_instance(response, instance_id)


def _tags(instance: dict[str, Any]) -> tuple[Tag, ...]:
    return tuple(Tag(key=tag.get("Key", ""), value=tag.get("Value", "")) for tag in instance.get("Tags", []))


def _security_groups(instance: dict[str, Any]) -> tuple[SecurityGroup, ...]:
    return tuple(
        SecurityGroup(group_id=group.get("GroupId", ""), group_name=group.get("GroupName", ""))
        for group in instance.get("SecurityGroups", [])
    )


def _ebs_mappings(instance: dict[str, Any]) -> tuple[EbsMapping, ...]:
    mappings = []
    for mapping in instance.get("BlockDeviceMappings", []):
        ebs = mapping.get("Ebs")
        if not ebs:
            continue
        mappings.append(
            EbsMapping(
                device_name=mapping.get("DeviceName", ""),
                volume_id=ebs.get("VolumeId", ""),
                status=ebs.get("Status", ""),
                attach_time=ebs.get("AttachTime"),
                delete_on_termination=bool(ebs.get("DeleteOnTermination", False)),
            )
        )
    return tuple(mappings)


def build_instance_description(instance: dict[str, Any]) -> InstanceDescription:
    """Convert a DescribeInstances instance record into an InstanceDescription."""
    return InstanceDescription(
        instance_id=instance.get("InstanceId", ""),
        vpc_id=instance.get("VpcId", ""),
        subnet_id=instance.get("SubnetId", ""),
        state=instance.get("State", {}).get("Name", ""),
        public_dns=instance.get("PublicDnsName", ""),
        public_ip=instance.get("PublicIpAddress", ""),
        tags=_tags(instance),
        security_groups=_security_groups(instance),
        ebs_mappings=_ebs_mappings(instance),
    )


class InstanceDescriber:
    """Fetches the InstanceDescription for the identity's instance at most once."""

    def __init__(
        self,
        identity: IdentitySnapshot,
        client_factory: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.identity = identity
        self._client_factory = client_factory or create_ec2_client
        self._description: Optional[InstanceDescription] = None

    @property
    def description(self) -> InstanceDescription:
        if self._description is None:
            self._description = self._fetch()
        return self._description

    def _fetch(self) -> InstanceDescription:
        instance_id = self.identity.instance_id
        logging.info("Describing instance %s in %s", instance_id, self.identity.region)
        try:
            ec2_client = self._client_factory(self.identity.region)
        except BotoCoreError as exc:
            raise DescribeFailedError(instance_id, exc) from exc
        instance = describe_instance(ec2_client, instance_id)
        return build_instance_description(instance)
