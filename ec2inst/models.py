"""
Data records for ec2inst.

IdentitySnapshot is built from the instance identity document served by IMDS.
InstanceDescription is built from a single DescribeInstances response.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Union

Timestamp = Union[datetime, str, None]


def _text(value: Any) -> str:
    """Return value as a string, mapping None to an empty string."""
    if value is None:
        return ""
    return str(value)


def _text_tuple(values: Iterable[Any] | None) -> tuple[str, ...]:
    if not values:
        return ()
    return tuple(_text(value) for value in values)


@dataclass(frozen=True)
class IdentitySnapshot:
    """Self-reported identity of the running instance."""

    instance_id: str
    account_id: str
    region: str
    availability_zone: str
    architecture: str
    image_id: str
    instance_type: str
    kernel_id: str
    pending_time: str
    private_ip: str
    billing_products: tuple[str, ...] = ()
    product_codes: tuple[str, ...] = ()

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> IdentitySnapshot:
        """Build a snapshot from a parsed identity document."""
        product_codes = document.get("devpayProductCodes") or document.get("marketplaceProductCodes")
        return cls(
            instance_id=_text(document.get("instanceId")),
            account_id=_text(document.get("accountId")),
            region=_text(document.get("region")),
            availability_zone=_text(document.get("availabilityZone")),
            architecture=_text(document.get("architecture")),
            image_id=_text(document.get("imageId")),
            instance_type=_text(document.get("instanceType")),
            kernel_id=_text(document.get("kernelId")),
            pending_time=_text(document.get("pendingTime")),
            private_ip=_text(document.get("privateIp")),
            billing_products=_text_tuple(document.get("billingProducts")),
            product_codes=_text_tuple(product_codes),
        )


@dataclass(frozen=True)
class Tag:
    """Instance tag."""

    key: str
    value: str


@dataclass(frozen=True)
class SecurityGroup:
    """Security group attached to the instance."""

    group_id: str
    group_name: str


@dataclass(frozen=True)
class EbsMapping:
    """EBS volume attached through a block device mapping."""

    device_name: str
    volume_id: str
    status: str
    attach_time: Timestamp
    delete_on_termination: bool


@dataclass(frozen=True)
class InstanceDescription:
    """Subset of a DescribeInstances record used by ec2inst."""

    instance_id: str
    vpc_id: str = ""
    subnet_id: str = ""
    state: str = ""
    public_dns: str = ""
    public_ip: str = ""
    tags: tuple[Tag, ...] = ()
    security_groups: tuple[SecurityGroup, ...] = ()
    ebs_mappings: tuple[EbsMapping, ...] = ()
