"""
Field dispatch table.

Each FieldKey maps to a resolver reading either the identity snapshot or the
instance description. Resolvers always return a list of strings; single-valued
fields return exactly one entry, which may be empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .describe import InstanceDescriber
from .exceptions import UnknownFieldKeyError
from .formatter import format_ebs_mappings, format_security_groups, format_tags
from .models import IdentitySnapshot, InstanceDescription


class FieldKey(str, Enum):
    """Supported field keys, in usage order."""

    ID = "id"
    ACCOUNT = "account"
    REGION = "region"
    AZ = "az"
    TYPE = "type"
    IMGID = "imgid"
    ARCH = "arch"
    KERNELID = "kernelid"
    PENDING = "pending"
    PRODUCTCODES = "productcodes"
    BILLINGPRODUCTS = "billingproducts"
    STATE = "state"
    TAGS = "tags"
    EBS = "ebs"
    PVTIP = "pvtip"
    PUBLICIP = "publicip"
    PUBLICDNS = "publicdns"
    SG = "sg"
    VPCID = "vpcid"
    SUBNETID = "subnetid"

    @classmethod
    def parse(cls, key: str) -> FieldKey:
        """
        Return the FieldKey for key.

        Raises:
            UnknownFieldKeyError: If key is not a supported field.
        """
        try:
            return cls(key)
        except ValueError:
            raise UnknownFieldKeyError(key) from None


class Source(str, Enum):
    IDENTITY = "identity"
    DESCRIBE = "describe"


@dataclass(frozen=True)
class FieldSpec:
    """Dispatch entry for one field key."""

    source: Source
    resolver: Callable
    description: str


def _identity(resolver, description):
    return FieldSpec(Source.IDENTITY, resolver, description)


def _describe(resolver, description):
    return FieldSpec(Source.DESCRIBE, resolver, description)


_ENTRIES: dict[FieldKey, FieldSpec] = {
    FieldKey.ID: _identity(lambda ident: [ident.instance_id], "Show this instance's ID."),
    FieldKey.ACCOUNT: _identity(
        lambda ident: [ident.account_id], "Show the account ID in which this instance resides."
    ),
    FieldKey.REGION: _identity(lambda ident: [ident.region], "Show the AWS region in which this instance resides."),
    FieldKey.AZ: _identity(
        lambda ident: [ident.availability_zone], "Show the availability zone in which this instance resides."
    ),
    FieldKey.TYPE: _identity(lambda ident: [ident.instance_type], "Show the instance type."),
    FieldKey.IMGID: _identity(lambda ident: [ident.image_id], "Show the instance's image ID."),
    FieldKey.ARCH: _identity(lambda ident: [ident.architecture], "Show the instance architecture."),
    FieldKey.KERNELID: _identity(lambda ident: [ident.kernel_id], "Show the instance's kernel ID."),
    FieldKey.PENDING: _identity(lambda ident: [ident.pending_time], "Show the instance's pending time."),
    FieldKey.PRODUCTCODES: _identity(lambda ident: list(ident.product_codes), "Show the instance's product codes."),
    FieldKey.BILLINGPRODUCTS: _identity(
        lambda ident: list(ident.billing_products), "Show the instance's billing products."
    ),
    FieldKey.STATE: _describe(lambda desc: [desc.state], "Show the instance's state."),
    FieldKey.TAGS: _describe(lambda desc: format_tags(desc.tags), "Show the instance's tags (<key>:<value>)"),
    FieldKey.EBS: _describe(
        lambda desc: format_ebs_mappings(desc.ebs_mappings),
        "Show the instance's EBS volumes "
        "(<device name>:<volume id>:<status>:<attach time>:<delete on termination>)",
    ),
    FieldKey.PVTIP: _identity(lambda ident: [ident.private_ip], "Show the instance's private IP"),
    FieldKey.PUBLICIP: _describe(lambda desc: [desc.public_ip], "Show the instance's public IP"),
    FieldKey.PUBLICDNS: _describe(lambda desc: [desc.public_dns], "Show the instance's public DNS name"),
    FieldKey.SG: _describe(
        lambda desc: format_security_groups(desc.security_groups),
        "Show the instance's security groups (<group id>:<group name>)",
    ),
    FieldKey.VPCID: _describe(lambda desc: [desc.vpc_id], "Show the instance's VPC ID"),
    FieldKey.SUBNETID: _describe(lambda desc: [desc.subnet_id], "Show the instance's subnet ID"),
}


def _build_field_table(entries: dict[FieldKey, FieldSpec]) -> dict[FieldKey, FieldSpec]:
    """Order entries like FieldKey and fail if any key has no resolver."""
    missing = [key.value for key in FieldKey if key not in entries]
    if missing:
        raise RuntimeError(f"Field dispatch table is missing entries for: {', '.join(missing)}")
    return {key: entries[key] for key in FieldKey}


FIELD_TABLE: dict[FieldKey, FieldSpec] = _build_field_table(_ENTRIES)


def resolve_field(key: FieldKey, identity: IdentitySnapshot, describer: InstanceDescriber) -> list[str]:
    """
    Resolve a field key to its string values.

    Identity fields never touch the describer, so DescribeInstances is only
    called for fields that need it.
    """
    spec = FIELD_TABLE[key]
    if spec.source is Source.IDENTITY:
        return spec.resolver(identity)
    description: InstanceDescription = describer.description
    return spec.resolver(description)
