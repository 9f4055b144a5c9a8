"""
ec2inst package.

Show identity and description fields of the EC2 instance the command runs on.
"""

from . import args_parser, aws_client_factory, cli, config, describe, exceptions, fields, formatter, metadata, models
from .describe import InstanceDescriber
from .exceptions import (
    DescribeFailedError,
    Ec2InstError,
    IdentityFetchError,
    InstanceNotFoundError,
    MetadataUnavailableError,
    UnknownFieldKeyError,
)
from .fields import FIELD_TABLE, FieldKey, resolve_field
from .models import IdentitySnapshot, InstanceDescription

__all__ = [
    "DescribeFailedError",
    "Ec2InstError",
    "FIELD_TABLE",
    "FieldKey",
    "IdentityFetchError",
    "IdentitySnapshot",
    "InstanceDescriber",
    "InstanceDescription",
    "InstanceNotFoundError",
    "MetadataUnavailableError",
    "UnknownFieldKeyError",
    "args_parser",
    "aws_client_factory",
    "cli",
    "config",
    "describe",
    "exceptions",
    "fields",
    "formatter",
    "metadata",
    "models",
    "resolve_field",
]
