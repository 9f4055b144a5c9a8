"""
Configuration and tunable constants for ec2inst.

Values can be overridden through environment variables; the command line only
accepts the field key.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

# Instance Metadata Service
DEFAULT_IMDS_ENDPOINT: str = "http://169.254.169.254"
IMDS_TOKEN_PATH: str = "/latest/api/token"
IMDS_PROBE_PATH: str = "/latest/meta-data/instance-id"
IMDS_IDENTITY_DOCUMENT_PATH: str = "/latest/dynamic/instance-identity/document"
IMDS_TOKEN_HEADER: str = "X-aws-ec2-metadata-token"
IMDS_TOKEN_TTL_HEADER: str = "X-aws-ec2-metadata-token-ttl-seconds"
IMDS_TOKEN_TTL_SECONDS: int = 21600
DEFAULT_IMDS_TIMEOUT_SECONDS: float = 1.0

# Exit codes
EXIT_SUCCESS: int = 0
EXIT_FAILURE: int = 1

DEFAULT_LOG_LEVEL: str = "WARNING"

DEFAULT_BUILD_HASH: str = "No version available"
DEFAULT_BUILD_TIMESTAMP: str = "Not set"

REFERENCE_URL: str = "http://docs.aws.amazon.com/AWSEC2/latest/UserGuide/instance-identity-documents.html"


@dataclass(frozen=True)
class BuildInfo:
    """Build identifiers shown by the version banner."""

    build_hash: str = DEFAULT_BUILD_HASH
    build_timestamp: str = DEFAULT_BUILD_TIMESTAMP


def load_build_info() -> BuildInfo:
    """Read build identifiers injected into the environment at packaging time."""
    return BuildInfo(
        build_hash=os.environ.get("EC2INST_BUILD_HASH") or DEFAULT_BUILD_HASH,
        build_timestamp=os.environ.get("EC2INST_BUILD_TIMESTAMP") or DEFAULT_BUILD_TIMESTAMP,
    )


def get_imds_endpoint() -> str:
    """Return the IMDS base URL, honouring EC2INST_IMDS_ENDPOINT."""
    endpoint = os.environ.get("EC2INST_IMDS_ENDPOINT") or DEFAULT_IMDS_ENDPOINT
    return endpoint.rstrip("/")


def get_imds_timeout() -> float:
    """Return the IMDS request timeout in seconds."""
    raw_value = os.environ.get("EC2INST_IMDS_TIMEOUT")
    if not raw_value:
        return DEFAULT_IMDS_TIMEOUT_SECONDS
    try:
        timeout = float(raw_value)
    except ValueError:
        logging.warning("Ignoring invalid EC2INST_IMDS_TIMEOUT=%r", raw_value)
        return DEFAULT_IMDS_TIMEOUT_SECONDS
    if timeout <= 0:
        logging.warning("Ignoring non-positive EC2INST_IMDS_TIMEOUT=%r", raw_value)
        return DEFAULT_IMDS_TIMEOUT_SECONDS
    return timeout


def get_log_level() -> int:
    """Return the logging level named by EC2INST_LOG_LEVEL."""
    name = (os.environ.get("EC2INST_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LOG_LEVEL)
