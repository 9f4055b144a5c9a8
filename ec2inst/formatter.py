"""
Output formatting for ec2inst.

Every resolved value is printed as one bare line; empty values are skipped so
unset optional fields (e.g. no public IP) produce no output at all.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Iterable, TextIO

from .config import BuildInfo
from .models import EbsMapping, SecurityGroup, Tag, Timestamp


def format_timestamp(value: Timestamp) -> str:
    """Render a timestamp as ISO 8601, using a Z suffix for UTC."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.isoformat()
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return str(value)


def format_bool(value) -> str:
    return "true" if value else "false"


def format_tags(tags: Iterable[Tag]) -> list[str]:
    """Return tags as <key>:<value> lines in API order."""
    return [f"{tag.key}:{tag.value}" for tag in tags]


def format_security_groups(groups: Iterable[SecurityGroup]) -> list[str]:
    """Return security groups as <group id>:<group name> lines."""
    return [f"{group.group_id}:{group.group_name}" for group in groups]


def format_ebs_mappings(mappings: Iterable[EbsMapping]) -> list[str]:
    """Return volumes as <device>:<volume id>:<status>:<attach time>:<delete on termination>."""
    return [
        ":".join(
            (
                mapping.device_name,
                mapping.volume_id,
                mapping.status,
                format_timestamp(mapping.attach_time),
                format_bool(mapping.delete_on_termination),
            )
        )
        for mapping in mappings
    ]


def render_lines(values: Iterable[str]) -> list[str]:
    """Drop empty values, keeping resolution order."""
    return [value for value in values if value]


def print_values(values: Iterable[str], stream: TextIO | None = None) -> None:
    """Print each non-empty value on its own line."""
    out = stream or sys.stdout
    for line in render_lines(values):
        print(line, file=out)


def format_build_info(build_info: BuildInfo) -> str:
    return f"Build hash: {build_info.build_hash}\nBuild timestamp: {build_info.build_timestamp}"
