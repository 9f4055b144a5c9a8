"""
Command-line interface and main entry point for ec2inst.

Resolves one field key against the running instance and prints its value(s).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Optional

from .args_parser import parse_args
from .config import EXIT_FAILURE, EXIT_SUCCESS, REFERENCE_URL, BuildInfo, get_log_level, load_build_info
from .describe import InstanceDescriber
from .exceptions import Ec2InstError, UnknownFieldKeyError
from .fields import FIELD_TABLE, FieldKey, resolve_field
from .formatter import format_build_info, print_values
from .metadata import InstanceMetadataClient, fetch_identity_snapshot


def build_usage_text(prog: str) -> str:
    """Return the usage text listing every supported field key."""
    lines = [f"Usage: {prog} [information type]", "    -v\tShow version information for this utility."]
    for key, spec in FIELD_TABLE.items():
        lines.append(f"    {key.value}\t{spec.description}")
    lines.extend(["", "References:", f"    - {REFERENCE_URL}"])
    return "\n".join(lines)


def print_usage(prog: str) -> None:
    print(build_usage_text(prog))


def lookup_field(
    key: FieldKey,
    metadata_client_factory: Optional[Callable[[], InstanceMetadataClient]] = None,
    ec2_client_factory: Optional[Callable] = None,
) -> list[str]:
    """
    Fetch the identity snapshot and resolve key to its values.

    Raises:
        Ec2InstError: If metadata or the describe call is unavailable.
    """
    metadata_client = (metadata_client_factory or InstanceMetadataClient)()
    with metadata_client:
        identity = fetch_identity_snapshot(metadata_client)
    describer = InstanceDescriber(identity, client_factory=ec2_client_factory)
    return resolve_field(key, identity, describer)


def main(argv: list[str] | None = None, build_info: BuildInfo | None = None) -> int:
    """Main entry point for the ec2inst CLI."""
    prog = os.path.basename(sys.argv[0]) or "ec2inst"
    args = parse_args(sys.argv[1:] if argv is None else argv, prog=prog)
    logging.basicConfig(
        level=get_log_level(),
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.version:
        print(format_build_info(build_info or load_build_info()))
        return EXIT_SUCCESS
    if args.help or not args.field:
        print_usage(prog)
        return EXIT_SUCCESS

    try:
        key = FieldKey.parse(args.field)
    except UnknownFieldKeyError as exc:
        logging.info("%s", exc)
        print_usage(prog)
        return EXIT_SUCCESS

    try:
        values = lookup_field(key)
    except Ec2InstError as exc:
        logging.error("%s", exc)
        return EXIT_FAILURE

    print_values(values)
    return EXIT_SUCCESS


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())
