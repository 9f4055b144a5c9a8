#!/usr/bin/env python3
"""
Show information about the EC2 instance this script runs on.

Usage: ec2inst_cli.py <field>, e.g. `ec2inst_cli.py region` or `ec2inst_cli.py tags`.

This is a thin wrapper around the ec2inst package.
"""
from __future__ import annotations

from ec2inst.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
