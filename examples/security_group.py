#!/usr/bin/env python3
"""
Security Group Example

This example shows the two encodings of a security group:
1. Load a group from YAML
2. Validate its rules
3. Encode it for the remote API (JSON)
4. Catch a broken rule

Run with: python3 security_group.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hyper_types.codec import from_yaml, to_json
from hyper_types.endpoints import get_endpoint
from hyper_types.security import (Rule, SecurityGroup, dump_security_group,
                                  validate_security_group)

GROUP_YAML = """\
name: web
description: public web servers
rules:
- direction: ingress
  ethertype: IPv4
  protocol: tcp
  port_range_min: 80
  port_range_max: 443
  remote_ip_prefix: 0.0.0.0/0
  remote_group_name: ""
- direction: ingress
  protocol: tcp
  port_range_min: 22
  port_range_max: 22
  remote_ip_prefix: ""
  remote_group_name: bastion
"""


def print_header(text: str) -> None:
    """Print a formatted header."""
    print(f"\n{'='*60}")
    print(f"  {text}")
    print(f"{'='*60}\n")


def print_step(text: str) -> None:
    """Print a step indicator."""
    print(f"[+] {text}")


def print_info(text: str) -> None:
    """Print info text."""
    print(f"    {text}")


def main():
    print_header("Security Group Example")

    # Step 1: YAML
    print_step("Loading group from YAML...")
    group = from_yaml(SecurityGroup, GROUP_YAML)
    print_info(f"Group: {group.group_name} ({len(group.rules)} rules)")
    for rule in group.rules:
        remote = rule.remote_ip_prefix or f"group {rule.remote_group_name}"
        print_info(
            f"{rule.direction} {rule.protocol} "
            f"{rule.port_range_min}-{rule.port_range_max} from {remote}"
        )

    # Step 2: Validate
    print_step("Validating rules...")
    errors = validate_security_group(group)
    print_info("Valid" if not errors else f"{len(errors)} problem(s)")

    # Step 3: JSON
    endpoint = get_endpoint("sg.create")
    print_step(f"Encoding for {endpoint.method} {endpoint.path} (ethertype stays local)...")
    print(to_json(group, indent=2))

    # Step 4: Broken rule
    print_step("Adding a broken rule...")
    group.rules.append(
        Rule(
            direction="ingress",
            ether_type="IPv6",
            protocol="udp",
            port_range_min=53,
            port_range_max=52,
            remote_ip_prefix="10.0.0.0/8",
        )
    )
    for err in validate_security_group(group):
        print_info(err)

    print_step("YAML form:")
    print(dump_security_group(group))

    print_header("Example Complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
