#!/usr/bin/env python3
"""
Security groups for hyper-types.

A security group is a named set of rules filtering the traffic of the
containers it is attached to. Groups travel over the wire as JSON and are
also written by hand as YAML files, e.g.:

    name: web
    description: public web servers
    rules:
    - direction: ingress
      protocol: tcp
      port_range_min: 80
      port_range_max: 80
      remote_ip_prefix: 0.0.0.0/0

Each field carries its JSON and its YAML key separately. Rule.ether_type is
config-only: it never appears in JSON and is omitted from YAML when empty.
In YAML only name and direction are required; the other keys may be left
out or left blank. The JSON form always carries every key but ethertype.

Decoding never validates rule contents; validate_security_group() reports
problems without raising.
"""

import ipaddress
import logging
from dataclasses import dataclass
from typing import List

from hyper_types.codec import DecodingError, from_yaml, to_yaml, wire_field

logger = logging.getLogger(__name__)

DIRECTIONS = ("ingress", "egress")
ETHER_TYPES = ("", "IPv4", "IPv6")
PROTOCOLS = ("", "tcp", "udp", "icmp")

MAX_PORT = 65535
MAX_ICMP_TYPE = 255


@dataclass
class Rule:
    """A single security group rule."""

    # "ingress" applies to traffic reaching the container, "egress" to
    # traffic leaving it
    direction: str = wire_field("direction", yaml_name="direction", default="")

    # "IPv4" or "IPv6"; CIDR addresses of the rule must match it
    ether_type: str = wire_field(
        "-", yaml_name="ethertype", yaml_omitempty=True, default=""
    )

    # Lowest port matched. Must not exceed port_range_max for tcp/udp; an
    # ICMP type for icmp
    port_range_min: int = wire_field(
        "port_range_min", yaml_name="port_range_min", yaml_omitempty=True, default=0
    )

    # Highest port matched; an ICMP type for icmp
    port_range_max: int = wire_field(
        "port_range_max", yaml_name="port_range_max", yaml_omitempty=True, default=0
    )

    # "tcp", "udp", "icmp" or empty for any protocol
    protocol: str = wire_field(
        "protocol", yaml_name="protocol", yaml_omitempty=True, default=""
    )

    # Source (ingress) or destination (egress) CIDR. Mutually exclusive with
    # remote_group_name
    remote_ip_prefix: str = wire_field(
        "remote_ip_prefix", yaml_name="remote_ip_prefix", yaml_omitempty=True, default=""
    )

    # Optional group whose members the rule matches. Mutually exclusive with
    # remote_ip_prefix
    remote_group_name: str = wire_field(
        "remote_group_name", yaml_name="remote_group_name", yaml_omitempty=True,
        default="",
    )


@dataclass
class SecurityGroup:
    """A named set of rules."""

    group_name: str = wire_field("name", yaml_name="name", default="")
    # Human readable description of the group
    description: str = wire_field(
        "description", yaml_name="description", yaml_omitempty=True, default=""
    )
    # Rules determining how the group filters traffic
    rules: List[Rule] = wire_field(
        "rules", yaml_name="rules", yaml_omitempty=True, default_factory=list
    )


def load_security_group(path: str) -> SecurityGroup:
    """
    Load a security group from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        SecurityGroup instance

    Raises:
        DecodingError: If the file is not a valid security group
        OSError: If the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise DecodingError(f"{path}: not UTF-8 text ({e.reason} at byte {e.start})")

    try:
        group = from_yaml(SecurityGroup, content)
    except DecodingError as e:
        raise DecodingError(f"{path}: {e}")

    logger.debug("Loaded security group %r from %s", group.group_name, path)
    return group


def dump_security_group(group: SecurityGroup) -> str:
    """Render a security group as YAML."""
    return to_yaml(group)


def validate_rule(rule: Rule) -> List[str]:
    """
    Validate a security group rule.

    Args:
        rule: Rule instance

    Returns:
        List of problems (empty if valid)
    """
    errors = []

    if rule.direction not in DIRECTIONS:
        errors.append(
            f"direction must be one of {', '.join(DIRECTIONS)}, got {rule.direction!r}"
        )

    if rule.ether_type not in ETHER_TYPES:
        errors.append(f"ethertype must be IPv4 or IPv6, got {rule.ether_type!r}")

    if rule.protocol not in PROTOCOLS:
        errors.append(
            f"protocol must be tcp, udp, icmp or empty, got {rule.protocol!r}"
        )
    elif rule.protocol in ("tcp", "udp"):
        for label, port in (
            ("port_range_min", rule.port_range_min),
            ("port_range_max", rule.port_range_max),
        ):
            if not 0 <= port <= MAX_PORT:
                errors.append(f"{label} {port} is outside 0-{MAX_PORT}")
        if rule.port_range_min > rule.port_range_max:
            errors.append(
                f"port_range_min {rule.port_range_min} is greater than "
                f"port_range_max {rule.port_range_max}"
            )
    elif rule.protocol == "icmp":
        for label, value in (
            ("port_range_min", rule.port_range_min),
            ("port_range_max", rule.port_range_max),
        ):
            if not 0 <= value <= MAX_ICMP_TYPE:
                errors.append(f"{label} {value} is not an ICMP type")

    if rule.remote_ip_prefix and rule.remote_group_name:
        errors.append("remote_ip_prefix and remote_group_name are mutually exclusive")

    if rule.remote_ip_prefix:
        try:
            network = ipaddress.ip_network(rule.remote_ip_prefix, strict=False)
        except ValueError:
            errors.append(f"remote_ip_prefix {rule.remote_ip_prefix!r} is not a CIDR")
        else:
            if rule.ether_type and rule.ether_type != f"IPv{network.version}":
                errors.append(
                    f"remote_ip_prefix {rule.remote_ip_prefix} does not match "
                    f"ethertype {rule.ether_type}"
                )

    return errors


def validate_security_group(group: SecurityGroup) -> List[str]:
    """
    Validate a security group and all of its rules.

    Returns:
        List of problems, rule problems prefixed with "rules[i]: "
    """
    errors = []

    if not group.group_name:
        errors.append("name is required")

    for i, rule in enumerate(group.rules or []):
        errors.extend(f"rules[{i}]: {err}" for err in validate_rule(rule))

    return errors
