#!/usr/bin/env python3
"""
Port and port-binding types.

A port is written "<number>/<proto>", e.g. "80/tcp". A PortMap maps such
ports to the host bindings published for them:

    {"80/tcp": [{"HostIp": "0.0.0.0", "HostPort": "8080"}]}
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from hyper_types.codec import wire_field

DEFAULT_PROTO = "tcp"


@dataclass
class PortBinding:
    """Host address and port a container port is published on."""

    host_ip: str = wire_field("HostIp", default="")
    host_port: str = wire_field("HostPort", default="")


# Container port ("80/tcp") -> host bindings
PortMap = Dict[str, List[PortBinding]]


def new_port(proto: str, port: str) -> str:
    """
    Build a port key from protocol and port (or port range).

    Example:
        >>> new_port("udp", "53")
        '53/udp'
    """
    if not port:
        raise ValueError("port is required")
    return f"{port}/{proto or DEFAULT_PROTO}"


def parse_port(port: str) -> Tuple[str, str]:
    """
    Split a port key into (proto, port).

    A missing protocol defaults to tcp.

    Example:
        >>> parse_port("8080")
        ('tcp', '8080')
    """
    number, _, proto = port.partition("/")
    if not number:
        raise ValueError(f"invalid port: {port!r}")
    return proto or DEFAULT_PROTO, number


def port_range(port: str) -> Tuple[int, int]:
    """
    Return the (start, end) range of a port key such as "8000-8010/tcp".
    """
    _, number = parse_port(port)
    start, _, end = number.partition("-")
    try:
        first = int(start)
        last = int(end) if end else first
    except ValueError:
        raise ValueError(f"invalid port: {port!r}")
    if last < first:
        raise ValueError(f"invalid port range: {port!r}")
    return first, last
