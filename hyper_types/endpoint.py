#!/usr/bin/env python3
"""
Per-network endpoint and IP address management types.

These describe how a container is attached to one network and how a
network hands out addresses. They are shared by the container inspect
payload (NetworkSettings.Networks), network connect requests and network
create requests.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from hyper_types.codec import wire_field


@dataclass
class Address:
    """An IP address with its prefix length."""

    addr: str = wire_field("Addr", default="")
    prefix_len: int = wire_field("PrefixLen", default=0)


@dataclass
class EndpointIPAMConfig:
    """Static addresses requested for an endpoint."""

    ipv4_address: str = wire_field("IPv4Address", omitempty=True, default="")
    ipv6_address: str = wire_field("IPv6Address", omitempty=True, default="")
    link_local_ips: List[str] = wire_field(
        "LinkLocalIPs", omitempty=True, default_factory=list
    )


@dataclass
class EndpointSettings:
    """Settings of a container endpoint on one network."""

    ipam_config: Optional[EndpointIPAMConfig] = wire_field("IPAMConfig", default=None)
    links: List[str] = wire_field("Links", default_factory=list)
    aliases: List[str] = wire_field("Aliases", default_factory=list)

    # Operational data
    network_id: str = wire_field("NetworkID", default="")
    endpoint_id: str = wire_field("EndpointID", default="")
    gateway: str = wire_field("Gateway", default="")
    ip_address: str = wire_field("IPAddress", default="")
    ip_prefix_len: int = wire_field("IPPrefixLen", default=0)
    ipv6_gateway: str = wire_field("IPv6Gateway", default="")
    global_ipv6_address: str = wire_field("GlobalIPv6Address", default="")
    global_ipv6_prefix_len: int = wire_field("GlobalIPv6PrefixLen", default=0)
    mac_address: str = wire_field("MacAddress", default="")


@dataclass
class IPAMConfig:
    """One address pool of a network."""

    subnet: str = wire_field("Subnet", omitempty=True, default="")
    ip_range: str = wire_field("IPRange", omitempty=True, default="")
    gateway: str = wire_field("Gateway", omitempty=True, default="")
    aux_address: Dict[str, str] = wire_field(
        "AuxiliaryAddresses", omitempty=True, default_factory=dict
    )


@dataclass
class IPAM:
    """IP address management of a network."""

    driver: str = wire_field("Driver", default="")
    options: Dict[str, str] = wire_field("Options", default_factory=dict)
    config: List[IPAMConfig] = wire_field("Config", default_factory=list)
