#!/usr/bin/env python3
"""
Network types for hyper-types.

Covers:
- Network settings reported for a container (inspect and list)
- Network resources (GET /networks, GET /networks/{id})
- Network create, connect and disconnect request bodies

Legacy top-level network fields
===============================

Before multi-network support a container had exactly one endpoint, and its
address data sat directly on NetworkSettings. Those fields now live per
network under NetworkSettings.Networks, but the top-level copies
(DefaultNetworkSettings) are still sent for clients that read them. During
the deprecation window both must carry the same values for the default
network; apply_default_network() keeps them in sync. The top-level copies
go away once clients read Networks only.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from hyper_types.codec import wire_field
from hyper_types.endpoint import IPAM, Address, EndpointSettings
from hyper_types.nat import PortMap

DEFAULT_NETWORK = "bridge"


@dataclass
class NetworkSettingsBase:
    """Basic information about a container's network stack."""

    # Bridge the network uses, e.g. "docker0"
    bridge: str = wire_field("Bridge", default="")
    # Uniquely represents a container's network stack
    sandbox_id: str = wire_field("SandboxID", default="")
    # Whether hairpin NAT is enabled on the virtual interface
    hairpin_mode: bool = wire_field("HairpinMode", default=False)
    link_local_ipv6_address: str = wire_field("LinkLocalIPv6Address", default="")
    link_local_ipv6_prefix_len: int = wire_field("LinkLocalIPv6PrefixLen", default=0)
    ports: PortMap = wire_field("Ports", default_factory=dict)
    sandbox_key: str = wire_field("SandboxKey", default="")
    secondary_ip_addresses: List[Address] = wire_field(
        "SecondaryIPAddresses", default_factory=list
    )
    secondary_ipv6_addresses: List[Address] = wire_field(
        "SecondaryIPv6Addresses", default_factory=list
    )


@dataclass
class DefaultNetworkSettings:
    """
    Endpoint data of the default network, duplicated at the top level of
    NetworkSettings for the deprecation window.
    """

    endpoint_id: str = wire_field("EndpointID", default="")
    gateway: str = wire_field("Gateway", default="")
    global_ipv6_address: str = wire_field("GlobalIPv6Address", default="")
    global_ipv6_prefix_len: int = wire_field("GlobalIPv6PrefixLen", default=0)
    ip_address: str = wire_field("IPAddress", default="")
    ip_prefix_len: int = wire_field("IPPrefixLen", default=0)
    ipv6_gateway: str = wire_field("IPv6Gateway", default="")
    mac_address: str = wire_field("MacAddress", default="")


def default_network_settings(endpoint: EndpointSettings) -> DefaultNetworkSettings:
    """Build the legacy top-level fields from an endpoint."""
    return DefaultNetworkSettings(
        endpoint_id=endpoint.endpoint_id,
        gateway=endpoint.gateway,
        global_ipv6_address=endpoint.global_ipv6_address,
        global_ipv6_prefix_len=endpoint.global_ipv6_prefix_len,
        ip_address=endpoint.ip_address,
        ip_prefix_len=endpoint.ip_prefix_len,
        ipv6_gateway=endpoint.ipv6_gateway,
        mac_address=endpoint.mac_address,
    )


@dataclass
class NetworkSettings(NetworkSettingsBase, DefaultNetworkSettings):
    """Network settings of a container, as returned by inspect."""

    networks: Dict[str, Optional[EndpointSettings]] = wire_field(
        "Networks", default_factory=dict
    )

    def apply_default_network(self, name: str = DEFAULT_NETWORK) -> bool:
        """
        Copy the endpoint of network `name` into the legacy top-level fields.

        Returns:
            True if the network was found and copied
        """
        endpoint = (self.networks or {}).get(name)
        if endpoint is None:
            return False

        legacy = default_network_settings(endpoint)
        for attr in vars(legacy):
            setattr(self, attr, getattr(legacy, attr))
        return True


@dataclass
class SummaryNetworkSettings:
    """Summary of a container's networks in GET /containers/json."""

    networks: Dict[str, Optional[EndpointSettings]] = wire_field(
        "Networks", default_factory=dict
    )


@dataclass
class EndpointResource:
    """Network resources of one container attached to a network."""

    name: str = wire_field("Name", default="")
    endpoint_id: str = wire_field("EndpointID", default="")
    mac_address: str = wire_field("MacAddress", default="")
    ipv4_address: str = wire_field("IPv4Address", default="")
    ipv6_address: str = wire_field("IPv6Address", default="")


@dataclass
class NetworkResource:
    """Body of the GET /networks/{id} response."""

    name: str = wire_field("Name", default="")
    # Uniquely identifies a network on a single machine
    id: str = wire_field("Id", default="")
    # "local" for machine level, "global" for cluster-wide
    scope: str = wire_field("Scope", default="")
    # e.g. "bridge", "overlay"
    driver: str = wire_field("Driver", default="")
    enable_ipv6: bool = wire_field("EnableIPv6", default=False)
    ipam: IPAM = wire_field("IPAM", default_factory=IPAM)
    # Whether the network is internal only
    internal: bool = wire_field("Internal", default=False)
    # Container ID -> endpoint
    containers: Dict[str, EndpointResource] = wire_field(
        "Containers", default_factory=dict
    )
    options: Dict[str, str] = wire_field("Options", default_factory=dict)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)


@dataclass
class NetworkCreate:
    """Parameters of a network create call."""

    check_duplicate: bool = wire_field("CheckDuplicate", default=False)
    driver: str = wire_field("Driver", default="")
    enable_ipv6: bool = wire_field("EnableIPv6", default=False)
    ipam: IPAM = wire_field("IPAM", default_factory=IPAM)
    internal: bool = wire_field("Internal", default=False)
    options: Dict[str, str] = wire_field("Options", default_factory=dict)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)


@dataclass
class NetworkCreateRequest(NetworkCreate):
    """Body of POST /networks/create."""

    name: str = wire_field("Name", default="")


@dataclass
class NetworkCreateResponse:
    """Response of POST /networks/create."""

    id: str = wire_field("Id", default="")
    warning: str = wire_field("Warning", default="")


@dataclass
class NetworkConnect:
    """Body of POST /networks/{id}/connect."""

    container: str = wire_field("Container", default="")
    endpoint_config: Optional[EndpointSettings] = wire_field(
        "EndpointConfig", omitempty=True, default=None
    )


@dataclass
class NetworkDisconnect:
    """Body of POST /networks/{id}/disconnect."""

    container: str = wire_field("Container", default="")
    force: bool = wire_field("Force", default=False)
