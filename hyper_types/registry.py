#!/usr/bin/env python3
"""
Registry service configuration reported by GET /info.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from hyper_types.codec import wire_field


@dataclass
class IndexInfo:
    """Configuration of one registry index."""

    # Name of the registry, e.g. "docker.io"
    name: str = wire_field("Name", default="")
    mirrors: List[str] = wire_field("Mirrors", default_factory=list)
    # Whether the registry is reached over TLS with verification
    secure: bool = wire_field("Secure", default=False)
    # Whether this is the official public index
    official: bool = wire_field("Official", default=False)


@dataclass
class ServiceConfig:
    """Registry configuration of the daemon."""

    # CIDR strings such as "127.0.0.0/8"
    insecure_registry_cidrs: List[str] = wire_field(
        "InsecureRegistryCIDRs", default_factory=list
    )
    index_configs: Dict[str, Optional[IndexInfo]] = wire_field(
        "IndexConfigs", default_factory=dict
    )
    mirrors: List[str] = wire_field("Mirrors", default_factory=list)
