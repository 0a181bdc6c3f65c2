"""
hyper-types: typed request/response payloads for a container-management API.

Provides:
- Wire dataclasses for containers, images, networks, volumes, snapshots,
  system info, authentication and security groups
- Per-field JSON and YAML naming with omit-if-empty rules
- A codec turning payloads into JSON/YAML and back, failing loudly on
  malformed input
- A registry mapping endpoints to their request and response types

License: MIT
"""

__version__ = "1.0.0"
__all__ = [
    "codec",
    "config",
    "containers",
    "endpoint",
    "endpoints",
    "images",
    "nat",
    "networks",
    "registry",
    "runconfig",
    "security",
    "system",
    "volumes",
]
