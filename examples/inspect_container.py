#!/usr/bin/env python3
"""
Container Inspect Example

This example walks through the payload types of a container round trip:
1. Build a create request body
2. Route a response to its endpoint
3. Decode the inspect payload
4. Refresh the legacy network fields from the default network
5. Re-encode it as JSON

Run with: python3 inspect_container.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hyper_types.codec import DecodingError, to_json
from hyper_types.endpoints import get_endpoint, match_endpoint
from hyper_types.runconfig import ContainerCreateRequest, HostConfig, RestartPolicy

INSPECT = {
    "Id": "ba033ac4401106a3b513bc9d639eee123ad78ca3616b921167cd74b20e25ed39",
    "Created": "2016-06-07T20:31:11.853781916Z",
    "Path": "/bin/sh",
    "Args": ["-c", "sleep 1000"],
    "State": {
        "Status": "running",
        "Running": True,
        "Paused": False,
        "Restarting": False,
        "OOMKilled": False,
        "Dead": False,
        "Pid": 4821,
        "ExitCode": 0,
        "Error": "",
        "StartedAt": "2016-06-07T20:31:12.106Z",
        "FinishedAt": "0001-01-01T00:00:00Z",
    },
    "Image": "sha256:e4a5c5c83bdb",
    "ResolvConfPath": "",
    "HostnamePath": "",
    "HostsPath": "",
    "LogPath": "",
    "Name": "/web",
    "RestartCount": 0,
    "Driver": "overlay2",
    "MountLabel": "",
    "ProcessLabel": "",
    "AppArmorProfile": "",
    "ExecIDs": [],
    "HostConfig": None,
    "GraphDriver": {"Name": "overlay2", "Data": {}},
    "Mounts": [],
    "Config": None,
    "NetworkSettings": {
        "Bridge": "",
        "SandboxID": "",
        "HairpinMode": False,
        "LinkLocalIPv6Address": "",
        "LinkLocalIPv6PrefixLen": 0,
        "Ports": {},
        "SandboxKey": "",
        "SecondaryIPAddresses": [],
        "SecondaryIPv6Addresses": [],
        "EndpointID": "",
        "Gateway": "",
        "GlobalIPv6Address": "",
        "GlobalIPv6PrefixLen": 0,
        "IPAddress": "",
        "IPPrefixLen": 0,
        "IPv6Gateway": "",
        "MacAddress": "",
        "Networks": {
            "bridge": {
                "IPAMConfig": None,
                "Links": [],
                "Aliases": [],
                "NetworkID": "7ea29fc14122",
                "EndpointID": "7587b82f0dad",
                "Gateway": "172.17.0.1",
                "IPAddress": "172.17.0.2",
                "IPPrefixLen": 16,
                "IPv6Gateway": "",
                "GlobalIPv6Address": "",
                "GlobalIPv6PrefixLen": 0,
                "MacAddress": "02:42:ac:11:00:02",
            }
        },
    },
}


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
    print_header("Container Payload Example")

    # Step 1: Create request
    print_step("Building a create request...")
    endpoint = get_endpoint("container.create")
    request = ContainerCreateRequest(
        image="ubuntu",
        cmd=["/bin/sh", "-c", "sleep 1000"],
        host_config=HostConfig(
            memory=256 * 1024 * 1024,
            restart_policy=RestartPolicy(name="on-failure", maximum_retry_count=3),
        ),
    )
    body = endpoint.encode_request(request)
    print_info(f"{endpoint.method} {endpoint.path}")
    print_info(f"Body keys: {len(body)}, Memory: {body['HostConfig']['Memory']}")

    # Step 2: Routing
    print_step("Routing the inspect call...")
    endpoint, params = match_endpoint("GET", "/containers/web/json")
    print_info(f"Endpoint: {endpoint.name}, params: {params}")

    # Step 3: Decode
    print_step("Decoding the inspect payload...")
    try:
        container = endpoint.decode_response(INSPECT)
    except DecodingError as e:
        print(f"Error: {e}")
        return 1
    print_info(f"Name: {container.name}, PID: {container.state.pid}")
    print_info(f"Started: {container.state.started_at}")

    # Step 4: Legacy fields
    print_step("Filling legacy network fields from 'bridge'...")
    settings = container.network_settings
    print_info(f"Before: IPAddress={settings.ip_address!r}")
    settings.apply_default_network()
    print_info(f"After:  IPAddress={settings.ip_address!r}")

    # Step 5: Encode
    print_step("Encoding back to JSON...")
    print(to_json(container.network_settings, indent=2))

    print_header("Example Complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
