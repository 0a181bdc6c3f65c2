#!/usr/bin/env python3
"""
Endpoint registry for hyper-types.

Maps every remote operation (method + path template) to the payload types
it exchanges. Nothing here performs I/O; a transport uses the registry to
pick the type to encode a request body from and the type to decode a
response into.

Path templates use {param} for one path segment and {param:path} for a
value that may contain slashes (image names such as "library/ubuntu").
Query parameters are not part of the template.

Example:
    endpoint, params = match_endpoint("GET", "/containers/web/json")
    # endpoint.name == "container.inspect", params == {"name": "web"}
    inspect = endpoint.decode_response(payload)
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Tuple

from hyper_types.codec import decode, encode, is_wire_type
from hyper_types.containers import (Container, ContainerChange,
                                    ContainerCommitResponse,
                                    ContainerCreateResponse,
                                    ContainerExecCreateResponse, ContainerJSON,
                                    ContainerPathStat, ContainerProcessList,
                                    ContainerUpdateResponse,
                                    ContainerWaitResponse, CopyConfig,
                                    ExecStartCheck)
from hyper_types.images import Image, ImageDelete, ImageHistory, ImageInspect
from hyper_types.networks import (NetworkConnect, NetworkCreateRequest,
                                  NetworkCreateResponse, NetworkDisconnect,
                                  NetworkResource)
from hyper_types.runconfig import (Config, ContainerCreateRequest, ExecConfig,
                                   UpdateConfig)
from hyper_types.security import SecurityGroup
from hyper_types.system import (AuthConfig, AuthResponse, Checkpoint, Info,
                                Version)
from hyper_types.volumes import (Snapshot, SnapshotCreateRequest,
                                 SnapshotsListResponse, Volume,
                                 VolumeCreateRequest, VolumesInitializeRequest,
                                 VolumesInitializeResponse,
                                 VolumesListResponse)

_PLACEHOLDER = re.compile(r"\{(\w+)(?::(path))?\}")


def _compile(template: str) -> Pattern:
    pattern = ""
    pos = 0
    for m in _PLACEHOLDER.finditer(template):
        pattern += re.escape(template[pos:m.start()])
        group = ".+" if m.group(2) else "[^/]+"
        pattern += f"(?P<{m.group(1)}>{group})"
        pos = m.end()
    pattern += re.escape(template[pos:])
    return re.compile(pattern)


@dataclass(frozen=True)
class Endpoint:
    """
    A remote operation and its payload types.

    Attributes:
        name: Registry key, e.g. "container.create"
        method: HTTP method
        path: Path template
        request: Type of the request body, or None
        response: Type of the response body, or None
    """

    name: str
    method: str
    path: str
    request: Any = None
    response: Any = None
    pattern: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pattern", _compile(self.path))

    @property
    def params(self) -> List[str]:
        """Names of the path parameters."""
        return [m.group(1) for m in _PLACEHOLDER.finditer(self.path)]

    def match(self, method: str, path: str) -> Optional[Dict[str, str]]:
        """
        Match a request against this endpoint.

        Returns:
            Path parameters, or None if the endpoint does not match
        """
        if method.upper() != self.method:
            return None
        m = self.pattern.fullmatch(path.split("?", 1)[0])
        if not m:
            return None
        return m.groupdict()

    def format_path(self, **params: str) -> str:
        """
        Fill in the path template.

        Raises:
            KeyError: If a parameter is missing
        """
        def replace(m):
            return str(params[m.group(1)])

        return _PLACEHOLDER.sub(replace, self.path)

    def encode_request(self, value: Any) -> Any:
        """
        Encode a request body for this endpoint.

        Raises:
            ValueError: If the endpoint takes no body
            TypeError: If value is not of the request type
        """
        if self.request is None:
            raise ValueError(f"{self.name} takes no request body")
        if isinstance(self.request, type) and not isinstance(value, self.request):
            raise TypeError(
                f"{self.name} expects {self.request.__name__}, got {type(value).__name__}"
            )
        return encode(value)

    def decode_response(self, data: Any, strict: Optional[bool] = None) -> Any:
        """
        Decode a parsed response body for this endpoint.

        Raises:
            ValueError: If the endpoint returns no body
            DecodingError: If data does not match the response type
        """
        if self.response is None:
            raise ValueError(f"{self.name} returns no response body")
        return decode(self.response, data, strict=strict)


ENDPOINTS: List[Endpoint] = [
    # Containers
    Endpoint("container.list", "GET", "/containers/json", response=List[Container]),
    Endpoint(
        "container.create", "POST", "/containers/create",
        request=ContainerCreateRequest, response=ContainerCreateResponse,
    ),
    Endpoint("container.inspect", "GET", "/containers/{name}/json", response=ContainerJSON),
    Endpoint(
        "container.update", "POST", "/containers/{name}/update",
        request=UpdateConfig, response=ContainerUpdateResponse,
    ),
    Endpoint("container.wait", "POST", "/containers/{name}/wait", response=ContainerWaitResponse),
    Endpoint(
        "container.commit", "POST", "/commit",
        request=Config, response=ContainerCommitResponse,
    ),
    Endpoint(
        "container.changes", "GET", "/containers/{name}/changes",
        response=List[ContainerChange],
    ),
    Endpoint("container.top", "GET", "/containers/{name}/top", response=ContainerProcessList),
    Endpoint("container.copy", "POST", "/containers/{name}/copy", request=CopyConfig),
    # The stat travels in the X-Docker-Container-Path-Stat header
    Endpoint("container.archive.stat", "HEAD", "/containers/{name}/archive", response=ContainerPathStat),
    Endpoint(
        "container.checkpoints", "GET", "/containers/{name}/checkpoints",
        response=List[Checkpoint],
    ),
    # Exec
    Endpoint(
        "exec.create", "POST", "/containers/{name}/exec",
        request=ExecConfig, response=ContainerExecCreateResponse,
    ),
    Endpoint("exec.start", "POST", "/exec/{id}/start", request=ExecStartCheck),
    # Images
    Endpoint("image.list", "GET", "/images/json", response=List[Image]),
    Endpoint("image.inspect", "GET", "/images/{name:path}/json", response=ImageInspect),
    Endpoint("image.history", "GET", "/images/{name:path}/history", response=List[ImageHistory]),
    Endpoint("image.remove", "DELETE", "/images/{name:path}", response=List[ImageDelete]),
    # Networks
    Endpoint("network.list", "GET", "/networks", response=List[NetworkResource]),
    Endpoint("network.inspect", "GET", "/networks/{id}", response=NetworkResource),
    Endpoint(
        "network.create", "POST", "/networks/create",
        request=NetworkCreateRequest, response=NetworkCreateResponse,
    ),
    Endpoint("network.connect", "POST", "/networks/{id}/connect", request=NetworkConnect),
    Endpoint("network.disconnect", "POST", "/networks/{id}/disconnect", request=NetworkDisconnect),
    Endpoint("network.remove", "DELETE", "/networks/{id}"),
    # Volumes
    Endpoint("volume.list", "GET", "/volumes", response=VolumesListResponse),
    Endpoint(
        "volume.create", "POST", "/volumes/create",
        request=VolumeCreateRequest, response=Volume,
    ),
    Endpoint("volume.inspect", "GET", "/volumes/{name}", response=Volume),
    Endpoint("volume.remove", "DELETE", "/volumes/{name}"),
    Endpoint(
        "volume.initialize", "POST", "/volumes/initialize",
        request=VolumesInitializeRequest, response=VolumesInitializeResponse,
    ),
    # Snapshots
    Endpoint("snapshot.list", "GET", "/snapshots", response=SnapshotsListResponse),
    Endpoint(
        "snapshot.create", "POST", "/snapshots/create",
        request=SnapshotCreateRequest, response=Snapshot,
    ),
    Endpoint("snapshot.inspect", "GET", "/snapshots/{name}", response=Snapshot),
    Endpoint("snapshot.remove", "DELETE", "/snapshots/{name}"),
    # Security groups
    Endpoint("sg.list", "GET", "/sg", response=List[SecurityGroup]),
    Endpoint("sg.create", "POST", "/sg/create", request=SecurityGroup),
    Endpoint("sg.inspect", "GET", "/sg/{name}", response=SecurityGroup),
    Endpoint("sg.update", "PUT", "/sg/{name}", request=SecurityGroup),
    Endpoint("sg.remove", "DELETE", "/sg/{name}"),
    # System
    Endpoint("system.auth", "POST", "/auth", request=AuthConfig, response=AuthResponse),
    Endpoint("system.info", "GET", "/info", response=Info),
    Endpoint("system.version", "GET", "/version", response=Version),
]

_BY_NAME: Dict[str, Endpoint] = {e.name: e for e in ENDPOINTS}

# Literal paths first so /volumes/create never reads as /volumes/{name}
_MATCH_ORDER: List[Endpoint] = sorted(ENDPOINTS, key=lambda e: bool(e.params))


def get_endpoint(name: str) -> Endpoint:
    """
    Look up an endpoint by name.

    Raises:
        KeyError: If no endpoint has that name
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint: {name}")


def match_endpoint(method: str, path: str) -> Tuple[Endpoint, Dict[str, str]]:
    """
    Find the endpoint serving a request.

    Args:
        method: HTTP method
        path: Request path, optionally with a query string

    Returns:
        (endpoint, path parameters)

    Raises:
        LookupError: If no endpoint matches
    """
    for endpoint in _MATCH_ORDER:
        params = endpoint.match(method, path)
        if params is not None:
            return endpoint, params
    raise LookupError(f"No endpoint for {method.upper()} {path}")


_payload_types: Dict[str, type] = {}


def payload_types() -> Dict[str, type]:
    """
    All wire types by class name.

    Returns:
        Mapping of class name to class for every module's wire dataclasses
    """
    if not _payload_types:
        from hyper_types import (containers, endpoint, images, nat, networks,
                                 registry, runconfig, security, system,
                                 volumes)

        for module in (containers, endpoint, images, nat, networks, registry,
                       runconfig, security, system, volumes):
            for name, obj in vars(module).items():
                if (
                    isinstance(obj, type)
                    and obj.__module__ == module.__name__
                    and is_wire_type(obj)
                ):
                    _payload_types[name] = obj
    return dict(_payload_types)
