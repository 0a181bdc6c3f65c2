#!/usr/bin/env python3
"""
Container lifecycle types for hyper-types.

Request and response payloads of the container endpoints:

    POST   /containers/create              ContainerCreateResponse
    GET    /containers/json                [Container]
    GET    /containers/{name}/json         ContainerJSON
    POST   /containers/{name}/update       ContainerUpdateResponse
    POST   /containers/{name}/wait         ContainerWaitResponse
    POST   /commit?container={id}          ContainerCommitResponse
    GET    /containers/{name}/changes      [ContainerChange]
    GET    /containers/{name}/top          ContainerProcessList
    POST   /containers/{name}/copy         CopyConfig (request)
    HEAD   /containers/{name}/archive      ContainerPathStat (header)
    POST   /containers/{name}/exec         ContainerExecCreateResponse
    POST   /exec/{id}/start                ExecStartCheck (request)

Every field maps to its wire key explicitly, e.g. ContainerCreateResponse.id
is sent as "Id".
"""

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from hyper_types.codec import (ZERO_TIME, DecodingError, decode, encode,
                               wire_field)
from hyper_types.images import GraphDriverData
from hyper_types.networks import NetworkSettings, SummaryNetworkSettings
from hyper_types.runconfig import Config, HostConfig

# Header carrying a base64 JSON ContainerPathStat on archive requests
PATH_STAT_HEADER = "X-Docker-Container-Path-Stat"

# File mode bits of ContainerPathStat.mode
MODE_DIR = 1 << 31
MODE_SYMLINK = 1 << 27
MODE_PERM = 0o777

# ContainerChange kinds
CHANGE_MODIFY = 0
CHANGE_ADD = 1
CHANGE_DELETE = 2

CHANGE_KIND_NAMES = {
    CHANGE_MODIFY: "C",
    CHANGE_ADD: "A",
    CHANGE_DELETE: "D",
}


@dataclass
class ContainerCreateResponse:
    """Response of POST /containers/create."""

    # ID of the created container
    id: str = wire_field("Id", default="")
    # Warnings encountered while creating the container
    warnings: List[str] = wire_field("Warnings", default_factory=list)


@dataclass
class ContainerExecCreateResponse:
    """Response of POST /containers/{name}/exec."""

    id: str = wire_field("Id", default="")


@dataclass
class ContainerUpdateResponse:
    """Response of POST /containers/{name}/update."""

    warnings: List[str] = wire_field("Warnings", default_factory=list)


@dataclass
class ContainerWaitResponse:
    """Response of POST /containers/{id}/wait."""

    status_code: int = wire_field("StatusCode", default=0)


@dataclass
class ContainerCommitResponse:
    """Response of POST /commit?container={id}."""

    id: str = wire_field("Id", default="")


@dataclass
class ContainerChange:
    """One filesystem change from GET /containers/{name}/changes."""

    kind: int = wire_field("Kind", default=CHANGE_MODIFY)
    path: str = wire_field("Path", default="")

    @property
    def kind_name(self) -> str:
        """Single-letter kind as printed by `diff` (C, A or D)."""
        return CHANGE_KIND_NAMES.get(self.kind, "?")


@dataclass
class Port:
    """
    An open port of a container.

    Example: {"PrivatePort": 8080, "PublicPort": 80, "Type": "tcp"}
    """

    ip: str = wire_field("IP", omitempty=True, default="")
    private_port: int = wire_field("PrivatePort", default=0)
    public_port: int = wire_field("PublicPort", omitempty=True, default=0)
    type: str = wire_field("Type", default="")


@dataclass
class MountPoint:
    """A mount point inside a container."""

    name: str = wire_field("Name", omitempty=True, default="")
    source: str = wire_field("Source", default="")
    destination: str = wire_field("Destination", default="")
    driver: str = wire_field("Driver", omitempty=True, default="")
    mode: str = wire_field("Mode", default="")
    rw: bool = wire_field("RW", default=False)
    propagation: str = wire_field("Propagation", default="")


@dataclass
class ContainerHostConfig:
    """The HostConfig summary carried by container list entries."""

    network_mode: str = wire_field("NetworkMode", omitempty=True, default="")


@dataclass
class Container:
    """One entry of GET /containers/json."""

    id: str = wire_field("Id", default="")
    names: List[str] = wire_field("Names", default_factory=list)
    image: str = wire_field("Image", default="")
    image_id: str = wire_field("ImageID", default="")
    command: str = wire_field("Command", default="")
    created: int = wire_field("Created", default=0)
    ports: List[Port] = wire_field("Ports", default_factory=list)
    size_rw: int = wire_field("SizeRw", omitempty=True, default=0)
    size_root_fs: int = wire_field("SizeRootFs", omitempty=True, default=0)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)
    state: str = wire_field("State", default="")
    status: str = wire_field("Status", default="")
    host_config: ContainerHostConfig = wire_field(
        "HostConfig", default_factory=ContainerHostConfig
    )
    network_settings: Optional[SummaryNetworkSettings] = wire_field(
        "NetworkSettings", default=None
    )
    mounts: List[MountPoint] = wire_field("Mounts", default_factory=list)


@dataclass
class CopyConfig:
    """Body of POST /containers/{id}/copy."""

    resource: str = wire_field("Resource", default="")


@dataclass
class ContainerPathStat:
    """
    Stat of a path inside a container, sent base64-encoded in the
    X-Docker-Container-Path-Stat header of GET/HEAD /containers/{name}/archive.
    """

    # File or directory name
    name: str = wire_field("name", default="")
    size: int = wire_field("size", default=0)
    # File mode bits (see MODE_DIR, MODE_SYMLINK)
    mode: int = wire_field("mode", default=0)
    mtime: datetime = wire_field("mtime", default=ZERO_TIME)
    link_target: str = wire_field("linkTarget", default="")

    @property
    def is_dir(self) -> bool:
        return bool(self.mode & MODE_DIR)

    @property
    def is_symlink(self) -> bool:
        return bool(self.mode & MODE_SYMLINK)

    def to_header(self) -> str:
        """Encode as the value of the path stat header."""
        data = json.dumps(encode(self), separators=(",", ":"))
        return base64.b64encode(data.encode("utf-8")).decode("ascii")

    @classmethod
    def from_header(cls, value: str) -> "ContainerPathStat":
        """
        Decode the value of the path stat header.

        Raises:
            DecodingError: If the header is not base64 JSON of the right shape
        """
        try:
            raw = base64.b64decode(value, validate=True)
            data = json.loads(raw)
        except (binascii.Error, ValueError) as e:
            raise DecodingError(f"Invalid {PATH_STAT_HEADER} header: {e}")
        return decode(cls, data)


@dataclass
class ContainerProcessList:
    """Response of GET /containers/{name}/top."""

    processes: List[List[str]] = wire_field("Processes", default_factory=list)
    titles: List[str] = wire_field("Titles", default_factory=list)

    def rows(self) -> List[Dict[str, str]]:
        """Processes as title -> value mappings."""
        titles = self.titles or []
        return [dict(zip(titles, proc or [])) for proc in self.processes or []]


@dataclass
class ExecStartCheck:
    """Body of POST /exec/{id}/start."""

    # Start detached
    detach: bool = wire_field("Detach", default=False)
    # Allocate a tty
    tty: bool = wire_field("Tty", default=False)


@dataclass
class ContainerState:
    """Running state of a container, part of the inspect payload."""

    status: str = wire_field("Status", default="")
    running: bool = wire_field("Running", default=False)
    paused: bool = wire_field("Paused", default=False)
    restarting: bool = wire_field("Restarting", default=False)
    oom_killed: bool = wire_field("OOMKilled", default=False)
    dead: bool = wire_field("Dead", default=False)
    pid: int = wire_field("Pid", default=0)
    exit_code: int = wire_field("ExitCode", default=0)
    error: str = wire_field("Error", default="")
    started_at: str = wire_field("StartedAt", default="")
    finished_at: str = wire_field("FinishedAt", default="")


@dataclass
class ContainerNode:
    """Node a container runs on. Only reported by cluster daemons."""

    id: str = wire_field("ID", default="")
    ip_address: str = wire_field("IP", default="")
    addr: str = wire_field("Addr", default="")
    name: str = wire_field("Name", default="")
    cpus: int = wire_field("Cpus", default=0)
    memory: int = wire_field("Memory", default=0)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)


@dataclass
class ContainerJSONBase:
    """Common part of GET /containers/{name}/json."""

    id: str = wire_field("Id", default="")
    created: str = wire_field("Created", default="")
    path: str = wire_field("Path", default="")
    args: List[str] = wire_field("Args", default_factory=list)
    state: Optional[ContainerState] = wire_field("State", default=None)
    image: str = wire_field("Image", default="")
    resolv_conf_path: str = wire_field("ResolvConfPath", default="")
    hostname_path: str = wire_field("HostnamePath", default="")
    hosts_path: str = wire_field("HostsPath", default="")
    log_path: str = wire_field("LogPath", default="")
    node: Optional[ContainerNode] = wire_field("Node", omitempty=True, default=None)
    name: str = wire_field("Name", default="")
    restart_count: int = wire_field("RestartCount", default=0)
    driver: str = wire_field("Driver", default="")
    mount_label: str = wire_field("MountLabel", default="")
    process_label: str = wire_field("ProcessLabel", default="")
    app_armor_profile: str = wire_field("AppArmorProfile", default="")
    exec_ids: List[str] = wire_field("ExecIDs", default_factory=list)
    host_config: Optional[HostConfig] = wire_field("HostConfig", default=None)
    graph_driver: GraphDriverData = wire_field(
        "GraphDriver", default_factory=GraphDriverData
    )
    # Only set when sizes were requested; None means "not computed"
    size_rw: Optional[int] = wire_field("SizeRw", omitempty=True, default=None)
    size_root_fs: Optional[int] = wire_field("SizeRootFs", omitempty=True, default=None)


@dataclass
class ContainerJSON(ContainerJSONBase):
    """Response of GET /containers/{name}/json."""

    mounts: List[MountPoint] = wire_field("Mounts", default_factory=list)
    config: Optional[Config] = wire_field("Config", default=None)
    network_settings: Optional[NetworkSettings] = wire_field(
        "NetworkSettings", default=None
    )
