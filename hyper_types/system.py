#!/usr/bin/env python3
"""
System, authentication and checkpoint types.

    GET  /version                       Version
    GET  /info                          Info
    POST /auth                          AuthConfig -> AuthResponse
    GET  /containers/{name}/checkpoints [Checkpoint]
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from hyper_types.codec import wire_field
from hyper_types.registry import ServiceConfig


@dataclass
class Version:
    """Response of GET /version."""

    version: str = wire_field("Version", default="")
    api_version: str = wire_field("ApiVersion", default="")
    git_commit: str = wire_field("GitCommit", default="")
    go_version: str = wire_field("GoVersion", default="")
    os: str = wire_field("Os", default="")
    arch: str = wire_field("Arch", default="")
    kernel_version: str = wire_field("KernelVersion", omitempty=True, default="")
    experimental: bool = wire_field("Experimental", omitempty=True, default=False)
    build_time: str = wire_field("BuildTime", omitempty=True, default="")


@dataclass
class PluginsInfo:
    """Plugins registered with the daemon, by kind."""

    volume: List[str] = wire_field("Volume", default_factory=list)
    network: List[str] = wire_field("Network", default_factory=list)
    authorization: List[str] = wire_field("Authorization", default_factory=list)


@dataclass
class Info:
    """Response of GET /info."""

    id: str = wire_field("ID", default="")
    containers: int = wire_field("Containers", default=0)
    containers_running: int = wire_field("ContainersRunning", default=0)
    containers_paused: int = wire_field("ContainersPaused", default=0)
    containers_stopped: int = wire_field("ContainersStopped", default=0)
    images: int = wire_field("Images", default=0)
    driver: str = wire_field("Driver", default="")
    driver_status: List[Tuple[str, str]] = wire_field("DriverStatus", default_factory=list)
    system_status: List[Tuple[str, str]] = wire_field("SystemStatus", default_factory=list)
    plugins: PluginsInfo = wire_field("Plugins", default_factory=PluginsInfo)
    memory_limit: bool = wire_field("MemoryLimit", default=False)
    swap_limit: bool = wire_field("SwapLimit", default=False)
    kernel_memory: bool = wire_field("KernelMemory", default=False)
    cpu_cfs_period: bool = wire_field("CpuCfsPeriod", default=False)
    cpu_cfs_quota: bool = wire_field("CpuCfsQuota", default=False)
    cpu_shares: bool = wire_field("CPUShares", default=False)
    cpu_set: bool = wire_field("CPUSet", default=False)
    ipv4_forwarding: bool = wire_field("IPv4Forwarding", default=False)
    bridge_nf_iptables: bool = wire_field("BridgeNfIptables", default=False)
    bridge_nf_ip6tables: bool = wire_field("BridgeNfIp6tables", default=False)
    debug: bool = wire_field("Debug", default=False)
    n_fd: int = wire_field("NFd", default=0)
    oom_kill_disable: bool = wire_field("OomKillDisable", default=False)
    n_goroutines: int = wire_field("NGoroutines", default=0)
    system_time: str = wire_field("SystemTime", default="")
    execution_driver: str = wire_field("ExecutionDriver", default="")
    logging_driver: str = wire_field("LoggingDriver", default="")
    cgroup_driver: str = wire_field("CgroupDriver", default="")
    n_events_listener: int = wire_field("NEventsListener", default=0)
    kernel_version: str = wire_field("KernelVersion", default="")
    operating_system: str = wire_field("OperatingSystem", default="")
    os_type: str = wire_field("OSType", default="")
    architecture: str = wire_field("Architecture", default="")
    index_server_address: str = wire_field("IndexServerAddress", default="")
    registry_config: Optional[ServiceConfig] = wire_field("RegistryConfig", default=None)
    ncpu: int = wire_field("NCPU", default=0)
    mem_total: int = wire_field("MemTotal", default=0)
    docker_root_dir: str = wire_field("DockerRootDir", default="")
    http_proxy: str = wire_field("HttpProxy", default="")
    https_proxy: str = wire_field("HttpsProxy", default="")
    no_proxy: str = wire_field("NoProxy", default="")
    name: str = wire_field("Name", default="")
    labels: List[str] = wire_field("Labels", default_factory=list)
    experimental_build: bool = wire_field("ExperimentalBuild", default=False)
    server_version: str = wire_field("ServerVersion", default="")
    cluster_store: str = wire_field("ClusterStore", default="")
    cluster_advertise: str = wire_field("ClusterAdvertise", default="")
    security_options: List[str] = wire_field("SecurityOptions", default_factory=list)


@dataclass
class AuthConfig:
    """Body of POST /auth."""

    username: str = wire_field("username", omitempty=True, default="")
    password: str = wire_field("password", omitempty=True, default="")
    auth: str = wire_field("auth", omitempty=True, default="")
    email: str = wire_field("email", omitempty=True, default="")
    server_address: str = wire_field("serveraddress", omitempty=True, default="")
    # Sent instead of username/password once a token was issued
    identity_token: str = wire_field("identitytoken", omitempty=True, default="")
    registry_token: str = wire_field("registrytoken", omitempty=True, default="")


@dataclass
class AuthResponse:
    """Response of POST /auth."""

    # Authentication status
    status: str = wire_field("Status", default="")
    # Opaque token for authenticating the user after a successful login
    identity_token: str = wire_field("IdentityToken", omitempty=True, default="")


@dataclass
class Checkpoint:
    """A container checkpoint."""

    name: str = wire_field("Name", default="")
