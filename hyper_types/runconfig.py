#!/usr/bin/env python3
"""
Container run configuration.

Config holds the portable part of a container's configuration (what to run),
HostConfig the host-dependent part (how to run it). Both appear in container
inspect payloads and in the bodies of:

    POST /containers/create           ContainerCreateRequest
    POST /containers/{name}/exec      ExecConfig
    POST /containers/{name}/update    UpdateConfig
    POST /commit?container={id}       Config
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from hyper_types.codec import wire_field
from hyper_types.endpoint import EndpointSettings
from hyper_types.nat import PortMap


@dataclass
class HealthConfig:
    """Health check of a container. Durations are in nanoseconds."""

    # ["NONE"], ["CMD", args...] or ["CMD-SHELL", command]
    test: List[str] = wire_field("Test", omitempty=True, default_factory=list)
    interval: int = wire_field("Interval", omitempty=True, default=0)
    timeout: int = wire_field("Timeout", omitempty=True, default=0)
    retries: int = wire_field("Retries", omitempty=True, default=0)


@dataclass
class Config:
    """Portable configuration of a container."""

    hostname: str = wire_field("Hostname", default="")
    domainname: str = wire_field("Domainname", default="")
    user: str = wire_field("User", default="")
    attach_stdin: bool = wire_field("AttachStdin", default=False)
    attach_stdout: bool = wire_field("AttachStdout", default=False)
    attach_stderr: bool = wire_field("AttachStderr", default=False)
    # "80/tcp" -> {}
    exposed_ports: Dict[str, Dict[str, Any]] = wire_field(
        "ExposedPorts", omitempty=True, default_factory=dict
    )
    tty: bool = wire_field("Tty", default=False)
    open_stdin: bool = wire_field("OpenStdin", default=False)
    stdin_once: bool = wire_field("StdinOnce", default=False)
    env: List[str] = wire_field("Env", default_factory=list)
    cmd: List[str] = wire_field("Cmd", default_factory=list)
    healthcheck: Optional[HealthConfig] = wire_field(
        "Healthcheck", omitempty=True, default=None
    )
    args_escaped: bool = wire_field("ArgsEscaped", omitempty=True, default=False)
    image: str = wire_field("Image", default="")
    # Mount destination -> {}
    volumes: Dict[str, Dict[str, Any]] = wire_field("Volumes", default_factory=dict)
    working_dir: str = wire_field("WorkingDir", default="")
    entrypoint: List[str] = wire_field("Entrypoint", default_factory=list)
    network_disabled: bool = wire_field("NetworkDisabled", omitempty=True, default=False)
    mac_address: str = wire_field("MacAddress", omitempty=True, default="")
    on_build: List[str] = wire_field("OnBuild", default_factory=list)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)
    stop_signal: str = wire_field("StopSignal", omitempty=True, default="")
    stop_timeout: Optional[int] = wire_field("StopTimeout", omitempty=True, default=None)
    shell: List[str] = wire_field("Shell", omitempty=True, default_factory=list)


@dataclass
class RestartPolicy:
    """What to do when a container exits."""

    # "", "no", "always", "unless-stopped" or "on-failure"
    name: str = wire_field("Name", default="")
    maximum_retry_count: int = wire_field("MaximumRetryCount", default=0)


@dataclass
class LogConfig:
    """Log driver of a container."""

    type: str = wire_field("Type", default="")
    config: Dict[str, str] = wire_field("Config", default_factory=dict)


@dataclass
class Resources:
    """Resource limits that can be changed on a live container."""

    cpu_shares: int = wire_field("CpuShares", default=0)
    memory: int = wire_field("Memory", default=0)
    cgroup_parent: str = wire_field("CgroupParent", default="")
    blkio_weight: int = wire_field("BlkioWeight", default=0)
    cpu_period: int = wire_field("CpuPeriod", default=0)
    cpu_quota: int = wire_field("CpuQuota", default=0)
    cpuset_cpus: str = wire_field("CpusetCpus", default="")
    cpuset_mems: str = wire_field("CpusetMems", default="")
    kernel_memory: int = wire_field("KernelMemory", default=0)
    memory_reservation: int = wire_field("MemoryReservation", default=0)
    memory_swap: int = wire_field("MemorySwap", default=0)
    memory_swappiness: Optional[int] = wire_field("MemorySwappiness", default=None)
    oom_kill_disable: Optional[bool] = wire_field("OomKillDisable", default=None)
    pids_limit: int = wire_field("PidsLimit", default=0)


@dataclass
class HostConfig(Resources):
    """Host-dependent configuration of a container."""

    binds: List[str] = wire_field("Binds", default_factory=list)
    container_id_file: str = wire_field("ContainerIDFile", default="")
    log_config: LogConfig = wire_field("LogConfig", default_factory=LogConfig)
    network_mode: str = wire_field("NetworkMode", default="")
    port_bindings: PortMap = wire_field("PortBindings", default_factory=dict)
    restart_policy: RestartPolicy = wire_field(
        "RestartPolicy", default_factory=RestartPolicy
    )
    auto_remove: bool = wire_field("AutoRemove", default=False)
    volume_driver: str = wire_field("VolumeDriver", default="")
    volumes_from: List[str] = wire_field("VolumesFrom", default_factory=list)

    cap_add: List[str] = wire_field("CapAdd", default_factory=list)
    cap_drop: List[str] = wire_field("CapDrop", default_factory=list)
    dns: List[str] = wire_field("Dns", default_factory=list)
    dns_options: List[str] = wire_field("DnsOptions", default_factory=list)
    dns_search: List[str] = wire_field("DnsSearch", default_factory=list)
    extra_hosts: List[str] = wire_field("ExtraHosts", default_factory=list)
    group_add: List[str] = wire_field("GroupAdd", default_factory=list)
    ipc_mode: str = wire_field("IpcMode", default="")
    links: List[str] = wire_field("Links", default_factory=list)
    oom_score_adj: int = wire_field("OomScoreAdj", default=0)
    pid_mode: str = wire_field("PidMode", default="")
    privileged: bool = wire_field("Privileged", default=False)
    publish_all_ports: bool = wire_field("PublishAllPorts", default=False)
    readonly_rootfs: bool = wire_field("ReadonlyRootfs", default=False)
    security_opt: List[str] = wire_field("SecurityOpt", default_factory=list)
    storage_opt: Dict[str, str] = wire_field(
        "StorageOpt", omitempty=True, default_factory=dict
    )
    tmpfs: Dict[str, str] = wire_field("Tmpfs", omitempty=True, default_factory=dict)
    uts_mode: str = wire_field("UTSMode", default="")
    userns_mode: str = wire_field("UsernsMode", default="")
    shm_size: int = wire_field("ShmSize", default=0)
    sysctls: Dict[str, str] = wire_field("Sysctls", omitempty=True, default_factory=dict)
    runtime: str = wire_field("Runtime", omitempty=True, default="")


@dataclass
class NetworkingConfig:
    """Networks to attach a container to at creation time."""

    endpoints_config: Dict[str, Optional[EndpointSettings]] = wire_field(
        "EndpointsConfig", default_factory=dict
    )


@dataclass
class ContainerCreateRequest(Config):
    """
    Body of POST /containers/create.

    The Config fields sit at the top level next to HostConfig and
    NetworkingConfig.
    """

    host_config: Optional[HostConfig] = wire_field(
        "HostConfig", omitempty=True, default=None
    )
    networking_config: Optional[NetworkingConfig] = wire_field(
        "NetworkingConfig", omitempty=True, default=None
    )


@dataclass
class ExecConfig:
    """Body of POST /containers/{name}/exec."""

    user: str = wire_field("User", default="")
    privileged: bool = wire_field("Privileged", default=False)
    tty: bool = wire_field("Tty", default=False)
    attach_stdin: bool = wire_field("AttachStdin", default=False)
    attach_stderr: bool = wire_field("AttachStderr", default=False)
    attach_stdout: bool = wire_field("AttachStdout", default=False)
    detach: bool = wire_field("Detach", default=False)
    detach_keys: str = wire_field("DetachKeys", default="")
    env: List[str] = wire_field("Env", omitempty=True, default_factory=list)
    cmd: List[str] = wire_field("Cmd", default_factory=list)


@dataclass
class UpdateConfig(Resources):
    """Body of POST /containers/{name}/update."""

    restart_policy: RestartPolicy = wire_field(
        "RestartPolicy", default_factory=RestartPolicy
    )
