#!/usr/bin/env python3
"""
Volume and snapshot types.

    GET    /volumes               VolumesListResponse
    POST   /volumes/create        VolumeCreateRequest -> Volume
    GET    /volumes/{name}        Volume
    POST   /volumes/initialize    VolumesInitializeRequest -> VolumesInitializeResponse
    GET    /snapshots             SnapshotsListResponse
    POST   /snapshots/create      SnapshotCreateRequest -> Snapshot
    GET    /snapshots/{name}      Snapshot

Volumes and snapshots refer to each other by name only.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from hyper_types.codec import ZERO_TIME, wire_field


@dataclass
class Snapshot:
    """A point-in-time copy of a volume."""

    id: str = wire_field("ID", default="")
    name: str = wire_field("Name", default="")
    # Name of the volume the snapshot was taken from
    volume: str = wire_field("Volume", default="")
    size: int = wire_field("Size", default=0)


@dataclass
class SnapshotsListResponse:
    """Response of GET /snapshots."""

    snapshots: List[Optional[Snapshot]] = wire_field("Snapshots", default_factory=list)
    warnings: List[str] = wire_field("Warnings", default_factory=list)


@dataclass
class SnapshotCreateRequest:
    """Body of POST /snapshots/create."""

    # Requested snapshot name
    name: str = wire_field("Name", default="")
    # Volume to snapshot
    volume: str = wire_field("Volume", default="")
    force: bool = wire_field("Force", default=False)


@dataclass
class Volume:
    """A volume as reported by the volume endpoints."""

    name: str = wire_field("Name", default="")
    # Driver used to create the volume
    driver: str = wire_field("Driver", default="")
    # Location of the volume on disk
    mountpoint: str = wire_field("Mountpoint", default="")
    # Low-level, driver specific status
    status: Dict[str, Any] = wire_field("Status", omitempty=True, default_factory=dict)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)
    # "local" for machine level, "global" for cluster-wide
    scope: str = wire_field("Scope", default="")
    created_at: datetime = wire_field("CreatedAt", default=ZERO_TIME)


@dataclass
class VolumesListResponse:
    """Response of GET /volumes."""

    volumes: List[Optional[Volume]] = wire_field("Volumes", default_factory=list)
    # Warnings from volume drivers while listing
    warnings: List[str] = wire_field("Warnings", default_factory=list)


@dataclass
class VolumeCreateRequest:
    """Body of POST /volumes/create."""

    name: str = wire_field("Name", default="")
    driver: str = wire_field("Driver", default="")
    driver_opts: Dict[str, str] = wire_field("DriverOpts", default_factory=dict)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)


@dataclass
class VolumesInitializeResponse:
    """Response of POST /volumes/initialize."""

    # Upload session; empty means no session was established
    session: str = wire_field("Session", default="")
    # Cookie to send when uploading volume data
    cookie: str = wire_field("Cookie", default="")
    # Volume name -> upload ID
    uploaders: Dict[str, str] = wire_field("Uploaders", default_factory=dict)


@dataclass
class VolumeInitDesc:
    """A volume to initialize and where its data comes from."""

    name: str = wire_field("Name", default="")
    source: str = wire_field("Source", default="")


@dataclass
class VolumesInitializeRequest:
    """Body of POST /volumes/initialize."""

    # Reload the sources set by a previous initialize call
    reload: bool = wire_field("Reload", default=False)
    volume: List[VolumeInitDesc] = wire_field("Volume", default_factory=list)
