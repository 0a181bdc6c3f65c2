#!/usr/bin/env python3
"""
Image and filesystem metadata types.

    GET    /images/json            [Image]
    GET    /images/{name}/json     ImageInspect
    GET    /images/{name}/history  [ImageHistory]
    DELETE /images/{name}          [ImageDelete]
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from hyper_types.codec import wire_field
from hyper_types.runconfig import Config


@dataclass
class ImageHistory:
    """One layer in GET /images/{name}/history."""

    id: str = wire_field("Id", default="")
    created: int = wire_field("Created", default=0)
    created_by: str = wire_field("CreatedBy", default="")
    tags: List[str] = wire_field("Tags", default_factory=list)
    size: int = wire_field("Size", default=0)
    comment: str = wire_field("Comment", default="")


@dataclass
class ImageDelete:
    """
    One entry of DELETE /images/{name}.

    Each entry reports either an untagged reference or a deleted layer.
    """

    untagged: str = wire_field("Untagged", omitempty=True, default="")
    deleted: str = wire_field("Deleted", omitempty=True, default="")


@dataclass
class Image:
    """One entry of GET /images/json."""

    id: str = wire_field("Id", default="")
    parent_id: str = wire_field("ParentId", default="")
    repo_tags: List[str] = wire_field("RepoTags", default_factory=list)
    repo_digests: List[str] = wire_field("RepoDigests", default_factory=list)
    created: int = wire_field("Created", default=0)
    size: int = wire_field("Size", default=0)
    virtual_size: int = wire_field("VirtualSize", default=0)
    labels: Dict[str, str] = wire_field("Labels", default_factory=dict)


@dataclass
class GraphDriverData:
    """Storage driver details of an image or container."""

    name: str = wire_field("Name", default="")
    data: Dict[str, str] = wire_field("Data", default_factory=dict)


@dataclass
class RootFS:
    """Root filesystem of an image, including its layer IDs."""

    type: str = wire_field("Type", default="")
    layers: List[str] = wire_field("Layers", omitempty=True, default_factory=list)
    base_layer: str = wire_field("BaseLayer", omitempty=True, default="")


@dataclass
class ImageInspect:
    """Response of GET /images/{name}/json."""

    id: str = wire_field("Id", default="")
    repo_tags: List[str] = wire_field("RepoTags", default_factory=list)
    repo_digests: List[str] = wire_field("RepoDigests", default_factory=list)
    parent: str = wire_field("Parent", default="")
    comment: str = wire_field("Comment", default="")
    created: str = wire_field("Created", default="")
    container: str = wire_field("Container", default="")
    container_config: Optional[Config] = wire_field("ContainerConfig", default=None)
    docker_version: str = wire_field("DockerVersion", default="")
    author: str = wire_field("Author", default="")
    config: Optional[Config] = wire_field("Config", default=None)
    architecture: str = wire_field("Architecture", default="")
    os: str = wire_field("Os", default="")
    size: int = wire_field("Size", default=0)
    virtual_size: int = wire_field("VirtualSize", default=0)
    graph_driver: GraphDriverData = wire_field(
        "GraphDriver", default_factory=GraphDriverData
    )
    root_fs: RootFS = wire_field("RootFS", default_factory=RootFS)
