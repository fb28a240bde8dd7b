"""
alicloud_admission/models/shoot.py

Pydantic models for the parts of a Gardener Shoot that the Alicloud
validators read: networking, provider workers and their volumes.
Unknown keys of the surrounding core objects are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from alicloud_admission.models.base import ManifestModel, ObjectMeta


class Networking(ManifestModel):
    """The cluster-wide CIDRs; each one is optional at decode time."""

    model_config = ConfigDict(extra="ignore")

    nodes: Optional[str] = None
    pods: Optional[str] = None
    services: Optional[str] = None


class Volume(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    size: str = ""


class DataVolume(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    type: Optional[str] = None
    size: str = ""


class Worker(ManifestModel):
    """
    A worker pool of a shoot.

    Attributes:
        name: Pool name, used to match pools across updates.
        volume: Root disk; required.
        data_volumes: Additional disks.
        zones: The zones the pool spreads across, in order.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    volume: Optional[Volume] = None
    data_volumes: List[DataVolume] = Field(default_factory=list)
    zones: List[str] = Field(default_factory=list)


class Provider(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    infrastructure_config: Optional[Dict[str, Any]] = None
    workers: List[Worker] = Field(default_factory=list)


class ShootSpec(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    region: str = ""
    networking: Networking = Field(default_factory=Networking)
    provider: Provider = Field(default_factory=Provider)


class Shoot(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ShootSpec = Field(default_factory=ShootSpec)


__all__ = [
    "Networking",
    "Volume",
    "DataVolume",
    "Worker",
    "Provider",
    "ShootSpec",
    "Shoot",
]
