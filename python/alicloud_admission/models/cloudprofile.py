"""
alicloud_admission/models/cloudprofile.py

Pydantic models for machine images:
  - The provider catalog (CloudProfileConfig -> MachineImages -> versions ->
    region mappings or capability flavors)
  - The images a CloudProfile declares (CoreMachineImage)
  - Capability definitions and capability sets
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from alicloud_admission.models.base import ManifestModel, ObjectMeta, ProviderConfig

# capability name -> accepted values
Capabilities = Dict[str, List[str]]


class CapabilityDefinition(ManifestModel):
    """
    One dimension of the capability schema, e.g. architecture: [amd64, arm64].

    A capability set that omits this dimension is defaulted to all of `values`.
    """

    name: str
    values: List[str] = Field(default_factory=list)


class RegionIDMapping(ManifestModel):
    """Maps a region to the provider image id available there."""

    name: str = ""
    id: str = ""


class MachineImageFlavor(ManifestModel):
    """A capability set and the image ids that satisfy it per region."""

    capabilities: Capabilities = Field(default_factory=dict)
    regions: List[RegionIDMapping] = Field(default_factory=list)


class MachineImageVersion(ManifestModel):
    """
    A catalog version.

    Exactly one of `regions` (no capability definitions in the profile) or
    `capability_flavors` (capability definitions present) may be used.
    """

    version: str = ""
    regions: List[RegionIDMapping] = Field(default_factory=list)
    capability_flavors: List[MachineImageFlavor] = Field(default_factory=list)


class MachineImages(ManifestModel):
    name: str = ""
    versions: List[MachineImageVersion] = Field(default_factory=list)


class CloudProfileConfig(ProviderConfig):
    """The provider catalog of a CloudProfile: logical image name -> versions."""

    machine_images: List[MachineImages] = Field(default_factory=list)


class CapabilitySet(ManifestModel):
    capabilities: Capabilities = Field(default_factory=dict)


class CoreMachineImageVersion(ManifestModel):
    """A version declared in the CloudProfile spec, with optional flavors."""

    model_config = ConfigDict(extra="ignore")

    version: str
    capability_flavors: List[CapabilitySet] = Field(default_factory=list)


class CoreMachineImage(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    versions: List[CoreMachineImageVersion] = Field(default_factory=list)


class CloudProfileSpec(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    provider_config: Optional[Dict[str, Any]] = None
    machine_images: List[CoreMachineImage] = Field(default_factory=list)
    machine_capabilities: List[Dict[str, Any]] = Field(default_factory=list)


class CloudProfile(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: CloudProfileSpec = Field(default_factory=CloudProfileSpec)


__all__ = [
    "Capabilities",
    "CapabilityDefinition",
    "RegionIDMapping",
    "MachineImageFlavor",
    "MachineImageVersion",
    "MachineImages",
    "CloudProfileConfig",
    "CapabilitySet",
    "CoreMachineImageVersion",
    "CoreMachineImage",
    "CloudProfileSpec",
    "CloudProfile",
]
