"""
alicloud_admission/validation/cloudprofile.py

Validation of the machine image catalog in a CloudProfile's providerConfig
and of its mapping onto the machine images the CloudProfile declares.
"""

from __future__ import annotations

from typing import Dict, Sequence

from alicloud_admission.models.cloudprofile import (
    CapabilityDefinition,
    CloudProfileConfig,
    CoreMachineImage,
    MachineImages,
    MachineImageVersion,
    RegionIDMapping,
)
from alicloud_admission.models.field import (
    ErrorList,
    FieldPath,
    forbidden,
    required,
)
from alicloud_admission.validation.capabilities import (
    defaulted_flavors,
    find_matching_flavor,
    format_capabilities,
    validate_capabilities,
)


def validate_cloud_profile_config(
    config: CloudProfileConfig,
    machine_images: Sequence[CoreMachineImage],
    capability_definitions: Sequence[CapabilityDefinition],
    fld_path: FieldPath,
) -> ErrorList:
    """
    Validate the catalog structure and that every declared image version has
    a catalog entry.

    Args:
        config: The decoded providerConfig.
        machine_images: The images declared in the CloudProfile spec.
        capability_definitions: The profile's capability schema; empty means
            versions map straight to regions.
        fld_path: Path of the providerConfig, e.g. spec.providerConfig.
    """
    all_errs = validate_machine_image_catalog(
        config.machine_images, capability_definitions, fld_path.child("machineImages")
    )
    all_errs += validate_machine_image_mapping(
        machine_images,
        config,
        capability_definitions,
        FieldPath.new("spec", "machineImages"),
    )
    return all_errs


def validate_machine_image_catalog(
    machine_images: Sequence[MachineImages],
    capability_definitions: Sequence[CapabilityDefinition],
    fld_path: FieldPath,
) -> ErrorList:
    all_errs: ErrorList = []
    if not machine_images:
        all_errs.append(required(fld_path, "must provide at least one machine image"))

    for i, machine_image in enumerate(machine_images):
        idx_path = fld_path.index(i)
        if not machine_image.name:
            all_errs.append(required(idx_path.child("name"), "must provide a name"))
        if not machine_image.versions:
            all_errs.append(
                required(
                    idx_path.child("versions"),
                    f'must provide at least one version for machine image "{machine_image.name}"',
                )
            )
        for j, version in enumerate(machine_image.versions):
            jdx_path = idx_path.child("versions").index(j)
            if not version.version:
                all_errs.append(required(jdx_path.child("version"), "must provide a version"))
            all_errs += _validate_version_mappings(
                machine_image.name, version, capability_definitions, jdx_path
            )

    return all_errs


def _validate_version_mappings(
    image_name: str,
    version: MachineImageVersion,
    capability_definitions: Sequence[CapabilityDefinition],
    fld_path: FieldPath,
) -> ErrorList:
    """
    A version maps either through `regions` or through `capabilityFlavors`,
    decided by whether the profile defines capabilities. This is the only
    place that enforces the exclusivity.
    """
    label = f'machine image "{image_name}" and version "{version.version}"'

    if not capability_definitions:
        all_errs: ErrorList = []
        if version.capability_flavors:
            all_errs.append(
                forbidden(
                    fld_path.child("capabilityFlavors"),
                    "must not be set as CloudProfile does not define capabilities. "
                    "Use regions instead.",
                )
            )
        return all_errs + _validate_regions(version.regions, label, fld_path.child("regions"))

    all_errs = []
    if version.regions:
        all_errs.append(
            forbidden(
                fld_path.child("regions"),
                "must not be set as CloudProfile defines capabilities. "
                "Use capabilityFlavors.regions instead.",
            )
        )
    flavors_path = fld_path.child("capabilityFlavors")
    if not version.capability_flavors:
        all_errs.append(
            required(flavors_path, f"must provide at least one capability flavor for {label}")
        )
    for k, flavor in enumerate(version.capability_flavors):
        kdx_path = flavors_path.index(k)
        all_errs += validate_capabilities(
            flavor.capabilities, capability_definitions, kdx_path.child("capabilities")
        )
        all_errs += _validate_regions(flavor.regions, label, kdx_path.child("regions"))
    return all_errs


def _validate_regions(
    regions: Sequence[RegionIDMapping], label: str, fld_path: FieldPath
) -> ErrorList:
    all_errs: ErrorList = []
    if not regions:
        all_errs.append(required(fld_path, f"must provide at least one region for {label}"))
    for k, region in enumerate(regions):
        if not region.name:
            all_errs.append(required(fld_path.index(k).child("name"), "must provide a name"))
        if not region.id:
            all_errs.append(required(fld_path.index(k).child("id"), "must provide an id"))
    return all_errs


def validate_machine_image_mapping(
    machine_images: Sequence[CoreMachineImage],
    config: CloudProfileConfig,
    capability_definitions: Sequence[CapabilityDefinition],
    fld_path: FieldPath,
) -> ErrorList:
    """
    Every declared image version needs a catalog entry; with capabilities,
    every declared flavor needs a catalog flavor with the same defaulted set.
    """
    catalog: Dict[str, MachineImages] = {
        image.name: image for image in reversed(config.machine_images)
    }
    all_errs: ErrorList = []

    for i, machine_image in enumerate(machine_images):
        if not machine_image.versions:
            continue
        idx_path = fld_path.index(i)
        entry = catalog.get(machine_image.name)
        if entry is None:
            all_errs.append(
                required(
                    idx_path,
                    f'must provide an image mapping for image "{machine_image.name}" '
                    "in providerConfig",
                )
            )
            continue

        catalog_versions: Dict[str, MachineImageVersion] = {
            version.version: version for version in reversed(entry.versions)
        }
        for j, version in enumerate(machine_image.versions):
            jdx_path = idx_path.child("versions").index(j)
            image_ref = f"{machine_image.name}@{version.version}"
            catalog_version = catalog_versions.get(version.version)
            if catalog_version is None:
                all_errs.append(
                    required(
                        jdx_path,
                        f"machine image version {image_ref} is not defined in the providerConfig",
                    )
                )
                continue
            if not capability_definitions:
                continue

            available = defaulted_flavors(
                [flavor.capabilities for flavor in catalog_version.capability_flavors],
                capability_definitions,
            )
            wanted = defaulted_flavors(
                [flavor.capabilities for flavor in version.capability_flavors],
                capability_definitions,
            )
            all_errs += [
                required(
                    jdx_path,
                    f"missing providerConfig mapping for machine image version "
                    f"{image_ref} and capabilitySet {format_capabilities(flavor)}",
                )
                for flavor in wanted
                if find_matching_flavor(flavor, available) < 0
            ]

    return all_errs


__all__ = [
    "validate_cloud_profile_config",
    "validate_machine_image_catalog",
    "validate_machine_image_mapping",
]
