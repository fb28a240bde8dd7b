"""
Tests for the machine image catalog and its mapping onto declared images.
"""

from alicloud_admission.models.cloudprofile import (
    CapabilityDefinition,
    CapabilitySet,
    CloudProfileConfig,
    CoreMachineImage,
    CoreMachineImageVersion,
    MachineImageFlavor,
    MachineImages,
    MachineImageVersion,
    RegionIDMapping,
)
from alicloud_admission.models.field import ErrorType, FieldPath
from alicloud_admission.validation.cloudprofile import (
    validate_cloud_profile_config,
    validate_machine_image_catalog,
    validate_machine_image_mapping,
)

CATALOG_PATH = FieldPath.new("spec", "providerConfig", "machineImages")
MAPPING_PATH = FieldPath.new("spec", "machineImages")
ARCH = [CapabilityDefinition(name="architecture", values=["amd64", "arm64"])]
REGION = RegionIDMapping(name="cn-beijing", id="m-123")


def _catalog(*versions: MachineImageVersion, name: str = "ubuntu") -> CloudProfileConfig:
    return CloudProfileConfig(machine_images=[MachineImages(name=name, versions=list(versions))])


def _declared(name: str, *versions: str, flavors=()) -> CoreMachineImage:
    return CoreMachineImage(
        name=name,
        versions=[
            CoreMachineImageVersion(
                version=v, capability_flavors=[CapabilitySet(capabilities=f) for f in flavors]
            )
            for v in versions
        ],
    )


class TestCatalog:
    def test_regions_without_capabilities(self):
        config = _catalog(MachineImageVersion(version="1.2.3", regions=[REGION]))
        assert validate_machine_image_catalog(config.machine_images, [], CATALOG_PATH) == []

    def test_empty_catalog(self):
        errors = validate_machine_image_catalog([], [], CATALOG_PATH)
        assert [(e.type, e.field) for e in errors] == [
            (ErrorType.REQUIRED, "spec.providerConfig.machineImages")
        ]

    def test_missing_name_and_versions(self):
        errors = validate_machine_image_catalog([MachineImages()], [], CATALOG_PATH)
        assert [e.field for e in errors] == [
            "spec.providerConfig.machineImages[0].name",
            "spec.providerConfig.machineImages[0].versions",
        ]

    def test_region_needs_name_and_id(self):
        config = _catalog(MachineImageVersion(version="1.2.3", regions=[RegionIDMapping()]))
        errors = validate_machine_image_catalog(config.machine_images, [], CATALOG_PATH)
        assert [e.field for e in errors] == [
            "spec.providerConfig.machineImages[0].versions[0].regions[0].name",
            "spec.providerConfig.machineImages[0].versions[0].regions[0].id",
        ]

    def test_flavors_forbidden_without_capabilities(self):
        config = _catalog(
            MachineImageVersion(
                version="1.2.3",
                regions=[REGION],
                capability_flavors=[MachineImageFlavor(regions=[REGION])],
            )
        )
        errors = validate_machine_image_catalog(config.machine_images, [], CATALOG_PATH)
        assert [(e.type, e.field) for e in errors] == [
            (ErrorType.FORBIDDEN, "spec.providerConfig.machineImages[0].versions[0].capabilityFlavors")
        ]

    def test_regions_forbidden_with_capabilities(self):
        config = _catalog(
            MachineImageVersion(
                version="1.2.3",
                regions=[REGION],
                capability_flavors=[
                    MachineImageFlavor(capabilities={"architecture": ["amd64"]}, regions=[REGION])
                ],
            )
        )
        errors = validate_machine_image_catalog(config.machine_images, ARCH, CATALOG_PATH)
        assert [(e.type, e.field) for e in errors] == [
            (ErrorType.FORBIDDEN, "spec.providerConfig.machineImages[0].versions[0].regions")
        ]

    def test_flavors_required_with_capabilities(self):
        config = _catalog(MachineImageVersion(version="1.2.3"))
        errors = validate_machine_image_catalog(config.machine_images, ARCH, CATALOG_PATH)
        assert [(e.type, e.field) for e in errors] == [
            (ErrorType.REQUIRED, "spec.providerConfig.machineImages[0].versions[0].capabilityFlavors")
        ]

    def test_flavor_capabilities_are_validated(self):
        config = _catalog(
            MachineImageVersion(
                version="1.2.3",
                capability_flavors=[
                    MachineImageFlavor(capabilities={"architecture": ["s390x"]}, regions=[REGION])
                ],
            )
        )
        errors = validate_machine_image_catalog(config.machine_images, ARCH, CATALOG_PATH)
        assert [e.type for e in errors] == [ErrorType.NOT_SUPPORTED]


class TestMapping:
    def test_image_without_catalog_entry(self):
        config = _catalog(MachineImageVersion(version="1.2.3", regions=[REGION]), name="suse")
        errors = validate_machine_image_mapping(
            [_declared("ubuntu", "1.2.3")], config, [], MAPPING_PATH
        )
        assert len(errors) == 1
        assert errors[0].type == ErrorType.REQUIRED
        assert errors[0].field == "spec.machineImages[0]"
        assert '"ubuntu"' in errors[0].detail

    def test_version_without_catalog_entry(self):
        config = _catalog(MachineImageVersion(version="1.2.3", regions=[REGION]))
        errors = validate_machine_image_mapping(
            [_declared("ubuntu", "1.2.3", "2.0.0")], config, [], MAPPING_PATH
        )
        assert [(e.field, e.detail) for e in errors] == [
            (
                "spec.machineImages[0].versions[1]",
                "machine image version ubuntu@2.0.0 is not defined in the providerConfig",
            )
        ]

    def test_image_without_versions_needs_no_entry(self):
        config = _catalog(name="suse")
        assert validate_machine_image_mapping([_declared("ubuntu")], config, [], MAPPING_PATH) == []

    def test_declared_flavor_is_matched_after_defaulting(self):
        config = _catalog(
            MachineImageVersion(
                version="1.2.3",
                capability_flavors=[MachineImageFlavor(capabilities={}, regions=[REGION])],
            )
        )
        declared = [_declared("ubuntu", "1.2.3", flavors=[{"architecture": ["arm64", "amd64"]}])]
        assert validate_machine_image_mapping(declared, config, ARCH, MAPPING_PATH) == []

    def test_missing_flavor(self):
        config = _catalog(
            MachineImageVersion(
                version="1.2.3",
                capability_flavors=[
                    MachineImageFlavor(capabilities={"architecture": ["amd64"]}, regions=[REGION])
                ],
            )
        )
        declared = [
            _declared(
                "ubuntu", "1.2.3", flavors=[{"architecture": ["amd64"]}, {"architecture": ["arm64"]}]
            )
        ]
        errors = validate_machine_image_mapping(declared, config, ARCH, MAPPING_PATH)
        assert [(e.field, e.detail) for e in errors] == [
            (
                "spec.machineImages[0].versions[0]",
                "missing providerConfig mapping for machine image version ubuntu@1.2.3 "
                "and capabilitySet {architecture:[arm64]}",
            )
        ]

    def test_version_without_flavors_needs_full_flavor(self):
        config = _catalog(
            MachineImageVersion(
                version="1.2.3",
                capability_flavors=[
                    MachineImageFlavor(capabilities={"architecture": ["amd64"]}, regions=[REGION])
                ],
            )
        )
        errors = validate_machine_image_mapping(
            [_declared("ubuntu", "1.2.3")], config, ARCH, MAPPING_PATH
        )
        assert len(errors) == 1
        assert "{architecture:[amd64,arm64]}" in errors[0].detail


class TestCloudProfileConfig:
    def test_combined(self):
        config = _catalog(MachineImageVersion(version="1.2.3", regions=[REGION]))
        path = FieldPath.new("spec", "providerConfig")
        assert validate_cloud_profile_config(config, [_declared("ubuntu", "1.2.3")], [], path) == []

        errors = validate_cloud_profile_config(
            config, [_declared("ubuntu", "9.9.9")], [], path
        )
        assert [e.field for e in errors] == ["spec.machineImages[0].versions[0]"]
