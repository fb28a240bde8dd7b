"""
alicloud_admission/admission/cloudprofile.py

Admission validation of CloudProfiles: decodes the machine image catalog and
the capability definitions, then checks the catalog against the declared
machine images.
"""

from __future__ import annotations

import logging
from typing import Any, List

from alicloud_admission.models.cloudprofile import (
    CapabilityDefinition,
    CloudProfile,
    CloudProfileConfig,
)
from alicloud_admission.models.field import (
    AggregateError,
    FieldPath,
    internal_error,
    required,
    to_aggregate,
)
from alicloud_admission.models.validator import (
    DecodeError,
    coerce_object,
    decode_object,
    decode_provider_config,
)
from alicloud_admission.validation.cloudprofile import validate_cloud_profile_config

logger = logging.getLogger(__name__)

PROVIDER_CONFIG_PATH = FieldPath.new("spec", "providerConfig")
MACHINE_CAPABILITIES_PATH = FieldPath.new("spec", "machineCapabilities")


class CloudProfileValidator:
    """Validates CloudProfile objects for the Alicloud provider."""

    def validate(self, new: Any, old: Any = None) -> None:
        """
        Validate a cloud profile; create and update are checked the same way.

        Raises:
            AggregateError: If the profile is rejected.
            TypeError: If the object is not a mapping or CloudProfile.
        """
        cloud_profile = coerce_object(new, CloudProfile)
        logger.debug("Validating cloud profile %s", cloud_profile.metadata.name)

        if cloud_profile.spec.provider_config is None:
            raise AggregateError(
                [
                    required(
                        PROVIDER_CONFIG_PATH,
                        "providerConfig must be set for Alicloud cloud profiles",
                    )
                ]
            )

        try:
            config = decode_provider_config(
                cloud_profile.spec.provider_config, CloudProfileConfig
            )
        except DecodeError as exc:
            raise AggregateError([internal_error(PROVIDER_CONFIG_PATH, exc)]) from exc

        try:
            definitions = decode_object(
                cloud_profile.spec.machine_capabilities, List[CapabilityDefinition]
            )
        except DecodeError as exc:
            raise AggregateError([internal_error(MACHINE_CAPABILITIES_PATH, exc)]) from exc

        err = to_aggregate(
            validate_cloud_profile_config(
                config, cloud_profile.spec.machine_images, definitions, PROVIDER_CONFIG_PATH
            )
        )
        if err is not None:
            logger.info(
                "Cloud profile %s rejected with %d error(s)",
                cloud_profile.metadata.name,
                len(err.errors),
            )
            raise err


__all__ = ["CloudProfileValidator"]
