"""
alicloud_admission/admission/shoot.py

Admission validation of Shoots: decodes the embedded InfrastructureConfig and
runs the networking, infrastructure and worker checks on create, plus the
immutability checks on update.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from alicloud_admission.models.field import (
    AggregateError,
    ErrorList,
    FieldPath,
    forbidden,
    required,
)
from alicloud_admission.models.infrastructure import InfrastructureConfig
from alicloud_admission.models.settings import AdmissionSettings
from alicloud_admission.models.shoot import Shoot
from alicloud_admission.models.validator import (
    DecodeError,
    coerce_object,
    decode_provider_config,
)
from alicloud_admission.validation.infrastructure import (
    validate_infrastructure_config,
    validate_infrastructure_config_update,
)
from alicloud_admission.validation.shoot import (
    validate_networking,
    validate_networking_update,
    validate_workers,
    validate_workers_update,
)

logger = logging.getLogger(__name__)

SPEC_PATH = FieldPath.new("spec")
NETWORKING_PATH = SPEC_PATH.child("networking")
PROVIDER_PATH = SPEC_PATH.child("provider")
INFRA_CONFIG_PATH = PROVIDER_PATH.child("infrastructureConfig")
WORKERS_PATH = PROVIDER_PATH.child("workers")


def check_and_decode_infrastructure_config(
    raw: Optional[Any], fld_path: FieldPath, lenient: bool = False
) -> InfrastructureConfig:
    """
    Decode a shoot's infrastructureConfig.

    Args:
        raw: The raw infrastructureConfig.
        fld_path: Path reported in errors.
        lenient: Drop unknown keys; used for the stored (old) shoot.

    Raises:
        AggregateError: Required if it is missing, Forbidden if it does not decode.
    """
    if raw is None:
        raise AggregateError(
            [required(fld_path, "infrastructureConfig must be set for Alicloud shoots")]
        )
    try:
        return decode_provider_config(raw, InfrastructureConfig, lenient=lenient)
    except DecodeError as exc:
        raise AggregateError(
            [forbidden(fld_path, f"not allowed to configure an unsupported infrastructureConfig: {exc}")]
        ) from exc


def _raise_if_any(errors: ErrorList) -> None:
    if errors:
        raise AggregateError(errors)


class ShootValidator:
    """
    Validates Shoot objects for the Alicloud provider.

    Raw objects are plain mappings as parsed from JSON/YAML; decoded
    `Shoot` models are accepted too.
    """

    def __init__(self, settings: Optional[AdmissionSettings] = None) -> None:
        self.settings = settings or AdmissionSettings()

    def validate(self, new: Any, old: Any = None) -> None:
        """
        Validate a shoot on create (`old` is None) or update.

        Raises:
            AggregateError: If the shoot is rejected.
            TypeError: If an object is not a mapping or Shoot.
        """
        shoot = coerce_object(new, Shoot)
        if old is not None:
            return self._validate_update(coerce_object(old, Shoot), shoot)
        return self._validate_creation(shoot)

    def _validate_creation(self, shoot: Shoot) -> None:
        logger.debug("Validating creation of shoot %s", shoot.metadata.name)
        infra_config = check_and_decode_infrastructure_config(
            shoot.spec.provider.infrastructure_config, INFRA_CONFIG_PATH
        )
        self._validate_shoot(shoot, infra_config)

    def _validate_update(self, old_shoot: Shoot, shoot: Shoot) -> None:
        logger.debug("Validating update of shoot %s", shoot.metadata.name)
        infra_config = check_and_decode_infrastructure_config(
            shoot.spec.provider.infrastructure_config, INFRA_CONFIG_PATH
        )
        old_infra_config = check_and_decode_infrastructure_config(
            old_shoot.spec.provider.infrastructure_config, INFRA_CONFIG_PATH, lenient=True
        )

        if old_infra_config != infra_config:
            _raise_if_any(
                validate_infrastructure_config_update(old_infra_config, infra_config)
            )
        _raise_if_any(
            validate_workers_update(
                old_shoot.spec.provider.workers, shoot.spec.provider.workers, WORKERS_PATH
            )
        )
        _raise_if_any(
            validate_networking_update(
                old_shoot.spec.networking, shoot.spec.networking, NETWORKING_PATH
            )
        )
        self._validate_shoot(shoot, infra_config)

    def _validate_shoot(self, shoot: Shoot, infra_config: InfrastructureConfig) -> None:
        _raise_if_any(validate_networking(shoot.spec.networking, NETWORKING_PATH))
        _raise_if_any(
            validate_infrastructure_config(
                infra_config,
                shoot.spec.networking,
                region=shoot.spec.region,
                dual_stack_regions=self.settings.dual_stack_regions,
                nat_gateway_zones=self.settings.nat_gateway_zones,
            )
        )
        _raise_if_any(
            validate_workers(
                shoot.spec.provider.workers, infra_config.networks.zones, WORKERS_PATH
            )
        )
        logger.info("Shoot %s passed validation", shoot.metadata.name)


__all__ = ["ShootValidator", "check_and_decode_infrastructure_config"]
