"""
alicloud_admission/validation/infrastructure.py

Validation of the InfrastructureConfig network topology:
  - VPC descriptor (existing id XOR cidr to create) and dual-stack rules
  - zone worker CIDRs against the nodes and VPC CIDRs
  - pods/services CIDRs against the VPC and worker CIDRs
  - update-time immutability of the VPC and the zone list
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from alicloud_admission.models.field import (
    ErrorList,
    FieldPath,
    forbidden,
    invalid,
    not_supported,
    required,
    validate_immutable_field,
)
from alicloud_admission.models.infrastructure import (
    InfrastructureConfig,
    NatGatewayConfig,
    Zone,
)
from alicloud_admission.models.shoot import Networking
from alicloud_admission.validation.cidr import (
    CIDR,
    validate_cidr_is_canonical,
    validate_cidr_overlap,
    validate_cidr_parse,
)

NETWORKING_PATH = FieldPath.new("networking")
NETWORKS_PATH = FieldPath.new("networks")
DUAL_STACK_PATH = FieldPath.new("dualStack")


def _networking_cidr(value: Optional[str], name: str) -> Optional[CIDR]:
    return CIDR(value, NETWORKING_PATH.child(name)) if value is not None else None


def validate_infrastructure_config(
    infra: InfrastructureConfig,
    networking: Optional[Networking] = None,
    region: str = "",
    dual_stack_regions: Sequence[str] = (),
    nat_gateway_zones: Optional[Sequence[str]] = None,
) -> ErrorList:
    """
    Validate the network topology of a new InfrastructureConfig.

    All checks run independently and accumulate; a check whose input is
    absent (e.g. no VPC CIDR, no nodes CIDR) is skipped.

    Args:
        infra: The decoded config.
        networking: The shoot's nodes/pods/services CIDRs, if any.
        region: The target region, checked when dual-stack is enabled.
        dual_stack_regions: Regions in which dual-stack may be enabled.
        nat_gateway_zones: Zones with enhanced NAT gateway support; when given,
            the first zone must be one of them.

    Returns:
        ErrorList: Every violation found.
    """
    networking = networking or Networking()
    nodes = _networking_cidr(networking.nodes, "nodes")
    pods = _networking_cidr(networking.pods, "pods")
    services = _networking_cidr(networking.services, "services")

    zones_path = NETWORKS_PATH.child("zones")
    all_errs: ErrorList = []

    if not infra.networks.zones:
        all_errs.append(
            required(zones_path, "must specify at least the network for one zone")
        )
    elif nat_gateway_zones is not None:
        all_errs += validate_enhanced_nat_gateway(
            infra.networks.zones[0], nat_gateway_zones, zones_path.index(0)
        )

    workers: List[CIDR] = []
    for i, zone in enumerate(infra.networks.zones):
        zone_path = zones_path.index(i)
        for key, value in (("worker", zone.worker), ("workers", zone.workers)):
            if not value:
                continue
            worker_path = zone_path.child(key)
            workers.append(CIDR(value, worker_path))
            all_errs += validate_cidr_is_canonical(worker_path, value)
        all_errs += validate_nat_gateway_config(
            zone.nat_gateway, zone_path.child("natGateway")
        )

    all_errs += validate_cidr_parse(*workers)
    all_errs += _validate_vpc(infra, region, dual_stack_regions)

    if nodes is not None:
        all_errs += nodes.validate_subset(*workers)

    vpc = infra.networks.vpc
    if vpc.cidr is not None and vpc.id is None:
        cidr_path = NETWORKS_PATH.child("vpc", "cidr")
        vpc_cidr = CIDR(vpc.cidr, cidr_path)
        all_errs += validate_cidr_is_canonical(cidr_path, vpc.cidr)
        all_errs += vpc_cidr.validate_parse()
        all_errs += vpc_cidr.validate_subset(nodes)
        all_errs += vpc_cidr.validate_subset(*workers)
        all_errs += vpc_cidr.validate_not_overlap(pods, services)

    all_errs += validate_cidr_overlap(workers, allow_equal=False)
    if pods is not None:
        all_errs += pods.validate_not_overlap(*workers)
    if services is not None:
        all_errs += services.validate_not_overlap(*workers)

    return all_errs


def _validate_vpc(
    infra: InfrastructureConfig, region: str, dual_stack_regions: Sequence[str]
) -> ErrorList:
    vpc = infra.networks.vpc
    vpc_path = NETWORKS_PATH.child("vpc")
    all_errs: ErrorList = []

    if (vpc.id is None) == (vpc.cidr is None):
        all_errs.append(
            invalid(vpc_path, vpc, "must specify either a vpc id or a cidr")
        )

    if infra.dual_stack_enabled():
        if vpc.id is not None:
            all_errs.append(
                forbidden(
                    vpc_path.child("id"),
                    "dual-stack cannot be enabled when using an existing vpc",
                )
            )
        if region not in dual_stack_regions:
            all_errs.append(
                invalid(
                    DUAL_STACK_PATH.child("enabled"),
                    True,
                    "can not enable DualStack in target region",
                )
            )

    return all_errs


def validate_infrastructure_config_update(
    old_config: InfrastructureConfig, new_config: InfrastructureConfig
) -> ErrorList:
    """
    Validate the allowed transitions of an InfrastructureConfig.

    The VPC descriptor is immutable, zones may only be appended and
    dual-stack cannot be turned off once enabled.
    """
    all_errs = validate_immutable_field(
        new_config.networks.vpc, old_config.networks.vpc, NETWORKS_PATH.child("vpc")
    )
    all_errs += validate_network_zones_config(
        new_config.networks.zones,
        old_config.networks.zones,
        NETWORKS_PATH.child("zones"),
    )
    if old_config.dual_stack_enabled() and not new_config.dual_stack_enabled():
        all_errs.append(
            forbidden(
                DUAL_STACK_PATH.child("enabled"),
                "dual-stack cannot be disabled once it is enabled",
            )
        )
    return all_errs


def validate_network_zones_config(
    new_zones: Sequence[Zone], old_zones: Sequence[Zone], fld_path: FieldPath
) -> ErrorList:
    """
    Existing zones keep their name and worker CIDR (under either key); zones
    cannot be removed.

    The NAT gateway of every zone stays mutable but must remain well-formed.
    """
    if len(new_zones) < len(old_zones):
        return [forbidden(fld_path, "zones cannot be removed")]

    all_errs: ErrorList = [
        err
        for i, (old, new) in enumerate(zip(old_zones, new_zones))
        for err in (
            validate_immutable_field(new.name, old.name, fld_path.index(i))
            + validate_immutable_field(new.workers, old.workers, fld_path.index(i))
            + validate_immutable_field(new.worker, old.worker, fld_path.index(i))
        )
    ]
    all_errs += [
        err
        for i, zone in enumerate(new_zones)
        for err in validate_nat_gateway_config(
            zone.nat_gateway, fld_path.index(i).child("natGateway")
        )
    ]
    return all_errs


def validate_nat_gateway_config(
    nat_gateway: Optional[NatGatewayConfig], fld_path: FieldPath
) -> ErrorList:
    """A NAT gateway config, when present, must name a non-empty EIP allocation id."""
    if nat_gateway is None:
        return []
    if nat_gateway.eip_allocation_id is None:
        return [invalid(fld_path, nat_gateway, "eip id is not specified")]
    if nat_gateway.eip_allocation_id == "":
        return [invalid(fld_path, nat_gateway, "eip id cannot be empty string")]
    return []


def validate_enhanced_nat_gateway(
    target_zone: Zone, valid_zones: Sequence[str], fld_path: FieldPath
) -> ErrorList:
    """The zone hosting the NAT gateway must support the enhanced NAT gateway."""
    if target_zone.name in valid_zones:
        return []
    return [not_supported(fld_path, target_zone.name, list(valid_zones))]


__all__ = [
    "validate_infrastructure_config",
    "validate_infrastructure_config_update",
    "validate_network_zones_config",
    "validate_nat_gateway_config",
    "validate_enhanced_nat_gateway",
]
