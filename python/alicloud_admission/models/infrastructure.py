"""
alicloud_admission/models/infrastructure.py

Pydantic models for the Alicloud InfrastructureConfig:
  - InfrastructureConfig
  - Networks, VPC, Zone, NatGatewayConfig
  - DualStack
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from alicloud_admission.models.base import ManifestModel, ProviderConfig


class NatGatewayConfig(ManifestModel):
    """
    NAT gateway settings of a zone.

    Attributes:
        eip_allocation_id: Id of an existing EIP to bind to the NAT gateway.
    """

    eip_allocation_id: Optional[str] = Field(None, alias="eipAllocationID")


class Zone(ManifestModel):
    """
    A zone and the worker subnet (vswitch) created in it.

    Attributes:
        name: The zone name, immutable once set.
        worker: The worker CIDR, immutable once set.
        workers: Deprecated spelling of `worker`, still validated the same way.
        nat_gateway: Optional NAT gateway config, mutable.
    """

    name: str
    worker: str = ""
    workers: str = ""
    nat_gateway: Optional[NatGatewayConfig] = None


class VPC(ManifestModel):
    """Either an existing VPC (id) or the CIDR of a VPC to create, never both."""

    id: Optional[str] = None
    cidr: Optional[str] = None


class Networks(ManifestModel):
    vpc: VPC = Field(default_factory=VPC)
    zones: List[Zone] = Field(default_factory=list)


class DualStack(ManifestModel):
    enabled: bool = False


class InfrastructureConfig(ProviderConfig):
    """
    The provider-specific infrastructure configuration of a shoot.

    Attributes:
        networks: VPC descriptor plus the ordered zone list.
        dual_stack: Optional dual-stack (IPv4 + IPv6) setting.
    """

    networks: Networks = Field(default_factory=Networks)
    dual_stack: Optional[DualStack] = None

    def dual_stack_enabled(self) -> bool:
        return self.dual_stack is not None and self.dual_stack.enabled


__all__ = [
    "NatGatewayConfig",
    "Zone",
    "VPC",
    "Networks",
    "DualStack",
    "InfrastructureConfig",
]
