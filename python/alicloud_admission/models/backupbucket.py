"""
alicloud_admission/models/backupbucket.py

Pydantic models for backup buckets:
  - RetentionType (Enum)
  - ImmutableConfig
  - BackupBucketConfig
  - Seed / BackupBucket (only the fields the validators read)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field

from alicloud_admission.models.base import (
    ManifestModel,
    ObjectMeta,
    ObjectReference,
    ProviderConfig,
)


class RetentionType(str, Enum):
    """Where the retention policy applies; only bucket level is supported."""

    BUCKET = "bucket"


class ImmutableConfig(ManifestModel):
    """
    The immutability (WORM) settings of a backup bucket.

    Attributes:
        retention_type: Kept as a plain string so unsupported values can be
            reported instead of failing the decode.
        retention_period: Retention in whole days, at least 1.
        locked: One-way flag; once true the policy cannot be unlocked and the
            period cannot be reduced.
    """

    retention_type: str = RetentionType.BUCKET.value
    retention_period: int = 0
    locked: bool = False


class BackupBucketConfig(ProviderConfig):
    immutability: Optional[ImmutableConfig] = None


class BackupSpec(ManifestModel):
    """The backup section of a Seed or the spec of a BackupBucket."""

    model_config = ConfigDict(extra="ignore")

    credentials_ref: Optional[ObjectReference] = None
    provider_config: Optional[Dict[str, Any]] = None


class SeedSpec(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    backup: Optional[BackupSpec] = None


class Seed(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: SeedSpec = Field(default_factory=SeedSpec)


class BackupBucket(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: BackupSpec = Field(default_factory=BackupSpec)


__all__ = [
    "RetentionType",
    "ImmutableConfig",
    "BackupBucketConfig",
    "BackupSpec",
    "SeedSpec",
    "Seed",
    "BackupBucket",
]
