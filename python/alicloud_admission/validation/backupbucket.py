"""
alicloud_admission/validation/backupbucket.py

Validation of backup bucket immutability (retention policy) and of the
credentials reference used to reach the bucket.

The retention policy behaves as a monotonic state machine over
(retention_type, retention_period, locked): a lock is never released and the
period never shrinks. Removing immutability altogether is still accepted.
"""

from __future__ import annotations

from typing import Optional

from alicloud_admission.models.backupbucket import BackupBucketConfig, RetentionType
from alicloud_admission.models.base import ObjectReference
from alicloud_admission.models.field import (
    ErrorList,
    FieldPath,
    forbidden,
    invalid,
    not_supported,
    required,
)

SECRET_API_VERSION = "v1"
SECRET_KIND = "Secret"


def validate_backup_bucket_config(
    config: Optional[BackupBucketConfig], fld_path: FieldPath
) -> ErrorList:
    """Immutability, when configured, must be bucket-level with at least 1 day."""
    if config is None or config.immutability is None:
        return []

    immutability = config.immutability
    immutability_path = fld_path.child("immutability")
    all_errs: ErrorList = []

    if immutability.retention_type != RetentionType.BUCKET.value:
        all_errs.append(
            invalid(
                immutability_path.child("retentionType"),
                immutability.retention_type,
                "must be 'bucket'",
            )
        )

    # Alicloud OSS retention is counted in whole days.
    if immutability.retention_period < 1:
        all_errs.append(
            invalid(
                immutability_path.child("retentionPeriod"),
                immutability.retention_period,
                "can only be set in days, hence it can't be less than 1 day",
            )
        )

    return all_errs


def validate_backup_bucket_config_update(
    old_config: Optional[BackupBucketConfig],
    new_config: Optional[BackupBucketConfig],
    fld_path: FieldPath,
) -> ErrorList:
    """
    Validate the new config, then the transition from the old one.

    Transition rules apply only when both configs have immutability set.
    Dropping immutability from a locked policy is currently accepted.
    """
    all_errs = validate_backup_bucket_config(new_config, fld_path)

    # TODO: reject disabling immutability once existing buckets have been migrated.
    if (
        old_config is None
        or old_config.immutability is None
        or new_config is None
        or new_config.immutability is None
    ):
        return all_errs

    old, new = old_config.immutability, new_config.immutability
    immutability_path = fld_path.child("immutability")

    if old.locked and not new.locked:
        all_errs.append(
            forbidden(
                immutability_path.child("locked"),
                "immutable retention policy lock cannot be unlocked once it is locked",
            )
        )

    if new.retention_period < old.retention_period:
        all_errs.append(
            invalid(
                immutability_path.child("retentionPeriod"),
                new.retention_period,
                f"reducing the retention period from {old.retention_period} "
                f"to {new.retention_period} is not allowed",
            )
        )

    return all_errs


def validate_backup_bucket_credentials_ref(
    credentials_ref: Optional[ObjectReference], fld_path: FieldPath
) -> ErrorList:
    """Only a core v1 Secret can hold the bucket credentials."""
    if credentials_ref is None:
        return [required(fld_path, "must be set")]

    if (credentials_ref.api_version, credentials_ref.kind) != (SECRET_API_VERSION, SECRET_KIND):
        secret_gvk = ObjectReference(api_version=SECRET_API_VERSION, kind=SECRET_KIND).gvk()
        return [not_supported(fld_path, credentials_ref.gvk(), [secret_gvk])]

    return []


__all__ = [
    "validate_backup_bucket_config",
    "validate_backup_bucket_config_update",
    "validate_backup_bucket_credentials_ref",
]
