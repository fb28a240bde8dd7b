"""
alicloud_admission/admission/backup.py

Admission validation of backup settings on Seeds and of BackupBuckets:
the credentials reference, the immutability settings and their transitions.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from alicloud_admission.models.backupbucket import (
    BackupBucket,
    BackupBucketConfig,
    BackupSpec,
    Seed,
)
from alicloud_admission.models.field import (
    ErrorList,
    FieldPath,
    internal_error,
    to_aggregate,
)
from alicloud_admission.models.validator import (
    DecodeError,
    coerce_object,
    decode_provider_config,
)
from alicloud_admission.validation.backupbucket import (
    validate_backup_bucket_config,
    validate_backup_bucket_config_update,
    validate_backup_bucket_credentials_ref,
)

logger = logging.getLogger(__name__)


class _ConfigDecodeError(Exception):
    def __init__(self, errors: ErrorList) -> None:
        super().__init__(str(errors))
        self.errors = errors


def _decode_config(
    raw: Optional[Any], fld_path: FieldPath, which: str, lenient: bool = False
) -> Optional[BackupBucketConfig]:
    if raw is None:
        return None
    try:
        return decode_provider_config(raw, BackupBucketConfig, lenient=lenient)
    except DecodeError as exc:
        raise _ConfigDecodeError(
            [internal_error(fld_path, DecodeError(f"failed to decode {which} provider config: {exc}"))]
        ) from exc


def validate_backup_create(backup: BackupSpec, backup_path: FieldPath) -> ErrorList:
    """Credentials reference plus the (optional) bucket config."""
    all_errs = validate_backup_bucket_credentials_ref(
        backup.credentials_ref, backup_path.child("credentialsRef")
    )
    config_path = backup_path.child("providerConfig")
    try:
        config = _decode_config(backup.provider_config, config_path, "new")
    except _ConfigDecodeError as exc:
        return all_errs + exc.errors
    return all_errs + validate_backup_bucket_config(config, config_path)


def validate_backup_update(
    old_backup: Optional[BackupSpec], new_backup: BackupSpec, backup_path: FieldPath
) -> ErrorList:
    """
    Like validate_backup_create, plus the retention transition rules when the
    old object already carried a bucket config.
    """
    if old_backup is None or old_backup.provider_config is None:
        return validate_backup_create(new_backup, backup_path)

    config_path = backup_path.child("providerConfig")
    try:
        old_config = _decode_config(
            old_backup.provider_config, config_path, "old", lenient=True
        )
        new_config = _decode_config(new_backup.provider_config, config_path, "new")
    except _ConfigDecodeError as exc:
        return exc.errors

    all_errs = validate_backup_bucket_config_update(old_config, new_config, config_path)
    all_errs += validate_backup_bucket_credentials_ref(
        new_backup.credentials_ref, backup_path.child("credentialsRef")
    )
    return all_errs


class SeedValidator:
    """Validates the backup section of Seed objects."""

    backup_path = FieldPath.new("spec", "backup")

    def validate(self, new: Any, old: Any = None) -> None:
        """
        Raises:
            AggregateError: If the seed is rejected.
            TypeError: If an object is not a mapping or Seed.
        """
        seed = coerce_object(new, Seed)
        if seed.spec.backup is None:
            return
        logger.debug("Validating backup of seed %s", seed.metadata.name)

        if old is None:
            errors = validate_backup_create(seed.spec.backup, self.backup_path)
        else:
            old_seed = coerce_object(old, Seed)
            errors = validate_backup_update(
                old_seed.spec.backup, seed.spec.backup, self.backup_path
            )

        err = to_aggregate(errors)
        if err is not None:
            raise err


class BackupBucketValidator:
    """Validates BackupBucket objects."""

    spec_path = FieldPath.new("spec")

    def validate(self, new: Any, old: Any = None) -> None:
        """
        Raises:
            AggregateError: If the bucket is rejected.
            TypeError: If an object is not a mapping or BackupBucket.
        """
        bucket = coerce_object(new, BackupBucket)
        logger.debug("Validating backup bucket %s", bucket.metadata.name)

        if old is None:
            errors = validate_backup_create(bucket.spec, self.spec_path)
        else:
            old_bucket = coerce_object(old, BackupBucket)
            errors = validate_backup_update(old_bucket.spec, bucket.spec, self.spec_path)

        err = to_aggregate(errors)
        if err is not None:
            raise err


__all__ = [
    "SeedValidator",
    "BackupBucketValidator",
    "validate_backup_create",
    "validate_backup_update",
]
