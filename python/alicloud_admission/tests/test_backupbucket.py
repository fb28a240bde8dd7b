"""
Tests for backup bucket immutability rules and the credentials reference.
"""

import pytest

from alicloud_admission.models.backupbucket import BackupBucketConfig, ImmutableConfig
from alicloud_admission.models.base import ObjectReference
from alicloud_admission.models.field import ErrorType, FieldPath
from alicloud_admission.validation.backupbucket import (
    validate_backup_bucket_config,
    validate_backup_bucket_config_update,
    validate_backup_bucket_credentials_ref,
)

PATH = FieldPath.new("spec", "providerConfig")


def _config(retention_type="bucket", retention_period=1, locked=False) -> BackupBucketConfig:
    return BackupBucketConfig(
        immutability=ImmutableConfig(
            retention_type=retention_type, retention_period=retention_period, locked=locked
        )
    )


class TestConfig:
    def test_valid(self):
        assert validate_backup_bucket_config(_config(retention_period=7), PATH) == []

    def test_absent_config_or_immutability(self):
        assert validate_backup_bucket_config(None, PATH) == []
        assert validate_backup_bucket_config(BackupBucketConfig(), PATH) == []

    def test_unsupported_retention_type(self):
        errors = validate_backup_bucket_config(_config(retention_type="object"), PATH)
        assert [(e.field, e.detail) for e in errors] == [
            ("spec.providerConfig.immutability.retentionType", "must be 'bucket'")
        ]

    @pytest.mark.parametrize("period", [0, -1])
    def test_retention_period_below_one_day(self, period):
        errors = validate_backup_bucket_config(_config(retention_period=period), PATH)
        assert [e.field for e in errors] == ["spec.providerConfig.immutability.retentionPeriod"]


class TestConfigUpdate:
    def test_reducing_locked_retention(self):
        errors = validate_backup_bucket_config_update(
            _config(retention_period=2, locked=True),
            _config(retention_period=1, locked=True),
            PATH,
        )
        assert len(errors) == 1
        assert errors[0].type == ErrorType.INVALID
        assert "reducing the retention period from" in errors[0].detail

    def test_extending_retention_and_locking(self):
        assert (
            validate_backup_bucket_config_update(
                _config(retention_period=1), _config(retention_period=5, locked=True), PATH
            )
            == []
        )

    def test_unlocking_is_forbidden(self):
        errors = validate_backup_bucket_config_update(
            _config(locked=True), _config(locked=False), PATH
        )
        assert [(e.type, e.field) for e in errors] == [
            (ErrorType.FORBIDDEN, "spec.providerConfig.immutability.locked")
        ]

    def test_disabling_immutability_is_accepted(self):
        assert (
            validate_backup_bucket_config_update(_config(locked=True), BackupBucketConfig(), PATH)
            == []
        )

    def test_new_config_is_validated(self):
        errors = validate_backup_bucket_config_update(
            None, _config(retention_type="object"), PATH
        )
        assert [e.type for e in errors] == [ErrorType.INVALID]


class TestCredentialsRef:
    path = FieldPath.new("spec", "credentialsRef")

    def test_secret_reference(self):
        ref = ObjectReference(api_version="v1", kind="Secret", name="backup", namespace="garden")
        assert validate_backup_bucket_credentials_ref(ref, self.path) == []

    def test_missing(self):
        errors = validate_backup_bucket_credentials_ref(None, self.path)
        assert [(e.type, e.detail) for e in errors] == [(ErrorType.REQUIRED, "must be set")]

    def test_other_kind(self):
        ref = ObjectReference(
            api_version="security.gardener.cloud/v1alpha1", kind="WorkloadIdentity", name="x"
        )
        errors = validate_backup_bucket_credentials_ref(ref, self.path)
        assert [e.type for e in errors] == [ErrorType.NOT_SUPPORTED]
        assert errors[0].detail == 'supported values: "v1, Kind=Secret"'
