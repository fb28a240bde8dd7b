"""
Shared manifest fixtures for the admission tests.
"""

import copy

import pytest

PROVIDER_API_VERSION = "alicloud.provider.extensions.gardener.cloud/v1alpha1"

SHOOT = {
    "apiVersion": "core.gardener.cloud/v1beta1",
    "kind": "Shoot",
    "metadata": {"name": "dev", "namespace": "garden-dev"},
    "spec": {
        "region": "cn-beijing",
        "secretBindingName": "alicloud",
        "networking": {
            "type": "calico",
            "nodes": "10.250.0.0/16",
            "pods": "192.168.0.0/16",
            "services": "172.16.0.0/16",
        },
        "provider": {
            "type": "alicloud",
            "infrastructureConfig": {
                "apiVersion": PROVIDER_API_VERSION,
                "kind": "InfrastructureConfig",
                "networks": {
                    "vpc": {"cidr": "10.0.0.0/8"},
                    "zones": [{"name": "cn-beijing-f", "worker": "10.250.3.0/24"}],
                },
            },
            "workers": [
                {
                    "name": "pool",
                    "minimum": 1,
                    "maximum": 2,
                    "machine": {"type": "ecs.g6.large"},
                    "volume": {"type": "cloud_efficiency", "size": "40Gi"},
                    "zones": ["cn-beijing-f"],
                }
            ],
        },
    },
}

CLOUD_PROFILE = {
    "apiVersion": "core.gardener.cloud/v1beta1",
    "kind": "CloudProfile",
    "metadata": {"name": "alicloud"},
    "spec": {
        "type": "alicloud",
        "machineImages": [{"name": "ubuntu", "versions": [{"version": "1.2.3"}]}],
        "providerConfig": {
            "apiVersion": PROVIDER_API_VERSION,
            "kind": "CloudProfileConfig",
            "machineImages": [
                {
                    "name": "ubuntu",
                    "versions": [
                        {"version": "1.2.3", "regions": [{"name": "cn-beijing", "id": "m-123"}]}
                    ],
                }
            ],
        },
    },
}

BACKUP_BUCKET = {
    "apiVersion": "extensions.gardener.cloud/v1alpha1",
    "kind": "BackupBucket",
    "metadata": {"name": "bucket"},
    "spec": {
        "type": "alicloud",
        "region": "cn-beijing",
        "credentialsRef": {
            "apiVersion": "v1",
            "kind": "Secret",
            "name": "backup",
            "namespace": "garden",
        },
        "providerConfig": {
            "apiVersion": PROVIDER_API_VERSION,
            "kind": "BackupBucketConfig",
            "immutability": {"retentionType": "bucket", "retentionPeriod": 2, "locked": True},
        },
    },
}


@pytest.fixture
def shoot():
    return copy.deepcopy(SHOOT)


@pytest.fixture
def cloud_profile():
    return copy.deepcopy(CLOUD_PROFILE)


@pytest.fixture
def backup_bucket():
    return copy.deepcopy(BACKUP_BUCKET)


@pytest.fixture
def seed(backup_bucket):
    return {
        "apiVersion": "core.gardener.cloud/v1beta1",
        "kind": "Seed",
        "metadata": {"name": "seed"},
        "spec": {"backup": {"provider": "alicloud", **backup_bucket["spec"]}},
    }
