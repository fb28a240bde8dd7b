"""
alicloud_admission/admission/__init__.py

Aggregate imports of the admission validators, plus a registry keyed by the
resource kind they handle.
"""

from typing import Any, Dict, Optional

from typing_extensions import Protocol

from alicloud_admission.admission.backup import BackupBucketValidator, SeedValidator
from alicloud_admission.admission.cloudprofile import CloudProfileValidator
from alicloud_admission.admission.secret import SecretValidator
from alicloud_admission.admission.shoot import ShootValidator
from alicloud_admission.models.settings import AdmissionSettings


class Validator(Protocol):
    def validate(self, new: Any, old: Any = None) -> None: ...


def validators_by_kind(settings: Optional[AdmissionSettings] = None) -> Dict[str, Validator]:
    """Return one validator instance per supported kind (lowercase)."""
    return {
        "shoot": ShootValidator(settings),
        "cloudprofile": CloudProfileValidator(),
        "seed": SeedValidator(),
        "backupbucket": BackupBucketValidator(),
        "secret": SecretValidator(),
    }


__all__ = [
    "BackupBucketValidator",
    "CloudProfileValidator",
    "SecretValidator",
    "SeedValidator",
    "ShootValidator",
    "Validator",
    "validators_by_kind",
]
