"""
alicloud_admission/admission/secret.py

Admission validation of cloud provider secrets (e.g. referenced by a
SecretBinding or CredentialsBinding).
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from alicloud_admission.models.secret import Secret
from alicloud_admission.validation.secrets import (
    InvalidSecretError,
    validate_cloud_provider_secret,
)

logger = logging.getLogger(__name__)


class SecretValidator:
    """Checks that a secret holds well-formed Alicloud access keys."""

    def validate(self, new: Any, old: Any = None) -> None:
        """
        Args:
            new: A Secret, or a manifest mapping with base64 `data`.
            old: Ignored; every version of the secret must be valid.

        Raises:
            InvalidSecretError: On the first violation, or if `data` is not base64.
            TypeError: If `new` is neither a mapping nor a Secret.
        """
        if isinstance(new, Secret):
            secret = new
        elif isinstance(new, Mapping):
            try:
                secret = Secret.from_manifest(new)
            except ValueError as exc:
                raise InvalidSecretError(str(exc)) from exc
        else:
            raise TypeError(f"wrong object type {type(new).__name__}")

        logger.debug("Validating cloud provider secret %s", secret.ref())
        validate_cloud_provider_secret(secret)


__all__ = ["SecretValidator"]
