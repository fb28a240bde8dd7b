"""
alicloud_admission/validation/secrets.py

Shape checks for the Alicloud access keys stored in a cloud provider secret.
Unlike the other validators this one stops at the first violation.
"""

import re

from alicloud_admission.models.secret import ACCESS_KEY_ID, ACCESS_KEY_SECRET, Secret

ACCESS_KEY_ID_MIN_LEN = 16
ACCESS_KEY_ID_MAX_LEN = 128
ACCESS_KEY_SECRET_MIN_LEN = 30

# alphanumerics plus [._=]
_ACCESS_KEY_ID_RE = re.compile(rb"^[0-9a-zA-Z._=]+$")


class InvalidSecretError(ValueError):
    """Raised when a cloud provider secret does not hold usable access keys."""


def validate_cloud_provider_secret(secret: Secret) -> None:
    """
    Check the access key id and secret of a cloud provider secret.

    Raises:
        InvalidSecretError: On the first violation found.
    """
    secret_ref = secret.ref()

    access_key_id = secret.data.get(ACCESS_KEY_ID)
    if access_key_id is None:
        raise InvalidSecretError(f'missing "{ACCESS_KEY_ID}" field in secret {secret_ref}')
    if len(access_key_id) < ACCESS_KEY_ID_MIN_LEN:
        raise InvalidSecretError(
            f'field "{ACCESS_KEY_ID}" in secret {secret_ref} must have at least '
            f"{ACCESS_KEY_ID_MIN_LEN} characters"
        )
    if len(access_key_id) > ACCESS_KEY_ID_MAX_LEN:
        raise InvalidSecretError(
            f'field "{ACCESS_KEY_ID}" in secret {secret_ref} cannot be longer than '
            f"{ACCESS_KEY_ID_MAX_LEN} characters"
        )
    if not _ACCESS_KEY_ID_RE.fullmatch(access_key_id):
        raise InvalidSecretError(
            f'field "{ACCESS_KEY_ID}" in secret {secret_ref} must only contain '
            "alphanumeric characters and [._=]"
        )

    access_key_secret = secret.data.get(ACCESS_KEY_SECRET)
    if access_key_secret is None:
        raise InvalidSecretError(f'missing "{ACCESS_KEY_SECRET}" field in secret {secret_ref}')
    if len(access_key_secret) < ACCESS_KEY_SECRET_MIN_LEN:
        raise InvalidSecretError(
            f'field "{ACCESS_KEY_SECRET}" in secret {secret_ref} must have at least '
            f"{ACCESS_KEY_SECRET_MIN_LEN} characters"
        )
    # only CR/LF at either end; other whitespace passes
    if access_key_secret.strip(b"\r\n") != access_key_secret:
        raise InvalidSecretError(
            f'field "{ACCESS_KEY_SECRET}" in secret {secret_ref} must not contain '
            "leading or trailing new lines"
        )


__all__ = ["InvalidSecretError", "validate_cloud_provider_secret"]
