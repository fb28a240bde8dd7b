"""
alicloud_admission/models/secret.py

Pydantic model for a Kubernetes Secret carrying Alicloud access keys.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, Mapping

from pydantic import ConfigDict, Field

from alicloud_admission.models.base import ManifestModel, ObjectMeta
from alicloud_admission.models.validator import decode_object

# Data keys in a cloud provider secret.
ACCESS_KEY_ID = "accessKeyID"
ACCESS_KEY_SECRET = "accessKeySecret"


class Secret(ManifestModel):
    """
    A Secret with raw (already base64-decoded) data.

    Attributes:
        metadata: Name and namespace, used in error messages.
        type: The secret type, e.g. "Opaque".
        data: Key -> raw bytes.
    """

    model_config = ConfigDict(extra="ignore")

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    type: str = "Opaque"
    data: Dict[str, bytes] = Field(default_factory=dict)

    def ref(self) -> str:
        return f"{self.metadata.namespace}/{self.metadata.name}"

    @classmethod
    def from_manifest(cls, raw: Mapping[str, Any]) -> Secret:
        """
        Build a Secret from a manifest whose `data` values are base64 strings
        and whose `stringData` values are plain strings.

        Raises:
            ValueError: If `data` or `stringData` is not a mapping of strings,
                or a `data` value is not valid base64.
        """
        encoded = decode_object(raw.get("data") or {}, Dict[str, str])
        plain = decode_object(raw.get("stringData") or {}, Dict[str, str])
        try:
            data = {
                key: base64.b64decode(value, validate=True)
                for key, value in encoded.items()
            }
        except binascii.Error as exc:
            raise ValueError(f"secret data is not valid base64: {exc}") from exc
        data.update({key: value.encode() for key, value in plain.items()})
        return cls.model_validate(
            {
                "metadata": raw.get("metadata") or {},
                "type": raw.get("type") or "Opaque",
                "data": data,
            }
        )


__all__ = ["ACCESS_KEY_ID", "ACCESS_KEY_SECRET", "Secret"]
