"""
alicloud_admission/models/base.py

Shared pydantic base for every decoded manifest model.
Fields are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel

PROVIDER_API_GROUP = "alicloud.provider.extensions.gardener.cloud"
PROVIDER_API_VERSIONS = (f"{PROVIDER_API_GROUP}/v1alpha1",)

# Validation context that drops unknown keys instead of rejecting them.
LENIENT_CONTEXT = {"lenient": True}


class ManifestModel(BaseModel):
    """
    Frozen, strict-keyed model that accepts both camelCase and snake_case.

    Validated with LENIENT_CONTEXT, unknown keys are dropped at every nesting
    level; this is how already-stored objects are read.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_unknown_keys(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict) or not (info.context or {}).get("lenient"):
            return data
        known = {
            key
            for name, field_info in cls.model_fields.items()
            for key in (name, field_info.alias)
            if key
        }
        return {key: value for key, value in data.items() if key in known}


class ProviderConfig(ManifestModel):
    """
    A provider-specific config embedded in a Gardener resource.

    Attributes:
        api_version: e.g. "alicloud.provider.extensions.gardener.cloud/v1alpha1".
        kind: The config kind, checked against the model's expected kind on decode.
    """

    api_version: Optional[str] = None
    kind: Optional[str] = None


class ObjectReference(ManifestModel):
    """A reference to another object (apiVersion/kind/namespace/name)."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    namespace: str = ""

    def gvk(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


class ObjectMeta(ManifestModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    namespace: str = ""
