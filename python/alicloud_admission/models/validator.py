"""
alicloud_admission/models/validator.py

Decodes raw (already parsed JSON/YAML) objects into pydantic models using
TypeAdapter, and checks the apiVersion/kind of embedded provider configs.
"""

from typing import Any, Mapping, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from alicloud_admission.models.base import (
    LENIENT_CONTEXT,
    PROVIDER_API_VERSIONS,
    ProviderConfig,
)

T = TypeVar("T")
P = TypeVar("P", bound=ProviderConfig)


class DecodeError(ValueError):
    """Raised when a raw object cannot be decoded into its model."""


def decode_object(obj: Any, expected_type: Type[T], lenient: bool = False) -> T:
    """
    Validates that a given Python object conforms to the expected pydantic-based type.

    Args:
        obj (Any): The object to decode.
        expected_type (Type[T]): The type (pydantic or otherwise) to decode into.
        lenient (bool): Drop unknown keys instead of rejecting them.
            Used for objects that are already stored.

    Returns:
        T: The decoded object, cast to the expected type.

    Raises:
        DecodeError: If validation fails.
    """
    try:
        adapter = TypeAdapter(expected_type)
        return adapter.validate_python(obj, context=LENIENT_CONTEXT if lenient else None)
    except ValidationError as e:
        name = getattr(expected_type, "__name__", str(expected_type))
        raise DecodeError(f"failed to decode {name}: {e}") from e


def coerce_object(obj: Any, expected_type: Type[T]) -> T:
    """
    Accept an already-decoded model or a raw mapping to decode.

    Raises:
        TypeError: If `obj` is neither.
        DecodeError: If the mapping does not decode.
    """
    if isinstance(obj, expected_type):
        return obj
    if not isinstance(obj, Mapping):
        raise TypeError(f"wrong object type {type(obj).__name__}")
    return decode_object(dict(obj), expected_type)


def decode_provider_config(
    obj: Any, expected_type: Type[P], lenient: bool = False
) -> P:
    """
    Decode a provider config and verify its type meta.

    The apiVersion, when set, must be a known provider API version; the kind,
    when set, must equal the model's class name.
    With `lenient`, unknown keys are dropped; the type meta is still checked.

    Raises:
        DecodeError: On a schema violation or a mismatched apiVersion/kind.
    """
    if not isinstance(obj, dict):
        raise DecodeError(
            f"{expected_type.__name__} must be an object, got {type(obj).__name__}"
        )
    config = decode_object(obj, expected_type, lenient=lenient)
    if config.api_version is not None and config.api_version not in PROVIDER_API_VERSIONS:
        raise DecodeError(
            f"no kind {config.kind!r} is registered for version {config.api_version!r}"
        )
    if config.kind is not None and config.kind != expected_type.__name__:
        raise DecodeError(
            f"expected kind {expected_type.__name__!r}, got {config.kind!r}"
        )
    return config


__all__ = ["DecodeError", "decode_object", "coerce_object", "decode_provider_config"]
